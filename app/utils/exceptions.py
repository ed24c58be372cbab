from typing import List, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel


class FieldError(BaseModel):
    """One rejected field; ``field`` is the wire name, dotted when nested."""

    field: str
    message: str


class RegistryError(HTTPException):
    """Base for every error the registry reports to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            status_code=self.status_code, detail=detail or self.default_detail
        )


class RecordValidationError(RegistryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"

    def __init__(self, errors: List[FieldError], detail: Optional[str] = None):
        super().__init__(detail)
        self.errors = list(errors)

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


class NotFoundError(RegistryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Record not found"


class ConflictError(RegistryError):
    # Duplicate signups are reported as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "User already exists"


class PersistenceError(RegistryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Record store unavailable"


class AuthError(RegistryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid Credentials"

    def __init__(self):
        # Never say which half of the credentials was wrong
        super().__init__(self.default_detail)
