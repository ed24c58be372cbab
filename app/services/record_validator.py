"""
Record validation shared by the API and the registry client.

Every submission is checked as a whole: the caller gets back either a
normalized record or the ordered list of field errors, never a mix. The
store gateway always validates before writing; the client may also validate
before sending for quicker feedback.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.schemas.donor import DonorCreate
from app.schemas.hospital import HospitalCreate
from app.utils.exceptions import FieldError, RecordValidationError

RecordT = TypeVar("RecordT", bound=BaseModel)

ROOT_FIELD = "__root__"


@dataclass
class ValidationResult(Generic[RecordT]):
    record: Optional[RecordT] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    def raise_for_errors(self) -> RecordT:
        """Return the record, or raise ``RecordValidationError`` with every field error."""
        if self.errors:
            raise RecordValidationError(self.errors)
        return self.record


def _field_name(loc, schema: Optional[Type[BaseModel]] = None) -> str:
    parts = [str(part) for part in loc]
    if schema is not None and parts:
        # Defaults validated in place are located by attribute, not by wire name
        model_field = schema.model_fields.get(parts[0])
        if model_field is not None and model_field.alias:
            parts[0] = model_field.alias
    return ".".join(parts) if parts else ROOT_FIELD


def _message(error: dict, field_name: str) -> str:
    error_type = error.get("type")
    ctx = error.get("ctx") or {}
    if error_type == "value_error" and "error" in ctx:
        # Our own validators raise ValueError with a user-facing message
        return str(ctx["error"])
    if error_type == "missing":
        return f"{field_name} is required"
    if error_type == "extra_forbidden":
        return f"Unknown field: {field_name}"
    if error_type == "string_too_long":
        return f"{field_name} must be at most {ctx['max_length']} characters"
    return error["msg"]


def to_field_errors(
    exc: PydanticValidationError, schema: Optional[Type[BaseModel]] = None
) -> List[FieldError]:
    """Flatten a pydantic ``ValidationError`` into ordered ``FieldError`` items."""
    errors = []
    for error in exc.errors():
        name = _field_name(error.get("loc", ()), schema)
        errors.append(FieldError(field=name, message=_message(error, name)))
    return errors


def validate_record(payload: Any, schema: Type[RecordT]) -> ValidationResult[RecordT]:
    if isinstance(payload, schema):
        payload = payload.model_dump(by_alias=True)
    if not isinstance(payload, dict):
        return ValidationResult(
            errors=[FieldError(field=ROOT_FIELD, message="Record must be a JSON object")]
        )
    try:
        return ValidationResult(record=schema.model_validate(payload))
    except PydanticValidationError as exc:
        return ValidationResult(errors=to_field_errors(exc, schema))


def validate_donor(payload: Any) -> ValidationResult[DonorCreate]:
    return validate_record(payload, DonorCreate)


def validate_hospital(payload: Any) -> ValidationResult[HospitalCreate]:
    return validate_record(payload, HospitalCreate)
