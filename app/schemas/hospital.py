from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from app.schemas.base_schema import BaseSchema, ResponseSchema


class HospitalCreate(BaseSchema):
    name: str = Field(..., max_length=150, description="Hospital name")
    email: EmailStr
    phone: str = Field(..., max_length=20)
    address: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    contact_person: str = Field(..., max_length=100, alias="contactPerson")
    # Requested blood group and unit count, stored as typed
    blood_group: Optional[str] = Field(default=None, max_length=50)
    unit: Optional[str] = Field(default=None, max_length=50)

    @field_validator("name", "phone", "address", "city", "state", "contact_person")
    @classmethod
    def require_text(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            label = info.field_name.replace("_", " ").capitalize()
            raise ValueError(f"{label} is required")
        return v

    def to_document(self) -> Dict[str, Any]:
        """Column values for a new ``Hospital`` row."""
        document = self.model_dump()
        document["email"] = str(self.email)
        return document


class HospitalResponse(ResponseSchema):
    id: UUID
    name: str
    email: str
    phone: str
    address: str
    city: str
    state: str
    contact_person: str = Field(..., alias="contactPerson")
    blood_group: Optional[str] = None
    unit: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
