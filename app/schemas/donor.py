import re
from datetime import datetime
from typing import Any, Dict
from uuid import UUID

from pydantic import EmailStr, Field, ValidationInfo, field_validator

from app.schemas.base_schema import (
    BaseSchema,
    BloodType,
    Gender,
    ResponseSchema,
)

MIN_DONOR_AGE = 18
MAX_DONOR_AGE = 65

PHONE_PATTERN = re.compile(r"^[0-9]{10,15}$")

AGE_CONFIRMATION_MESSAGE = "You must be 18 or older to register"


class MedicalQuestions(BaseSchema):
    """Donor health questionnaire. Unanswered questions count as "no"."""

    recent_illness: bool = Field(default=False, alias="recentIllness")
    heart_condition: bool = Field(default=False, alias="heartCondition")
    blood_pressure: bool = Field(default=False, alias="bloodPressure")
    diabetes: bool = Field(default=False, alias="diabetes")
    hepatitis: bool = Field(default=False, alias="hepatitis")
    hiv: bool = Field(default=False, alias="hiv")
    medication: bool = Field(default=False, alias="medication")
    surgery: bool = Field(default=False, alias="surgery")
    pregnancy: bool = Field(default=False, alias="pregnancy")
    vaccination: bool = Field(default=False, alias="vaccination")


class DonorCreate(BaseSchema):
    name: str = Field(..., max_length=100, description="Donor full name")
    age: int = Field(..., description="Age in whole years")
    gender: Gender
    blood_group: BloodType = Field(..., alias="bloodGroup")
    phone: str = Field(..., description="Digits only, 10 to 15 long")
    email: EmailStr
    address: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    age_confirmation: bool = Field(
        default=None, alias="ageConfirmation", validate_default=True
    )
    medical_questions: MedicalQuestions = Field(
        default_factory=MedicalQuestions, alias="medicalQuestions"
    )

    @field_validator("name", "address", "city", "state")
    @classmethod
    def require_text(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    @field_validator("age")
    @classmethod
    def check_age_range(cls, v: int) -> int:
        if v < MIN_DONOR_AGE:
            raise ValueError(f"Must be at least {MIN_DONOR_AGE} years old")
        if v > MAX_DONOR_AGE:
            raise ValueError(f"Must be {MAX_DONOR_AGE} years old or younger")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def check_gender(cls, v: Any) -> Any:
        if v not in Gender.get_values():
            raise ValueError(
                f"Gender must be one of: {', '.join(Gender.get_values())}"
            )
        return v

    @field_validator("blood_group", mode="before")
    @classmethod
    def check_blood_group(cls, v: Any) -> Any:
        if v not in BloodType.get_values():
            raise ValueError(
                f"Blood group must be one of: {', '.join(BloodType.get_values())}"
            )
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        if not PHONE_PATTERN.fullmatch(v):
            raise ValueError("Invalid phone number")
        return v

    @field_validator("age_confirmation", mode="before")
    @classmethod
    def require_age_confirmation(cls, v: Any) -> bool:
        # Only a literal boolean true counts; "true", 1 and the like do not
        if v is not True:
            raise ValueError(AGE_CONFIRMATION_MESSAGE)
        return v

    def to_document(self) -> Dict[str, Any]:
        """Column values for a new ``Donor`` row."""
        document = self.model_dump(exclude={"medical_questions"})
        document["email"] = str(self.email)
        document["medical_questions"] = self.medical_questions.model_dump(
            by_alias=True
        )
        return document


class DonorResponse(ResponseSchema):
    id: UUID
    name: str
    age: int
    gender: Gender
    blood_group: BloodType = Field(..., alias="bloodGroup")
    phone: str
    email: str
    address: str
    city: str
    state: str
    age_confirmation: bool = Field(..., alias="ageConfirmation")
    medical_questions: MedicalQuestions = Field(..., alias="medicalQuestions")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class DonorDeleteResponse(ResponseSchema):
    message: str
    id: UUID
