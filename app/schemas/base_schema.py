from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base for every inbound record schema"""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        use_enum_values=True,
        extra="forbid",
        from_attributes=True,
        populate_by_name=True,
    )


class ResponseSchema(BaseModel):
    """Base for stored records read back out of the database"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )


class BloodType(str, Enum):
    """Enum for valid blood types"""

    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"

    @classmethod
    def get_values(cls) -> List[str]:
        """Get all valid blood type values"""
        return [item.value for item in cls]


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def get_values(cls) -> List[str]:
        return [item.value for item in cls]


class StockStatus(str, Enum):
    """Dashboard classification of one blood group's donor count"""

    CRITICAL = "critical"
    LOW = "low"
    NORMAL = "normal"
    EXCESS = "excess"
