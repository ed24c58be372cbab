from typing import List

from pydantic import Field

from app.schemas.base_schema import BloodType, ResponseSchema, StockStatus


class BloodGroupBucket(ResponseSchema):
    blood_group: BloodType = Field(..., alias="type")
    count: int
    min_required: int = Field(..., alias="minRequired")
    status: StockStatus


class BloodGroupDashboard(ResponseSchema):
    total_donors: int = Field(..., alias="totalDonors")
    total_blood_units: int = Field(..., alias="totalBloodUnits")
    blood_groups: List[BloodGroupBucket] = Field(..., alias="bloodGroups")
