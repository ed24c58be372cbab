"""
Dashboard Service - blood group stock levels derived from the donor list
"""

from collections import Counter
from typing import Any, Dict, Iterable, Optional

from app.schemas.base_schema import BloodType, StockStatus
from app.schemas.dashboard import BloodGroupBucket, BloodGroupDashboard

# Minimum donors wanted per group before stock counts as healthy
MIN_REQUIRED: Dict[str, int] = {
    BloodType.A_POSITIVE.value: 5,
    BloodType.A_NEGATIVE.value: 5,
    BloodType.B_POSITIVE.value: 5,
    BloodType.B_NEGATIVE.value: 5,
    BloodType.O_POSITIVE.value: 10,
    BloodType.O_NEGATIVE.value: 8,
    BloodType.AB_POSITIVE.value: 5,
    BloodType.AB_NEGATIVE.value: 5,
}

# Each registered donor is counted as two units of collectable blood
UNITS_PER_DONOR = 2


def classify_stock(count: int, min_required: int) -> StockStatus:
    if count == 0:
        return StockStatus.CRITICAL
    if count < min_required:
        return StockStatus.LOW
    if count > min_required * 2:
        return StockStatus.EXCESS
    return StockStatus.NORMAL


def _blood_group_of(donor: Any) -> Optional[str]:
    if isinstance(donor, dict):
        value = donor.get("bloodGroup", donor.get("blood_group"))
    else:
        value = getattr(donor, "blood_group", None)
    return getattr(value, "value", value)


def summarize_blood_groups(donors: Iterable[Any]) -> BloodGroupDashboard:
    """
    Count donors per blood group and classify each group against its minimum.

    Accepts ORM rows, response models or raw dicts. Donors with a blood group
    outside the eight known groups are left out of the buckets but still count
    towards the donor total.
    """
    total = 0
    counts: Counter = Counter()
    for donor in donors:
        total += 1
        group = _blood_group_of(donor)
        if group in MIN_REQUIRED:
            counts[group] += 1

    buckets = [
        BloodGroupBucket(
            blood_group=group,
            count=counts[group],
            min_required=minimum,
            status=classify_stock(counts[group], minimum),
        )
        for group, minimum in MIN_REQUIRED.items()
    ]

    return BloodGroupDashboard(
        total_donors=total,
        total_blood_units=total * UNITS_PER_DONOR,
        blood_groups=buckets,
    )
