from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.schemas.dashboard import BloodGroupDashboard
from app.services.dashboard_service import summarize_blood_groups
from app.services.donor_service import DonorService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/blood-groups", response_model=BloodGroupDashboard)
async def blood_group_dashboard(db: AsyncSession = Depends(get_db)):
    """Recomputed from the full donor list on every call."""
    donors = await DonorService(db).list_donors()
    return summarize_blood_groups(donors)
