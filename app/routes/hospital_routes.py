from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.schemas.hospital import HospitalResponse
from app.services.hospital_service import HospitalService

router = APIRouter(prefix="/hospitals", tags=["hospitals"])


@router.post("", response_model=HospitalResponse, status_code=status.HTTP_201_CREATED)
async def register_hospital(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    service = HospitalService(db)
    return await service.create_hospital(payload)


@router.get("", response_model=List[HospitalResponse])
async def list_hospitals(db: AsyncSession = Depends(get_db)):
    service = HospitalService(db)
    return await service.list_hospitals()
