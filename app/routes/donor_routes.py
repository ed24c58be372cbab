from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.schemas.donor import DonorDeleteResponse, DonorResponse
from app.services.donor_service import DonorService

router = APIRouter(prefix="/donors", tags=["donors"])


@router.post("", response_model=DonorResponse, status_code=status.HTTP_201_CREATED)
async def register_donor(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    service = DonorService(db)
    return await service.create_donor(payload)


@router.post(
    "/register",
    response_model=DonorResponse,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def register_donor_legacy(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    service = DonorService(db)
    return await service.create_donor(payload)


@router.get("", response_model=List[DonorResponse])
async def list_donors(db: AsyncSession = Depends(get_db)):
    service = DonorService(db)
    return await service.list_donors()


@router.get("/all", response_model=List[DonorResponse], include_in_schema=False)
async def list_donors_legacy(db: AsyncSession = Depends(get_db)):
    service = DonorService(db)
    return await service.list_donors()


@router.get("/{donor_id}", response_model=DonorResponse)
async def get_donor(donor_id: str, db: AsyncSession = Depends(get_db)):
    service = DonorService(db)
    return await service.get_donor(donor_id)


@router.delete("/{donor_id}", response_model=DonorDeleteResponse)
async def delete_donor(donor_id: str, db: AsyncSession = Depends(get_db)):
    service = DonorService(db)
    deleted_id = await service.delete_donor(donor_id)
    return DonorDeleteResponse(message="Donor deleted successfully", id=deleted_id)
