from fastapi import APIRouter
from .auth_routes import router as auth_router
from .dashboard_routes import router as dashboard_router
from .donor_routes import router as donor_router
from .hospital_routes import router as hospital_router


router = APIRouter()

router.include_router(auth_router)
router.include_router(donor_router)
router.include_router(hospital_router)
router.include_router(dashboard_router)
