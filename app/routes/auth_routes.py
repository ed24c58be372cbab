from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.schemas.user import (
    LoginResponse,
    LoginSchema,
    SignupResponse,
    SignupSchema,
    UserInfo,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: SignupSchema, db: AsyncSession = Depends(get_db)):
    service = UserService(db)
    await service.create_user(user_data)
    return SignupResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginSchema, db: AsyncSession = Depends(get_db)):
    """Check credentials and return the matching user. No token is issued."""
    service = UserService(db)
    user = await service.authenticate_user(credentials)
    return LoginResponse(message="Login successful", user=UserInfo(email=user.email))
