from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.future import select

from app.models.user import User
from app.schemas.user import LoginSchema, SignupSchema
from app.services.base_store import RecordStore
from app.utils.exceptions import AuthError, ConflictError, PersistenceError
from app.utils.logging_config import get_logger, log_security_event
from app.utils.security import burn_password_check, get_password_hash, verify_password

logger = get_logger(__name__)


class UserService(RecordStore):
    """Signup and credential checks. No tokens or sessions are issued."""

    async def get_user_by_email(self, email: str) -> Optional[User]:
        async def read():
            result = await self.db.execute(
                select(User).where(User.email == email).limit(1)
            )
            return result.scalar_one_or_none()

        return await self._guard("get user", read())

    async def create_user(self, user_data: SignupSchema) -> User:
        email = user_data.email.strip().lower()

        if await self.get_user_by_email(email):
            raise ConflictError("User already exists")

        user = User(email=email, hashed_password=get_password_hash(user_data.password))

        async def write() -> User:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
            return user

        try:
            user = await self._guard("insert user", write())
        except PersistenceError as e:
            # A concurrent signup can win the race past the existence check
            if isinstance(e.__cause__, IntegrityError):
                raise ConflictError("User already exists") from e
            raise

        logger.info(f"User registered: {user.id}")
        log_security_event(event_type="user_signup", details={"user_id": str(user.id)})
        return user

    async def authenticate_user(self, credentials: LoginSchema) -> User:
        email = credentials.email.strip().lower()
        user = await self.get_user_by_email(email)

        if user is None:
            burn_password_check(credentials.password)
            raise AuthError()

        if not verify_password(credentials.password, user.hashed_password):
            raise AuthError()

        return user
