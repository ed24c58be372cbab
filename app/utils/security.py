from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from app.utils.exceptions import PersistenceError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

# Argon2 password hashing configuration; each hash carries its own random salt
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16,
)

# Verified against when the email is unknown, so both failure paths cost the same
_DUMMY_HASH = ph.hash("not-a-real-password")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password using Argon2"""
    try:
        return ph.hash(password)
    except HashingError as e:
        logger.error(
            "Password hashing failed",
            extra={"extra_fields": {"event_type": "password_hashing_failed"}},
        )
        raise PersistenceError("Password hashing failed") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against an Argon2 hashed password"""
    try:
        ph.verify(hashed_password, plain_password)
        return True
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError) as e:
        logger.error(
            "Password verification error",
            extra={"extra_fields": {"event_type": "password_verification_error", "error": str(e)}},
        )
        return False


def burn_password_check(plain_password: str) -> None:
    """Spend the same work as a real verification when there is no user to check."""
    verify_password(plain_password, _DUMMY_HASH)
