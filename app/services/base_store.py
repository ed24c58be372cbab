import asyncio
from typing import Awaitable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.utils.exceptions import PersistenceError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class RecordStore:
    """Shared plumbing for the record gateways: one bounded attempt per call."""

    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = timeout if timeout is not None else settings.STORE_TIMEOUT_SECONDS

    async def _guard(self, operation: str, call: Awaitable[T]) -> T:
        """Await a store call, mapping timeouts and database errors to ``PersistenceError``."""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                f"Store call timed out: {operation}",
                extra={"extra_fields": {"operation": operation, "timeout": self.timeout}},
            )
            await self._rollback(operation)
            raise PersistenceError(f"Record store timed out during {operation}") from e
        except SQLAlchemyError as e:
            logger.error(
                f"Store call failed: {operation}: {type(e).__name__}: {e}",
                extra={"extra_fields": {"operation": operation}},
            )
            await self._rollback(operation)
            raise PersistenceError(f"Record store failed during {operation}") from e

    async def _rollback(self, operation: str) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Rollback after failed {operation} also failed: {e}")
