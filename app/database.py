import logging

from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.db.base import Base

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

url = make_url(DATABASE_URL)
connect_args = {}
engine_kwargs = {}

if url.get_backend_name() == "sqlite":
    connect_args = {"check_same_thread": False}
else:
    engine_kwargs = {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }

logger.info(f"Database backend: {url.get_backend_name()}")

engine = create_async_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=False,
    **engine_kwargs,
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Import models so create_all and Alembic see every table
from app.models.donor import Donor  # noqa: E402,F401
from app.models.hospital import Hospital  # noqa: E402,F401
from app.models.user import User  # noqa: E402,F401


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully.")


async def close_db():
    """Close database connections gracefully"""
    await engine.dispose()
    logger.info("Database connections closed.")
