from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import close_db, init_db
from app.dependencies import get_db
from app.middlewares.logging_middleware import LoggingMiddleware
from app.routes import router as api_router
from app.services.record_validator import ROOT_FIELD
from app.utils.exceptions import FieldError, RecordValidationError, RegistryError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application startup and shutdown events.
    """
    logger.info("Application starting up...")
    try:
        await init_db()
    except SQLAlchemyError as e:
        # Keep serving; each request reports the store failure itself
        logger.error(f"Database initialization failed: {e}")

    yield

    logger.info("Application shutting down...")
    await close_db()


def _error_body(detail: str, errors=None) -> dict:
    body = {"detail": detail}
    if errors is not None:
        body["errors"] = [error.model_dump() for error in errors]
    return body


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    errors = exc.errors if isinstance(exc, RecordValidationError) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail, errors))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body parsing failures are reported like record validation failures."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            FieldError(field=".".join(loc) or ROOT_FIELD, message=error.get("msg", "Invalid value"))
        )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Validation failed", errors),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework errors such as unreadable bodies or unknown routes, in the common shape."""
    errors = None
    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        errors = [FieldError(field=ROOT_FIELD, message=str(exc.detail))]
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), errors),
        headers=getattr(exc, "headers", None),
    )


def create_application() -> FastAPI:
    """Create the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url=settings.DOCS_URL,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Requested-With", "Origin"],
        expose_headers=["Content-Length", "Content-Type", "X-Request-ID"],
        max_age=600,
    )

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def read_root():
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        """Health check with database connectivity test"""
        try:
            await db.execute(select(1))
            return {"status": "healthy", "database": "connected"}
        except SQLAlchemyError as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "database": "disconnected"},
            )

    return app


app = create_application()
