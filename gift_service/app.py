"""
Gift Service - Main Application.

Wires the record client, repositories and routers together:
- Clients: Supabase or in-memory record store
- Repositories: Per-table CRUD and derived filters
- Services: Social features composed from several repositories
- Routers: HTTP endpoints
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import settings
from .dependencies import build_repositories, create_record_client, set_repositories
from .domain.exceptions import (
    ConfigurationException,
    GiftServiceException,
    PartialWriteFailure,
    RecordNotFoundException,
    RemoteOperationFailed,
)
from .logging_config import setup_logging
from .routers import group_gifts_router, price_alerts_router, saved_gifts_router, social_router
from .routers.schemas import HealthResponse

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    logger.info(
        "Starting Gift Service",
        version=__version__,
        backend=settings.RECORD_BACKEND,
    )

    client = await create_record_client(settings)
    set_repositories(build_repositories(client))
    logger.info("Gift Service started")

    yield

    logger.info("Shutting down Gift Service")
    set_repositories(None)
    await client.close()
    logger.info("Gift Service stopped")


app = FastAPI(
    title="Gift Service",
    description="Group gifts, price alerts, saved gifts and social gifting",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=600,
)


def _error_response(status_code: int, exc: GiftServiceException) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


@app.exception_handler(RecordNotFoundException)
async def record_not_found_handler(request: Request, exc: RecordNotFoundException):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(RemoteOperationFailed)
@app.exception_handler(PartialWriteFailure)
async def record_store_error_handler(request: Request, exc: GiftServiceException):
    """Failures reported by the record store surface as a bad gateway."""
    logger.error(
        "Record store error",
        path=request.url.path,
        method=request.method,
        error=exc.message,
    )
    return _error_response(status.HTTP_502_BAD_GATEWAY, exc)


@app.exception_handler(ConfigurationException)
async def configuration_error_handler(request: Request, exc: ConfigurationException):
    logger.error("Configuration error", path=request.url.path, error=exc.message)
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        version=__version__,
        backend=settings.RECORD_BACKEND,
    )


app.include_router(group_gifts_router.router)
app.include_router(price_alerts_router.router)
app.include_router(saved_gifts_router.router)
app.include_router(social_router.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gift_service.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
    )
