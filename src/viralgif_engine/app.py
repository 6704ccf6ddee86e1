"""FastAPI application factory for ViralGif-Engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from viralgif_engine.common.config import get_settings
from viralgif_engine.common.exceptions import InternalError, ValidationError, ViralGifError
from viralgif_engine.common.logging import setup_logging
from viralgif_engine.common.schemas import HealthResponse, error_response

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from viralgif_engine.deps import get_catalog, get_db, get_giphy_client
        db = get_db()
        await db.init()
        await db.create_all()
        get_catalog().load()
        yield
        # Shutdown
        await get_giphy_client().close()
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(ViralGifError)
    async def viralgif_error_handler(request: Request, exc: ViralGifError) -> JSONResponse:
        return error_response(exc, redact_internal=settings.is_production_like)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(ValidationError("Request body must be a JSON object"))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(InternalError(str(exc)), redact_internal=settings.is_production_like)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version, environment=settings.environment)

    # Mount routers
    from viralgif_engine.generation.router import router as generation_router
    from viralgif_engine.quota.router import router as quota_router
    from viralgif_engine.catalog.router import router as catalog_router
    from viralgif_engine.accounts.router import router as accounts_router

    prefix = settings.api_prefix
    app.include_router(generation_router, prefix=prefix, tags=["generation"])
    app.include_router(quota_router, prefix=prefix, tags=["quota"])
    app.include_router(catalog_router, prefix=prefix, tags=["catalog"])
    app.include_router(accounts_router, prefix=prefix, tags=["accounts"])

    return app
