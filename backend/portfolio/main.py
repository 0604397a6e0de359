"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from portfolio.config import get_settings
from portfolio.domain.exceptions import GatewayError
from portfolio.infrastructure.database import Base, dispose_engine, get_engine
from portfolio.infrastructure.logging.log_config import setup_logging
from portfolio.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, prepare the chosen backend."""
    settings = get_settings()
    setup_logging()

    if settings.gateway_backend == "database":
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready")

    logger.info(
        "Portfolio API started (gateway=%s, storage=%s)",
        settings.gateway_backend,
        settings.storage_backend,
    )

    yield

    if settings.gateway_backend == "database":
        await dispose_engine()


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("Unhandled gateway error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(GatewayError, _gateway_error_handler)

    app.include_router(api_router)

    # Locally stored images are served by the API itself
    if settings.storage_backend == "local" and settings.public_storage_url.startswith("/"):
        upload_dir = Path(settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount(settings.public_storage_url, StaticFiles(directory=upload_dir), name="storage")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
