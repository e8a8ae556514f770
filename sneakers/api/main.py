"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sneakers.api.routes import health
from sneakers.api.routes import sneakers as sneaker_routes
from sneakers.config import LogLevel, settings

logger = structlog.get_logger(__name__)


def configure_logging(level: LogLevel = settings.log_level) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    logger.info("sneakers_service_starting")
    yield
    logger.info("sneakers_service_stopping")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sneakers Service",
        description="Sneaker listings with geocoded locations and image artifacts.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(sneaker_routes.router)

    return app


app = create_app()
