"""FastAPI application setup."""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from api.routes import ai, commands
from api.routes.health import router as health_router
from config.logging_config import setup_logging
from config.settings import settings
from database.client import init_supabase
from core.dependencies import init_dependencies, shutdown_dependencies

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    # STARTUP
    logger.info("Initializing database connection...")
    init_supabase()
    init_dependencies()
    logger.info("Application started")
    yield
    # SHUTDOWN
    await shutdown_dependencies()
    logger.info("Application shut down")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""

    # Setup logging
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="SchoolOps API",
        description="Natural-language command console for school administration",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Never combine allow_credentials=True with allow_origins=["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(commands.router, prefix="/commands", tags=["Commands"])
    app.include_router(ai.router, prefix="/ai", tags=["AI"])

    logger.info("FastAPI application created")
    return app
