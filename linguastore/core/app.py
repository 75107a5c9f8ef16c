from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linguastore.api.errors import install_error_handlers
from linguastore.api.router import api_router
from linguastore.core.config import get_settings
from linguastore.core.database import dispose_engine, init_database

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "translation", "description": "Translation bundles keyed by context and locale."},
    {"name": "auth", "description": "Login and bearer token management."},
    {"name": "health", "description": "Liveness probes."},
]


def _configure_logging(level_name: str) -> None:
    """Ensure application logs propagate with the requested verbosity."""
    level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        )
    root_logger.setLevel(level)


def create_app() -> FastAPI:
    settings = get_settings()
    _configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if not settings.database_url:
            logger.warning("DATABASE_URL is not set; translation routes will fail until it is.")
            yield
            return
        await init_database()
        logger.info("%s ready (%s)", settings.app_name, settings.app_env)
        try:
            yield
        finally:
            await dispose_engine()

    app = FastAPI(
        title=settings.app_name,
        description="Store, look up and search localization bundles.",
        debug=settings.debug,
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    install_error_handlers(app, expose_details=settings.debug)
    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["health"])
    async def root() -> dict[str, str]:
        return {
            "service": settings.app_name,
            "environment": settings.app_env,
            "docs": app.docs_url or "",
        }

    return app
