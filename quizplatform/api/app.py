"""
Фабрика FastAPI-приложения.

create_app() является единственной точкой сборки HTTP-процесса: хранилище
открывается в lifespan, роутеры подключаются под префиксом /api.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from config.settings import Settings
from .. import __version__
from ..database.manager import StoreManager
from ..services.auth_service import AuthService
from .errors import register_error_handlers
from .routes.admin import router as admin_router
from .routes.auth import router as auth_router
from .routes.results import router as results_router
from .routes.system import router as system_router
from .routes.tests import router as tests_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db_manager = StoreManager(settings.DATABASE_PATH, settings.STORE_BUSY_TIMEOUT)
        await db_manager.init_database()
        app.state.settings = settings
        app.state.db_manager = db_manager

        await AuthService(db_manager, settings).ensure_admin()

        logger.info("🚀 HTTP API запущено")
        yield

        await db_manager.close()
        logger.info("HTTP API остановлено")

    app = FastAPI(title="Quiz Platform API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(results_router, prefix="/api/results", tags=["results"])
    app.include_router(tests_router, prefix="/api/tests", tags=["tests"])
    app.include_router(admin_router, prefix="/api", tags=["admin"])
    app.include_router(system_router, prefix="/api", tags=["system"])

    return app
