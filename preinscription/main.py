from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from preinscription.features.health.routes.health import router as health_router
from preinscription.features.signup.routes.signup import router as signup_router
from preinscription.middlewares.origin_filter import OriginFilterMiddleware
from preinscription.platform.config import Settings, get_settings
from preinscription.platform.db.init_db import ensure_schema
from preinscription.platform.db.session import Database
from preinscription.platform.exceptions import add_exception_handlers
from preinscription.platform.logger import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    if not settings.DATABASE_URL:
        logger.warning("Missing DATABASE_URL env var.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database.from_settings(settings)
        try:
            await ensure_schema(database.engine)
        except Exception as e:
            logger.exception(f"Fatal init error: {e}")
            await database.dispose()
            raise
        app.state.database = database
        logger.info(f"API listening on {settings.PORT}")
        try:
            yield
        finally:
            await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Email pre-registration signups and running count.",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    allowed_origins = settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORSMiddleware and rejects before preflight handling
    app.add_middleware(OriginFilterMiddleware, allowed_origins=allowed_origins)

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(signup_router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run("preinscription.main:app", host=settings.HOST, port=settings.PORT)
