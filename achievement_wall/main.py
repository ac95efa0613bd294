"""
Achievement Wall - FastAPI main application
"""

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from achievement_wall.core.config import Settings, settings as default_settings, validate_settings
from achievement_wall.core.database import (
    build_engine,
    build_session_factory,
    ensure_sqlite_parent_dir,
    init_models,
)
from achievement_wall.core.exceptions import error_response, register_exception_handlers
from achievement_wall.core.paths import ensure_dir, get_static_dir, get_upload_dir
from achievement_wall.services.storage import LocalStorage

from achievement_wall.api.achievements import router as achievements_router
from achievement_wall.api.frontend import create_fallback_router

# Logging setup
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

UPLOADS_URL = "/uploads"
# Room for the title, description and part headers around the image
MULTIPART_OVERHEAD = 64 * 1024


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around explicit storage and upload dependencies."""
    settings = settings or default_settings
    validate_settings(settings)

    upload_dir = get_upload_dir(settings)
    static_dir = get_static_dir(settings)
    engine = build_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        busy_timeout=settings.SQLITE_BUSY_TIMEOUT,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Runs on application startup/shutdown"""
        logger.info("Achievement Wall starting")

        ensure_sqlite_parent_dir(settings.DATABASE_URL)
        await init_models(engine)
        ensure_dir(upload_dir)
        logger.info(f"Uploads stored in {upload_dir}")

        yield

        await engine.dispose()
        logger.info("Achievement Wall stopped")

    app = FastAPI(
        title="Achievement Wall API",
        description="Post achievements, like them and comment on them",
        version="1.0.0",
        docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = LocalStorage(
        base_dir=upload_dir,
        public_base=UPLOADS_URL,
        max_size=settings.MAX_UPLOAD_SIZE,
    )

    register_exception_handlers(app)

    create_path = f"{settings.API_PREFIX}/achievements"

    @app.middleware("http")
    async def upload_size_guard(request: Request, call_next):
        """Refuse an oversized create request before its body is read."""
        if request.method == "POST" and request.url.path == create_path:
            length = request.headers.get("content-length")
            if length and length.isdigit() and int(length) > settings.MAX_UPLOAD_SIZE + MULTIPART_OVERHEAD:
                return error_response(413, app.state.storage.too_large_message())
        return await call_next(request)

    # CORS stays the outermost middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(achievements_router, prefix=f"{settings.API_PREFIX}/achievements", tags=["achievements"])

    @app.get(f"{settings.API_PREFIX}/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
        }

    # The directory is created in lifespan, before the first request
    app.mount(UPLOADS_URL, StaticFiles(directory=upload_dir, check_dir=False), name="uploads")

    # Must stay last: it matches every remaining path
    app.include_router(create_fallback_router(settings.API_PREFIX, static_dir))

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    import uvicorn
    uvicorn.run(
        "achievement_wall.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.ENVIRONMENT == "development" and default_settings.DEBUG,
    )


if __name__ == "__main__":
    run()
