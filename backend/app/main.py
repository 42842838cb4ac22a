"""
Portfolio API entry point.

Builds the FastAPI application: CORS, the error middleware, the
ServiceError handler and the v1 routers under /api/{API_VERSION}.

Run with:
    uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.exceptions import ServiceError, service_exception_handler
from app.db.session import SessionLocal, engine
from app.middleware.cors import setup_cors
from app.middleware.error_handler import ErrorHandlerMiddleware
from app.models import Base
from app.services.error_logging import configure_error_logging
from app.services.file_storage import FileStorage


APP_VERSION = "1.0.0"

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    description="""
    Portfolio API: authors publish projects (video, thumbnail, gallery)
    grouped in categories.

    - Paginated project cards, sortable by name, rating or date
    - Name suggestions and search
    - Categories with background videos
    - Registration, streaming and cleanup of stored media files
    """
)

setup_cors(app)
app.add_middleware(ErrorHandlerMiddleware)
app.add_exception_handler(ServiceError, service_exception_handler)


@app.on_event("startup")
async def startup_event():
    """
    Prepare database, logging and media directory.

    Note: create_all only adds missing tables, existing ones are not altered.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    if not configure_error_logging(SessionLocal):
        logger.warning(f"Logging to console only, {settings.LOG_DIR} is not writable")

    media_root = FileStorage(settings.MEDIA_ROOT).ensure_root()
    logger.info(f"Serving media from {media_root}")


@app.on_event("shutdown")
async def shutdown_event():
    engine.dispose()
    logger.info("Application shutdown complete")


@app.get("/health", tags=["Health"], summary="Health Check")
async def health_check():
    """Liveness probe for monitoring and container orchestrators."""
    return {"status": "ok", "version": APP_VERSION, "api": settings.PROJECT_NAME}


@app.get("/", tags=["Root"], summary="API Root")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "api": f"/api/{settings.API_VERSION}",
    }


app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")
