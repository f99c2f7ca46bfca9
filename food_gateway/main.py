"""
Food Volume Gateway - Main FastAPI Application
Receives food images and routes them through the volume-estimation and
classification microservices.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from food_gateway.core.config import get_settings
from food_gateway.core.dependencies import close_http_client, close_s3_client
from food_gateway.core.exceptions import GatewayError
from food_gateway.api import analysis, files, health, nutrition
from food_gateway.api.static import UploadsStaticFiles
from food_gateway.storage.local import UploadStore
from food_schemas.common import InternalErrorResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Runs on startup and shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Volume service: {settings.VOLUME_SERVICE_URL}")
    logger.info(f"Classification service: {settings.CLASSIFICATION_SERVICE_URL}")
    if settings.ARTIFACT_SYNC_ENABLED:
        logger.info(f"Artifact sync from {settings.STORAGE_BUCKET}/{settings.STORAGE_PREFIX}")
    else:
        logger.info("Artifact sync disabled")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_http_client()
    close_s3_client()
    logger.info("Clients closed")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Gateway for food volume estimation and nutrition classification",
    version=settings.APP_VERSION,
    lifespan=lifespan
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Include API routers
app.include_router(health.router)
app.include_router(analysis.router)
app.include_router(files.router)
app.include_router(nutrition.router)


# Uploaded and segmented images; the directory may be removed by deleteAll
UploadStore(settings.UPLOAD_DIR).ensure_dir()
app.mount(
    "/uploads",
    UploadsStaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads"
)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": {
                "GET /health": "Service health check",
                "GET /health/services": "Downstream services status"
            },
            "analysis": {
                "POST /api/upload": "Volume estimation and classification of a food image"
            },
            "files": {
                "GET /api/images": "List local images",
                "DELETE /api/delete/{filename}": "Delete one image locally and in storage",
                "GET /api/deleteAll": "Delete all images locally and in storage"
            },
            "nutrition": {
                "POST /api/edit": "Rescale nutrients of a food to a new weight"
            },
            "static": {
                "GET /uploads/{filename}": "Uploaded and segmented images"
            }
        },
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        }
    }


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    """Render gateway errors with their exact response body."""
    return JSONResponse(status_code=exc.status_code, content=exc.content)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=InternalErrorResponse(detail="Internal server error").model_dump()
    )


def run():
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "food_gateway.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
