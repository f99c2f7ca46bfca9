"""
Shared dependencies for FastAPI endpoints.
Every component is built from Settings here and handed its configuration
explicitly.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends
import httpx

from food_gateway.clients.classification_client import ClassificationClient
from food_gateway.clients.nutritionix_client import NutritionixClient
from food_gateway.clients.volume_client import VolumeEstimationClient
from food_gateway.core.config import Settings, get_settings
from food_gateway.s3.client import S3Client
from food_gateway.services.nutrition import NutritionEditService
from food_gateway.services.pipeline import AnalysisPipeline
from food_gateway.storage.artifacts import ArtifactStore
from food_gateway.storage.local import UploadStore

logger = logging.getLogger(__name__)


# HTTP Client singleton
_http_client: httpx.AsyncClient | None = None

# S3 Client singleton (owns the transfer thread pool)
_s3_client: S3Client | None = None


async def get_http_client() -> httpx.AsyncClient:
    """
    Get or create the global HTTP client.
    Used for making requests to downstream services.
    """
    global _http_client
    if _http_client is None:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT,
            follow_redirects=True
        )
    return _http_client


async def close_http_client():
    """Close the global HTTP client."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def get_s3_client() -> S3Client:
    """Get or create the global S3 client."""
    global _s3_client
    if _s3_client is None:
        settings = get_settings()
        _s3_client = S3Client(
            endpoint=settings.STORAGE_ENDPOINT,
            access_key=settings.STORAGE_ACCESS_KEY,
            secret_key=settings.STORAGE_SECRET_KEY,
            secure=settings.STORAGE_SECURE,
            region=settings.STORAGE_REGION,
            max_concurrency=settings.SYNC_MAX_CONCURRENCY
        )
    return _s3_client


def close_s3_client():
    """Shut down the global S3 client's transfer pool."""
    global _s3_client
    if _s3_client is not None:
        _s3_client.shutdown(wait=False)
        _s3_client = None


SettingsDep = Annotated[Settings, Depends(get_settings)]
HTTPClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_upload_store(settings: SettingsDep) -> UploadStore:
    return UploadStore(settings.UPLOAD_DIR)


def get_artifact_store(settings: SettingsDep) -> ArtifactStore:
    s3_client = get_s3_client()
    return ArtifactStore(
        s3_client,
        bucket=settings.STORAGE_BUCKET,
        prefix=settings.STORAGE_PREFIX,
        executor=s3_client.transfer_executor
    )


def get_pipeline(settings: SettingsDep, client: HTTPClient) -> AnalysisPipeline:
    """Build the analysis pipeline; storage sync is attached only when enabled."""
    artifact_store: Optional[ArtifactStore] = None
    if settings.ARTIFACT_SYNC_ENABLED:
        artifact_store = get_artifact_store(settings)

    return AnalysisPipeline(
        volume_client=VolumeEstimationClient(client, settings.VOLUME_SERVICE_URL),
        classification_client=ClassificationClient(client, settings.CLASSIFICATION_SERVICE_URL),
        artifact_store=artifact_store,
        local_dir=settings.UPLOAD_DIR,
        skip_existing=settings.SYNC_SKIP_EXISTING
    )


def get_nutrition_service(settings: SettingsDep, client: HTTPClient) -> NutritionEditService:
    return NutritionEditService(
        NutritionixClient(
            client,
            url=settings.NUTRITIONIX_URL,
            app_id=settings.NUTRITIONIX_APP_ID,
            app_key=settings.NUTRITIONIX_APP_KEY
        )
    )


# Dependency annotations
UploadStoreDep = Annotated[UploadStore, Depends(get_upload_store)]
ArtifactStoreDep = Annotated[ArtifactStore, Depends(get_artifact_store)]
PipelineDep = Annotated[AnalysisPipeline, Depends(get_pipeline)]
NutritionServiceDep = Annotated[NutritionEditService, Depends(get_nutrition_service)]
