"""
Health check endpoints.
"""

import asyncio
import logging
import time

from fastapi import APIRouter

from food_gateway.core.dependencies import HTTPClient, SettingsDep, get_s3_client
from food_schemas.gateway import HealthResponse, ServiceStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def get_health_status(settings: SettingsDep):
    """
    Basic health check endpoint.

    Returns service status and version.
    """
    return HealthResponse(
        status="healthy",
        version=settings.APP_VERSION
    )


@router.get("/health/services", response_model=HealthResponse)
async def get_services_status(settings: SettingsDep, client: HTTPClient):
    """
    Check health of all downstream services.

    Returns status of both inference services and, when sync is enabled,
    the object-storage bucket.
    """
    services = []

    inference_services = [
        ("Volume Estimation Service", settings.VOLUME_SERVICE_URL),
        ("Classification Service", settings.CLASSIFICATION_SERVICE_URL),
    ]

    for name, url in inference_services:
        try:
            response = await client.get(f"{url.rstrip('/')}/health", timeout=5.0)
            services.append(ServiceStatus(
                name=name,
                url=url,
                status="online" if response.status_code == 200 else "offline",
                response_time_ms=response.elapsed.total_seconds() * 1000
            ))
        except Exception as e:
            logger.error(f"{name} health check failed: {e}")
            services.append(ServiceStatus(
                name=name,
                url=url,
                status="offline"
            ))

    if settings.ARTIFACT_SYNC_ENABLED:
        storage_url = f"s3://{settings.STORAGE_BUCKET}/{settings.STORAGE_PREFIX}"
        try:
            s3_client = get_s3_client()
            start = time.perf_counter()
            reachable = await asyncio.to_thread(s3_client.bucket_reachable, settings.STORAGE_BUCKET)
            services.append(ServiceStatus(
                name="Object Storage",
                url=storage_url,
                status="online" if reachable else "offline",
                response_time_ms=(time.perf_counter() - start) * 1000
            ))
        except Exception as e:
            logger.error(f"Object storage health check failed: {e}")
            services.append(ServiceStatus(
                name="Object Storage",
                url=storage_url,
                status="offline"
            ))

    # Determine overall health
    online_count = sum(1 for s in services if s.status == "online")
    total_count = len(services)

    if online_count == total_count:
        overall_status = "healthy"
    elif online_count > 0:
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"

    return HealthResponse(
        status=overall_status,
        version=settings.APP_VERSION,
        services=services
    )
