"""
Food image analysis endpoint.
"""

import logging
from typing import Optional

import httpx
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from food_gateway.core.dependencies import PipelineDep, UploadStoreDep
from food_gateway.core.exceptions import ArtifactSyncError, NoFileUploadedError, ProcessingError
from food_schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post(
    "/upload",
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}}
)
async def upload_image(
    store: UploadStoreDep,
    pipeline: PipelineDep,
    image: Optional[UploadFile] = File(None, description="Food image to analyse")
):
    """
    Analyse an uploaded food image.

    Stores the image, sends it to the volume-estimation service, forwards
    that result to the classification service, mirrors the segmented images
    from object storage and returns the classification body unchanged.

    Sync counts are reported in the X-Artifact-Sync-Downloaded and
    X-Artifact-Sync-Failed headers.
    """
    if image is None or not image.filename:
        raise NoFileUploadedError()

    try:
        stored = await store.save(image.file, image.filename, image.content_type)
    except OSError as e:
        logger.error(f"Error storing upload {image.filename}: {e}")
        raise ProcessingError()

    try:
        result = await pipeline.run(stored)

    except httpx.HTTPError as e:
        logger.error(f"Downstream service error for {stored.stored_filename}: {e}")
        raise ProcessingError()
    except ArtifactSyncError as e:
        logger.error(f"Segmented image sync failed for {stored.stored_filename}: {e}")
        raise ProcessingError()
    except (ClientError, BotoCoreError, OSError, ValueError) as e:
        logger.error(f"Error processing {stored.stored_filename}: {e}")
        raise ProcessingError()

    headers = {}
    if result.sync_report is not None:
        headers = {
            "X-Artifact-Sync-Downloaded": str(result.sync_report.downloaded),
            "X-Artifact-Sync-Failed": str(result.sync_report.failed),
        }

    return JSONResponse(status_code=200, content=result.body, headers=headers)
