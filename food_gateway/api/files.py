"""
File management endpoints.
Local upload directory plus the segmented-image prefix in object storage.
"""

import asyncio
import logging

from fastapi import APIRouter

from food_gateway.core.dependencies import ArtifactStoreDep, UploadStoreDep
from food_gateway.core.exceptions import BulkDeletionError, FileDeletionError, GatewayError
from food_schemas.common import ErrorResponse, MessageResponse, SuccessFlagResponse
from food_schemas.gateway import ImageList

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.get("/images", response_model=ImageList, responses={500: {"model": MessageResponse}})
async def list_images(store: UploadStoreDep):
    """List filenames in the local upload directory."""
    try:
        return await store.list_files()
    except OSError as e:
        logger.error(f"Error reading files: {e}")
        raise GatewayError("Error reading files", status_code=500)


@router.delete(
    "/delete/{filename}",
    response_model=SuccessFlagResponse,
    response_model_exclude_none=True,
    responses={500: {"model": SuccessFlagResponse}}
)
async def delete_image(filename: str, store: UploadStoreDep, artifacts: ArtifactStoreDep):
    """
    Delete one file locally, then from object storage.

    There is no rollback: when the remote deletion fails the local file
    stays deleted.
    """
    try:
        await store.delete(filename)
    except OSError as e:
        logger.error(f"Error deleting the local file {filename}: {e}")
        raise FileDeletionError("Error deleting the local file")

    try:
        await artifacts.delete(filename)
    except Exception as e:
        logger.error(f"Error deleting {filename} from storage: {e}")
        raise FileDeletionError("Error deleting the file from storage")

    return SuccessFlagResponse(success=True)


@router.get(
    "/deleteAll",
    response_model=MessageResponse,
    responses={500: {"model": ErrorResponse}}
)
async def delete_all(store: UploadStoreDep, artifacts: ArtifactStoreDep):
    """
    Remove the local upload directory and every object under the storage
    prefix, concurrently. Succeeds only when both succeed.
    """
    local_result, remote_result = await asyncio.gather(
        store.delete_all(),
        artifacts.delete_all(),
        return_exceptions=True
    )

    failures = []
    if isinstance(local_result, BaseException):
        logger.error(f"Error while deleting local directory: {local_result}")
        failures.append("Error while deleting local directory.")
    else:
        logger.info("Local directory deleted successfully.")

    if isinstance(remote_result, BaseException):
        logger.error(f"Error deleting files from storage: {remote_result}")
        failures.append("Error deleting files from storage.")
    else:
        logger.info(f"{remote_result} files deleted successfully from storage.")

    if failures:
        raise BulkDeletionError(failures[0])

    return MessageResponse(message="All files and directories deleted successfully.")
