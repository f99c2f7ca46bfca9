"""Custom exception classes for the gateway."""

from typing import Any, Dict, Optional


GENERIC_PROCESSING_ERROR = "Error processing the request"


class GatewayError(Exception):
    """
    Base exception for errors rendered straight to the caller.

    The content dict is the exact JSON body of the response.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        content: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.content = content if content is not None else {"message": message}
        super().__init__(message)


class NoFileUploadedError(GatewayError):
    """Upload request without an image part."""

    def __init__(self):
        super().__init__("No file uploaded", status_code=400)


class FoodNotFoundError(GatewayError):
    """Nutrition lookup returned no matches."""

    def __init__(self, query: str):
        self.query = query
        super().__init__("Food not found", status_code=404)


class ProcessingError(GatewayError):
    """Any downstream or storage failure, collapsed to one 500 body."""

    def __init__(self, message: str = GENERIC_PROCESSING_ERROR):
        super().__init__(message, status_code=500)


class FileDeletionError(GatewayError):
    """Deleting a single file failed locally or in object storage."""

    def __init__(self, message: str):
        super().__init__(
            message,
            status_code=500,
            content={"success": False, "message": message},
        )


class BulkDeletionError(GatewayError):
    """Delete-all failed for the local directory or the bucket prefix."""

    def __init__(self, details: str):
        super().__init__(
            "Internal server error",
            status_code=500,
            content={"error": "Internal server error", "details": details},
        )


class ArtifactSyncError(Exception):
    """Listing the segmented-image prefix in object storage failed."""

    def __init__(self, bucket: str, prefix: str, cause: Exception):
        self.bucket = bucket
        self.prefix = prefix
        self.cause = cause
        super().__init__(f"Failed to list {bucket}/{prefix}: {cause}")


class NutritionDataError(Exception):
    """A nutrition record cannot be rescaled."""
