"""
Volume-estimation service client.
Sends the stored image to the segmentation/volume service.
"""

import asyncio
import logging
from typing import Any

import httpx

from food_gateway.models.upload import UploadedImage

logger = logging.getLogger(__name__)


class VolumeEstimationClient:
    """Client for the volume-estimation microservice."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        path: str = "/estimate_volume",
        field_name: str = "img"
    ):
        """
        Args:
            http_client: Shared HTTP client
            base_url: Base URL of the service (e.g. "http://localhost:8080")
            path: Estimation endpoint path
            field_name: Multipart field carrying the image
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.field_name = field_name

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    async def estimate(self, image: UploadedImage) -> Any:
        """
        Estimate per-segment food volume for a stored image.

        Args:
            image: Image already written to the upload directory

        Returns:
            The service's JSON body, unmodified

        Raises:
            httpx.HTTPError: On network failure or a non-2xx response
        """
        content = await asyncio.to_thread(image.local_path.read_bytes)
        files = {
            self.field_name: (
                image.stored_filename,
                content,
                image.content_type or "application/octet-stream",
            )
        }

        response = await self.http_client.post(self.url, files=files)
        response.raise_for_status()

        data = response.json()
        logger.info(f"Response from volume estimation API: {data}")
        return data
