"""
Classification service client.
Forwards volume estimates to the classification/nutritional-values service.
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ClassificationClient:
    """Client for the classification microservice."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str, path: str = "/predict"):
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.path = path

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    async def classify(self, volume_result: Any) -> Any:
        """
        Classify the segments of a volume estimate.

        Args:
            volume_result: JSON body returned by the volume service, sent verbatim

        Returns:
            JSON body with segmented image path, volume and label/nutrition list

        Raises:
            httpx.HTTPError: On network failure or a non-2xx response
        """
        response = await self.http_client.post(self.url, json=volume_result)
        response.raise_for_status()

        data = response.json()
        logger.info(f"Response from classification API: {data}")
        return data
