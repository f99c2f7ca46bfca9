"""
Nutritionix natural-language nutrients client.
"""

import logging
from typing import Any, Dict, List

import httpx

logger = logging.getLogger(__name__)


class NutritionixClient:
    """Looks up per-serving nutrient data by free-text food name."""

    def __init__(self, http_client: httpx.AsyncClient, url: str, app_id: str, app_key: str):
        self.http_client = http_client
        self.url = url
        self.app_id = app_id
        self.app_key = app_key

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-app-id": self.app_id,
            "x-app-key": self.app_key,
        }

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """
        Query the nutrients endpoint.

        Args:
            query: Food name, e.g. "Fried Rice"

        Returns:
            The `foods` list (possibly empty)

        Raises:
            httpx.HTTPError: On network failure or a non-2xx, non-404 response
        """
        response = await self.http_client.post(
            self.url,
            json={"query": query},
            headers=self.headers
        )

        # Nutritionix answers 404 when nothing in the query matched
        if response.status_code == 404:
            logger.info(f"Nutritionix found no match for '{query}'")
            return []

        response.raise_for_status()

        foods = response.json().get("foods") or []
        logger.info(f"Nutritionix returned {len(foods)} matches for '{query}'")
        return foods
