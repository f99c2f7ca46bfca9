"""Nutrition lookup and serving-weight rescaling for the edit endpoint."""

import logging
from typing import Any, List, Optional

from food_gateway.clients.nutritionix_client import NutritionixClient
from food_gateway.core.exceptions import FoodNotFoundError, GatewayError
from food_gateway.models.nutrition import NutritionRecord, format_food_name

logger = logging.getLogger(__name__)


class NutritionEditService:
    """Re-labels a detected food and rescales its nutrients to a new weight."""

    def __init__(self, client: NutritionixClient):
        self.client = client

    async def rescale(self, new_name: Optional[str], weight: Optional[float]) -> List[Any]:
        """
        Look up a food by name and scale its nutrients to weight grams.

        Args:
            new_name: Raw food name, underscores allowed
            weight: Target serving weight in grams

        Returns:
            [food_name, serving_weight_grams, calories, fat, cholesterol,
             sodium, carbohydrate, sugars, protein]

        Raises:
            GatewayError: 400 when the name or weight is missing
            FoodNotFoundError: When the lookup has no match
            httpx.HTTPError: When the lookup fails
            NutritionDataError: When the match has no serving weight
        """
        query = format_food_name(new_name or "")
        if not query.strip():
            raise GatewayError("Missing new name", status_code=400)
        if weight is None:
            raise GatewayError("Missing updated weight", status_code=400)

        foods = await self.client.search(query)
        if not foods:
            raise FoodNotFoundError(query)

        record = NutritionRecord.from_food(foods[0])
        result = record.scaled(weight)
        logger.info(f"Edit results: {result}")
        return result
