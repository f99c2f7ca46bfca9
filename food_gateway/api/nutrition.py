"""
Nutrition edit endpoint.
"""

import logging
from typing import Any, List, Optional

import httpx
from fastapi import APIRouter

from food_gateway.core.dependencies import NutritionServiceDep
from food_gateway.core.exceptions import NutritionDataError, ProcessingError
from food_schemas.common import MessageResponse
from food_schemas.gateway import NutritionEditRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["nutrition"])


@router.post(
    "/edit",
    response_model=List[Any],
    responses={
        400: {"model": MessageResponse},
        404: {"model": MessageResponse},
        500: {"model": MessageResponse},
    }
)
async def edit_food(service: NutritionServiceDep, request: Optional[NutritionEditRequest] = None):
    """
    Rename a detected food and rescale its nutrients.

    Looks the name up in Nutritionix and scales calories, fat, cholesterol,
    sodium, carbohydrate, sugars and protein of the first match to
    `updatedData` grams.
    """
    # A missing body is reported by the name check
    request = request or NutritionEditRequest()
    try:
        return await service.rescale(request.newName, request.updatedData)
    except (httpx.HTTPError, ValueError, NutritionDataError) as e:
        logger.error(f"Nutrition lookup failed for '{request.newName}': {e}")
        raise ProcessingError()
