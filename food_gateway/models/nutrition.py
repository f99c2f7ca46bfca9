"""
Nutrition record model for the edit endpoint.
"""

import re
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from food_gateway.core.exceptions import NutritionDataError

_WORD_START = re.compile(r"\b\w")


def format_food_name(name: str) -> str:
    """
    Normalize a classifier label into a lookup query.

    Underscores become spaces and the first character of every word is
    upper-cased: "fried_rice" -> "Fried Rice".
    """
    spaced = name.replace("_", " ")
    return _WORD_START.sub(lambda match: match.group(0).upper(), spaced)


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class NutritionRecord:
    """Per-serving nutrient values of one Nutritionix food."""

    food_name: str
    serving_weight_grams: Optional[float]
    nf_calories: Optional[float] = None
    nf_total_fat: Optional[float] = None
    nf_cholesterol: Optional[float] = None
    nf_sodium: Optional[float] = None
    nf_total_carbohydrate: Optional[float] = None
    nf_sugars: Optional[float] = None
    nf_protein: Optional[float] = None

    @classmethod
    def from_food(cls, food: Dict[str, Any]) -> "NutritionRecord":
        """Build a record from one entry of a Nutritionix `foods` list."""
        values = {
            f.name: _to_float(food.get(f.name))
            for f in fields(cls)
            if f.name != "food_name"
        }
        return cls(food_name=food.get("food_name", ""), **values)

    def nutrients(self) -> List[Optional[float]]:
        """Nutrient values in response order (calories through protein)."""
        return [
            self.nf_calories,
            self.nf_total_fat,
            self.nf_cholesterol,
            self.nf_sodium,
            self.nf_total_carbohydrate,
            self.nf_sugars,
            self.nf_protein,
        ]

    def scaled(self, weight: float) -> List[Any]:
        """
        Rescale every nutrient to the given serving weight.

        Returns [food_name, serving_weight_grams, calories, fat, cholesterol,
        sodium, carbohydrate, sugars, protein]. The serving weight is the
        original one; missing nutrients stay None.

        Raises:
            NutritionDataError: If the record has no usable serving weight
        """
        if not self.serving_weight_grams:
            raise NutritionDataError(
                f"'{self.food_name}' has no serving weight to scale from"
            )

        factor = float(weight) / self.serving_weight_grams
        scaled = [value * factor if value is not None else None for value in self.nutrients()]
        return [self.food_name, self.serving_weight_grams, *scaled]
