# app/services/nutrition_calculator.py
import logging
import math
from typing import Optional

from app.errors import ClientInputError
from app.models.nutrition import NutritionOnboarding, NutritionTargets

logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS = {
    "beginner": 1.3,
    "intermediate": 1.5,
}
# Anything that is not beginner/intermediate (including unknown levels) counts as advanced
DEFAULT_ACTIVITY_MULTIPLIER = 1.7

# goal -> (calorie factor vs maintenance, protein grams per unit of bodyweight)
GOAL_ADJUSTMENTS = {
    "shred": (0.8, 1.2),
    "build": (1.1, 1.0),
}
DEFAULT_GOAL_ADJUSTMENT = (1.0, 0.9)

FAT_CALORIE_SHARE = 0.25


def round_half_up(value: float) -> int:
    """Round .5 toward +infinity (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def calculate_bmr(weight: float, height: float, age: float) -> float:
    """Mifflin-St Jeor without the sex term."""
    return 10 * weight + 6.25 * height - 5 * age + 5


def activity_multiplier(fitness_level: Optional[str]) -> float:
    return ACTIVITY_MULTIPLIERS.get(fitness_level, DEFAULT_ACTIVITY_MULTIPLIER)


def calculate_nutrition(onboarding: Optional[NutritionOnboarding]) -> NutritionTargets:
    if onboarding is None:
        raise ClientInputError("Onboarding data required")

    bmr = calculate_bmr(onboarding.weight, onboarding.height, onboarding.age)
    maintenance_calories = round_half_up(bmr * activity_multiplier(onboarding.fitnessLevel))

    calorie_factor, protein_per_unit = GOAL_ADJUSTMENTS.get(onboarding.goal, DEFAULT_GOAL_ADJUSTMENT)
    target_calories = round_half_up(maintenance_calories * calorie_factor)

    protein_grams = round_half_up(onboarding.weight * protein_per_unit)
    protein_calories = protein_grams * 4

    fat_calories = round_half_up(target_calories * FAT_CALORIE_SHARE)
    fat_grams = round_half_up(fat_calories / 9)

    # carbs fill the remainder; left unclamped so the three macros always sum back to the target
    carb_calories = target_calories - protein_calories - fat_calories
    carb_grams = round_half_up(carb_calories / 4)

    if carb_calories < 0:
        logger.warning(f"Negative carb allocation ({carb_calories} kcal) for target {target_calories} kcal")

    return NutritionTargets(
        calories=target_calories,
        protein=protein_grams,
        carbs=carb_grams,
        fats=fat_grams,
        meals=[],
    )
