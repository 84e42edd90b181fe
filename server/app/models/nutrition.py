# app/models/nutrition.py
from typing import Any, List, Optional
from pydantic import BaseModel, Field


class NutritionOnboarding(BaseModel):
    weight: float
    height: float
    age: float
    fitnessLevel: Optional[str] = None
    goal: Optional[str] = None


class NutritionRequest(BaseModel):
    onboarding: Optional[NutritionOnboarding] = None


class NutritionTargets(BaseModel):
    calories: int
    protein: int  # grams
    carbs: int  # grams, may be negative for extreme inputs
    fats: int  # grams
    meals: List[Any] = Field(default_factory=list)
