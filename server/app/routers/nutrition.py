# app/routers/nutrition.py
from fastapi import APIRouter, Depends

from app.middleware.rate_limit import rate_limit
from app.models.nutrition import NutritionRequest, NutritionTargets
from app.services.nutrition_calculator import calculate_nutrition

router = APIRouter(prefix="/api", tags=["Nutrition"])


@router.post("/calculate-nutrition", response_model=NutritionTargets, dependencies=[Depends(rate_limit("api"))])
def calculate(payload: NutritionRequest):
    return calculate_nutrition(payload.onboarding)
