# app/routers/system_prompt.py
from fastapi import APIRouter, Depends

from app.middleware.rate_limit import rate_limit
from app.models.onboarding import PersonaRequest, PersonaResponse
from app.services.persona_service import build_system_prompt

router = APIRouter(prefix="/api", tags=["Coach Persona"])


@router.post("/system-prompt", response_model=PersonaResponse, dependencies=[Depends(rate_limit("api"))])
def system_prompt(payload: PersonaRequest):
    return build_system_prompt(payload.onboardingData, payload.progressData, payload.journalEntries)
