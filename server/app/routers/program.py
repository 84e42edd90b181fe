# app/routers/program.py
import logging

from fastapi import APIRouter, Depends

from app.middleware.rate_limit import rate_limit
from app.models.workout import ProgramRequest, ProgramResponse
from app.services.program_generator import generate_program, summarize_program

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Program"])


@router.post(
    "/generate-program",
    response_model=ProgramResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(rate_limit("api"))],
)
def generate(payload: ProgramRequest):
    workouts = generate_program(payload.onboarding)
    logger.info(f"Generated {len(workouts)}-day program: {summarize_program(workouts)}")
    return ProgramResponse(workouts=workouts)
