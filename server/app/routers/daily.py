# app/routers/daily.py
from fastapi import APIRouter, Depends

from app.middleware.rate_limit import rate_limit
from app.models.daily import DailyPromptOut, MilestoneOut
from app.services.daily_content import daily_prompt, milestone, parse_day

router = APIRouter(prefix="/api", tags=["Daily Content"], dependencies=[Depends(rate_limit("api"))])


# day stays a string so malformed values get the same 400 as out-of-range ones
@router.get("/daily-prompt/{day}", response_model=DailyPromptOut)
def get_daily_prompt(day: str):
    return DailyPromptOut(prompt=daily_prompt(parse_day(day)))


@router.get("/milestone/{day}", response_model=MilestoneOut)
def get_milestone(day: str):
    return MilestoneOut(**milestone(parse_day(day)))
