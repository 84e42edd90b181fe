# app/models/daily.py
from pydantic import BaseModel


class DailyPromptOut(BaseModel):
    prompt: str


class MilestoneOut(BaseModel):
    title: str
    message: str
    icon: str
