# app/models/onboarding.py
from typing import Any, List, Optional, Union
from pydantic import BaseModel, Field

Goal = str  # "shred" | "build" | "reset"; anything else is treated as reset
FitnessLevel = str  # "beginner" | "intermediate" | "advanced"


class OnboardingProfile(BaseModel):
    name: Optional[str] = None
    coachingStyle: Optional[Any] = None  # 1-10 slider, numeric strings accepted
    goal: Optional[Goal] = None
    equipment: Optional[List[str]] = Field(default_factory=list)
    injuries: Optional[List[str]] = Field(default_factory=list)
    emotionalBarriers: Optional[str] = None
    whyStatement: Optional[str] = None
    trainingDaysPerWeek: Optional[int] = None
    weight: Optional[float] = None
    height: Optional[float] = None
    age: Optional[float] = None
    fitnessLevel: Optional[FitnessLevel] = None
    timeAvailability: Optional[int] = None


class Streak(BaseModel):
    current: Optional[int] = Field(default=0, ge=0)


class ProgressSnapshot(BaseModel):
    currentDay: Optional[int] = None
    streak: Optional[Streak] = None


class JournalEntry(BaseModel):
    content: Optional[str] = None


class PersonaRequest(BaseModel):
    onboardingData: Optional[OnboardingProfile] = None
    progressData: Optional[ProgressSnapshot] = None
    journalEntries: Optional[List[Union[JournalEntry, str]]] = None


class PersonaResponse(BaseModel):
    systemPrompt: str
    styleLabel: str
