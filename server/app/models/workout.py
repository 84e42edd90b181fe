# app/models/workout.py
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class WorkoutType(str, Enum):
    UPPER_BODY = "Upper Body"
    LOWER_BODY = "Lower Body"
    FULL_BODY_CIRCUIT = "Full Body Circuit"
    ACTIVE_RECOVERY = "Active Recovery"


class Exercise(BaseModel):
    id: str
    name: str
    sets: int
    reps: str  # rep range ("8-12", "10-12/leg") or duration ("30-60s", "15 min")
    tempo: Optional[str] = None  # eccentric-pause-concentric seconds, e.g. "3-0-1"
    rest: int  # seconds
    swaps: Optional[List[str]] = None
    notes: Optional[str] = None


class Workout(BaseModel):
    id: str
    day: int = Field(ge=1, le=30)
    type: WorkoutType
    duration: int  # minutes
    exercises: List[Exercise] = []
    completed: bool = False


class ProgramOnboarding(BaseModel):
    equipment: Optional[List[str]] = Field(default_factory=list)
    goal: Optional[str] = None
    timeAvailability: Optional[int] = None


class ProgramRequest(BaseModel):
    onboarding: Optional[ProgramOnboarding] = None


class ProgramResponse(BaseModel):
    workouts: List[Workout]
