# app/services/persona_service.py
import math
from typing import Any, List, Optional, Tuple, Union

from app.errors import ClientInputError
from app.models.onboarding import (
    JournalEntry, OnboardingProfile, PersonaResponse, ProgressSnapshot
)
from app.services.persona_template import (
    DEFAULT_GOAL_DESCRIPTION, GOAL_DESCRIPTIONS, IDENTITY_ARC_PHASES, STYLE_MODES, render_persona
)

DEFAULT_COACHING_STYLE = 5
DEFAULT_TRAINING_DAYS = 4
MAX_JOURNAL_ENTRIES = 5


def coerce_coaching_style(value: Any) -> float:
    """Numeric slider value; absent or non-numeric input falls back to the middle of the scale."""
    if value is None or isinstance(value, bool):
        return DEFAULT_COACHING_STYLE
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_COACHING_STYLE
    if math.isnan(number):
        return DEFAULT_COACHING_STYLE
    return number


def style_band(coaching_style: Any) -> Tuple[str, str]:
    """Map the 1-10 slider onto (style label, tone description)."""
    value = coerce_coaching_style(coaching_style)
    if 1 <= value <= 3:
        label = "gentle"
    elif 4 <= value <= 7:
        label = "balanced"
    else:
        # 8-10 and anything out of range
        label = "direct"
    return label, STYLE_MODES[label]


def identity_arc_phase(current_day: int) -> str:
    for last_day, phase in IDENTITY_ARC_PHASES:
        if last_day is None or current_day <= last_day:
            return phase
    return IDENTITY_ARC_PHASES[-1][1]


def journal_context(entries: Optional[List[Union[JournalEntry, str]]]) -> str:
    if not entries:
        return ""
    recent = entries[-MAX_JOURNAL_ENTRIES:]
    texts = [entry if isinstance(entry, str) else (entry.content or "") for entry in recent]
    return f"Recent journal entries (last {len(recent)}): {' | '.join(texts)}"


def build_system_prompt(
    onboarding: Optional[OnboardingProfile],
    progress: Optional[ProgressSnapshot] = None,
    journal_entries: Optional[List[Union[JournalEntry, str]]] = None,
) -> PersonaResponse:
    """Render the coach persona for one user. Same input, same text."""
    if onboarding is None:
        raise ClientInputError("Onboarding data required")

    style_label, style_mode = style_band(onboarding.coachingStyle)

    equipment = ", ".join(onboarding.equipment) if onboarding.equipment else "Bodyweight only"
    injuries = ", ".join(onboarding.injuries) if onboarding.injuries else "None reported"

    profile_extras = ""
    if onboarding.emotionalBarriers:
        profile_extras += f"\nStruggles with: {onboarding.emotionalBarriers}"
    if onboarding.whyStatement:
        profile_extras += f'\nDeep WHY: "{onboarding.whyStatement}"'

    current_day = 1
    streak_current = 0
    if progress is not None:
        if progress.currentDay is not None:
            current_day = progress.currentDay
        if progress.streak is not None and progress.streak.current is not None:
            streak_current = progress.streak.current

    journal = journal_context(journal_entries)

    system_prompt = render_persona(
        user_name=onboarding.name or "there",
        goal_context=GOAL_DESCRIPTIONS.get(onboarding.goal, DEFAULT_GOAL_DESCRIPTION),
        plan_goal=onboarding.goal or "reset",
        training_days=onboarding.trainingDaysPerWeek or DEFAULT_TRAINING_DAYS,
        equipment=equipment,
        injuries=injuries,
        profile_extras=profile_extras,
        style_mode=style_mode,
        current_day=current_day,
        streak_current=streak_current,
        identity_arc_phase=identity_arc_phase(current_day),
        journal_block=f"\n\n{journal}" if journal else "",
    )
    return PersonaResponse(systemPrompt=system_prompt, styleLabel=style_label)
