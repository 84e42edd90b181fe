# app/services/daily_content.py
from typing import Any, Dict

from app.errors import ClientInputError, NotFoundError

PROGRAM_DAYS = 30

DAILY_PROMPTS: Dict[int, str] = {
    1: "Day 1: You're not starting over. You're starting new. That's a different energy. Own it.",
    5: "Day 5: Milestone. You showed up 5 days in a row. That's not luck—that's discipline. Keep building.",
    10: "Day 10: You're one-third through. The person who started this isn't the same person reading this now. Notice that.",
    15: "Day 15: Halfway. This is where most people quit. You're not most people.",
    20: "Day 20: The habit is forming. It's no longer about willpower—it's about identity.",
    25: "Day 25: Five days left. You can see the finish line. Don't coast. Finish strong.",
    30: "Day 30: You did it. 30 days of discipline, consistency, and growth. This isn't the end—it's the foundation.",
}

MILESTONES: Dict[int, Dict[str, str]] = {
    5: {
        "title": "Day 5: Momentum Building",
        "message": "You've made it through the hardest part—the start. Your body is adapting. Your mind is getting stronger. This is where real change begins.",
        "icon": "trending-up",
    },
    10: {
        "title": "Day 10: Breaking Through",
        "message": "Ten days of discipline. You're proving to yourself that you can do this. The person you're becoming is taking shape.",
        "icon": "zap",
    },
    15: {
        "title": "Halfway There",
        "message": "Fifteen days. You've crossed the halfway mark. The habits are forming. The results are showing. Keep pushing.",
        "icon": "award",
    },
    20: {
        "title": "Day 20: Unstoppable",
        "message": "Twenty days of showing up. Twenty days of choosing discipline over comfort. You're not the same person who started this journey.",
        "icon": "star",
    },
    25: {
        "title": "The Final Stretch",
        "message": "Five days left. You can see the finish line. But this isn't about finishing—it's about building a life. Stay focused.",
        "icon": "target",
    },
    30: {
        "title": "Transformation Complete",
        "message": "Thirty days. You did it. But this isn't the end—it's the beginning of who you've become. The discipline you built here? That's yours forever.",
        "icon": "check-circle",
    },
}


def parse_day(raw: Any) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        raise ClientInputError("Invalid day number")


def daily_prompt(day: int) -> str:
    if day < 1 or day > PROGRAM_DAYS:
        raise ClientInputError("Invalid day number")
    return DAILY_PROMPTS.get(
        day,
        f"Day {day}: Show up. Do the work. Trust the process. That's how transformation happens.",
    )


def milestone(day: int) -> Dict[str, str]:
    found = MILESTONES.get(day)
    if found is None:
        raise NotFoundError("No milestone for this day")
    return dict(found)
