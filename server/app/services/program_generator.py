# app/services/program_generator.py
import math
from typing import Any, Dict, List, Optional

from app.errors import ClientInputError
from app.models.workout import Exercise, ProgramOnboarding, Workout, WorkoutType

PROGRAM_DAYS = 30
RECOVERY_DURATION = 15
DEFAULT_TIME_AVAILABILITY = 30
MAX_WORKING_SETS = 5

# Each row: (name, reps, rest seconds, extras). "sets" is filled in per week;
# extras may pin "sets" for accessories or carry "tempo" / "swaps".
UPPER_BODY = {
    "barbell": [
        ("Barbell Bench Press", "8-12", 90, {"tempo": "2-0-2"}),
        ("Barbell Row", "8-12", 90, {"tempo": "2-0-2"}),
        ("Overhead Press", "8-10", 90, {"tempo": "2-0-2"}),
        ("Barbell Curl", "10-12", 60, {"sets": 3}),
        ("Tricep Extension", "10-12", 60, {"sets": 3}),
    ],
    "dumbbell": [
        ("Dumbbell Bench Press", "10-12", 75, {"tempo": "2-0-2"}),
        ("Dumbbell Row", "10-12", 75, {"tempo": "2-0-2"}),
        ("Dumbbell Shoulder Press", "8-10", 75, {}),
        ("Dumbbell Curl", "10-12", 60, {"sets": 3}),
        ("Overhead Tricep Extension", "10-12", 60, {"sets": 3}),
    ],
    "bodyweight": [
        ("Push-ups", "12-15", 60, {"swaps": ["Knee Push-ups", "Incline Push-ups"]}),
        ("Inverted Rows", "10-12", 60, {"swaps": ["Door Frame Rows"]}),
        ("Pike Push-ups", "8-10", 60, {}),
        ("Diamond Push-ups", "10-12", 45, {"sets": 3}),
        ("Plank Hold", "30-60s", 45, {"sets": 3}),
    ],
}

LOWER_BODY = {
    "barbell": [
        ("Barbell Squat", "8-12", 120, {"tempo": "3-0-1"}),
        ("Romanian Deadlift", "8-12", 90, {"tempo": "3-0-1"}),
        ("Bulgarian Split Squat", "10-12/leg", 75, {}),
        ("Leg Curl", "12-15", 60, {"sets": 3}),
        ("Calf Raises", "15-20", 45, {"sets": 4}),
    ],
    "dumbbell": [
        ("Goblet Squat", "10-15", 90, {}),
        ("Dumbbell Romanian Deadlift", "10-12", 90, {}),
        ("Dumbbell Lunges", "10-12/leg", 75, {}),
        ("Single-Leg Deadlift", "8-10/leg", 60, {"sets": 3}),
        ("Dumbbell Calf Raises", "15-20", 45, {"sets": 4}),
    ],
    "bodyweight": [
        ("Bodyweight Squat", "15-20", 60, {}),
        ("Single-Leg Romanian Deadlift", "10-12/leg", 60, {}),
        ("Bulgarian Split Squat", "12-15/leg", 60, {}),
        ("Glute Bridge", "15-20", 45, {"sets": 3}),
        ("Wall Sit", "30-60s", 45, {"sets": 3}),
    ],
}

# Circuits are conditioning work: volume never progresses
CIRCUIT_SETS = 3
FULL_BODY_CIRCUIT = {
    "equipped": [
        ("Dumbbell Thruster", "12-15", 45, {}),
        ("Renegade Row", "10-12/side", 45, {}),
        ("Goblet Squat", "15-20", 45, {}),
        ("Dumbbell Swing", "15-20", 45, {}),
        ("Mountain Climbers", "20-30", 30, {}),
    ],
    "bodyweight": [
        ("Burpees", "10-15", 45, {}),
        ("Jump Squats", "12-15", 45, {}),
        ("Push-ups", "12-15", 45, {}),
        ("Plank to Downward Dog", "10-12", 45, {}),
        ("High Knees", "30-45s", 30, {}),
    ],
}


def week_of(day: int) -> int:
    return math.ceil(day / 7)


def working_sets(week: int) -> int:
    """Progressive overload: one extra working set every other week, capped."""
    return min(3 + week // 2, MAX_WORKING_SETS)


def equipment_tier(equipment: List[str]) -> str:
    # most specific first: a barbell wins even when dumbbells are also listed
    if "Barbell" in equipment:
        return "barbell"
    if "Dumbbells" in equipment:
        return "dumbbell"
    return "bodyweight"


def _build_exercises(rows, sets: int) -> List[Exercise]:
    exercises = []
    for index, (name, reps, rest, extras) in enumerate(rows, 1):
        exercises.append(Exercise(
            id=f"ex-{index}",
            name=name,
            sets=extras.get("sets", sets),
            reps=reps,
            tempo=extras.get("tempo"),
            rest=rest,
            swaps=list(extras["swaps"]) if "swaps" in extras else None,
        ))
    return exercises


def upper_body_exercises(equipment: List[str], week: int) -> List[Exercise]:
    return _build_exercises(UPPER_BODY[equipment_tier(equipment)], working_sets(week))


def lower_body_exercises(equipment: List[str], week: int) -> List[Exercise]:
    return _build_exercises(LOWER_BODY[equipment_tier(equipment)], working_sets(week))


def full_body_exercises(equipment: List[str]) -> List[Exercise]:
    rows = FULL_BODY_CIRCUIT["equipped" if equipment else "bodyweight"]
    return _build_exercises(rows, CIRCUIT_SETS)


def recovery_workout(day: int) -> Workout:
    return Workout(
        id=f"workout-{day}",
        day=day,
        type=WorkoutType.ACTIVE_RECOVERY,
        duration=RECOVERY_DURATION,
        exercises=[
            Exercise(
                id=f"ex-{day}-1",
                name="Light Walk or Stretch",
                sets=1,
                reps="15 min",
                rest=0,
                notes="Focus on mobility and recovery",
            )
        ],
        completed=False,
    )


def workout_for_day(day: int, equipment: List[str], duration: int) -> Workout:
    week = week_of(day)
    day_of_week = day % 7

    if day_of_week in (1, 4):
        workout_type = WorkoutType.UPPER_BODY
        exercises = upper_body_exercises(equipment, week)
    elif day_of_week in (2, 5):
        workout_type = WorkoutType.LOWER_BODY
        exercises = lower_body_exercises(equipment, week)
    elif day_of_week in (3, 6):
        workout_type = WorkoutType.FULL_BODY_CIRCUIT
        exercises = full_body_exercises(equipment)
    else:
        # unreachable while recovery days are routed through recovery_workout()
        workout_type = WorkoutType.ACTIVE_RECOVERY
        exercises = [Exercise(id=f"ex-{day}-1", name="Light Activity", sets=1, reps="20 min", rest=0)]

    return Workout(
        id=f"workout-{day}",
        day=day,
        type=workout_type,
        duration=duration,
        exercises=exercises,
        completed=False,
    )


def generate_program(onboarding: Optional[ProgramOnboarding]) -> List[Workout]:
    """Build the full 30-day plan. Either every day is generated or the request is rejected."""
    if onboarding is None:
        raise ClientInputError("Onboarding data required")

    equipment = list(onboarding.equipment or [])
    duration = onboarding.timeAvailability or DEFAULT_TIME_AVAILABILITY

    workouts = []
    for day in range(1, PROGRAM_DAYS + 1):
        if day % 7 == 0:
            workouts.append(recovery_workout(day))
        else:
            workouts.append(workout_for_day(day, equipment, duration))
    return workouts


def summarize_program(workouts: List[Workout]) -> Dict[str, Any]:
    """Counts per workout type, used for request logging."""
    counts: Dict[str, int] = {}
    for workout in workouts:
        counts[workout.type.value] = counts.get(workout.type.value, 0) + 1
    return counts
