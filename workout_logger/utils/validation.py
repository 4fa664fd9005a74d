import math
from datetime import datetime

from workout_logger.models.workout import UnitType, Workout

NAME_MAX_LENGTH = 50
NOTES_MAX_LENGTH = 200

# Every check returns None when the value is valid, otherwise the reason.


def validate_id(workout_id: int | None) -> str | None:
    valid = (
        isinstance(workout_id, int)
        and not isinstance(workout_id, bool)
        and workout_id > 0
    )
    return None if valid else "Workout ID cannot be null and must be greater than 0."


def validate_name(name: str | None) -> str | None:
    valid = name is not None and name.strip() != "" and len(name) <= NAME_MAX_LENGTH
    return (
        None
        if valid
        else f"Workout name cannot be null or empty or longer than {NAME_MAX_LENGTH} characters."
    )


def validate_start_date_time(start: datetime | None) -> str | None:
    # Parsing the string form is the caller's job
    return (
        None
        if start is not None
        else "Start date/time cannot be null and must be in 'YYYY-MM-DDTHH:MM' format (e.g. 2025-10-04T14:30)."
    )


def validate_duration(duration: int | None) -> str | None:
    valid = duration is not None and duration >= 1
    return None if valid else "Duration must be at least 1 minute."


def validate_distance(distance: float | None) -> str | None:
    valid = distance is not None and math.isfinite(distance) and distance >= 0
    return None if valid else "Distance must be a non-negative number."


def validate_unit(unit: UnitType | None) -> str | None:
    valid = isinstance(unit, UnitType)
    return None if valid else "Unit must be either KILOMETERS or MILES."


def validate_notes(notes: str | None) -> str | None:
    valid = notes is None or len(notes) <= NOTES_MAX_LENGTH
    return None if valid else f"Notes cannot exceed {NOTES_MAX_LENGTH} characters."


def validate_workout(workout: Workout) -> str | None:
    """
    Run the field checks in order and stop at the first failure.
    The id is not checked here, it belongs to the repository.
    """
    checks = (
        (validate_name, workout.name),
        (validate_start_date_time, workout.start_date_time),
        (validate_duration, workout.duration),
        (validate_distance, workout.distance),
        (validate_unit, workout.unit),
        (validate_notes, workout.notes),
    )
    for check, value in checks:
        error = check(value)
        if error is not None:
            return error
    return None
