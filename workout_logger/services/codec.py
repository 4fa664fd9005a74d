"""
Line oriented exchange format for importing and exporting workouts.

One workout per non-blank line, six comma separated fields, no header:

    name,startDateTime,duration,distance,unit,notes
    Run,2025-10-10T12:00,10,10.0,KILOMETERS,
"""

from typing import Iterable, List

from workout_logger.models.workout import UnitType, Workout
from workout_logger.utils import dates
from workout_logger.utils.validation import validate_workout

FIELD_COUNT = 6
SEPARATOR = ","
UNSAFE_CHARS = (SEPARATOR, "\r", "\n")


class ImportFormatError(Exception):
    """A line of import text could not be turned into a valid workout."""

    def __init__(self, line: int, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Error on line {line}: {reason}")


class ExportFormatError(Exception):
    """A workout cannot be written as one line of the exchange format."""

    def __init__(self, workout_id: int | None, reason: str):
        self.workout_id = workout_id
        self.reason = reason
        super().__init__(f"Workout {workout_id} cannot be exported: {reason}")


def _parse_unit(value: str) -> UnitType:
    try:
        return UnitType(value.upper())
    except ValueError:
        raise ValueError(f"unknown unit '{value}'") from None


def _parse_line(line: str, line_number: int) -> Workout:
    parts = [p.strip() for p in line.split(SEPARATOR)]
    if len(parts) != FIELD_COUNT:
        raise ImportFormatError(
            line_number, f"expected {FIELD_COUNT} fields but found {len(parts)}"
        )

    name, start, duration, distance, unit, notes = parts
    try:
        workout = Workout(
            name=name,
            start_date_time=dates.parse_start(start),
            duration=int(duration),
            distance=float(distance),
            unit=_parse_unit(unit),
            notes=notes,
        )
    except ValueError as e:
        # pydantic's ValidationError is a ValueError too
        raise ImportFormatError(line_number, f"unexpected parsing error: {e}") from e

    error = validate_workout(workout)
    if error is not None:
        raise ImportFormatError(line_number, error)
    return workout


def decode(lines: str | Iterable[str]) -> List[Workout]:
    """
    Parse import text into workouts.

    Blank lines are skipped and not counted. The first bad line raises
    ImportFormatError and nothing decoded so far is returned.
    """
    if isinstance(lines, str):
        lines = lines.splitlines()

    workouts: List[Workout] = []
    line_number = 0
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        line_number += 1
        workouts.append(_parse_line(line, line_number))
    return workouts


def _check_free_text(workout: Workout, field: str, value: str) -> None:
    if any(ch in value for ch in UNSAFE_CHARS):
        raise ExportFormatError(
            workout.id, f"{field} contains a comma or line break"
        )


def encode_line(workout: Workout) -> str:
    """
    Raises ExportFormatError when the name or notes would split the line,
    the format has no quoting.
    """
    _check_free_text(workout, "name", workout.name or "")
    _check_free_text(workout, "notes", workout.notes or "")

    fields = [
        workout.name or "",
        dates.format_start(workout.start_date_time),
        str(workout.duration),
        repr(float(workout.distance)),
        workout.unit.value,
        workout.notes or "",
    ]
    return SEPARATOR.join(fields)


def encode(workouts: Iterable[Workout]) -> str:
    """
    One line per workout, each terminated by a newline.

    Decoding trims every field, so leading or trailing spaces in a name or
    note do not survive an export and re-import.
    """
    return "".join(f"{encode_line(w)}\n" for w in workouts)
