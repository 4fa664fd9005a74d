from datetime import datetime
from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from workout_logger.utils.dates import START_FORMAT, to_minute

T = TypeVar("T")

ErrorKind = Literal["validation", "not_found", "import_format", "internal"]


class UnitType(str, Enum):
    KILOMETERS = "KILOMETERS"
    MILES = "MILES"


class Workout(BaseModel):
    """
    A single cardio session.

    Types only. Range and length checks live in utils.validation so an
    invalid record can still be built and reported with one message.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int | None = None  # assigned by the repository
    name: str | None = None
    start_date_time: datetime | None = Field(default=None, alias="startDateTime")
    duration: int | None = None  # minutes
    distance: float | None = None
    unit: UnitType | None = None
    notes: str | None = ""

    @field_validator("start_date_time")
    @classmethod
    def _minute_precision(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            raise ValueError("startDateTime must not include a timezone")
        return to_minute(value)

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_upper(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_serializer("start_date_time")
    def _serialize_start(self, value: datetime | None) -> str | None:
        return value.strftime(START_FORMAT) if value else None


class UnitChange(BaseModel):
    unit: UnitType | None = None


class OperationResult(BaseModel, Generic[T]):
    """
    Uniform envelope returned by every service call.
    """

    success: bool
    data: T | None = None
    message: str = ""
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str = "") -> "OperationResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, message: str, error: ErrorKind = "validation") -> "OperationResult[T]":
        return cls(success=False, data=None, message=message, error=error)
