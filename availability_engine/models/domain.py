# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models - pure data structures, validated at construction.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

T = TypeVar("T")

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})")


class Weekday(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


# Sunday-first, matching the stored schedule documents.
WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)


def weekday_of(instant: datetime) -> Weekday:
    """Weekday of a wall-clock instant (no timezone conversion)."""
    return WEEKDAYS[(instant.weekday() + 1) % 7]


def minute_of_day(instant: datetime) -> int:
    return instant.hour * 60 + instant.minute


def parse_clock(value: str) -> int:
    """Parse 'HH:MM' (or 'H:MM') into minutes since midnight."""
    match = _CLOCK_RE.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"Invalid clock time '{value}', expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Clock time '{value}' out of range")
    return hours * 60 + minutes


class GeoPoint(BaseModel):
    """A latitude/longitude pair in degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ...,
        ge=-90.0,
        le=90.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("latitude", "lat"),
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("longitude", "long", "lng", "lon"),
    )

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return {"latitude": data[0], "longitude": data[1]}
        return data


class DayWindow(BaseModel):
    """
    One day's availability, in minutes since midnight.

    start == end marks the day as unavailable. An all-day window is
    start=0, end=1439. Windows never wrap past midnight, so end < start
    is also treated as unavailable.
    """
    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, lt=MINUTES_PER_DAY, description="Start minute")
    end: int = Field(..., ge=0, lt=MINUTES_PER_DAY, description="End minute")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _coerce_clock(cls, value: Any) -> Any:
        if isinstance(value, str) and ":" in value:
            return parse_clock(value)
        return value

    @property
    def is_active(self) -> bool:
        return self.end > self.start

    @classmethod
    def inactive(cls) -> "DayWindow":
        return cls(start=0, end=0)

    @classmethod
    def all_day(cls) -> "DayWindow":
        return cls(start=0, end=MINUTES_PER_DAY - 1)


class WeeklySchedule(BaseModel):
    """Recurring weekly availability. Every weekday must be present."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    sunday: DayWindow
    monday: DayWindow
    tuesday: DayWindow
    wednesday: DayWindow
    thursday: DayWindow
    friday: DayWindow
    saturday: DayWindow

    def window_for(self, day: Weekday) -> DayWindow:
        return getattr(self, Weekday(day).value)

    @classmethod
    def every_day(cls, window: DayWindow) -> "WeeklySchedule":
        return cls(**{day.value: window for day in WEEKDAYS})


class LocationEntry(BaseModel):
    """A catalog member: a fixed site or a participant's current point."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    point: GeoPoint


class RosterEntry(BaseModel):
    """
    A participant as supplied by the roster store.
    Unknown fields are kept untouched and exposed via ``passthrough``.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., min_length=1)
    weekly_schedule: WeeklySchedule = Field(
        ...,
        validation_alias=AliasChoices(
            "weekly_schedule", "weeklySchedule", "availabilitySchedule"
        ),
    )
    point: GeoPoint

    @property
    def passthrough(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class AvailabilitySummary(BaseModel):
    """Display-ready availability state for one schedule at one instant."""
    available_now: bool
    today: Optional[str] = None
    remaining: Optional[str] = None
    next_available: Optional[str] = None


@dataclass(frozen=True)
class RankedResult(Generic[T]):
    item: T
    distance_km: float


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    fetched_at_epoch_ms: int


@dataclass(frozen=True)
class NextWindow:
    weekday: Weekday
    window: DayWindow
    starts_at: datetime
    days_ahead: int
