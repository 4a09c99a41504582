# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Weekly availability logic - pure computation, no side effects.

Every function takes the evaluation instant explicitly. Instants are read
as wall-clock values: weekday and minute-of-day come straight from the
datetime, with no timezone conversion. Day/time arithmetic is integer
minutes throughout.
"""

from datetime import datetime, timedelta
from typing import Optional

from availability_engine.core.config import settings
from availability_engine.models.domain import (
    MINUTES_PER_DAY,
    WEEKDAYS,
    AvailabilitySummary,
    DayWindow,
    NextWindow,
    WeeklySchedule,
    minute_of_day,
    weekday_of,
)


def is_available_at(schedule: WeeklySchedule, instant: datetime) -> bool:
    """True when ``instant`` falls inside that day's window, both ends inclusive."""
    window = schedule.window_for(weekday_of(instant))
    if not window.is_active:
        return False
    return window.start <= minute_of_day(instant) <= window.end


def remaining_minutes(schedule: WeeklySchedule, instant: datetime) -> Optional[int]:
    """Minutes left in the current window, or None when not available."""
    if not is_available_at(schedule, instant):
        return None
    window = schedule.window_for(weekday_of(instant))
    return window.end - minute_of_day(instant)


def next_available_window(
    schedule: WeeklySchedule,
    instant: datetime,
    horizon_days: Optional[int] = None,
) -> Optional[NextWindow]:
    """
    First active window starting after ``instant``, scanning from today.
    Today's window only qualifies if its start is still ahead.
    """
    horizon = settings.NEXT_WINDOW_HORIZON_DAYS if horizon_days is None else horizon_days
    today_index = WEEKDAYS.index(weekday_of(instant))
    midnight = instant.replace(hour=0, minute=0, second=0, microsecond=0)

    for days_ahead in range(horizon):
        weekday = WEEKDAYS[(today_index + days_ahead) % 7]
        window = schedule.window_for(weekday)
        if not window.is_active:
            continue
        starts_at = midnight + timedelta(days=days_ahead, minutes=window.start)
        if days_ahead == 0 and starts_at <= instant:
            continue
        return NextWindow(
            weekday=weekday,
            window=window,
            starts_at=starts_at,
            days_ahead=days_ahead,
        )
    return None


def has_any_availability(schedule: WeeklySchedule) -> bool:
    return any(schedule.window_for(day).is_active for day in WEEKDAYS)


# ── Display helpers ──

def format_clock(minutes: int) -> str:
    """Minutes since midnight as 12-hour time: 0 -> '12:00 AM', 720 -> '12:00 PM'."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minute of day out of range: {minutes}")
    hours, mins = divmod(minutes, 60)
    period = "AM" if hours < 12 else "PM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{mins:02d} {period}"


def format_window(window: DayWindow) -> Optional[str]:
    if not window.is_active:
        return None
    return f"{format_clock(window.start)} - {format_clock(window.end)}"


def today_availability(schedule: WeeklySchedule, instant: datetime) -> Optional[str]:
    return format_window(schedule.window_for(weekday_of(instant)))


def format_remaining(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m left"
    return f"{mins}m left"


def format_next_window(next_window: NextWindow) -> str:
    if next_window.days_ahead == 0:
        day = "Today"
    elif next_window.days_ahead == 1:
        day = "Tomorrow"
    else:
        day = next_window.weekday.value.capitalize()
    return f"{day} at {format_clock(next_window.window.start)}"


def summarize(schedule: WeeklySchedule, instant: datetime) -> AvailabilitySummary:
    """Bundle the countdown / next-window strings a dashboard renders."""
    remaining = remaining_minutes(schedule, instant)
    upcoming = next_available_window(schedule, instant)
    return AvailabilitySummary(
        available_now=remaining is not None,
        today=today_availability(schedule, instant),
        remaining=format_remaining(remaining) if remaining is not None else None,
        next_available=format_next_window(upcoming) if upcoming is not None else None,
    )
