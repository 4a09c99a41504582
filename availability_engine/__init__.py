# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Availability & proximity engine.

Which participants are reachable right now, ranked by distance, with the
roster sourced through a retrying TTL cache.
"""

from availability_engine.core.dependencies import build_directory
from availability_engine.core.errors import FetchError, ValidationError
from availability_engine.models.domain import (
    AvailabilitySummary,
    CacheEntry,
    DayWindow,
    GeoPoint,
    LocationEntry,
    NextWindow,
    RankedResult,
    RosterEntry,
    Weekday,
    WeeklySchedule,
    parse_clock,
)
from availability_engine.services.availability import (
    format_clock,
    is_available_at,
    next_available_window,
    remaining_minutes,
    summarize,
)
from availability_engine.services.cache import CacheState, ResilientCache
from availability_engine.services.directory import AvailabilityDirectory
from availability_engine.services.proximity import closest, distance_km, nearest
from availability_engine.services.roster_client import HttpRosterSupplier

__all__ = [
    # Errors
    "FetchError",
    "ValidationError",
    # Domain
    "AvailabilitySummary",
    "CacheEntry",
    "DayWindow",
    "GeoPoint",
    "LocationEntry",
    "NextWindow",
    "RankedResult",
    "RosterEntry",
    "Weekday",
    "WeeklySchedule",
    "parse_clock",
    # Weekly availability
    "format_clock",
    "is_available_at",
    "next_available_window",
    "remaining_minutes",
    "summarize",
    # Proximity
    "closest",
    "distance_km",
    "nearest",
    # Cache + directory
    "AvailabilityDirectory",
    "CacheState",
    "HttpRosterSupplier",
    "ResilientCache",
    "build_directory",
]
