# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Availability directory.

Answers "who is available near this point at this instant": the roster comes
through a ResilientCache, is filtered by each participant's weekly schedule,
then ranked by great-circle distance. A failed roster fetch fails the query;
nothing is computed over a missing roster.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterable, Optional, Union

from availability_engine.core.errors import FetchError, ValidationError
from availability_engine.core.logging import get_logger
from availability_engine.metrics.prometheus import (
    AVAILABLE_PARTICIPANTS,
    DIRECTORY_QUERIES,
    ROSTER_SIZE,
)
from availability_engine.models.domain import (
    AvailabilitySummary,
    GeoPoint,
    RankedResult,
    RosterEntry,
    WeeklySchedule,
)
from availability_engine.repositories.roster_repository import RosterRepository
from availability_engine.services.availability import is_available_at, summarize
from availability_engine.services.cache import CacheState, ResilientCache, run_fetch
from availability_engine.services.proximity import nearest

RosterRecords = Iterable[Union[RosterEntry, Mapping[str, Any]]]
RosterSupplier = Callable[[], Union[Awaitable[RosterRecords], RosterRecords]]

logger = get_logger(__name__)


def coerce_roster(records: RosterRecords) -> list[RosterEntry]:
    """Validate supplier records, skipping (and logging) malformed ones."""
    roster: list[RosterEntry] = []
    for record in records:
        if isinstance(record, RosterEntry):
            roster.append(record)
            continue
        try:
            roster.append(RosterEntry.model_validate(record))
        except ValidationError as exc:
            record_id = record.get("id") if isinstance(record, Mapping) else None
            logger.warning(
                "Skipping malformed roster record: id=%s, errors=%d",
                record_id, exc.error_count(),
            )
    return roster


class AvailabilityDirectory:
    """Business logic for availability-and-proximity lookups."""

    def __init__(
        self,
        supplier: Optional[RosterSupplier] = None,
        *,
        roster_repo: Optional[RosterRepository] = None,
        max_age: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        attempt_timeout: Optional[float] = None,
        clock: Optional[Callable[[], int]] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ) -> None:
        self._supplier = supplier
        self._roster = roster_repo or RosterRepository()
        self._cache: ResilientCache[list[RosterEntry]] = ResilientCache(
            self._load_roster,
            name="roster",
            max_age=max_age,
            retries=retries,
            backoff_base=backoff_base,
            attempt_timeout=attempt_timeout,
            clock=clock,
            sleep=sleep,
        )

    @property
    def externally_sourced(self) -> bool:
        return self._supplier is not None

    @property
    def roster_state(self) -> CacheState:
        return self._cache.state

    # ── Registration ──

    def register(
        self,
        participant_id: str,
        schedule: Union[WeeklySchedule, Mapping[str, Any]],
        point: Union[GeoPoint, Mapping[str, Any], tuple[float, float]],
        **extra: Any,
    ) -> RosterEntry:
        """
        Validate and upsert a participant into the in-memory roster.
        Visible after the next roster fetch (TTL expiry, refresh, or invalidate).
        Raises ValidationError on a malformed schedule or point. When the roster
        is externally sourced the entry is validated but not stored.
        """
        entry = RosterEntry.model_validate(
            {**extra, "id": participant_id, "weekly_schedule": schedule, "point": point}
        )
        if self.externally_sourced:
            logger.info(
                "Registration not stored, roster is externally sourced: participant=%s",
                participant_id,
            )
            return entry

        self._roster.save(entry)
        logger.info(
            "Participant registered: participant=%s, roster=%d",
            participant_id, self._roster.count(),
        )
        return entry

    def unregister(self, participant_id: str) -> None:
        """Remove a participant from the in-memory roster. Raises KeyError if unknown."""
        if self._roster.delete(participant_id) is None:
            raise KeyError(f"No participant registered with id '{participant_id}'")
        logger.info("Participant unregistered: participant=%s", participant_id)

    # ── Queries ──

    async def query_available_near(
        self,
        point: Union[GeoPoint, Mapping[str, Any], tuple[float, float]],
        at: datetime,
        max_results: Optional[int] = None,
    ) -> list[RankedResult]:
        """Participants available at ``at``, closest to ``point`` first."""
        origin = point if isinstance(point, GeoPoint) else GeoPoint.model_validate(point)
        try:
            roster = await self._cache.fetch()
        except FetchError:
            DIRECTORY_QUERIES.labels(outcome="fetch_error").inc()
            raise

        survivors = [e for e in roster if is_available_at(e.weekly_schedule, at)]
        ranked = nearest(origin, survivors, max_results)
        results = [RankedResult(item=r.item.id, distance_km=r.distance_km) for r in ranked]

        DIRECTORY_QUERIES.labels(outcome="ok").inc()
        AVAILABLE_PARTICIPANTS.observe(len(results))
        logger.info(
            "Available-near query: roster=%d, available=%d, returned=%d",
            len(roster), len(survivors), len(results),
        )
        return results

    async def describe_participant(self, participant_id: str, at: datetime) -> AvailabilitySummary:
        """Availability summary for one participant. Raises KeyError if unknown."""
        roster = await self._cache.fetch()
        for entry in roster:
            if entry.id == participant_id:
                return summarize(entry.weekly_schedule, at)
        raise KeyError(f"No participant found with id '{participant_id}'")

    # ── Roster cache control ──

    async def refresh_roster(self) -> list[RosterEntry]:
        return await self._cache.refresh()

    def invalidate_roster(self) -> None:
        self._cache.invalidate()

    # ── Internal ──

    async def _load_roster(self) -> list[RosterEntry]:
        if self._supplier is None:
            records = self._roster.get_all()
        else:
            records = await run_fetch(self._supplier)
        roster = coerce_roster(records)
        ROSTER_SIZE.set(len(roster))
        return roster
