# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Roster data access.
Encapsulates all read/write operations on the in-memory participant store.
NO business rules here - pure CRUD.
"""

from typing import Optional

from availability_engine.models.domain import RosterEntry


class RosterRepository:
    """In-memory roster storage, keyed by participant id."""

    def __init__(self) -> None:
        self._store: dict[str, RosterEntry] = {}

    # ── Read ──

    def get_all(self) -> list[RosterEntry]:
        return list(self._store.values())

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def save(self, entry: RosterEntry) -> None:
        self._store[entry.id] = entry

    def delete(self, participant_id: str) -> Optional[RosterEntry]:
        return self._store.pop(participant_id, None)
