# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Composition - wire suppliers, repositories and the directory.
Every call builds a fresh, caller-owned graph; nothing is shared between
directories.
"""

from typing import Any, Optional

from availability_engine.core.config import settings
from availability_engine.repositories.roster_repository import RosterRepository
from availability_engine.services.directory import AvailabilityDirectory
from availability_engine.services.roster_client import HttpRosterSupplier


def build_directory(roster_url: Optional[str] = None, **options: Any) -> AvailabilityDirectory:
    """
    Directory backed by the HTTP roster store when a URL is configured,
    otherwise by a fresh in-memory roster. ``options`` go to the directory.
    """
    url = roster_url or settings.ROSTER_SERVICE_URL
    if url:
        return AvailabilityDirectory(HttpRosterSupplier(url), **options)
    return AvailabilityDirectory(roster_repo=RosterRepository(), **options)
