# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy.

ValidationError is pydantic's: every malformed GeoPoint, DayWindow or
WeeklySchedule is rejected by the domain models at construction time.
FetchError is raised once the roster supplier has failed on every attempt.
"""

from typing import Optional

from pydantic import ValidationError


class FetchError(RuntimeError):
    """The underlying fetch failed on every retry attempt."""

    def __init__(
        self,
        resource: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
    ) -> None:
        self.resource = resource
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(
            f"Fetching '{resource}' failed after {attempts} attempt(s){detail}"
        )


__all__ = ["FetchError", "ValidationError"]
