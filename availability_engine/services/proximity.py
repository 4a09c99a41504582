# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Proximity ranking - pure computation, no side effects.

Every call recomputes distances over the whole catalog. That is fine for
catalogs up to roughly a thousand entries; there is no spatial index.
"""

import math
from typing import Iterable, Optional, Protocol

from availability_engine.core.config import settings
from availability_engine.models.domain import GeoPoint, RankedResult

EARTH_RADIUS_KM = 6371.0


class Located(Protocol):
    point: GeoPoint


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points on Earth in kilometers.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    h = min(1.0, h)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def nearest(
    point: GeoPoint,
    catalog: Iterable[Located],
    n: Optional[int] = None,
) -> list[RankedResult]:
    """
    Rank catalog entries by distance from ``point``, closest first.
    Ties keep catalog order. At most ``n`` results.
    """
    limit = settings.DEFAULT_MAX_RESULTS if n is None else n
    if limit <= 0:
        return []

    ranked = [RankedResult(item=entry, distance_km=distance_km(point, entry.point)) for entry in catalog]
    # list.sort is stable
    ranked.sort(key=lambda r: r.distance_km)
    return ranked[:limit]


def closest(point: GeoPoint, catalog: Iterable[Located]) -> Optional[RankedResult]:
    ranked = nearest(point, catalog, 1)
    return ranked[0] if ranked else None
