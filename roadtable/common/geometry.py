"""Great-circle distance helpers."""

from __future__ import annotations

import math
from typing import Sequence

from roadtable.common.constants import EARTH_RADIUS_KM
from roadtable.common.models import GeoPoint


def _wrap_degrees(value: float) -> float:
    # Exact for finite input and the identity on [-180, 180].
    return math.remainder(value, 360.0)


def haversine_km(p1: GeoPoint, p2: GeoPoint) -> float:
    lat1_deg, lon1_deg = _wrap_degrees(p1.lat), _wrap_degrees(p1.lon)
    lat2_deg, lon2_deg = _wrap_degrees(p2.lat), _wrap_degrees(p2.lon)

    lat1 = math.radians(lat1_deg)
    lat2 = math.radians(lat2_deg)
    dlat = math.radians(lat2_deg - lat1_deg)
    dlon = math.radians(lon2_deg - lon1_deg)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push a just outside [0, 1] for near-antipodal points.
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.asin(math.sqrt(a))


def polyline_length_km(points: Sequence[GeoPoint]) -> float:
    total = 0.0
    for start, end in zip(points, points[1:]):
        total += haversine_km(start, end)
    return total


def format_point(point: GeoPoint) -> str:
    return f"{float(point.lat)!r};{float(point.lon)!r}"
