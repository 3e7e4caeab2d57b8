"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float


@dataclass(frozen=True)
class LineGeometry:
    points: tuple[GeoPoint, ...]


@dataclass(frozen=True)
class OtherGeometry:
    """Any geometry that is not a usable line: points, polygons, multi-geometries,
    null geometries, and line strings whose coordinates could not be decoded."""

    kind: str
    malformed: bool = False


Geometry = Union[LineGeometry, OtherGeometry]


@dataclass(frozen=True)
class RawFeature:
    highway: str
    name: str
    maxspeed: str
    geometry: Geometry = field(default_factory=lambda: OtherGeometry(kind="null"))


@dataclass(frozen=True)
class RoadRecord:
    road_name: str
    origin: str
    destination: str
    length_km: float
    speed_limit: str

    def to_row(self) -> dict[str, object]:
        return {
            "RoadName": self.road_name,
            "From": self.origin,
            "To": self.destination,
            "LengthKm": self.length_km,
            "SpeedLimitKmH": self.speed_limit,
        }
