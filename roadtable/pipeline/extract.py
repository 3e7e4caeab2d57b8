"""Per-feature road extraction: classification filter, length and speed inference."""

from __future__ import annotations

from dataclasses import dataclass

from roadtable.common.constants import LENGTH_DECIMALS
from roadtable.common.geometry import format_point, polyline_length_km
from roadtable.common.models import LineGeometry, RawFeature, RoadRecord
from roadtable.common.policy import DEFAULT_POLICY, ClassificationPolicy

REJECT_NOT_DRIVABLE = "highway_not_drivable"
REJECT_MISSING_NAME = "missing_name"
REJECT_NON_LINE = "non_line_geometry"
REJECT_MALFORMED_GEOMETRY = "malformed_geometry"
REJECTION_REASONS = (
    REJECT_NOT_DRIVABLE,
    REJECT_MISSING_NAME,
    REJECT_NON_LINE,
    REJECT_MALFORMED_GEOMETRY,
)


@dataclass(frozen=True)
class Extraction:
    record: RoadRecord | None = None
    rejected: str | None = None

    @property
    def accepted(self) -> bool:
        return self.record is not None


def extract_road(feature: RawFeature, policy: ClassificationPolicy = DEFAULT_POLICY) -> Extraction:
    """Turn one raw feature into a road record, or say why it was left out.

    A feature is kept only when its highway tag is drivable under ``policy``,
    it has a non-empty name, and its geometry is a decoded line string with at
    least one point. The declared ``maxspeed`` is passed through verbatim;
    otherwise the policy's default speed for the tag is used.
    """
    if not policy.is_drivable(feature.highway):
        return Extraction(rejected=REJECT_NOT_DRIVABLE)
    if not feature.name:
        return Extraction(rejected=REJECT_MISSING_NAME)

    geometry = feature.geometry
    if not isinstance(geometry, LineGeometry):
        if geometry.malformed:
            return Extraction(rejected=REJECT_MALFORMED_GEOMETRY)
        return Extraction(rejected=REJECT_NON_LINE)
    if not geometry.points:
        return Extraction(rejected=REJECT_MALFORMED_GEOMETRY)

    points = geometry.points
    length_km = round(polyline_length_km(points), LENGTH_DECIMALS)
    speed = feature.maxspeed or policy.default_speed(feature.highway)

    return Extraction(
        record=RoadRecord(
            road_name=feature.name,
            origin=format_point(points[0]),
            destination=format_point(points[-1]),
            length_km=length_km,
            speed_limit=speed,
        )
    )
