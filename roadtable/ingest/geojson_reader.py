"""GeoJSON FeatureCollection decoding into raw road features."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from roadtable.common.errors import MalformedInputError, MissingInputError
from roadtable.common.fs import read_text
from roadtable.common.models import GeoPoint, Geometry, LineGeometry, OtherGeometry, RawFeature

PROPERTY_KEYS = ("highway", "name", "maxspeed")


def _property_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), sort_keys=True)


def _coordinate(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_position(position: Any) -> GeoPoint | None:
    if not isinstance(position, list) or len(position) < 2:
        return None
    lon = _coordinate(position[0])
    lat = _coordinate(position[1])
    if lon is None or lat is None:
        return None
    return GeoPoint(lat=lat, lon=lon)


def parse_geometry(geometry: Any) -> Geometry:
    if not isinstance(geometry, dict):
        return OtherGeometry(kind="null")
    kind = geometry.get("type")
    if not isinstance(kind, str):
        return OtherGeometry(kind="unknown", malformed=True)
    if kind != "LineString":
        return OtherGeometry(kind=kind)

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list) or not coordinates:
        return OtherGeometry(kind=kind, malformed=True)
    points = []
    for position in coordinates:
        point = _parse_position(position)
        if point is None:
            return OtherGeometry(kind=kind, malformed=True)
        points.append(point)
    return LineGeometry(points=tuple(points))


def parse_feature(obj: Any) -> RawFeature:
    if not isinstance(obj, dict):
        return RawFeature(highway="", name="", maxspeed="", geometry=OtherGeometry(kind="null", malformed=True))

    properties = obj.get("properties")
    if not isinstance(properties, dict):
        properties = {}
    highway, name, maxspeed = (_property_text(properties.get(key)) for key in PROPERTY_KEYS)
    return RawFeature(
        highway=highway,
        name=name,
        maxspeed=maxspeed,
        geometry=parse_geometry(obj.get("geometry")),
    )


def decode_feature_collection(text: str, source: str = "<input>") -> list[RawFeature]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"{source} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise MalformedInputError(f"{source} is not a GeoJSON FeatureCollection")
    features = payload.get("features")
    if not isinstance(features, list):
        raise MalformedInputError(f"{source} has no features list")
    return [parse_feature(feature) for feature in features]


def read_feature_collection(path: Path) -> list[RawFeature]:
    if not path.is_file():
        raise MissingInputError(f"File {path} not found.")
    try:
        text = read_text(path)
    except UnicodeDecodeError as exc:
        raise MalformedInputError(f"{path} is not UTF-8 text: {exc}") from exc
    return decode_feature_collection(text, source=str(path))
