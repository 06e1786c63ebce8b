"""
Minimal GeoJSON object model.

Parses GeoJSON geometries, features and feature collections into plain
dataclasses so callers can pull coordinates out of them, typically to build
the query box for a cell search. Coordinates are (lng, lat) tuples, as in
the GeoJSON format itself.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type, Union
import json

from .bbox import BoundingBox
from .exceptions import GeoJSONError


Coordinate = Tuple[float, float]


class Properties(dict):
    """Feature properties with typed access to individual members."""

    def value(self, name: str, type_: Optional[Type] = None) -> Any:
        """
        Look up a property.

        Args:
            name: Property name
            type_: If given, the value is converted to this type

        Returns:
            The value, or None if it is missing or cannot be converted
        """
        if name not in self:
            return None
        raw = self[name]
        if type_ is None:
            return raw
        if isinstance(raw, type_) and not (type_ is int and isinstance(raw, bool)):
            return raw
        # Only lossless numeric conversions; anything else is a mismatch
        if type_ is float and isinstance(raw, int) and not isinstance(raw, bool):
            return float(raw)
        return None


@dataclass
class Point:
    coordinates: Coordinate


@dataclass
class LineString:
    coordinates: List[Coordinate]


@dataclass
class Polygon:
    coordinates: List[List[Coordinate]]


@dataclass
class MultiPoint:
    coordinates: List[Coordinate]


@dataclass
class MultiLineString:
    coordinates: List[List[Coordinate]]


@dataclass
class MultiPolygon:
    coordinates: List[List[List[Coordinate]]]


@dataclass
class GeometryCollection:
    geometries: List["Geometry"]


Geometry = Union[
    Point, LineString, Polygon, MultiPoint, MultiLineString, MultiPolygon, GeometryCollection
]


@dataclass
class Feature:
    geometry: Geometry
    properties: Properties = field(default_factory=Properties)
    id: Optional[int] = None


@dataclass
class FeatureCollection:
    features: List[Feature]


GeoJSON = Union[Geometry, Feature, FeatureCollection]


def _coordinate(raw: Any) -> Coordinate:
    if (
        not isinstance(raw, (list, tuple))
        or len(raw) < 2
        or not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in raw[:2])
    ):
        raise GeoJSONError(f"Invalid position: {raw!r}")
    return float(raw[0]), float(raw[1])


def _nested(raw: Any, levels: int) -> Any:
    """Convert positions nested `levels` lists deep."""
    if levels == 0:
        return _coordinate(raw)
    if not isinstance(raw, list):
        raise GeoJSONError(f"Expected a list of coordinates, got {raw!r}")
    return [_nested(item, levels - 1) for item in raw]


# Geometry type -> (class, list nesting depth of its positions)
_COORDINATE_GEOMETRIES: Dict[str, Tuple[type, int]] = {
    "Point": (Point, 0),
    "LineString": (LineString, 1),
    "MultiPoint": (MultiPoint, 1),
    "Polygon": (Polygon, 2),
    "MultiLineString": (MultiLineString, 2),
    "MultiPolygon": (MultiPolygon, 3),
}


def _member(obj: Mapping[str, Any], name: str) -> Any:
    if name not in obj:
        raise GeoJSONError(f"{obj.get('type')} is missing '{name}'")
    return obj[name]


def _parse_geometry(obj: Mapping[str, Any]) -> Geometry:
    geo_type = obj.get("type")
    if geo_type in _COORDINATE_GEOMETRIES:
        cls, levels = _COORDINATE_GEOMETRIES[geo_type]
        return cls(_nested(_member(obj, "coordinates"), levels))
    if geo_type == "GeometryCollection":
        geometries = _member(obj, "geometries")
        if not isinstance(geometries, list):
            raise GeoJSONError("GeometryCollection 'geometries' must be a list")
        return GeometryCollection([_parse_geometry(_as_mapping(g)) for g in geometries])
    raise GeoJSONError(f"Unknown geometry type: {geo_type!r}")


def _parse_feature(obj: Mapping[str, Any]) -> Feature:
    feature_id = obj.get("id")
    if feature_id is not None and (not isinstance(feature_id, int) or isinstance(feature_id, bool)):
        raise GeoJSONError(f"Feature id must be an integer, got {feature_id!r}")

    properties = obj.get("properties") or {}
    if not isinstance(properties, dict):
        raise GeoJSONError("Feature 'properties' must be an object")

    geometry = _parse_geometry(_as_mapping(_member(obj, "geometry")))
    return Feature(geometry=geometry, properties=Properties(properties), id=feature_id)


def _as_mapping(obj: Any) -> Mapping[str, Any]:
    if not isinstance(obj, dict):
        raise GeoJSONError(f"Expected a JSON object, got {type(obj).__name__}")
    return obj


def parse_geojson(source: Union[str, bytes, Mapping[str, Any]]) -> GeoJSON:
    """
    Parse a GeoJSON document.

    Args:
        source: JSON text, or an already-decoded mapping

    Returns:
        A geometry, Feature or FeatureCollection

    Raises:
        GeoJSONError: If the text is not JSON or not a supported GeoJSON object
    """
    if isinstance(source, (str, bytes)):
        try:
            source = json.loads(source)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise GeoJSONError(f"Invalid JSON: {e}") from e

    obj = _as_mapping(source)
    geo_type = obj.get("type")

    if geo_type == "Feature":
        return _parse_feature(obj)
    if geo_type == "FeatureCollection":
        features = _member(obj, "features")
        if not isinstance(features, list):
            raise GeoJSONError("FeatureCollection 'features' must be a list")
        return FeatureCollection([_parse_feature(_as_mapping(f)) for f in features])
    return _parse_geometry(obj)


def _flatten(value: Any) -> Iterator[Coordinate]:
    if isinstance(value, tuple):
        yield value
    else:
        for item in value:
            yield from _flatten(item)


def iter_coordinates(obj: GeoJSON) -> Iterator[Coordinate]:
    """Yield every (lng, lat) position in a GeoJSON object."""
    if isinstance(obj, FeatureCollection):
        for feature in obj.features:
            yield from iter_coordinates(feature)
    elif isinstance(obj, Feature):
        yield from iter_coordinates(obj.geometry)
    elif isinstance(obj, GeometryCollection):
        for geometry in obj.geometries:
            yield from iter_coordinates(geometry)
    else:
        yield from _flatten(obj.coordinates)


def bounding_box(obj: GeoJSON) -> BoundingBox:
    """
    Compute the box enclosing all positions of a GeoJSON object.

    Raises:
        GeoJSONError: If the object has no positions
    """
    try:
        return BoundingBox.from_coordinates(iter_coordinates(obj))
    except ValueError as e:
        raise GeoJSONError(str(e)) from e
