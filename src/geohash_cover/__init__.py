"""
geohash-cover: quadtree cell codes covering a latitude/longitude region.

This package computes the integer codes of the quadtree cells, at a chosen
subdivision depth, that overlap a query bounding box. The codes can be used
as partition or range keys to restrict a geo-indexed search.
"""

__version__ = "0.1.0"

from .bbox import BoundingBox, Quadrant, EMISSION_ORDER, WORLD
from .codes import (
    ROOT_CODE,
    MAX_DEPTH_64,
    code_depth,
    child_code,
    parent_code,
    code_path,
    code_to_bbox,
    format_code,
)
from .search import (
    Cell,
    search,
    search_cells,
    SearchConfig,
    SearchStats,
    CoverSearcher,
    cover_bounding_box,
)
from .exceptions import GeoHashCoverError, ValidationError, GeoJSONError
from .geojson import parse_geojson, bounding_box

__all__ = [
    "BoundingBox",
    "Quadrant",
    "EMISSION_ORDER",
    "WORLD",
    "ROOT_CODE",
    "MAX_DEPTH_64",
    "code_depth",
    "child_code",
    "parent_code",
    "code_path",
    "code_to_bbox",
    "format_code",
    "Cell",
    "search",
    "search_cells",
    "SearchConfig",
    "SearchStats",
    "CoverSearcher",
    "cover_bounding_box",
    "GeoHashCoverError",
    "ValidationError",
    "GeoJSONError",
    "parse_geojson",
    "bounding_box",
]
