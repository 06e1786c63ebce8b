"""
Bounding box representation for the geohash cell search.

This module defines the axis-aligned latitude/longitude rectangle used both
as the root extent of the cell tree and as the query region, together with
the bisection and open-intersection rules the search relies on.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Tuple


class Quadrant(IntEnum):
    """
    Two-bit quadrant tags appended to a parent code.

    The high bit selects the longitude half, the low bit the latitude half.
    """
    SOUTH_WEST = 0b00  # lower lat, lower lng
    NORTH_WEST = 0b01  # upper lat, lower lng
    SOUTH_EAST = 0b10  # lower lat, upper lng
    NORTH_EAST = 0b11  # upper lat, upper lng

    @property
    def is_north(self) -> bool:
        return bool(self & 0b01)

    @property
    def is_east(self) -> bool:
        return bool(self & 0b10)


# Order in which the children of a cell are emitted. Consumers comparing
# exact output sequences depend on it.
EMISSION_ORDER: Tuple[Quadrant, ...] = (
    Quadrant.SOUTH_WEST,
    Quadrant.NORTH_EAST,
    Quadrant.SOUTH_EAST,
    Quadrant.NORTH_WEST,
)


@dataclass(frozen=True)
class BoundingBox:
    """
    An axis-aligned rectangle in latitude/longitude space.

    Bounds are not validated on construction: min <= max on each axis is
    expected by the search but left to the caller (see CoverSearcher for a
    validating entry point).
    """
    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Tuple[float, float]]) -> BoundingBox:
        """
        Build the smallest box enclosing a set of (lng, lat) pairs.

        Pairs are in GeoJSON order, longitude first.

        Raises:
            ValueError: If no coordinates are given
        """
        lats: List[float] = []
        lngs: List[float] = []
        for lng, lat in coordinates:
            lngs.append(lng)
            lats.append(lat)
        if not lats:
            raise ValueError("Cannot build a bounding box from no coordinates")
        return cls(min(lats), min(lngs), max(lats), max(lngs))

    @property
    def height(self) -> float:
        """Extent along the latitude axis, in degrees."""
        return self.max_lat - self.min_lat

    @property
    def width(self) -> float:
        """Extent along the longitude axis, in degrees."""
        return self.max_lng - self.min_lng

    def is_valid(self) -> bool:
        """Check that min <= max on both axes."""
        return self.min_lat <= self.max_lat and self.min_lng <= self.max_lng

    def contains(self, lat: float, lng: float) -> bool:
        """Check if a point lies within the box, edges included."""
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng

    def intersects(self, other: BoundingBox) -> bool:
        """
        Open intersection test.

        Boxes that only share an edge or a corner do not intersect, so a
        query edge lying exactly on a cell boundary is attributed to one
        side only.
        """
        return (
            self.min_lat < other.max_lat
            and self.max_lat > other.min_lat
            and self.min_lng < other.max_lng
            and self.max_lng > other.min_lng
        )

    def midpoints(self) -> Tuple[float, float]:
        """
        Calculate the bisection point.

        Returns:
            Tuple of (mid_lat, mid_lng)
        """
        mid_lat = (self.min_lat + self.max_lat) / 2.0
        mid_lng = (self.min_lng + self.max_lng) / 2.0
        return mid_lat, mid_lng

    def quadrant(self, tag: Quadrant) -> BoundingBox:
        """Return the sub-rectangle for one quadrant of this box."""
        mid_lat, mid_lng = self.midpoints()

        if tag.is_north:
            min_lat, max_lat = mid_lat, self.max_lat
        else:
            min_lat, max_lat = self.min_lat, mid_lat

        if tag.is_east:
            min_lng, max_lng = mid_lng, self.max_lng
        else:
            min_lng, max_lng = self.min_lng, mid_lng

        return BoundingBox(min_lat, min_lng, max_lat, max_lng)

    def subdivide(self) -> List[Tuple[Quadrant, BoundingBox]]:
        """
        Bisect the box into its four quadrants.

        Returns:
            List of (quadrant, box) pairs in emission order: SW, NE, SE, NW
        """
        return [(tag, self.quadrant(tag)) for tag in EMISSION_ORDER]


# Full WGS84 latitude/longitude domain
WORLD = BoundingBox(min_lat=-90.0, min_lng=-180.0, max_lat=90.0, max_lng=180.0)
