"""
Cell search over a quadtree of latitude/longitude boxes.

This module finds the cells at a given depth whose boxes overlap a query
region. The tree is never materialized: the search keeps only the live
frontier of one level, subdivides every live cell into its four quadrants
and keeps the children that intersect the query. A pruned cell is never
revisited, so every returned code descends from a code returned at the
previous depth.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
import logging

from .bbox import BoundingBox, WORLD
from .codes import ROOT_CODE, MAX_DEPTH_64, child_code
from .exceptions import ValidationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """A code paired with the box it covers. Only lives inside a search."""

    code: int
    box: BoundingBox

    def children(self) -> Iterator[Cell]:
        """Yield the four child cells in emission order."""
        for tag, box in self.box.subdivide():
            yield Cell(child_code(self.code, tag), box)


def iter_frontiers(
    world_box: BoundingBox,
    query_box: BoundingBox,
    depth: int,
) -> Iterator[List[Cell]]:
    """
    Yield the live frontier of every level, root level first.

    Yields depth + 1 lists. Each list holds the cells of one level whose
    boxes intersect the query, in emission order; the first list is the
    root alone, which is never filtered.
    """
    frontier = [Cell(ROOT_CODE, world_box)]
    yield frontier

    for _ in range(depth):
        frontier = [
            child
            for cell in frontier
            for child in cell.children()
            if child.box.intersects(query_box)
        ]
        yield frontier


def search_cells(
    world_box: BoundingBox,
    query_box: BoundingBox,
    depth: int,
) -> List[Cell]:
    """Like search(), but return the final cells with their boxes."""
    frontier: List[Cell] = []
    for frontier in iter_frontiers(world_box, query_box, depth):
        pass
    return frontier


def search(world_box: BoundingBox, query_box: BoundingBox, depth: int) -> List[int]:
    """
    Find the codes of all cells at `depth` that overlap `query_box`.

    Args:
        world_box: Extent of the root cell
        query_box: Region to cover
        depth: Number of subdivisions below the root

    Returns:
        Codes in emission order. At depth 0 this is always [1], whether or
        not the query overlaps the world box.

    No input is validated; see CoverSearcher for a checked variant.
    """
    return [cell.code for cell in search_cells(world_box, query_box, depth)]


@dataclass
class SearchConfig:
    """Configuration for a validating cell search."""

    max_depth: int = MAX_DEPTH_64
    """Deepest level a caller may request."""

    world_box: BoundingBox = WORLD
    """Root extent used by CoverSearcher.cover()."""

    # Coordinate range every input box must lie within
    min_lat: float = -90.0
    max_lat: float = 90.0
    min_lng: float = -180.0
    max_lng: float = 180.0

    validate: bool = True
    """Reject bad inputs before searching. When False, behaves like search()."""

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lng > self.max_lng:
            raise ValueError("min_lng must not exceed max_lng")


@dataclass
class SearchStats:
    """Statistics collected during one search."""

    levels: int = 0
    cells_examined: int = 0
    cells_pruned: int = 0
    max_frontier: int = 0
    codes_emitted: int = 0


class CoverSearcher:
    """
    Validating front end for the cell search.

    Inputs are checked before any traversal begins, so a call either
    returns the complete result for the requested depth or raises
    ValidationError. Statistics for the most recent search are kept on
    `stats`; use one searcher per thread.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or SearchConfig()
        self.stats = SearchStats()

    def _validate_box(self, box: BoundingBox, name: str) -> None:
        cfg = self.config
        if not box.is_valid():
            raise ValidationError(f"{name} has inverted bounds: {box}")
        if box.min_lat < cfg.min_lat or box.max_lat > cfg.max_lat:
            raise ValidationError(
                f"{name} latitude outside [{cfg.min_lat}, {cfg.max_lat}]: {box}"
            )
        if box.min_lng < cfg.min_lng or box.max_lng > cfg.max_lng:
            raise ValidationError(
                f"{name} longitude outside [{cfg.min_lng}, {cfg.max_lng}]: {box}"
            )

    def validate(self, world_box: BoundingBox, query_box: BoundingBox, depth: int) -> None:
        """
        Check search inputs.

        Raises:
            ValidationError: On negative depth, depth above max_depth,
                inverted bounds or out-of-range coordinates
        """
        try:
            if depth < 0:
                raise ValidationError(f"depth must be non-negative, got {depth}")
            if depth > self.config.max_depth:
                raise ValidationError(
                    f"depth {depth} exceeds maximum {self.config.max_depth}"
                )
            self._validate_box(world_box, "world box")
            self._validate_box(query_box, "query box")
        except ValidationError as e:
            logger.debug("Rejected search: %s", e)
            raise

    def search_cells(
        self,
        world_box: BoundingBox,
        query_box: BoundingBox,
        depth: int,
    ) -> List[Cell]:
        """Search and return the final cells, recording statistics."""
        self.stats = SearchStats()
        if self.config.validate:
            self.validate(world_box, query_box, depth)

        frontier: List[Cell] = []
        previous = 0

        for level, frontier in enumerate(iter_frontiers(world_box, query_box, depth)):
            if level > 0:
                examined = previous * 4
                self.stats.levels = level
                self.stats.cells_examined += examined
                self.stats.cells_pruned += examined - len(frontier)
                logger.debug(
                    "Level %d: kept %d of %d cells", level, len(frontier), examined
                )
            self.stats.max_frontier = max(self.stats.max_frontier, len(frontier))
            previous = len(frontier)

        self.stats.codes_emitted = len(frontier)
        logger.debug(
            "Search to depth %d emitted %d codes (%d examined, %d pruned)",
            depth,
            self.stats.codes_emitted,
            self.stats.cells_examined,
            self.stats.cells_pruned,
        )
        return frontier

    def search(self, world_box: BoundingBox, query_box: BoundingBox, depth: int) -> List[int]:
        """Validate, then return the codes search() would return."""
        return [cell.code for cell in self.search_cells(world_box, query_box, depth)]

    def cover(self, query_box: BoundingBox, depth: int) -> List[int]:
        """Search against the configured world box."""
        return self.search(self.config.world_box, query_box, depth)


def cover_bounding_box(
    query_box: BoundingBox,
    depth: int,
    max_depth: int = MAX_DEPTH_64,
    world_box: BoundingBox = WORLD,
) -> Tuple[List[int], SearchStats]:
    """
    Convenience function to cover a query box over the whole world.

    Args:
        query_box: Region to cover
        depth: Number of subdivisions below the root
        max_depth: Deepest level accepted
        world_box: Extent of the root cell

    Returns:
        Tuple of (codes, SearchStats)
    """
    config = SearchConfig(max_depth=max_depth, world_box=world_box)
    searcher = CoverSearcher(config)
    codes = searcher.cover(query_box, depth)
    return codes, searcher.stats
