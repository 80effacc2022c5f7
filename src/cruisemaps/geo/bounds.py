"""Bounding region of itinerary geometry."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from numbers import Real
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class BoundingRegion:
    """Axis-aligned lng/lat region."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_point(cls, lng: float, lat: float) -> BoundingRegion:
        return cls(west=lng, south=lat, east=lng, north=lat)

    def extend(self, lng: float, lat: float) -> None:
        self.west = min(self.west, lng)
        self.south = min(self.south, lat)
        self.east = max(self.east, lng)
        self.north = max(self.north, lat)

    @property
    def center(self) -> tuple[float, float]:
        return (self.west + self.east) / 2, (self.south + self.north) / 2

    def to_list(self) -> list[list[float]]:
        """[[west, south], [east, north]] as expected by fitBounds."""
        return [[self.west, self.south], [self.east, self.north]]


def is_valid_coordinate(coord: Any) -> bool:
    """Ровно два конечных числа [lng, lat]; bool числом не считается."""
    if not isinstance(coord, (list, tuple)) or len(coord) != 2:
        return False
    return all(
        isinstance(v, Real) and not isinstance(v, bool) and math.isfinite(v)
        for v in coord
    )


def _iter_positions(geometry: Mapping[str, Any]) -> Iterable[Any]:
    kind = geometry.get('type')
    coordinates = geometry.get('coordinates')
    if coordinates is None:
        return
    if kind == 'Point':
        yield coordinates
    elif kind == 'LineString':
        if isinstance(coordinates, (list, tuple)):
            yield from coordinates
    elif kind == 'MultiLineString':
        if isinstance(coordinates, (list, tuple)):
            for line in coordinates:
                if isinstance(line, (list, tuple)):
                    yield from line


def compute_bounds(collection: Mapping[str, Any] | None) -> BoundingRegion | None:
    """
    Minimal region covering every valid coordinate of the collection.

    Point, LineString and MultiLineString geometries contribute; malformed
    coordinates and other geometry kinds are skipped silently.

    Returns:
        BoundingRegion, or None when no valid coordinate was found

    """
    if not collection:
        return None
    features = collection.get('features') or []

    region: BoundingRegion | None = None
    skipped = 0
    for feature in features:
        if not isinstance(feature, Mapping):
            continue
        geometry = feature.get('geometry')
        if not isinstance(geometry, Mapping):
            continue
        for coord in _iter_positions(geometry):
            if not is_valid_coordinate(coord):
                skipped += 1
                continue
            lng, lat = float(coord[0]), float(coord[1])
            if region is None:
                region = BoundingRegion.from_point(lng, lat)
            else:
                region.extend(lng, lat)

    if skipped:
        logger.debug('Skipped %d malformed coordinates', skipped)
    return region
