"""Tests for bounds computation."""

import math

import pytest

from cruisemaps.geo.bounds import BoundingRegion, compute_bounds, is_valid_coordinate


def _fc(*geometries):
    return {
        'type': 'FeatureCollection',
        'features': [{'type': 'Feature', 'geometry': g, 'properties': {}} for g in geometries],
    }


class TestIsValidCoordinate:
    """Tests for is_valid_coordinate function."""

    @pytest.mark.parametrize('coord', [[0, 0], (10.5, -3), [-180, 85.0]])
    def test_valid(self, coord):
        """Two finite numbers are valid."""
        assert is_valid_coordinate(coord)

    @pytest.mark.parametrize(
        'coord',
        [
            None,
            [],
            [1],
            [1, 2, 3],
            ['1', 2],
            [True, 2],
            [math.nan, 1],
            [1, math.inf],
            '12',
            {'lng': 1, 'lat': 2},
        ],
    )
    def test_invalid(self, coord):
        """Wrong arity, non-numbers, booleans and non-finite values are rejected."""
        assert not is_valid_coordinate(coord)


class TestComputeBounds:
    """Tests for compute_bounds function."""

    def test_linestring_exact(self):
        """LineString [[0,0],[10,10]] yields exactly that region."""
        region = compute_bounds(_fc({'type': 'LineString', 'coordinates': [[0, 0], [10, 10]]}))
        assert region == BoundingRegion(west=0, south=0, east=10, north=10)
        assert region.to_list() == [[0, 0], [10, 10]]

    def test_point_single(self):
        """A single point gives a degenerate region."""
        region = compute_bounds(_fc({'type': 'Point', 'coordinates': [5, 6]}))
        assert region.to_list() == [[5, 6], [5, 6]]

    def test_multilinestring(self):
        """Every coordinate of every sub-line contributes."""
        region = compute_bounds(
            _fc(
                {
                    'type': 'MultiLineString',
                    'coordinates': [[[-10, 0], [0, 5]], [[20, -5], [30, 1]]],
                }
            )
        )
        assert region.to_list() == [[-10, -5], [30, 5]]

    def test_mixed_features(self, itinerary):
        """Track and port points together."""
        region = compute_bounds(itinerary)
        assert region.west == pytest.approx(-80.19)
        assert region.east == pytest.approx(-64.78)
        assert region.south == pytest.approx(25.06)
        assert region.north == pytest.approx(32.30)

    def test_malformed_coordinates_skipped(self):
        """Bad coordinates are ignored, the rest still count."""
        region = compute_bounds(
            _fc({'type': 'LineString', 'coordinates': [[0, 0], ['x', 1], [None], [3, 4]]})
        )
        assert region.to_list() == [[0, 0], [3, 4]]

    def test_other_geometry_kinds_ignored(self):
        """Polygons are not part of itinerary geometry."""
        polygon = {'type': 'Polygon', 'coordinates': [[[0, 0], [50, 0], [50, 50], [0, 0]]]}
        region = compute_bounds(_fc(polygon, {'type': 'Point', 'coordinates': [1, 1]}))
        assert region.to_list() == [[1, 1], [1, 1]]

    @pytest.mark.parametrize(
        'collection',
        [
            None,
            {},
            {'type': 'FeatureCollection', 'features': []},
            {'type': 'FeatureCollection', 'features': [{'type': 'Feature', 'geometry': None}]},
            _fc({'type': 'LineString', 'coordinates': [[True, False], ['a', 'b']]}),
            _fc({'type': 'Point'}),
        ],
    )
    def test_no_valid_coordinates_returns_none(self, collection):
        """Zero valid coordinates yields None."""
        assert compute_bounds(collection) is None


class TestBoundingRegion:
    """Tests for BoundingRegion."""

    def test_extend_and_center(self):
        """extend grows the region; center is the midpoint."""
        region = BoundingRegion.from_point(0, 0)
        region.extend(10, -4)
        assert region.to_list() == [[0, -4], [10, 0]]
        assert region.center == (5, -2)
