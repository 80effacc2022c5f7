"""Geo module - geometry bounds and Web Mercator helpers."""

from .bounds import BoundingRegion, compute_bounds, is_valid_coordinate
from .mercator import fit_camera, lnglat_to_world_xy, world_xy_to_lnglat

__all__ = [
    'BoundingRegion',
    'compute_bounds',
    'fit_camera',
    'is_valid_coordinate',
    'lnglat_to_world_xy',
    'world_xy_to_lnglat',
]
