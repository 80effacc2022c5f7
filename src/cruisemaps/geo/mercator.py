from __future__ import annotations

import math
from typing import TYPE_CHECKING

from cruisemaps.shared.constants import GL_TILE_SIZE, MAX_ZOOM, MERCATOR_MAX_LAT_DEG

if TYPE_CHECKING:
    from cruisemaps.geo.bounds import BoundingRegion


def lnglat_to_world_xy(
    lng_deg: float, lat_deg: float, zoom: float = 0.0
) -> tuple[float, float]:
    """Преобразует WGS84 (lng, lat) в «мировые» пиксели Web Mercator."""
    lat = min(max(lat_deg, -MERCATOR_MAX_LAT_DEG), MERCATOR_MAX_LAT_DEG)
    siny = math.sin(math.radians(lat))
    world_size = GL_TILE_SIZE * (2**zoom)
    x = (lng_deg + 180.0) / 360.0 * world_size
    y = (0.5 - math.log((1 + siny) / (1 - siny)) / (4 * math.pi)) * world_size
    return x, y


def world_xy_to_lnglat(x: float, y: float, zoom: float = 0.0) -> tuple[float, float]:
    """Обратное преобразование: «мировые» пиксели -> WGS84 (lng, lat)."""
    world_size = GL_TILE_SIZE * (2**zoom)
    lng = (x / world_size) * 360.0 - 180.0
    merc_y = 0.5 - (y / world_size)
    lat = 90.0 - 360.0 * math.atan(math.exp(-merc_y * 2 * math.pi)) / math.pi
    return lng, lat


def fit_camera(
    bounds: BoundingRegion,
    width_px: int,
    height_px: int,
    *,
    padding: int = 0,
    max_zoom: float = MAX_ZOOM,
) -> tuple[tuple[float, float], float]:
    """
    Camera (center, zoom) that shows `bounds` inside the viewport.

    Args:
        bounds: Region to show
        width_px: Viewport width
        height_px: Viewport height
        padding: Padding on every side (px)
        max_zoom: Upper zoom limit

    Returns:
        ((lng, lat), zoom)

    """
    x0, y1 = lnglat_to_world_xy(bounds.west, bounds.south)
    x1, y0 = lnglat_to_world_xy(bounds.east, bounds.north)
    center_lng, center_lat = world_xy_to_lnglat((x0 + x1) / 2, (y0 + y1) / 2)

    avail_w = max(width_px - 2 * padding, 1)
    avail_h = max(height_px - 2 * padding, 1)
    span_x = x1 - x0
    span_y = y1 - y0
    if span_x <= 0 and span_y <= 0:
        # Одна точка: максимальный допустимый зум
        return (center_lng, center_lat), float(max_zoom)

    scales = []
    if span_x > 0:
        scales.append(avail_w / span_x)
    if span_y > 0:
        scales.append(avail_h / span_y)
    zoom = math.log2(min(scales))
    zoom = min(max(zoom, 0.0), float(max_zoom))
    return (center_lng, center_lat), zoom
