"""
Static raster preview of a composed map.

Draws the line and circle layers added on top of the base style (track and
ports) with PIL; base style layers and symbol layers are not rasterised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from PIL import Image, ImageColor, ImageDraw

from cruisemaps.geo.bounds import is_valid_coordinate
from cruisemaps.geo.mercator import lnglat_to_world_xy
from cruisemaps.shared.constants import (
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
    PREVIEW_BACKGROUND_COLOR,
    PREVIEW_PLACEHOLDER_TEXT,
)

if TYPE_CHECKING:
    from cruisemaps.render.engine import StyleMap

logger = logging.getLogger(__name__)

_LINE_KINDS = ('LineString', 'MultiLineString')


def evaluate(expr: Any, properties: Mapping[str, Any], zoom: float) -> Any:
    """Evaluate the subset of style expressions the itinerary layers use."""
    if not isinstance(expr, list) or not expr:
        return expr
    op = expr[0]
    if op == 'literal':
        return expr[1]
    if op == 'get':
        return properties.get(expr[1])
    if op == 'zoom':
        return zoom
    if op == '==':
        return evaluate(expr[1], properties, zoom) == evaluate(expr[2], properties, zoom)
    if op == 'case':
        branches = expr[1:-1]
        for i in range(0, len(branches), 2):
            if evaluate(branches[i], properties, zoom):
                return evaluate(branches[i + 1], properties, zoom)
        return evaluate(expr[-1], properties, zoom)
    if op == 'interpolate':
        value = float(evaluate(expr[2], properties, zoom))
        stops = expr[3:]
        pairs = [(float(stops[i]), float(stops[i + 1])) for i in range(0, len(stops), 2)]
        if value <= pairs[0][0]:
            return pairs[0][1]
        for (z0, v0), (z1, v1) in zip(pairs, pairs[1:]):
            if value <= z1:
                t = (value - z0) / (z1 - z0)
                return v0 + t * (v1 - v0)
        return pairs[-1][1]
    msg = f'Unsupported expression: {op!r}'
    raise ValueError(msg)


def matches_filter(layer_filter: Any, geometry_type: str, properties: Mapping[str, Any]) -> bool:
    if layer_filter is None:
        return True
    if (
        isinstance(layer_filter, list)
        and len(layer_filter) == 3
        and layer_filter[0] == '=='
        and layer_filter[1] == '$type'
    ):
        # $type LineString включает и MultiLineString
        return geometry_type.removeprefix('Multi') == layer_filter[2]
    return bool(evaluate(layer_filter, properties, 0.0))


def _rgba(color: str, opacity: float) -> tuple[int, int, int, int]:
    rgb = ImageColor.getrgb(color)
    alpha = rgb[3] if len(rgb) == 4 else 255
    return rgb[0], rgb[1], rgb[2], round(alpha * max(0.0, min(1.0, opacity)))


class _Projector:
    def __init__(self, center: tuple[float, float], zoom: float, width: int, height: int):
        self.zoom = zoom
        cx, cy = lnglat_to_world_xy(center[0], center[1], zoom)
        self.origin = (cx - width / 2, cy - height / 2)

    def __call__(self, coord: Any) -> tuple[float, float]:
        x, y = lnglat_to_world_xy(float(coord[0]), float(coord[1]), self.zoom)
        return x - self.origin[0], y - self.origin[1]


def _lines_of(geometry: Mapping[str, Any]) -> list[list[Any]]:
    coords = geometry.get('coordinates') or []
    if geometry.get('type') == 'LineString':
        return [coords]
    if geometry.get('type') == 'MultiLineString':
        return list(coords)
    return []


def _draw_line_layer(
    overlay: Image.Image, layer: dict[str, Any], features: list[Any], project: _Projector
) -> None:
    paint = layer.get('paint') or {}
    draw = ImageDraw.Draw(overlay)
    for feature in features:
        geometry = feature.get('geometry') or {}
        props = feature.get('properties') or {}
        if geometry.get('type') not in _LINE_KINDS:
            continue
        if not matches_filter(layer.get('filter'), geometry['type'], props):
            continue
        color = _rgba(
            evaluate(paint.get('line-color', '#000000'), props, project.zoom),
            float(evaluate(paint.get('line-opacity', 1.0), props, project.zoom)),
        )
        width = max(1, round(float(evaluate(paint.get('line-width', 1), props, project.zoom))))
        for line in _lines_of(geometry):
            points = [project(c) for c in line if is_valid_coordinate(c)]
            # draw.line требует >= 2 точек
            if len(points) >= 2:
                draw.line(points, fill=color, width=width, joint='curve')


def _draw_circle_layer(
    overlay: Image.Image, layer: dict[str, Any], features: list[Any], project: _Projector
) -> None:
    paint = layer.get('paint') or {}
    draw = ImageDraw.Draw(overlay)
    for feature in features:
        geometry = feature.get('geometry') or {}
        props = feature.get('properties') or {}
        if geometry.get('type') != 'Point' or not is_valid_coordinate(
            geometry.get('coordinates')
        ):
            continue
        if not matches_filter(layer.get('filter'), 'Point', props):
            continue
        opacity = float(evaluate(paint.get('circle-opacity', 1.0), props, project.zoom))
        radius = float(evaluate(paint.get('circle-radius', 5), props, project.zoom))
        fill = _rgba(evaluate(paint.get('circle-color', '#000000'), props, project.zoom), opacity)
        stroke = _rgba(
            evaluate(paint.get('circle-stroke-color', '#000000'), props, project.zoom), 1.0
        )
        stroke_w = round(float(evaluate(paint.get('circle-stroke-width', 0), props, project.zoom)))
        x, y = project(geometry['coordinates'])
        box = [x - radius, y - radius, x + radius, y + radius]
        draw.ellipse(box, fill=fill, outline=stroke if stroke_w else None, width=stroke_w or 1)


def render_preview(
    engine_map: StyleMap, width: int | None = None, height: int | None = None
) -> Image.Image:
    """Rasterise the map's line and circle layers at its current camera."""
    width = width or engine_map.width or DEFAULT_MAP_WIDTH
    height = height or engine_map.height or DEFAULT_MAP_HEIGHT
    project = _Projector(engine_map.center, engine_map.zoom, width, height)

    result = Image.new('RGBA', (width, height), (*PREVIEW_BACKGROUND_COLOR, 255))
    for layer in engine_map.layers:
        kind = layer.get('type')
        if kind not in ('line', 'circle'):
            continue
        source = engine_map.get_source(layer.get('source', '')) or {}
        data = source.get('data') or {}
        features = [f for f in data.get('features') or [] if isinstance(f, Mapping)]
        overlay = Image.new('RGBA', (width, height), (0, 0, 0, 0))
        if kind == 'line':
            _draw_line_layer(overlay, layer, features, project)
        else:
            _draw_circle_layer(overlay, layer, features, project)
        result = Image.alpha_composite(result, overlay)

    logger.debug('Preview rendered %dx%d, layers=%d', width, height, len(engine_map.layers))
    return result.convert('RGB')


def render_placeholder(
    width: int = DEFAULT_MAP_WIDTH,
    height: int = DEFAULT_MAP_HEIGHT,
    text: str = PREVIEW_PLACEHOLDER_TEXT,
) -> Image.Image:
    img = Image.new('RGB', (width, height), (235, 235, 235))
    draw = ImageDraw.Draw(img)
    left, top, right, bottom = draw.textbbox((0, 0), text)
    draw.text(
        ((width - (right - left)) / 2, (height - (bottom - top)) / 2),
        text,
        fill=(120, 120, 120),
    )
    return img
