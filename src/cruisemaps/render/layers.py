"""
Itinerary layers on top of an engine map.

Every attach function is idempotent: when the layer id already exists the
call changes nothing. The track layer owns the shared `track-source`, so it
must be attached before the ports and arrows layers that read from it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cruisemaps.domain.models import PortStyle, PortStyleConfig, TrackStyle
from cruisemaps.render.effects import add_3d_effects
from cruisemaps.shared.constants import (
    ARROW_COLOR,
    ARROW_GLYPH,
    ARROW_HALO_COLOR,
    ARROW_HALO_WIDTH,
    ARROW_SPACING_PX,
    ARROW_TEXT_SIZE,
    ARROWS_LAYER_ID,
    END_PORT_COLOR,
    END_PORT_RADIUS,
    FEATURE_TYPE_END,
    FEATURE_TYPE_PROPERTY,
    FEATURE_TYPE_START,
    INTERMEDIATE_PORT_COLOR,
    INTERMEDIATE_PORT_RADIUS,
    PORT_OPACITY,
    PORT_STROKE_COLOR,
    PORT_STROKE_WIDTH,
    PORTS_LAYER_ID,
    START_PORT_COLOR,
    START_PORT_RADIUS,
    TRACK_LAYER_ID,
    TRACK_OPACITY_STOPS,
    TRACK_SOURCE_ID,
)

if TYPE_CHECKING:
    from cruisemaps.domain.models import MapConfig
    from cruisemaps.render.engine import EngineMap

logger = logging.getLogger(__name__)


def track_opacity_expression() -> list[Any]:
    expr: list[Any] = ['interpolate', ['linear'], ['zoom']]
    for zoom, opacity in TRACK_OPACITY_STOPS:
        expr.extend([zoom, opacity])
    return expr


def _feature_type_case(start: Any, end: Any, other: Any) -> list[Any]:
    feature_type = ['get', FEATURE_TYPE_PROPERTY]
    return [
        'case',
        ['==', feature_type, FEATURE_TYPE_START],
        start,
        ['==', feature_type, FEATURE_TYPE_END],
        end,
        other,
    ]


def resolve_port_styles(
    config: PortStyleConfig | None,
) -> tuple[PortStyle, PortStyle, PortStyle]:
    """(start, end, intermediate) with defaults for missing entries."""
    config = config or PortStyleConfig()
    start = config.start_port or PortStyle(color=START_PORT_COLOR, radius=START_PORT_RADIUS)
    end = config.end_port or PortStyle(color=END_PORT_COLOR, radius=END_PORT_RADIUS)
    intermediate = config.intermediate_ports or PortStyle(
        color=INTERMEDIATE_PORT_COLOR, radius=INTERMEDIATE_PORT_RADIUS
    )
    return start, end, intermediate


def add_track_layer(
    engine_map: EngineMap,
    geojson: dict[str, Any],
    style: TrackStyle | None = None,
) -> None:
    """Register (or replace) the itinerary source and attach the track line."""
    style = style or TrackStyle()

    if engine_map.get_source(TRACK_SOURCE_ID) is None:
        engine_map.add_source(TRACK_SOURCE_ID, {'type': 'geojson', 'data': geojson})
    else:
        engine_map.set_source_data(TRACK_SOURCE_ID, geojson)

    if engine_map.get_layer(TRACK_LAYER_ID) is None:
        engine_map.add_layer(
            {
                'id': TRACK_LAYER_ID,
                'type': 'line',
                'source': TRACK_SOURCE_ID,
                'paint': {
                    'line-color': style.color,
                    'line-width': style.width,
                    # Плотные пересекающиеся треки приглушаются с ростом зума
                    'line-opacity': track_opacity_expression(),
                },
            }
        )


def add_ports_layer(
    engine_map: EngineMap, port_style: PortStyleConfig | None = None
) -> None:
    if engine_map.get_layer(PORTS_LAYER_ID) is not None:
        return
    start, end, intermediate = resolve_port_styles(port_style)
    engine_map.add_layer(
        {
            'id': PORTS_LAYER_ID,
            'type': 'circle',
            'source': TRACK_SOURCE_ID,
            'filter': ['==', '$type', 'Point'],
            'paint': {
                'circle-radius': _feature_type_case(
                    start.radius, end.radius, intermediate.radius
                ),
                'circle-color': _feature_type_case(
                    start.color, end.color, intermediate.color
                ),
                'circle-stroke-color': PORT_STROKE_COLOR,
                'circle-stroke-width': PORT_STROKE_WIDTH,
                'circle-opacity': PORT_OPACITY,
            },
        }
    )


def add_arrows_layer(engine_map: EngineMap) -> None:
    if engine_map.get_layer(ARROWS_LAYER_ID) is not None:
        return
    logger.debug('Adding %s layer', ARROWS_LAYER_ID)
    engine_map.add_layer(
        {
            'id': ARROWS_LAYER_ID,
            'type': 'symbol',
            'source': TRACK_SOURCE_ID,
            'filter': ['==', '$type', 'LineString'],
            'layout': {
                'symbol-placement': 'line',
                'symbol-spacing': ARROW_SPACING_PX,
                'text-field': ARROW_GLYPH,
                'text-size': ARROW_TEXT_SIZE,
                'text-rotation-alignment': 'map',
                'text-pitch-alignment': 'viewport',
                'text-allow-overlap': True,
                'text-ignore-placement': True,
            },
            'paint': {
                'text-color': ARROW_COLOR,
                'text-halo-color': ARROW_HALO_COLOR,
                'text-halo-width': ARROW_HALO_WIDTH,
                'text-opacity': 1,
            },
        }
    )


def compose_layers(
    engine_map: EngineMap, geojson: dict[str, Any], map_config: MapConfig
) -> None:
    """Attach all itinerary layers in the order the shared source requires."""
    add_track_layer(engine_map, geojson, map_config.track_style)
    if map_config.has_arrows:
        add_arrows_layer(engine_map)
    add_ports_layer(engine_map, map_config.port_style)
    if map_config.is_3d:
        add_3d_effects(engine_map)
