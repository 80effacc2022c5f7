"""3D effects: fog, terrain exaggeration and an atmosphere sky layer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cruisemaps.domain.models import Map3DConfig
from cruisemaps.shared.constants import (
    SKY_LAYER_ID,
    TERRAIN_MAX_ZOOM,
    TERRAIN_SOURCE_ID,
    TERRAIN_SOURCE_URL,
    TERRAIN_TILE_SIZE,
)

if TYPE_CHECKING:
    from cruisemaps.render.engine import EngineMap

logger = logging.getLogger(__name__)


def add_3d_effects(engine_map: EngineMap, config: Map3DConfig | None = None) -> None:
    """Apply fog, terrain and sky; no-op when the sky layer is already there."""
    config = config or Map3DConfig()
    if not config.enabled or engine_map.get_layer(SKY_LAYER_ID) is not None:
        return

    if config.fog is not None:
        engine_map.set_fog(
            {
                'color': config.fog.color,
                'high-color': config.fog.high_color,
                'horizon-blend': config.fog.horizon_blend,
                'space-color': config.fog.space_color,
                'star-intensity': config.fog.star_intensity,
            }
        )

    if config.terrain is not None:
        if engine_map.get_source(TERRAIN_SOURCE_ID) is None:
            engine_map.add_source(
                TERRAIN_SOURCE_ID,
                {
                    'type': 'raster-dem',
                    'url': TERRAIN_SOURCE_URL,
                    'tileSize': TERRAIN_TILE_SIZE,
                    'maxzoom': TERRAIN_MAX_ZOOM,
                },
            )
        engine_map.set_terrain(
            {'source': TERRAIN_SOURCE_ID, 'exaggeration': config.terrain.exaggeration}
        )

    sky = config.sky
    if sky is not None:
        engine_map.add_layer(
            {
                'id': SKY_LAYER_ID,
                'type': 'sky',
                'paint': {
                    'sky-type': sky.sky_type,
                    'sky-atmosphere-sun': list(sky.sun_position),
                    'sky-atmosphere-sun-intensity': sky.sun_intensity,
                    'sky-atmosphere-color': sky.atmosphere_color,
                    'sky-atmosphere-halo-color': sky.halo_color,
                    'sky-opacity': sky.opacity,
                },
            }
        )
    logger.debug('3D effects applied')
