# Модуль рендеринга карты
from cruisemaps.render.effects import add_3d_effects
from cruisemaps.render.engine import (
    EngineMap,
    MapEngine,
    MapOptions,
    StyleMap,
    StyleMapEngine,
)
from cruisemaps.render.layers import (
    add_arrows_layer,
    add_ports_layer,
    add_track_layer,
    compose_layers,
)
from cruisemaps.render.preview import render_placeholder, render_preview
from cruisemaps.render.style_loader import (
    MapboxStyleLoader,
    StaticStyleLoader,
    StyleLoader,
    resolve_style_url,
)
from cruisemaps.render.surface import Surface, SurfaceHost

__all__ = [
    'EngineMap',
    'MapEngine',
    'MapOptions',
    'MapboxStyleLoader',
    'StaticStyleLoader',
    'StyleLoader',
    'StyleMap',
    'StyleMapEngine',
    'Surface',
    'SurfaceHost',
    'add_3d_effects',
    'add_arrows_layer',
    'add_ports_layer',
    'add_track_layer',
    'compose_layers',
    'render_placeholder',
    'render_preview',
    'resolve_style_url',
]
