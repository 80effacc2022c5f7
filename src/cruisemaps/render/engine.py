"""
Rendering engine contract and the style-document engine.

The map service talks to the engine only through MapEngine / EngineMap.
StyleMap keeps the state a Mapbox GL map would keep (sources, layers, fog,
terrain, camera) and enforces the same rules: no source or layer work before
the style has loaded, no duplicate ids, no layer referencing a missing source.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from cruisemaps.geo.mercator import fit_camera
from cruisemaps.render.style_loader import MapboxStyleLoader, StyleLoader, empty_style
from cruisemaps.shared.constants import FIT_BOUNDS_MAX_ZOOM, FIT_BOUNDS_PADDING_PX
from cruisemaps.shared.errors import EngineError

if TYPE_CHECKING:
    from cruisemaps.geo.bounds import BoundingRegion
    from cruisemaps.render.surface import Surface

logger = logging.getLogger(__name__)


@dataclass
class MapOptions:
    style: str
    center: tuple[float, float]
    zoom: float
    interactive: bool = True
    access_token: str = ''


class EngineMap(Protocol):
    async def wait_style_ready(self) -> None: ...

    def is_style_loaded(self) -> bool: ...

    def add_source(self, source_id: str, source: dict[str, Any]) -> None: ...

    def get_source(self, source_id: str) -> dict[str, Any] | None: ...

    def set_source_data(self, source_id: str, data: Any) -> None: ...

    def add_layer(self, layer: dict[str, Any]) -> None: ...

    def get_layer(self, layer_id: str) -> dict[str, Any] | None: ...

    def fit_bounds(
        self, bounds: BoundingRegion, *, padding: int, max_zoom: float
    ) -> None: ...

    def set_fog(self, fog: dict[str, Any] | None) -> None: ...

    def set_terrain(self, terrain: dict[str, Any] | None) -> None: ...

    def resize(self) -> None: ...

    def remove(self) -> None: ...


class MapEngine(Protocol):
    def create_map(self, surface: Surface, options: MapOptions) -> EngineMap: ...


class StyleMap:
    """In-process map object backed by a Mapbox GL style document."""

    def __init__(
        self,
        surface: Surface,
        options: MapOptions,
        style_loader: StyleLoader,
    ) -> None:
        self.surface = surface
        self.options = options
        self.interactive = options.interactive
        self.center: tuple[float, float] = tuple(options.center)
        self.zoom: float = float(options.zoom)
        self.bounds: BoundingRegion | None = None
        self.width = surface.width
        self.height = surface.height

        self.base_style: dict[str, Any] | None = None
        self.sources: dict[str, dict[str, Any]] = {}
        self.layers: list[dict[str, Any]] = []
        self.fog: dict[str, Any] | None = None
        self.terrain: dict[str, Any] | None = None
        self.removed = False
        self.resize_count = 0

        self._style_loader = style_loader
        self._style_ready = asyncio.Event()
        self._style_error: BaseException | None = None
        self._load_task: asyncio.Task | None = None

    # --- style lifecycle

    def start(self) -> None:
        """Start loading the base style; requires a running event loop."""
        if self._load_task is None and not self.removed:
            self._load_task = asyncio.get_running_loop().create_task(
                self._load_style()
            )

    async def _load_style(self) -> None:
        try:
            self.base_style = await self._style_loader(
                self.options.style, self.options.access_token
            )
        except asyncio.CancelledError:
            self._fail_pending_style()
            raise
        except Exception as e:
            logger.error('Style %s failed to load: %s', self.options.style, e)
            self._style_error = e
        self._style_ready.set()

    def _fail_pending_style(self) -> None:
        if not self._style_ready.is_set():
            self._style_error = EngineError('Map was removed before its style loaded')
            self._style_ready.set()

    async def wait_style_ready(self) -> None:
        """Resolve once the style has loaded; re-raise the load failure if any."""
        self.start()
        await self._style_ready.wait()
        if self._style_error is not None:
            raise self._style_error

    def is_style_loaded(self) -> bool:
        return (
            self._style_ready.is_set()
            and self._style_error is None
            and not self.removed
        )

    def _require_style(self) -> None:
        if self.removed:
            msg = 'Map has been removed'
            raise EngineError(msg)
        if not self.is_style_loaded():
            msg = 'Style is not done loading'
            raise EngineError(msg)

    # --- sources and layers

    def _all_source_ids(self) -> set[str]:
        base = (self.base_style or {}).get('sources') or {}
        return set(base) | set(self.sources)

    def add_source(self, source_id: str, source: dict[str, Any]) -> None:
        self._require_style()
        if source_id in self._all_source_ids():
            msg = f'There is already a source with ID "{source_id}"'
            raise EngineError(msg)
        self.sources[source_id] = dict(source)

    def get_source(self, source_id: str) -> dict[str, Any] | None:
        if source_id in self.sources:
            return self.sources[source_id]
        return ((self.base_style or {}).get('sources') or {}).get(source_id)

    def set_source_data(self, source_id: str, data: Any) -> None:
        self._require_style()
        source = self.sources.get(source_id)
        if source is None:
            msg = f'Source "{source_id}" not found'
            raise EngineError(msg)
        source['data'] = data

    def add_layer(self, layer: dict[str, Any]) -> None:
        self._require_style()
        layer_id = layer.get('id')
        if not layer_id:
            msg = 'Layer must have an id'
            raise EngineError(msg)
        if self.get_layer(layer_id) is not None:
            msg = f'Layer with id "{layer_id}" already exists on this map'
            raise EngineError(msg)
        source_id = layer.get('source')
        if isinstance(source_id, str) and source_id not in self._all_source_ids():
            msg = f'Source "{source_id}" not found'
            raise EngineError(msg)
        self.layers.append(layer)

    def get_layer(self, layer_id: str) -> dict[str, Any] | None:
        for layer in self.layers:
            if layer.get('id') == layer_id:
                return layer
        for layer in (self.base_style or {}).get('layers') or []:
            if layer.get('id') == layer_id:
                return layer
        return None

    @property
    def layer_ids(self) -> list[str]:
        return [layer['id'] for layer in self.layers]

    # --- camera, effects, lifecycle

    def fit_bounds(
        self,
        bounds: BoundingRegion,
        *,
        padding: int = FIT_BOUNDS_PADDING_PX,
        max_zoom: float = FIT_BOUNDS_MAX_ZOOM,
    ) -> None:
        if self.removed:
            msg = 'Map has been removed'
            raise EngineError(msg)
        width = self.width or self.surface.width or 0
        height = self.height or self.surface.height or 0
        self.center, self.zoom = fit_camera(
            bounds, width, height, padding=padding, max_zoom=max_zoom
        )
        self.bounds = bounds

    def set_fog(self, fog: dict[str, Any] | None) -> None:
        self._require_style()
        self.fog = dict(fog) if fog is not None else None

    def set_terrain(self, terrain: dict[str, Any] | None) -> None:
        self._require_style()
        if terrain is not None and terrain.get('source') not in self._all_source_ids():
            msg = f'Source "{terrain.get("source")}" not found'
            raise EngineError(msg)
        self.terrain = dict(terrain) if terrain is not None else None

    def resize(self) -> None:
        if self.removed:
            msg = 'Map has been removed'
            raise EngineError(msg)
        self.width = self.surface.width
        self.height = self.surface.height
        self.resize_count += 1

    def remove(self) -> None:
        if self.removed:
            return
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        # Задача могла быть отменена до первого запуска
        self._fail_pending_style()
        self.surface.detach(self)
        self.removed = True

    def to_style(self) -> dict[str, Any]:
        """Composed Mapbox GL style document: base style plus added content."""
        style = copy.deepcopy(self.base_style or empty_style())
        style.setdefault('sources', {}).update(copy.deepcopy(self.sources))
        style.setdefault('layers', []).extend(copy.deepcopy(self.layers))
        if self.fog is not None:
            style['fog'] = copy.deepcopy(self.fog)
        if self.terrain is not None:
            style['terrain'] = copy.deepcopy(self.terrain)
        style['center'] = list(self.center)
        style['zoom'] = self.zoom
        return style


class StyleMapEngine:
    """MapEngine that produces StyleMap objects."""

    def __init__(self, style_loader: StyleLoader | None = None) -> None:
        self._style_loader = style_loader or MapboxStyleLoader()

    def create_map(self, surface: Surface, options: MapOptions) -> StyleMap:
        engine_map = StyleMap(surface, options, self._style_loader)
        surface.attach(engine_map)
        engine_map.start()
        logger.debug(
            'Map created in %s: style=%s zoom=%s interactive=%s',
            surface.container_id,
            options.style,
            options.zoom,
            options.interactive,
        )
        return engine_map
