"""
Map lifecycle: load, destroy and resize maps by container id.

load_map runs the whole pipeline (surface, engine map, itinerary geometry,
style-ready, bounds fitting, layer composition, registration) and reports the
outcome as a bool. Failures are logged, rolled back and never raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from cruisemaps.domain.models import LoadMapParams
from cruisemaps.geo.bounds import compute_bounds
from cruisemaps.render.engine import MapOptions
from cruisemaps.render.layers import compose_layers
from cruisemaps.services.itineraries import fetch_itinerary
from cruisemaps.services.map_registry import MapInstance, MapInstanceRegistry
from cruisemaps.shared.constants import (
    FIT_BOUNDS_MAX_ZOOM,
    FIT_BOUNDS_PADDING_PX,
    PREVIEW_PLACEHOLDER_TEXT,
    MapState,
)
from cruisemaps.shared.errors import ContainerNotFoundError, GeometryFetchFailedError

if TYPE_CHECKING:
    from cruisemaps.infrastructure.http.client import NetworkClient
    from cruisemaps.render.engine import EngineMap, MapEngine
    from cruisemaps.render.surface import Surface, SurfaceHost
    from cruisemaps.services.config_store import ConfigurationStore

logger = logging.getLogger(__name__)


class MapRenderer:
    def __init__(
        self,
        config_store: ConfigurationStore,
        network: NetworkClient,
        surfaces: SurfaceHost,
        engine: MapEngine,
        registry: MapInstanceRegistry | None = None,
    ) -> None:
        self._config_store = config_store
        self._network = network
        self._surfaces = surfaces
        self._engine = engine
        self.registry = registry or MapInstanceRegistry()
        # container -> (ticket, engine map) загрузок, ещё не зарегистрированных
        self._pending: dict[str, tuple[int, EngineMap]] = {}

    async def load_map(self, params: LoadMapParams | Mapping[str, Any]) -> bool:
        """
        Render a ship's itinerary into a container.

        Returns True once the map is registered. On failure the new engine
        map is removed, a previously registered map stays registered, the
        surface shows a placeholder and False is returned.
        """
        container_id = None
        surface = None
        ticket = None
        engine_map = None
        try:
            if not isinstance(params, LoadMapParams):
                params = LoadMapParams.model_validate(params)
            container_id = params.container
            map_config = params.map or self._config_store.get_map_defaults()

            surface = self._surfaces.get(container_id)
            if surface is None:
                raise ContainerNotFoundError(container_id)

            ticket = await self.registry.begin_load(container_id)
            surface.clear()
            surface.set_size(map_config.width, map_config.height)

            engine_map = self._engine.create_map(
                surface,
                MapOptions(
                    style=map_config.map_style,
                    center=map_config.center,
                    zoom=map_config.zoom_level,
                    interactive=not map_config.is_static,
                    access_token=self._config_store.get_mapbox_key(),
                ),
            )
            self._pending[container_id] = (ticket, engine_map)

            data = params.data
            geometry = await fetch_itinerary(
                data.ship_id,
                data.start_date,
                data.duration,
                self._config_store,
                self._network,
            )
            if not geometry:
                raise GeometryFetchFailedError

            await engine_map.wait_style_ready()

            bounds = compute_bounds(geometry)
            if bounds is not None:
                engine_map.fit_bounds(
                    bounds, padding=FIT_BOUNDS_PADDING_PX, max_zoom=FIT_BOUNDS_MAX_ZOOM
                )
            compose_layers(engine_map, geometry, map_config)

            instance = MapInstance(
                container_id=container_id,
                handle=engine_map,
                style=map_config.map_style,
                geometry=geometry,
                bounds=bounds,
                config=map_config,
            )
            if not await self.registry.commit(container_id, instance, ticket):
                # destroy() или более новая загрузка уже забрали контейнер
                engine_map.remove()
                return False
        except asyncio.CancelledError:
            await self._rollback(container_id, surface, ticket, engine_map)
            raise
        except Exception:
            if ticket is not None and not self.registry.is_current(container_id, ticket):
                logger.info('Load into %s superseded: map discarded', container_id)
            else:
                logger.exception('Failed to load map into %s', container_id)
            await self._rollback(container_id, surface, ticket, engine_map)
            return False
        finally:
            self._forget_pending(container_id, ticket)

        logger.info(
            'Map loaded: container=%s ship=%s style=%s',
            container_id,
            params.data.ship_id,
            map_config.map_style,
        )
        return True

    def _forget_pending(self, container_id: str | None, ticket: int | None) -> None:
        pending = self._pending.get(container_id) if container_id else None
        if pending is not None and pending[0] == ticket:
            del self._pending[container_id]

    async def _rollback(
        self,
        container_id: str | None,
        surface: Surface | None,
        ticket: int | None,
        engine_map: EngineMap | None,
    ) -> None:
        if engine_map is not None:
            try:
                engine_map.remove()
            except Exception:
                logger.exception('Failed to remove engine map in %s', container_id)
        if container_id is None or ticket is None:
            return
        # Устаревшая загрузка не трогает поверхность: она принадлежит другой
        if await self.registry.fail(container_id, ticket) and surface is not None:
            surface.show_placeholder(PREVIEW_PLACEHOLDER_TEXT)

    async def destroy(self, container_id: str) -> bool:
        """Release and unregister the container's map; True when absent."""
        try:
            instance = await self.registry.remove(container_id)
            pending = self._pending.pop(container_id, None)
            if pending is not None:
                # Загрузка увидит снятую карту и завершится с False
                pending[1].remove()
            if instance is not None:
                instance.handle.remove()
                logger.info('Map destroyed: %s', container_id)
        except Exception:
            logger.exception('Failed to destroy map in %s', container_id)
            return False
        return True

    def resize_map(
        self,
        container_id: str,
        width: int | None = None,
        height: int | None = None,
    ) -> bool:
        """
        Re-read the container size; optionally set a new size first.

        A dimension left as None keeps the surface's current value.
        """
        instance = self.registry.get(container_id)
        if instance is None:
            logger.warning('Resize requested for unknown map: %s', container_id)
            return False
        try:
            surface = self._surfaces.get(container_id)
            if surface is not None and (width or height):
                surface.set_size(width or surface.width, height or surface.height)
            instance.handle.resize()
        except Exception:
            logger.exception('Failed to resize map in %s', container_id)
            return False
        return True

    def get_map(self, container_id: str) -> MapInstance | None:
        return self.registry.get(container_id)

    def state(self, container_id: str) -> MapState | None:
        return self.registry.state(container_id)
