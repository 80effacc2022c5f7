"""CruiseMaps SDK entry object."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from cruisemaps.domain.models import (
    Config,
    FetchShipsOptions,
    FetchShipsResponse,
    LoadMapParams,
)
from cruisemaps.infrastructure.http.client import NetworkClient
from cruisemaps.render.engine import StyleMapEngine
from cruisemaps.render.surface import SurfaceHost
from cruisemaps.services.config_store import ConfigurationStore
from cruisemaps.services.itineraries import fetch_itinerary
from cruisemaps.services.map_service import MapRenderer
from cruisemaps.services.ships import fetch_ships

if TYPE_CHECKING:
    import aiohttp

    from cruisemaps.render.engine import MapEngine
    from cruisemaps.services.map_registry import MapInstance
    from cruisemaps.shared.constants import MapState

logger = logging.getLogger(__name__)


class CruiseMapsClient:
    """
    One configured SDK instance.

    Owns its configuration, HTTP client, surfaces and map registry; several
    clients can coexist in one process. Use as an async context manager or
    call aclose() to release the HTTP session.
    """

    def __init__(
        self,
        config: Config | Mapping[str, Any] | None = None,
        *,
        engine: MapEngine | None = None,
        surfaces: SurfaceHost | None = None,
        session: aiohttp.ClientSession | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = ConfigurationStore(config)
        self._network = NetworkClient(self._config, session=session, sleep=sleep)
        self.surfaces = surfaces if surfaces is not None else SurfaceHost()
        self._renderer = MapRenderer(
            self._config,
            self._network,
            self.surfaces,
            engine or StyleMapEngine(),
        )

    async def __aenter__(self) -> CruiseMapsClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for container_id in self._renderer.registry.containers:
            await self._renderer.destroy(container_id)
        await self._network.close()

    # --- configuration

    def configure(self, config: Config | Mapping[str, Any]) -> None:
        self._config.configure(config)

    def is_configured(self) -> bool:
        return self._config.is_configured()

    def get_config(self) -> Config:
        return self._config.get_config()

    def get_available_map_styles(self) -> list[str]:
        return self._config.get_available_map_styles()

    def add_map_style(self, style_id: str) -> None:
        self._config.add_map_style(style_id)

    @property
    def config_store(self) -> ConfigurationStore:
        return self._config

    @property
    def network(self) -> NetworkClient:
        return self._network

    # --- data

    async def fetch_ships(
        self, options: FetchShipsOptions | Mapping[str, Any] | None = None
    ) -> FetchShipsResponse:
        return await fetch_ships(options, self._config, self._network)

    async def fetch_itinerary(
        self, ship_id: int, start_date: int, duration: int
    ) -> dict[str, Any] | None:
        return await fetch_itinerary(
            ship_id, start_date, duration, self._config, self._network
        )

    # --- maps

    async def load_map(self, params: LoadMapParams | Mapping[str, Any]) -> bool:
        return await self._renderer.load_map(params)

    async def destroy(self, container_id: str) -> bool:
        return await self._renderer.destroy(container_id)

    def resize_map(
        self, container_id: str, width: int | None = None, height: int | None = None
    ) -> bool:
        return self._renderer.resize_map(container_id, width, height)

    def get_map(self, container_id: str) -> MapInstance | None:
        return self._renderer.get_map(container_id)

    def map_state(self, container_id: str) -> MapState | None:
        return self._renderer.state(container_id)
