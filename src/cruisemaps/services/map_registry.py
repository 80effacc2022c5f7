"""Per-container map instance registry."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from cruisemaps.shared.constants import MapState

if TYPE_CHECKING:
    from cruisemaps.domain.models import MapConfig
    from cruisemaps.geo.bounds import BoundingRegion
    from cruisemaps.render.engine import EngineMap

logger = logging.getLogger(__name__)


@dataclass
class MapInstance:
    """A loaded map: engine handle plus what it was composed from."""

    container_id: str
    handle: EngineMap
    style: str
    geometry: dict[str, Any]
    bounds: BoundingRegion | None
    config: MapConfig


class MapInstanceRegistry:
    """
    At most one live MapInstance per container.

    Compound operations are serialised by an asyncio.Lock. Every load holds
    a ticket (the container's generation number at begin_load); remove() and
    any later begin_load() bump the generation, so an older load can neither
    commit nor mark the container failed.
    """

    def __init__(self) -> None:
        self._instances: dict[str, MapInstance] = {}
        self._states: dict[str, MapState] = {}
        self._generations: dict[str, int] = {}
        self._lock = asyncio.Lock()

    def _bump(self, container_id: str) -> int:
        generation = self._generations.get(container_id, 0) + 1
        self._generations[container_id] = generation
        return generation

    def is_current(self, container_id: str, ticket: int) -> bool:
        return self._generations.get(container_id) == ticket

    async def begin_load(self, container_id: str) -> int:
        async with self._lock:
            ticket = self._bump(container_id)
            self._states[container_id] = MapState.LOADING
            logger.debug('Load started: %s (ticket %d)', container_id, ticket)
            return ticket

    async def commit(
        self, container_id: str, instance: MapInstance, ticket: int
    ) -> bool:
        """Register the instance; False if the ticket is stale."""
        async with self._lock:
            if not self.is_current(container_id, ticket):
                logger.info(
                    'Stale load for %s discarded (ticket %d)', container_id, ticket
                )
                return False
            previous = self._instances.get(container_id)
            self._instances[container_id] = instance
            self._states[container_id] = MapState.READY

        if previous is not None and previous.handle is not instance.handle:
            try:
                previous.handle.remove()
            except Exception:
                logger.exception('Failed to remove replaced map in %s', container_id)
        return True

    async def fail(self, container_id: str, ticket: int) -> bool:
        """
        Mark a load as failed; False if the ticket is stale.

        A previously registered instance stays registered, and then the
        container keeps the Ready state.
        """
        async with self._lock:
            if not self.is_current(container_id, ticket):
                return False
            if container_id in self._instances:
                self._states[container_id] = MapState.READY
            else:
                self._states[container_id] = MapState.FAILED
            return True

    async def remove(self, container_id: str) -> MapInstance | None:
        """Unregister the container and invalidate in-flight loads."""
        async with self._lock:
            self._bump(container_id)
            self._states.pop(container_id, None)
            return self._instances.pop(container_id, None)

    def get(self, container_id: str) -> MapInstance | None:
        return self._instances.get(container_id)

    def state(self, container_id: str) -> MapState | None:
        return self._states.get(container_id)

    @property
    def containers(self) -> list[str]:
        return list(self._instances)

    def __contains__(self, container_id: object) -> bool:
        return container_id in self._instances

    def __len__(self) -> int:
        return len(self._instances)
