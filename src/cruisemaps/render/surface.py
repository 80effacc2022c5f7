"""Named containers that maps are rendered into."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Surface:
    """
    A rendering container addressed by id.

    Holds the current viewport size, the objects attached to it (normally a
    single engine map) and an optional placeholder message shown instead of
    a map.
    """

    container_id: str
    width: int | None = None
    height: int | None = None
    children: list[Any] = field(default_factory=list)
    placeholder: str | None = None

    def clear(self) -> None:
        self.children.clear()
        self.placeholder = None

    def set_size(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)

    def attach(self, child: Any) -> None:
        self.placeholder = None
        self.children.append(child)

    def detach(self, child: Any) -> None:
        if child in self.children:
            self.children.remove(child)

    def show_placeholder(self, message: str) -> None:
        """Сбрасывает содержимое и оставляет пассивную заглушку."""
        self.children.clear()
        self.placeholder = message


class SurfaceHost:
    """Registry of surfaces by container id (the host-page equivalent)."""

    def __init__(self) -> None:
        self._surfaces: dict[str, Surface] = {}

    def add(
        self, container_id: str, width: int | None = None, height: int | None = None
    ) -> Surface:
        surface = self._surfaces.get(container_id)
        if surface is None:
            surface = Surface(container_id, width=width, height=height)
            self._surfaces[container_id] = surface
            logger.debug('Surface added: %s', container_id)
        return surface

    def get(self, container_id: str) -> Surface | None:
        return self._surfaces.get(container_id)

    def remove(self, container_id: str) -> bool:
        return self._surfaces.pop(container_id, None) is not None

    def __contains__(self, container_id: object) -> bool:
        return container_id in self._surfaces

    def __len__(self) -> int:
        return len(self._surfaces)
