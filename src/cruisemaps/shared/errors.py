"""Exception hierarchy shared by every cruisemaps layer."""

from __future__ import annotations

from cruisemaps.shared.constants import HTTP_TOO_MANY_REQUESTS, HTTP_UNAUTHORIZED


class CruiseMapsError(Exception):
    """Base class for all cruisemaps errors."""


class NotConfiguredError(CruiseMapsError):
    def __init__(self, message: str = 'cruisemaps is not configured. Call configure() first.'):
        super().__init__(message)


class NetworkError(CruiseMapsError):
    """HTTP failure or transport error; retried up to the configured limit."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RateLimitError(NetworkError):
    def __init__(self, message: str = 'Rate limit exceeded'):
        super().__init__(message, HTTP_TOO_MANY_REQUESTS)


class AuthenticationError(NetworkError):
    def __init__(
        self,
        message: str = 'Invalid authentication key',
        status: int = HTTP_UNAUTHORIZED,
    ):
        super().__init__(message, status)


class ContainerNotFoundError(CruiseMapsError):
    def __init__(self, container: str):
        super().__init__(f"Container '{container}' not found")
        self.container = container


class GeometryFetchFailedError(CruiseMapsError):
    def __init__(self, message: str = 'Failed to fetch itinerary GeoJSON data'):
        super().__init__(message)


class EngineError(CruiseMapsError):
    """Raised by the rendering engine for invalid map operations."""
