"""Shared constants, errors and helpers."""
from cruisemaps.shared.errors import (
    AuthenticationError,
    ContainerNotFoundError,
    CruiseMapsError,
    EngineError,
    GeometryFetchFailedError,
    NetworkError,
    NotConfiguredError,
    RateLimitError,
)
from cruisemaps.shared.masking import mask_key

__all__ = [
    'AuthenticationError',
    'ContainerNotFoundError',
    'CruiseMapsError',
    'EngineError',
    'GeometryFetchFailedError',
    'NetworkError',
    'NotConfiguredError',
    'RateLimitError',
    'mask_key',
]
