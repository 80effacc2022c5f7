"""CruiseMaps SDK: cruise itinerary maps on Mapbox GL styles."""
from cruisemaps.client import CruiseMapsClient
from cruisemaps.domain.models import (
    Config,
    FetchShipsOptions,
    FetchShipsResponse,
    LoadMapData,
    LoadMapParams,
    MapConfig,
    Ship,
)
from cruisemaps.services.autoconfig import AutoConfigResult, configure_from_env
from cruisemaps.shared.constants import MapState
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

__version__ = '0.1.0'

__all__ = [
    'AuthenticationError',
    'AutoConfigResult',
    'Config',
    'ContainerNotFoundError',
    'CruiseMapsClient',
    'CruiseMapsError',
    'EngineError',
    'FetchShipsOptions',
    'FetchShipsResponse',
    'GeometryFetchFailedError',
    'LoadMapData',
    'LoadMapParams',
    'MapConfig',
    'MapState',
    'NetworkError',
    'NotConfiguredError',
    'RateLimitError',
    'Ship',
    '__version__',
    'configure_from_env',
]
