"""Domain models and configuration profiles."""
from cruisemaps.domain.models import (
    ApiConfig,
    AuthConfig,
    Config,
    FetchShipsOptions,
    FetchShipsResponse,
    FogConfig,
    LoadMapData,
    LoadMapParams,
    Map3DConfig,
    MapConfig,
    NetworkConfig,
    PortStyle,
    PortStyleConfig,
    RetryPolicy,
    Ship,
    SkyConfig,
    TerrainConfig,
    TrackStyle,
)
from cruisemaps.domain.profiles import load_config, save_config

__all__ = [
    'ApiConfig',
    'AuthConfig',
    'Config',
    'FetchShipsOptions',
    'FetchShipsResponse',
    'FogConfig',
    'LoadMapData',
    'LoadMapParams',
    'Map3DConfig',
    'MapConfig',
    'NetworkConfig',
    'PortStyle',
    'PortStyleConfig',
    'RetryPolicy',
    'Ship',
    'SkyConfig',
    'TerrainConfig',
    'TrackStyle',
    'load_config',
    'save_config',
]
