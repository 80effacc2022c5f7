"""SDK services: configuration, data fetching and map lifecycle."""
from cruisemaps.services.autoconfig import (
    AutoConfigResult,
    configure_from_env,
    default_config,
)
from cruisemaps.services.config_store import ConfigurationStore
from cruisemaps.services.itineraries import fetch_itinerary
from cruisemaps.services.map_registry import MapInstance, MapInstanceRegistry
from cruisemaps.services.map_service import MapRenderer
from cruisemaps.services.ships import MOCK_SHIPS, fetch_ships

__all__ = [
    'MOCK_SHIPS',
    'AutoConfigResult',
    'ConfigurationStore',
    'MapInstance',
    'MapInstanceRegistry',
    'MapRenderer',
    'configure_from_env',
    'default_config',
    'fetch_itinerary',
    'fetch_ships',
]
