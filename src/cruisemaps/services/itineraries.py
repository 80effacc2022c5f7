"""Itinerary geometry fetch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cruisemaps.infrastructure.http.client import NetworkClient
    from cruisemaps.services.config_store import ConfigurationStore

logger = logging.getLogger(__name__)


def itinerary_url(itineraries_endpoint: str, ship_id: int) -> str:
    return f'{itineraries_endpoint.rstrip("/")}/{ship_id}/itinerary'


async def fetch_itinerary(
    ship_id: int,
    start_date: int,
    duration: int,
    config_store: ConfigurationStore,
    network: NetworkClient,
) -> dict[str, Any] | None:
    """
    Fetch the GeoJSON FeatureCollection of a ship's itinerary.

    Args:
        ship_id: ship identifier
        start_date: start of the window, unix seconds
        duration: window length in seconds

    Returns:
        The decoded collection, or None when the body is empty or carries no
        features. Network errors propagate.

    """
    url = itinerary_url(config_store.get_endpoints().itineraries_endpoint, ship_id)
    response = await network.fetch_with_retry(
        url,
        params={'start_date': str(int(start_date)), 'duration': str(int(duration))},
    )
    payload = response.json()
    if not isinstance(payload, dict) or not payload.get('features'):
        logger.warning('Empty itinerary for ship %s (start=%s)', ship_id, start_date)
        return None

    logger.debug(
        'Itinerary for ship %s: %d features', ship_id, len(payload['features'])
    )
    return payload
