"""Paged ship listing."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cruisemaps.domain.models import FetchShipsOptions, FetchShipsResponse, Ship
from cruisemaps.shared.errors import NetworkError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cruisemaps.infrastructure.http.client import NetworkClient
    from cruisemaps.services.config_store import ConfigurationStore

logger = logging.getLogger(__name__)

# Статический каталог, пока бэкенд не отдаёт список судов
MOCK_TOTAL_SHIP_COUNT = 518
MOCK_SHIPS: tuple[Ship, ...] = (
    Ship(
        id=2,
        name='ADORA MEDITERRANEA',
        cruise_line='Adora Cruises Carnival China',
        imo_number=9237345,
        display_name='ADORA MEDITERRANEA - Adora Cruises Carnival China',
        mmsi=311001086,
    ),
    Ship(
        id=8,
        name='AIDADIVA',
        cruise_line='AIDA Cruises',
        imo_number=9334856,
        display_name='AIDADIVA - AIDA Cruises',
        mmsi=247187700,
    ),
    Ship(
        id=505,
        name='CELEBRITY ASCENT',
        cruise_line='Celebrity Cruises',
        imo_number=9838383,
        display_name='CELEBRITY ASCENT - Celebrity Cruises',
        mmsi=256191000,
    ),
    Ship(
        id=513,
        name='EXPEDITION C',
        cruise_line='[yacht]',
        imo_number=None,
        display_name='EXPEDITION C',
        mmsi=378111899,
    ),
    Ship(
        id=396,
        name='MV WORLD ODYSSEY',
        cruise_line='Semester at Sea',
        imo_number=9141807,
        display_name='MV WORLD ODYSSEY - Semester at Sea',
        mmsi=311000410,
    ),
    Ship(
        id=3,
        name='COSTA ATLANTICA',
        cruise_line='Adora Cruises Carnival China',
        imo_number=9187796,
        display_name='COSTA ATLANTICA - Adora Cruises Carnival China',
        mmsi=311001063,
    ),
    Ship(
        id=500,
        name='SILVER RAY',
        cruise_line='Silversea Cruises',
        imo_number=9886225,
        display_name='SILVER RAY - Silversea Cruises',
        mmsi=311001496,
    ),
    Ship(
        id=17,
        name='ADMIRALTY DREAM',
        cruise_line='Alaskan Dream Cruises',
        imo_number=8963727,
        display_name='ADMIRALTY DREAM - Alaskan Dream Cruises',
        mmsi=367486470,
    ),
    Ship(
        id=18,
        name='ALASKAN DREAM',
        cruise_line='Alaskan Dream Cruises',
        imo_number=8978679,
        display_name='ALASKAN DREAM - Alaskan Dream Cruises',
        mmsi=367489250,
    ),
    Ship(
        id=19,
        name='BARANOF DREAM',
        cruise_line='Alaskan Dream Cruises',
        imo_number=8963715,
        display_name='BARANOF DREAM - Alaskan Dream Cruises',
        mmsi=367573580,
    ),
)


def mock_ships(options: FetchShipsOptions) -> FetchShipsResponse:
    ships = MOCK_SHIPS[options.offset : options.offset + options.limit]
    return FetchShipsResponse(
        total_ship_count=MOCK_TOTAL_SHIP_COUNT,
        ships=[ship.model_copy() for ship in ships],
    )


async def fetch_ships(
    options: FetchShipsOptions | Mapping[str, Any] | None,
    config_store: ConfigurationStore,
    network: NetworkClient,
) -> FetchShipsResponse:
    """
    Return one page of ships.

    Uses the static catalogue unless the configuration turns mock ships off,
    in which case the ships endpoint is queried with skip/limit parameters.
    Errors propagate to the caller.
    """
    if options is None:
        options = FetchShipsOptions()
    elif not isinstance(options, FetchShipsOptions):
        options = FetchShipsOptions.model_validate(options)

    endpoints = config_store.get_endpoints()
    if endpoints.use_mock_ships:
        result = mock_ships(options)
        logger.debug(
            'Ships (mock): offset=%d limit=%d -> %d',
            options.offset,
            options.limit,
            len(result.ships),
        )
        return result

    response = await network.fetch_with_retry(
        endpoints.ships_endpoint,
        params={'skip': str(options.offset), 'limit': str(options.limit)},
    )
    data = response.json()
    if not isinstance(data, dict) or data.get('ships') is None:
        msg = 'Failed to fetch ships - no ships data in response'
        raise NetworkError(msg, response.status)

    data.setdefault('total_ship_count', len(data['ships']))
    result = FetchShipsResponse.model_validate(data)
    logger.info(
        'Ships fetched: %d of %d', len(result.ships), result.total_ship_count
    )
    return result
