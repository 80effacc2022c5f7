"""Pytest configuration and fixtures for cruisemaps tests."""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from cruisemaps.infrastructure.http.client import HttpResponse  # noqa: E402
from cruisemaps.services.config_store import ConfigurationStore  # noqa: E402


def _itinerary():
    return {
        'type': 'FeatureCollection',
        'features': [
            {
                'type': 'Feature',
                'geometry': {
                    'type': 'LineString',
                    'coordinates': [[-80.19, 25.77], [-77.35, 25.06], [-64.78, 32.30]],
                },
                'properties': {},
            },
            {
                'type': 'Feature',
                'geometry': {'type': 'Point', 'coordinates': [-80.19, 25.77]},
                'properties': {'Feature_type': 'start', 'name': 'Miami'},
            },
            {
                'type': 'Feature',
                'geometry': {'type': 'Point', 'coordinates': [-77.35, 25.06]},
                'properties': {'Feature_type': 'port', 'name': 'Nassau'},
            },
            {
                'type': 'Feature',
                'geometry': {'type': 'Point', 'coordinates': [-64.78, 32.30]},
                'properties': {'Feature_type': 'end', 'name': 'Hamilton'},
            },
        ],
    }


@pytest.fixture
def config_dict():
    """Configuration in the camelCase shape of the JS SDK."""
    return {
        'auth': {'mapBoxKey': 'pk.test-mapbox-key', 'cruiseMapsKey': 'cm-test-key'},
        'mapDefaults': {
            'mapStyle': 'mapbox://styles/mapbox/streets-v11',
            'zoomLevel': 10,
            'is3d': False,
            'isStatic': False,
            'hasArrows': True,
            'height': 400,
            'width': 600,
            'center': [-74.5, 40],
        },
        'availableMapStyles': [
            'mapbox://styles/mapbox/streets-v11',
            'mapbox://styles/mapbox/dark-v11',
        ],
        'api': {
            'apiBaseUrl': 'http://api.test/v1',
            'shipsEndpoint': 'http://api.test/v1/ships',
            'itinerariesEndpoint': 'http://api.test/v1/ships',
        },
        'network': {'maxRetries': 3, 'timeoutMs': 5000},
    }


@pytest.fixture
def store(config_dict):
    return ConfigurationStore(config_dict)


@pytest.fixture
def itinerary():
    return _itinerary()


@pytest.fixture
def make_response():
    """Factory for aiohttp-like response mocks usable with `async with`."""

    def _make(status=200, body=b'', reason='OK', url='http://api.test/v1/ships'):
        if not isinstance(body, bytes):
            body = json.dumps(body).encode()
        resp = MagicMock()
        resp.status = status
        resp.reason = reason
        resp.url = url
        resp.headers = {'Content-Type': 'application/json'}
        resp.read = AsyncMock(return_value=body)
        resp.json = AsyncMock(return_value=json.loads(body) if body else None)
        resp.__aenter__ = AsyncMock(return_value=resp)
        resp.__aexit__ = AsyncMock(return_value=None)
        return resp

    return _make


@pytest.fixture
def make_session():
    """Factory for session mocks; each item is a response mock or an exception."""

    def _make(*items):
        session = MagicMock()
        session.request = MagicMock(side_effect=list(items))
        session.get = MagicMock(side_effect=list(items))
        session.close = AsyncMock()
        return session

    return _make


@pytest.fixture
def sleep_calls():
    """Injectable sleep that records requested delays instead of waiting."""
    delays = []

    async def _sleep(delay):
        delays.append(delay)

    _sleep.delays = delays
    return _sleep


@pytest.fixture
def itinerary_network(itinerary):
    """NetworkClient stand-in answering every request with the itinerary."""
    network = MagicMock()
    network.fetch_with_retry = AsyncMock(
        return_value=HttpResponse(
            status=200,
            reason='OK',
            url='http://api.test/v1/ships/2/itinerary',
            body=json.dumps(itinerary).encode(),
        )
    )
    network.close = AsyncMock()
    return network
