"""Tests for the CruiseMapsClient facade."""

import json
from unittest.mock import AsyncMock

import pytest

from cruisemaps import CruiseMapsClient, MapState, NotConfiguredError
from cruisemaps.render.engine import StyleMapEngine
from cruisemaps.render.style_loader import StaticStyleLoader


def _offline_client(config=None, session=None, sleep=None):
    kwargs = {'engine': StyleMapEngine(StaticStyleLoader()), 'session': session}
    if sleep is not None:
        kwargs['sleep'] = sleep
    return CruiseMapsClient(config, **kwargs)


class TestConfiguration:
    """Tests for configuration through the client."""

    def test_unconfigured(self):
        """A fresh client reports unconfigured and rejects reads."""
        client = _offline_client()
        assert client.is_configured() is False
        with pytest.raises(NotConfiguredError):
            client.get_config()
        with pytest.raises(NotConfiguredError):
            client.get_available_map_styles()

    def test_configure_and_styles(self, config_dict):
        """configure then add a style once."""
        client = _offline_client()
        client.configure(config_dict)
        assert client.is_configured()

        client.add_map_style('mapbox://styles/me/custom')
        client.add_map_style('mapbox://styles/me/custom')
        styles = client.get_available_map_styles()
        assert styles.count('mapbox://styles/me/custom') == 1
        assert styles[-1] == 'mapbox://styles/me/custom'

    def test_clients_are_independent(self, config_dict):
        """Two clients do not share configuration."""
        a = _offline_client(config_dict)
        b = _offline_client()
        assert a.is_configured()
        assert not b.is_configured()


class TestClientPipeline:
    """End-to-end tests with a mocked HTTP session."""

    @pytest.mark.asyncio
    async def test_fetch_ships_mock(self, config_dict):
        """Default configuration serves the static catalogue."""
        async with _offline_client(config_dict) as client:
            result = await client.fetch_ships({'offset': 0, 'limit': 10})
        assert len(result.ships) <= 10
        assert result.total_ship_count >= len(result.ships)

    @pytest.mark.asyncio
    async def test_load_destroy(self, config_dict, itinerary, make_session, make_response, sleep_calls):
        """configure, load -> True, destroy twice -> True."""
        session = make_session(make_response(200, json.dumps(itinerary).encode()))
        client = _offline_client(config_dict, session=session, sleep=sleep_calls)
        client.surfaces.add('c1', 600, 400)

        ok = await client.load_map(
            {'container': 'c1', 'data': {'ship_id': 2, 'start_date': 1700000000, 'duration': 86400}}
        )

        assert ok is True
        assert client.map_state('c1') == MapState.READY
        assert client.get_map('c1') is not None
        method, url = session.request.call_args.args
        assert (method, url) == ('GET', 'http://api.test/v1/ships/2/itinerary')
        assert client.resize_map('c1', 640, 480) is True

        assert await client.destroy('c1') is True
        assert await client.destroy('c1') is True
        await client.aclose()
        session.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_through_client(
        self, config_dict, itinerary, make_session, make_response, sleep_calls
    ):
        """Server errors are retried with backoff before the load succeeds."""
        session = make_session(
            make_response(500),
            make_response(503),
            make_response(200, json.dumps(itinerary).encode()),
        )
        client = _offline_client(config_dict, session=session, sleep=sleep_calls)
        client.surfaces.add('c1')

        assert await client.load_map(
            {'container': 'c1', 'data': {'ship_id': 2, 'start_date': 0, 'duration': 1}}
        )
        assert sleep_calls.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_fetch_itinerary(self, config_dict, itinerary, make_session, make_response):
        """fetch_itinerary returns the decoded collection."""
        session = make_session(make_response(200, json.dumps(itinerary).encode()))
        client = _offline_client(config_dict, session=session)
        assert await client.fetch_itinerary(2, 0, 1) == itinerary

    @pytest.mark.asyncio
    async def test_aclose_destroys_maps(self, config_dict, itinerary_network):
        """aclose releases every registered map and the network client."""
        client = _offline_client(config_dict)
        client._renderer._network = itinerary_network
        client.surfaces.add('c1')
        client.surfaces.add('c2')
        for container in ('c1', 'c2'):
            assert await client.load_map(
                {'container': container, 'data': {'ship_id': 2, 'start_date': 0, 'duration': 1}}
            )
        handles = [client.get_map(c).handle for c in ('c1', 'c2')]
        client._network.close = AsyncMock()

        await client.aclose()

        assert all(h.removed for h in handles)
        assert client.get_map('c1') is None
