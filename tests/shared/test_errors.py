"""Tests for errors and key masking."""

import pytest

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


class TestErrorHierarchy:
    """Tests for the exception taxonomy."""

    @pytest.mark.parametrize(
        'exc',
        [
            NotConfiguredError(),
            NetworkError('boom'),
            RateLimitError(),
            AuthenticationError(),
            ContainerNotFoundError('c1'),
            GeometryFetchFailedError(),
            EngineError('bad'),
        ],
    )
    def test_all_derive_from_base(self, exc):
        """Every SDK error should be a CruiseMapsError."""
        assert isinstance(exc, CruiseMapsError)

    def test_rate_limit_is_network_error_with_429(self):
        """RateLimitError carries status 429."""
        exc = RateLimitError()
        assert isinstance(exc, NetworkError)
        assert exc.status == 429

    def test_authentication_default_status(self):
        """AuthenticationError defaults to 401 and keeps an explicit 403."""
        assert AuthenticationError().status == 401
        assert AuthenticationError(status=403).status == 403

    def test_network_error_status_optional(self):
        """Transport failures have no HTTP status."""
        assert NetworkError('timeout').status is None
        assert NetworkError('HTTP 500', 500).status == 500

    def test_container_not_found_message(self):
        """Message names the missing container."""
        exc = ContainerNotFoundError('map-1')
        assert str(exc) == "Container 'map-1' not found"
        assert exc.container == 'map-1'

    def test_not_configured_message(self):
        """Default message points at configure()."""
        assert 'configure()' in str(NotConfiguredError())


class TestMaskKey:
    """Tests for mask_key function."""

    def test_long_key_keeps_prefix(self):
        """Only the first 4 characters should be visible."""
        assert mask_key('pk.abcdef') == 'pk.a*****'

    def test_short_key_fully_masked(self):
        """Keys up to 4 characters are fully masked."""
        assert mask_key('abcd') == '****'
        assert mask_key('ab') == '**'

    def test_empty_key(self):
        """Empty or missing keys are shown as <empty>."""
        assert mask_key('') == '<empty>'
        assert mask_key(None) == '<empty>'
