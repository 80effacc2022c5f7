"""Holder of the active SDK configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from cruisemaps.domain.models import ApiConfig, Config, MapConfig, NetworkConfig
from cruisemaps.shared.errors import NotConfiguredError
from cruisemaps.shared.masking import mask_key

logger = logging.getLogger(__name__)


class ConfigurationStore:
    """
    Single active configuration of one client.

    Every accessor raises NotConfiguredError until configure() has been called.
    After that the configuration is treated as read-only, except for appends
    to the style catalog.
    """

    def __init__(self, config: Config | Mapping[str, Any] | None = None) -> None:
        self._config: Config | None = None
        if config is not None:
            self.configure(config)

    def configure(self, config: Config | Mapping[str, Any]) -> None:
        if not isinstance(config, Config):
            config = Config.model_validate(config)
        else:
            # собственная копия: каталог стилей дополняется на месте
            config = config.model_copy(deep=True)
        self._config = config
        logger.info(
            'Configured: mapbox_key=%s cruisemaps_key=%s api=%s',
            mask_key(config.auth.mapbox_key),
            mask_key(config.auth.cruisemaps_key),
            config.api.api_base_url,
        )

    def is_configured(self) -> bool:
        return self._config is not None

    def get_config(self) -> Config:
        if self._config is None:
            raise NotConfiguredError
        return self._config

    def get_endpoints(self) -> ApiConfig:
        return self.get_config().api

    def get_network_config(self) -> NetworkConfig:
        return self.get_config().network

    def get_mapbox_key(self) -> str:
        return self.get_config().auth.mapbox_key

    def get_cruisemaps_key(self) -> str:
        return self.get_config().auth.cruisemaps_key

    def get_map_defaults(self) -> MapConfig:
        return self.get_config().map_defaults

    def get_default_map_style(self) -> str:
        return self.get_config().map_defaults.map_style

    def get_default_zoom_level(self) -> float:
        return self.get_config().map_defaults.zoom_level

    def get_available_map_styles(self) -> list[str]:
        return list(self.get_config().available_map_styles)

    def add_map_style(self, style_id: str) -> None:
        """Append a style to the catalog unless it is already present."""
        styles = self.get_config().available_map_styles
        if style_id not in styles:
            styles.append(style_id)
