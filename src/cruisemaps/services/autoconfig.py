"""Configuration from environment variables and .env files."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from dotenv import load_dotenv

from cruisemaps.domain.models import AuthConfig, Config
from cruisemaps.shared.constants import ENV_CRUISEMAPS_KEY, ENV_MAPBOX_KEY

logger = logging.getLogger(__name__)

ENV_SOURCE = 'env'


class Configurable(Protocol):
    def configure(self, config: Config) -> None: ...


@dataclass
class AutoConfigResult:
    configured: bool
    source: str | None = None
    error: str | None = None


def default_config(mapbox_key: str, cruisemaps_key: str) -> Config:
    """Default configuration with the given credentials."""
    return Config(auth=AuthConfig(mapbox_key=mapbox_key, cruisemaps_key=cruisemaps_key))


def _env_candidates() -> list[Path]:
    cwd = Path.cwd()
    return [cwd / '.secrets.env', cwd / '.env']


def load_env_file(env_file: str | Path | None = None) -> Path | None:
    """Load the given .env file, or the first one found in the working directory."""
    candidates = [Path(env_file)] if env_file is not None else _env_candidates()
    for p in candidates:
        if p.exists():
            load_dotenv(p)
            logger.debug('Environment loaded from %s', p)
            return p
    if env_file is not None:
        logger.warning('Env file not found: %s', env_file)
    return None


def configure_from_env(
    client: Configurable,
    env_file: str | Path | None = None,
    on_result: Callable[[AutoConfigResult], None] | None = None,
) -> AutoConfigResult:
    """
    Configure the client from CRUISEMAPS_MAPBOX_KEY / CRUISEMAPS_API_KEY.

    Both keys are required; when either is missing the client is left alone
    and the result says so without an error. on_result, if given, receives
    the result as well.
    """
    load_env_file(env_file)
    mapbox_key = os.getenv(ENV_MAPBOX_KEY, '').strip()
    cruisemaps_key = os.getenv(ENV_CRUISEMAPS_KEY, '').strip()

    if not mapbox_key or not cruisemaps_key:
        logger.info('Auto-configuration skipped: credentials not set in environment')
        result = AutoConfigResult(configured=False)
    else:
        try:
            client.configure(default_config(mapbox_key, cruisemaps_key))
            result = AutoConfigResult(configured=True, source=ENV_SOURCE)
            logger.info('Auto-configured from environment')
        except Exception as e:
            logger.exception('Auto-configuration failed')
            result = AutoConfigResult(configured=False, error=str(e))

    if on_result is not None:
        on_result(result)
    return result
