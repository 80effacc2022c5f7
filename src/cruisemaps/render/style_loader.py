"""Base style loading for the style-document engine."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Protocol

import aiohttp

from cruisemaps.infrastructure.http.client import make_http_session
from cruisemaps.shared.constants import (
    HTTP_FORBIDDEN,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
    MAPBOX_STYLE_SCHEME,
    MAPBOX_STYLES_BASE,
    STYLE_LOAD_TIMEOUT_S,
)
from cruisemaps.shared.errors import AuthenticationError, NetworkError

logger = logging.getLogger(__name__)


class StyleLoader(Protocol):
    async def __call__(self, style_url: str, access_token: str) -> dict[str, Any]: ...


def resolve_style_url(style_url: str, access_token: str) -> str:
    """mapbox://styles/<owner>/<id> -> Styles API URL; other URLs unchanged."""
    if style_url.startswith(MAPBOX_STYLE_SCHEME):
        path = style_url[len(MAPBOX_STYLE_SCHEME) :]
        return f'{MAPBOX_STYLES_BASE}/{path}?access_token={access_token}'
    return style_url


def empty_style(name: str = 'empty') -> dict[str, Any]:
    return {'version': 8, 'name': name, 'sources': {}, 'layers': []}


class StaticStyleLoader:
    """Returns a fixed style document without network access."""

    def __init__(self, style: dict[str, Any] | None = None) -> None:
        self._style = style if style is not None else empty_style()

    async def __call__(self, style_url: str, access_token: str) -> dict[str, Any]:
        return copy.deepcopy(self._style)


class MapboxStyleLoader:
    """Fetches a style document from the Mapbox Styles API."""

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession | None = None,
        timeout_s: float = STYLE_LOAD_TIMEOUT_S,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s

    async def __call__(self, style_url: str, access_token: str) -> dict[str, Any]:
        url = resolve_style_url(style_url, access_token)
        # Не добавляем токен в лог/ошибки
        path = url.split('?', 1)[0]
        timeout = aiohttp.ClientTimeout(total=self._timeout_s)
        session = self._session or make_http_session()
        try:
            async with session.get(url, timeout=timeout) as resp:
                sc = resp.status
                if sc == HTTP_OK:
                    style = await resp.json(content_type=None)
                    logger.debug('Style loaded: %s', path)
                    return style
                if sc in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
                    msg = f'Invalid or expired map access token (HTTP {sc}) for {path}'
                    raise AuthenticationError(msg, status=sc)
                msg = f'Style {path} unavailable (HTTP {sc})'
                raise NetworkError(msg, sc)
        except asyncio.CancelledError:
            raise
        except (TimeoutError, asyncio.TimeoutError, aiohttp.ClientError, OSError) as e:
            msg = f'Failed to load style {path}: {e!r}'
            raise NetworkError(msg) from e
        finally:
            if self._session is None:
                await session.close()
