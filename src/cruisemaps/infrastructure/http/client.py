from __future__ import annotations

import asyncio
import json as jsonlib
import logging
import ssl
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import aiohttp
import certifi

from cruisemaps.shared.constants import (
    HTTP_BACKOFF_BASE_MS,
    HTTP_FORBIDDEN,
    HTTP_TOO_MANY_REQUESTS,
    HTTP_UNAUTHORIZED,
)
from cruisemaps.shared.errors import AuthenticationError, NetworkError, RateLimitError

if TYPE_CHECKING:
    from cruisemaps.services.config_store import ConfigurationStore

logger = logging.getLogger(__name__)


def make_http_session() -> aiohttp.ClientSession:
    # SSL-контекст с сертификатами из certifi
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)
    return aiohttp.ClientSession(connector=connector)


def backoff_delay_s(attempt: int) -> float:
    """Delay before the retry that follows attempt `attempt` (0-based)."""
    return (2**attempt) * HTTP_BACKOFF_BASE_MS / 1000


@dataclass
class HttpResponse:
    """Fully read HTTP response, detached from the aiohttp connection."""

    status: int
    reason: str
    url: str
    body: bytes = b''
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self, encoding: str = 'utf-8') -> str:
        return self.body.decode(encoding)

    def json(self) -> Any:
        if not self.body.strip():
            return None
        return jsonlib.loads(self.body)


class NetworkClient:
    """
    HTTP client with retries, exponential backoff and typed failures.

    - 429 -> RateLimitError, raised immediately
    - 401/403 -> AuthenticationError, raised immediately
    - other non-2xx and transport errors -> NetworkError, retried
      up to max_retries attempts with 1s, 2s, 4s... between them
    - after the last attempt the last error is raised
    """

    def __init__(
        self,
        config: ConfigurationStore,
        *,
        session: aiohttp.ClientSession | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._sleep = sleep

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = make_http_session()
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _build_headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        # Заголовки вызывающего кода перекрывают все значения по умолчанию,
        # включая Authorization
        return {
            'Authorization': f'Bearer {self._config.get_cruisemaps_key()}',
            'Content-Type': 'application/json',
            **(headers or {}),
        }

    async def fetch_with_retry(
        self,
        url: str,
        *,
        method: str = 'GET',
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> HttpResponse:
        policy = self._config.get_network_config()
        req_headers = self._build_headers(headers)
        timeout = aiohttp.ClientTimeout(total=policy.timeout_ms / 1000)

        last_exc: NetworkError = NetworkError('Unknown network error')
        for attempt in range(policy.max_retries):
            try:
                return await self._attempt(
                    method,
                    url,
                    headers=req_headers,
                    params=params,
                    json=json,
                    timeout=timeout,
                )
            except (RateLimitError, AuthenticationError):
                raise
            except NetworkError as e:
                last_exc = e

            if attempt < policy.max_retries - 1:
                delay = backoff_delay_s(attempt)
                logger.warning(
                    'Request %s %s failed (attempt %s/%s): %s; retry in %.1fs',
                    method,
                    url,
                    attempt + 1,
                    policy.max_retries,
                    last_exc,
                    delay,
                )
                await self._sleep(delay)

        logger.error(
            'Request %s %s failed after %s attempts: %s',
            method,
            url,
            policy.max_retries,
            last_exc,
        )
        raise last_exc

    async def _attempt(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: Mapping[str, Any] | None,
        json: Any,
        timeout: aiohttp.ClientTimeout,
    ) -> HttpResponse:
        session = self._get_session()
        try:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=timeout,
            ) as resp:
                sc = resp.status
                if sc == HTTP_TOO_MANY_REQUESTS:
                    raise RateLimitError
                if sc in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
                    raise AuthenticationError(status=sc)
                if not 200 <= sc < 300:
                    msg = f'HTTP {sc}: {resp.reason}'
                    raise NetworkError(msg, sc)
                body = await resp.read()
                return HttpResponse(
                    status=sc,
                    reason=resp.reason or '',
                    url=str(resp.url),
                    body=body,
                    headers=dict(resp.headers),
                )
        except asyncio.CancelledError:
            # не маскировать отмену задач
            raise
        except (TimeoutError, asyncio.TimeoutError, aiohttp.ClientError, OSError) as e:
            msg = f'Request to {url} failed: {e!r}'
            raise NetworkError(msg) from e
