"""HTTP client infrastructure."""
from cruisemaps.infrastructure.http.client import (
    HttpResponse,
    NetworkClient,
    backoff_delay_s,
    make_http_session,
)

__all__ = [
    'HttpResponse',
    'NetworkClient',
    'backoff_delay_s',
    'make_http_session',
]
