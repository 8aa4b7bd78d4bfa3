"""PocketBase client construction from settings.

There is no process-wide client: each caller builds one, uses it, and
closes it (``async with create_pocketbase_client() as client: ...``).
"""

import logging

import httpx

from fstack.core.config import get_settings
from fstack.core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from fstack.infrastructure.pocketbase._rest_client import PocketBaseRESTClient

logger = logging.getLogger(__name__)


def create_pocketbase_client(
    base_url: str | None = None,
    *,
    timeout: float | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> PocketBaseRESTClient:
    """Return a REST client for base_url.

    Settings are only loaded when base_url is omitted. An explicit URL
    never depends on the environment.

    Args:
        base_url: Server URL; PB_URL from settings when omitted.
        timeout: Request timeout in seconds. Defaults to HTTP_TIMEOUT_SECONDS
            when base_url comes from settings, else to 30 seconds.
        http_client: Optional injected httpx client (not closed by aclose()).

    Returns:
        A new PocketBaseRESTClient.
    """
    if base_url is None:
        settings = get_settings()
        base_url = settings.pb_url
        if timeout is None:
            timeout = settings.http_timeout_seconds
    elif timeout is None:
        timeout = DEFAULT_HTTP_TIMEOUT_SECONDS
    logger.debug("Creating PocketBase client for %s", base_url)
    return PocketBaseRESTClient(base_url, timeout=timeout, http_client=http_client)
