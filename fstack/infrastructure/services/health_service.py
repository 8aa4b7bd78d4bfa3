"""Pre-flight checks: server health and admin credential validity.

Neither function raises; failures are reported in the returned value.
"""

from __future__ import annotations

import logging

from fstack.application.dtos.provisioning import CredentialCheck, HealthStatus
from fstack.application.interfaces.services import ICollectionAdminClient
from fstack.domain.exceptions import FStackException
from fstack.infrastructure.pocketbase.client import create_pocketbase_client

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    if isinstance(exc, FStackException):
        return exc.message
    return str(exc) or exc.__class__.__name__


async def check_health(client: ICollectionAdminClient) -> HealthStatus:
    """Probe the server's health endpoint (no auth)."""
    try:
        health = await client.health_check()
        message = health.get("message") or "API is healthy."
    except Exception as exc:
        logger.info("Health check failed: %s", _describe(exc))
        return HealthStatus(healthy=False, message=_describe(exc))
    return HealthStatus(healthy=True, message=message)


async def probe_health(server_url: str, *, timeout: float | None = None) -> HealthStatus:
    """Probe the server at server_url with a short-lived client."""
    try:
        async with create_pocketbase_client(server_url, timeout=timeout) as client:
            return await check_health(client)
    except Exception as exc:
        return HealthStatus(healthy=False, message=_describe(exc))


async def validate_admin_credentials(
    server_url: str, email: str, password: str, *, timeout: float | None = None
) -> CredentialCheck:
    """Check admin credentials by authenticating and discarding the session."""
    try:
        async with create_pocketbase_client(server_url, timeout=timeout) as client:
            session = await client.authenticate(email, password)
            session.clear()
    except Exception as exc:
        return CredentialCheck(valid=False, message=_describe(exc))
    return CredentialCheck(valid=True, message="Credentials valid")
