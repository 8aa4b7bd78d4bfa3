"""PocketBase REST integration (collections admin API)."""

from fstack.infrastructure.pocketbase._rest_client import (
    PocketBaseClientError,
    PocketBaseConnectionError,
    PocketBaseResponseError,
    PocketBaseRESTClient,
)
from fstack.infrastructure.pocketbase.client import create_pocketbase_client
from fstack.infrastructure.pocketbase.session import AdminSession

__all__ = [
    "AdminSession",
    "PocketBaseClientError",
    "PocketBaseConnectionError",
    "PocketBaseRESTClient",
    "PocketBaseResponseError",
    "create_pocketbase_client",
]
