"""Service interfaces (ports) for the application layer.

Protocols define the contract provisioning needs from the remote
collection store; PocketBaseRESTClient implements it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from fstack.infrastructure.pocketbase.session import AdminSession


class ICollectionAdminClient(Protocol):
    """Protocol for the admin API of the remote collection store."""

    async def health_check(self) -> dict:
        """Unauthenticated liveness check; returns ``{code, message}``."""

    async def authenticate(self, email: str, password: str) -> AdminSession:
        """Return a new admin session; raise on rejected credentials."""

    async def list_collections(self, session: AdminSession) -> list[dict]:
        """Return every collection record (``{id, name, ...}``), unpaginated."""

    async def get_collection(self, session: AdminSession, id_or_name: str) -> dict:
        """Return one collection record by id or name."""

    async def create_collection(
        self, session: AdminSession, payload: dict[str, Any]
    ) -> dict:
        """Create a collection from a wire payload."""

    async def update_collection(
        self, session: AdminSession, collection_id: str, payload: dict[str, Any]
    ) -> dict:
        """Replace a collection definition by id."""

    async def update_settings(
        self, session: AdminSession, settings: dict[str, Any]
    ) -> dict:
        """Patch global server settings."""

    async def update_user_auth_settings(
        self, session: AdminSession, oauth2: dict[str, Any]
    ) -> dict:
        """Set OAuth2 provider config on the built-in users collection."""
