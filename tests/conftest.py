"""Pytest configuration and fixtures for fstack.

FakePocketBase is an in-memory stand-in for the collection admin API
(ICollectionAdminClient); it keeps collections by name so consecutive
provisioning runs see each other's writes.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from fstack.application.dtos.provisioning import AdminCredentials
from fstack.core.config import get_settings
from fstack.infrastructure.pocketbase import AdminSession, PocketBaseResponseError

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"

_ENV_VARS = (
    "PB_URL",
    "PB_ADMIN_EMAIL",
    "PB_ADMIN_PASS",
    "PB_UPDATE_EXISTING",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "HTTP_TIMEOUT_SECONDS",
    "DEBUG",
)


def _require(session: AdminSession) -> None:
    assert session.is_valid, "admin session used after clear()"


class FakePocketBase:
    """In-memory collection store with per-operation failure switches."""

    def __init__(self, existing: tuple[str, ...] = ()) -> None:
        self.collections: dict[str, dict[str, Any]] = {}
        for name in existing:
            self._store(name, {"name": name, "type": "base", "fields": []})
        self.calls: list[tuple[str, Any]] = []
        self.sessions: list[AdminSession] = []
        self.fail_list = False
        self.fail_create: set[str] = set()
        self.fail_update: set[str] = set()
        self.fail_settings = False
        self.oauth2: dict[str, Any] | None = None
        self.settings: dict[str, Any] | None = None

    def _store(self, name: str, payload: dict[str, Any]) -> dict[str, Any]:
        record = {**payload, "id": f"pbc_{len(self.collections) + 1}"}
        self.collections[name] = record
        return record

    async def health_check(self) -> dict:
        return {"code": 200, "message": "API is healthy."}

    async def authenticate(self, email: str, password: str) -> AdminSession:
        self.calls.append(("authenticate", email))
        if email != ADMIN_EMAIL or password != ADMIN_PASSWORD:
            raise PocketBaseResponseError(400, "Failed to authenticate.")
        session = AdminSession(f"token-{len(self.sessions)}")
        self.sessions.append(session)
        return session

    async def list_collections(self, session: AdminSession) -> list[dict]:
        _require(session)
        self.calls.append(("list_collections", None))
        if self.fail_list:
            raise PocketBaseResponseError(403, "The authorized record is not allowed to perform this action.")
        return list(self.collections.values())

    async def get_collection(self, session: AdminSession, id_or_name: str) -> dict:
        _require(session)
        self.calls.append(("get_collection", id_or_name))
        if id_or_name not in self.collections:
            raise PocketBaseResponseError(404, "The requested resource wasn't found.")
        return self.collections[id_or_name]

    async def create_collection(self, session: AdminSession, payload: dict) -> dict:
        _require(session)
        self.calls.append(("create_collection", payload))
        if payload["name"] in self.fail_create:
            raise PocketBaseResponseError(400, "Failed to create record.")
        if payload["name"] in self.collections:
            raise PocketBaseResponseError(400, "Collection name must be unique.")
        return self._store(payload["name"], payload)

    async def update_collection(
        self, session: AdminSession, collection_id: str, payload: dict
    ) -> dict:
        _require(session)
        self.calls.append(("update_collection", (collection_id, payload)))
        if payload["name"] in self.fail_update:
            raise PocketBaseResponseError(400, "Failed to update record.")
        record = {**payload, "id": collection_id}
        self.collections[payload["name"]] = record
        return record

    async def update_settings(self, session: AdminSession, settings: dict) -> dict:
        _require(session)
        self.calls.append(("update_settings", settings))
        if self.fail_settings:
            raise PocketBaseResponseError(400, "An error occurred while submitting the form.")
        self.settings = settings
        return settings

    async def update_user_auth_settings(
        self, session: AdminSession, oauth2: dict
    ) -> dict:
        _require(session)
        self.calls.append(("update_user_auth_settings", oauth2))
        if self.fail_settings:
            raise PocketBaseResponseError(404, "The requested resource wasn't found.")
        self.oauth2 = oauth2
        return {"name": "users", "oauth2": oauth2}

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_pb() -> FakePocketBase:
    """Empty in-memory server."""
    return FakePocketBase()


@pytest.fixture
def make_pb() -> type[FakePocketBase]:
    """Factory for servers that already hold some collections: make_pb(("tweets",))."""
    return FakePocketBase


@pytest.fixture
def credentials() -> AdminCredentials:
    return AdminCredentials.from_plain(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def bad_credentials() -> AdminCredentials:
    return AdminCredentials.from_plain(ADMIN_EMAIL, "wrong-password")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Unset provisioning env vars, run from an empty dir (no .env), reset cached settings."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def route_http(monkeypatch: pytest.MonkeyPatch):
    """Send requests of every httpx.AsyncClient built afterwards to handler.

    Lets tests exercise the real client factory without a server:
    route_http(lambda request: httpx.Response(200, json={...})).
    """
    real_client = httpx.AsyncClient

    def install(handler) -> None:
        def build(**kwargs) -> httpx.AsyncClient:
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", build)

    return install
