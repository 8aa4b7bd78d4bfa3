"""Thin PocketBase REST API client for collection administration.

Covers the admin endpoints provisioning needs: health, admin auth,
collection list/get/create/update and settings. All HTTP calls use
httpx.AsyncClient. Non-2xx responses raise PocketBaseResponseError and
transport failures raise PocketBaseConnectionError.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from fstack.core.constants import COLLECTIONS_BATCH_SIZE, USERS_COLLECTION
from fstack.domain.exceptions import FStackException
from fstack.infrastructure.pocketbase.session import AdminSession

logger = logging.getLogger(__name__)

_ADMIN_AUTH_PATH = "/api/admins/auth-with-password"
# PocketBase >= 0.23 replaced admins with the _superusers auth collection.
_SUPERUSER_AUTH_PATH = "/api/collections/_superusers/auth-with-password"


class PocketBaseClientError(FStackException):
    """Base error for PocketBase API calls."""


class PocketBaseConnectionError(PocketBaseClientError):
    """Raised when the server cannot be reached (connect, timeout, protocol)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "POCKETBASE_CONNECTION_ERROR")


class PocketBaseResponseError(PocketBaseClientError):
    """Raised for non-2xx responses; carries status and the error body data."""

    def __init__(
        self, status: int, message: str, data: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            "POCKETBASE_RESPONSE_ERROR",
            {"status": status, "data": data or {}},
        )
        self.status = status
        self.data = data or {}

    @classmethod
    def from_response(cls, resp: httpx.Response) -> PocketBaseResponseError:
        """Build from a PocketBase error body ``{code, message, data}``."""
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or resp.reason_phrase or "Request failed"
        return cls(resp.status_code, message, body.get("data"))


def _describe(exc: httpx.HTTPError) -> str:
    text = str(exc)
    return text if text else exc.__class__.__name__


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    token: str | None = None,
    params: dict[str, Any] | None = None,
) -> dict:
    """Perform async HTTP request to the PocketBase REST API."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = token
    try:
        if method == "GET":
            resp = await client.get(url, headers=headers, params=params)
        elif method == "PATCH":
            resp = await client.patch(url, headers=headers, json=body)
        elif method == "POST":
            resp = await client.post(url, headers=headers, json=body)
        else:
            raise ValueError(f"Unsupported method: {method!r}")
    except httpx.HTTPError as exc:
        raise PocketBaseConnectionError(_describe(exc)) from exc
    if not resp.is_success:
        raise PocketBaseResponseError.from_response(resp)
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class PocketBaseRESTClient:
    """Lightweight PocketBase admin client over the REST API.

    Holds no auth state: every authenticated call takes the AdminSession
    returned by authenticate().
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> PocketBaseRESTClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def health_check(self) -> dict:
        """GET /api/health (no auth). Returns ``{code, message, data}``."""
        return await _request_async(self._http, self._url("/api/health"))

    async def authenticate(self, email: str, password: str) -> AdminSession:
        """Authenticate as admin and return a new session.

        Tries the admins endpoint first and falls back to the _superusers
        collection when the server does not have it (404).
        """
        body = {"identity": email, "password": password}
        try:
            out = await _request_async(
                self._http, self._url(_ADMIN_AUTH_PATH), method="POST", body=body
            )
        except PocketBaseResponseError as exc:
            if exc.status != 404:
                raise
            logger.debug("Admins endpoint not found; using _superusers auth")
            out = await _request_async(
                self._http, self._url(_SUPERUSER_AUTH_PATH), method="POST", body=body
            )
        token = out.get("token")
        if not token:
            raise PocketBaseResponseError(200, "Auth response did not include a token")
        return AdminSession(token, out.get("admin") or out.get("record"))

    async def list_collections(
        self, session: AdminSession, *, batch: int = COLLECTIONS_BATCH_SIZE
    ) -> list[dict]:
        """Return every collection, reading pages until a short page.

        A page is short relative to the perPage the server reports, which
        may be lower than the requested batch when the server caps it.
        """
        items: list[dict] = []
        page = 1
        while True:
            out = await _request_async(
                self._http,
                self._url("/api/collections"),
                token=session.token,
                params={"page": page, "perPage": batch, "skipTotal": 1},
            )
            page_items = out.get("items") or []
            items.extend(page_items)
            per_page = out.get("perPage") or batch
            if not page_items or len(page_items) < per_page:
                return items
            page += 1

    async def get_collection(self, session: AdminSession, id_or_name: str) -> dict:
        url = self._url(f"/api/collections/{quote(id_or_name, safe='')}")
        return await _request_async(self._http, url, token=session.token)

    async def create_collection(
        self, session: AdminSession, payload: dict[str, Any]
    ) -> dict:
        return await _request_async(
            self._http,
            self._url("/api/collections"),
            method="POST",
            body=payload,
            token=session.token,
        )

    async def update_collection(
        self, session: AdminSession, collection_id: str, payload: dict[str, Any]
    ) -> dict:
        url = self._url(f"/api/collections/{quote(collection_id, safe='')}")
        return await _request_async(
            self._http, url, method="PATCH", body=payload, token=session.token
        )

    async def update_settings(
        self, session: AdminSession, settings: dict[str, Any]
    ) -> dict:
        """PATCH /api/settings with a partial settings body."""
        return await _request_async(
            self._http,
            self._url("/api/settings"),
            method="PATCH",
            body=settings,
            token=session.token,
        )

    async def update_user_auth_settings(
        self, session: AdminSession, oauth2: dict[str, Any]
    ) -> dict:
        """Set the OAuth2 config of the built-in users auth collection."""
        users = await self.get_collection(session, USERS_COLLECTION)
        return await self.update_collection(session, users["id"], {"oauth2": oauth2})
