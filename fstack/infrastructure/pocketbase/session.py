"""Admin session: the auth token for one provisioning run."""

from __future__ import annotations

from typing import Any


class AdminSession:
    """Holds the admin token returned by auth-with-password.

    Owned by exactly one provisioning run; the run calls clear() before it
    returns so the token is not reused.
    """

    def __init__(self, token: str, admin: dict[str, Any] | None = None) -> None:
        self._token: str | None = token
        self.admin = admin or {}

    @property
    def is_valid(self) -> bool:
        return bool(self._token)

    @property
    def token(self) -> str:
        if not self._token:
            raise RuntimeError("Admin session has been cleared")
        return self._token

    def clear(self) -> None:
        self._token = None
        self.admin = {}

    def __repr__(self) -> str:
        state = "valid" if self.is_valid else "cleared"
        return f"AdminSession({state})"
