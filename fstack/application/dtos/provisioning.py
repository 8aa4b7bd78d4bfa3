"""DTOs for collection provisioning (results, progress events, options)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import SecretStr

from fstack.domain.enums import ProgressKind


@dataclass(frozen=True)
class AdminCredentials:
    """Admin identity used to authenticate a provisioning run."""

    email: str
    password: SecretStr

    @classmethod
    def from_plain(cls, email: str, password: str) -> AdminCredentials:
        return cls(email=email, password=SecretStr(password))


@dataclass(frozen=True)
class ProvisionError:
    """One failure recorded during a run.

    ``collection`` is the schema name, or a sentinel (``_admin``,
    ``_system``, ``_settings``) for failures not tied to a collection.
    """

    collection: str
    error: str


@dataclass(frozen=True)
class ProvisionResult:
    """Outcome of one provisioning run. success is True iff errors is empty."""

    success: bool
    created: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    errors: tuple[ProvisionError, ...] = ()
    message: str = ""


@dataclass(frozen=True)
class ProgressEvent:
    """Human-readable progress line tagged with its kind."""

    kind: ProgressKind
    text: str


ProgressSink = Callable[[ProgressEvent], None]


@dataclass(frozen=True)
class GoogleAuthSettings:
    """Google OAuth2 provider credentials for the users collection."""

    client_id: str
    client_secret: SecretStr


@dataclass(frozen=True)
class ProvisionSettings:
    """Optional server settings applied before collections are provisioned.

    When google_auth is set it is applied to the users collection and
    ``extra`` is ignored; otherwise a non-empty ``extra`` is sent to the
    global settings endpoint.
    """

    google_auth: GoogleAuthSettings | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.google_auth is None and not self.extra


@dataclass(frozen=True)
class ProvisionOptions:
    """Per-run options for CollectionProvisioner.reconcile."""

    update_existing: bool = False
    settings: ProvisionSettings | None = None
    on_progress: ProgressSink | None = None


@dataclass(frozen=True)
class HealthStatus:
    """Result of the server health probe."""

    healthy: bool
    message: str


@dataclass(frozen=True)
class CredentialCheck:
    """Result of validating admin credentials without provisioning."""

    valid: bool
    message: str
