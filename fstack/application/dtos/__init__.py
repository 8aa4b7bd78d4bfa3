"""Application DTOs."""

from fstack.application.dtos.provisioning import (
    AdminCredentials,
    CredentialCheck,
    GoogleAuthSettings,
    HealthStatus,
    ProgressEvent,
    ProgressSink,
    ProvisionError,
    ProvisionOptions,
    ProvisionResult,
    ProvisionSettings,
)

__all__ = [
    "AdminCredentials",
    "CredentialCheck",
    "GoogleAuthSettings",
    "HealthStatus",
    "ProgressEvent",
    "ProgressSink",
    "ProvisionError",
    "ProvisionOptions",
    "ProvisionResult",
    "ProvisionSettings",
]
