"""Domain exceptions for FStack provisioning.

AuthError and RemoteFetchError end a provisioning run; the per-item and
settings errors are captured into ProvisionResult.errors by the
provisioner and never escape it. The setup script and embedding callers
only need ProvisionResult; the types exist so logs and tests can tell
failure modes apart.
"""

from typing import Any


class FStackException(Exception):
    """Base exception for all FStack errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. collection name, status).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class SchemaDefinitionError(FStackException):
    """Raised when a collection or field definition is invalid."""

    def __init__(self, message: str, collection: str | None = None) -> None:
        details = {"collection": collection} if collection else {}
        super().__init__(message, "SCHEMA_DEFINITION_ERROR", details)


class AuthError(FStackException):
    """Raised when the server rejects the admin credentials. Fatal to a run."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class RemoteFetchError(FStackException):
    """Raised when listing existing collections fails. Fatal to a run."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "REMOTE_FETCH_ERROR")


class SettingsUpdateError(FStackException):
    """Raised when the optional settings update fails. Recorded, not fatal."""

    def __init__(self, message: str, target: str) -> None:
        super().__init__(message, "SETTINGS_UPDATE_ERROR", {"target": target})


class ItemCreateError(FStackException):
    """Raised when creating a single collection fails."""

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(message, "ITEM_CREATE_ERROR", {"collection": collection})
        self.collection = collection


class ItemUpdateError(FStackException):
    """Raised when updating a single existing collection fails."""

    def __init__(self, collection: str, message: str) -> None:
        super().__init__(message, "ITEM_UPDATE_ERROR", {"collection": collection})
        self.collection = collection
