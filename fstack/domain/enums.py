"""Domain enumerations for collection provisioning.

Enums represent fixed sets of values understood by the PocketBase API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class CollectionType(_ValuesMixin, str, Enum):
    """Collection kind on the server."""

    BASE = "base"
    AUTH = "auth"
    VIEW = "view"


class ProgressKind(_ValuesMixin, str, Enum):
    """Kind of a progress notification emitted during provisioning."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"
    INFO = "info"
