"""Application interfaces (ports)."""

from fstack.application.interfaces.services import ICollectionAdminClient

__all__ = ["ICollectionAdminClient"]
