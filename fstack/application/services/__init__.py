"""Application services (pure; no I/O)."""

from fstack.application.services.payload_builder import (
    build_collection_payload,
    build_field_payload,
)

__all__ = ["build_collection_payload", "build_field_payload"]
