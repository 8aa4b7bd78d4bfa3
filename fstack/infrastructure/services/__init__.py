"""Provisioning and pre-flight services backed by the PocketBase client."""

from fstack.infrastructure.services.collection_provisioning_service import (
    CollectionProvisioner,
    get_provision_summary,
    provision_collections,
)
from fstack.infrastructure.services.health_service import (
    check_health,
    probe_health,
    validate_admin_credentials,
)

__all__ = [
    "CollectionProvisioner",
    "check_health",
    "get_provision_summary",
    "probe_health",
    "provision_collections",
    "validate_admin_credentials",
]
