"""Core constants: sentinel identifiers and shared literal values.

Sentinels tag systemic failures in ProvisionResult.errors. They start with
an underscore so they can never collide with a registry collection name.
"""

# Sentinel collection identifiers for non per-item failures
SENTINEL_ADMIN = "_admin"
SENTINEL_SYSTEM = "_system"
SENTINEL_SETTINGS = "_settings"

# Built-in auth collection that carries OAuth2 provider configuration
USERS_COLLECTION = "users"

DEFAULT_PB_URL = "http://127.0.0.1:8090"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

# Access rule expressions
RULE_PUBLIC = ""
RULE_AUTHENTICATED = '@request.auth.id != ""'

# Field defaults
DEFAULT_MAX_SELECT = 1
DEFAULT_FILE_MAX_SIZE = 5 * 1024 * 1024  # 5MB

# Page size used when reading the full collection list
COLLECTIONS_BATCH_SIZE = 500
