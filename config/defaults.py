"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - AppDefaults: Application-wide settings
    - StorageDefaults: Named storage connection settings

No tenant-specific value has a default: a named storage connection with no
STORAGE_CONNECTION_<NAME>_* variables is a configuration error, not a
fallback to some placeholder account.

Usage:
    from config.defaults import AppDefaults, StorageDefaults

    # In Pydantic Field definitions:
    environment: str = Field(default=AppDefaults.ENVIRONMENT, ...)
"""


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Core application settings."""

    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Storage connection defaults.

    ENV_PREFIX + <NAME> + "_" + <FIELD> forms each connection variable,
    e.g. STORAGE_CONNECTION_DEFAULT_ACCOUNT_NAME.
    """

    # Override: DEFAULT_STORAGE_CONNECTION
    DEFAULT_CONNECTION_NAME = "default"

    ENV_PREFIX = "STORAGE_CONNECTION_"

    # Azure Public cloud; override per connection for sovereign clouds
    ENDPOINT_SUFFIX = "core.windows.net"
    PROTOCOL = "https"
