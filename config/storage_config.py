# ============================================================================
# CLAUDE CONTEXT - STORAGE CONFIGURATION
# ============================================================================
# STATUS: Configuration - Named storage connections
# PURPOSE: Resolve a logical connection name into storage account settings
# EXPORTS: StorageConnectionConfig, storage_env_prefix
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: StorageConnectionConfig
# DEPENDENCIES: pydantic, os, re, typing
# SOURCE: Environment variables (STORAGE_CONNECTION_<NAME>_*)
# SCOPE: Storage-specific configuration
# VALIDATION: Pydantic v2 validation + per-auth-mode required fields
# PATTERNS: Value objects, factory classmethod
# ENTRY_POINTS: from config import StorageConnectionConfig
# ============================================================================

"""
Azure Storage Configuration - Named Connections

A storage connection is addressed by a logical name (e.g. "default",
"archive"). Its settings live in environment variables sharing the prefix
STORAGE_CONNECTION_<NAME>_ where <NAME> is the connection name upper-cased
with every non-alphanumeric character replaced by "_":

    STORAGE_CONNECTION_DEFAULT_AUTH_MODE=managed_identity
    STORAGE_CONNECTION_DEFAULT_ACCOUNT_NAME=mystorageaccount

Auth modes and the fields they require:
    connection_string: CONNECTION_STRING
    account_key:       ACCOUNT_NAME, ACCOUNT_KEY
    client_secret:     ACCOUNT_NAME, TENANT_ID, CLIENT_ID, CLIENT_SECRET
    managed_identity:  ACCOUNT_NAME (CLIENT_ID optional, user-assigned identity)
    default:           ACCOUNT_NAME (DefaultAzureCredential chain)

When AUTH_MODE is omitted it is inferred from the fields that are set.
"""

import os
import re
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.models.enums import AuthMode
from exceptions import InvalidConfigurationError
from .defaults import StorageDefaults


_NON_ALNUM = re.compile(r"[^A-Z0-9]")

# Fields required by each auth mode (beyond the mode itself)
_REQUIRED_FIELDS: Dict[AuthMode, List[str]] = {
    AuthMode.CONNECTION_STRING: ["connection_string"],
    AuthMode.ACCOUNT_KEY: ["account_name", "account_key"],
    AuthMode.CLIENT_SECRET: ["account_name", "tenant_id", "client_id", "client_secret"],
    AuthMode.MANAGED_IDENTITY: ["account_name"],
    AuthMode.DEFAULT: ["account_name"],
}

_SENSITIVE_FIELDS = ("connection_string", "account_key", "client_secret")


def storage_env_prefix(connection_name: str) -> str:
    """
    Environment variable prefix for a named connection.

    Example:
        storage_env_prefix("archive-eu") → "STORAGE_CONNECTION_ARCHIVE_EU_"
    """
    return f"{StorageDefaults.ENV_PREFIX}{_NON_ALNUM.sub('_', connection_name.upper())}_"


class StorageConnectionConfig(BaseModel):
    """
    Settings for one named Azure Storage connection.

    Build with from_environment(name); constructing directly is for tests
    and callers that already hold resolved settings.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    name: str = Field(..., description="Logical connection name")
    auth_mode: AuthMode = Field(..., description="How the client authenticates")

    connection_string: Optional[str] = Field(default=None, description="Full Azure Storage connection string")
    account_name: Optional[str] = Field(default=None, description="Storage account name")
    account_key: Optional[str] = Field(default=None, description="Storage account shared key")
    client_id: Optional[str] = Field(default=None, description="Service principal / user-assigned identity client ID")
    tenant_id: Optional[str] = Field(default=None, description="Entra ID tenant ID")
    client_secret: Optional[str] = Field(default=None, description="Service principal secret")

    endpoint_suffix: str = Field(
        default=StorageDefaults.ENDPOINT_SUFFIX,
        description="Storage DNS suffix (core.windows.net for Azure Public)"
    )
    protocol: str = Field(default=StorageDefaults.PROTOCOL, description="http or https")

    @property
    def account_url(self) -> Optional[str]:
        """Blob service endpoint, or None when only a connection string is configured."""
        if not self.account_name:
            return None
        return f"{self.protocol}://{self.account_name}.blob.{self.endpoint_suffix}"

    def missing_fields(self) -> List[str]:
        """Fields the auth mode requires that are not set."""
        return [field for field in _REQUIRED_FIELDS[self.auth_mode] if not getattr(self, field)]

    @staticmethod
    def _infer_auth_mode(values: Dict[str, Optional[str]]) -> AuthMode:
        if values.get("connection_string"):
            return AuthMode.CONNECTION_STRING
        if values.get("account_key"):
            return AuthMode.ACCOUNT_KEY
        if values.get("client_secret"):
            return AuthMode.CLIENT_SECRET
        return AuthMode.DEFAULT

    @classmethod
    def from_environment(cls, connection_name: str) -> 'StorageConnectionConfig':
        """
        Load a named connection from STORAGE_CONNECTION_<NAME>_* variables.

        Args:
            connection_name: Logical connection name

        Returns:
            Validated StorageConnectionConfig

        Raises:
            InvalidConfigurationError: No variables for the name, unknown
                auth mode, or a field required by the auth mode is missing
        """
        if not connection_name or not connection_name.strip():
            raise InvalidConfigurationError("Storage connection name cannot be empty")

        prefix = storage_env_prefix(connection_name)

        def _env(field: str) -> Optional[str]:
            value = os.environ.get(f"{prefix}{field}")
            if value is None:
                return None
            value = value.strip()
            return value or None

        values = {
            "connection_string": _env("CONNECTION_STRING"),
            "account_name": _env("ACCOUNT_NAME"),
            "account_key": _env("ACCOUNT_KEY"),
            "client_id": _env("CLIENT_ID"),
            "tenant_id": _env("TENANT_ID"),
            "client_secret": _env("CLIENT_SECRET"),
        }
        raw_mode = _env("AUTH_MODE")

        if raw_mode is None and not any(values.values()):
            raise InvalidConfigurationError(
                f"No configuration found for storage connection '{connection_name}' "
                f"(expected {prefix}* environment variables)"
            )

        if raw_mode is None:
            auth_mode = cls._infer_auth_mode(values)
        else:
            try:
                auth_mode = AuthMode(raw_mode.lower())
            except ValueError:
                raise InvalidConfigurationError(
                    f"Unsupported auth mode '{raw_mode}' for storage connection "
                    f"'{connection_name}'. Valid options: "
                    f"{', '.join(mode.value for mode in AuthMode)}"
                )

        try:
            config = cls(
                name=connection_name,
                auth_mode=auth_mode,
                endpoint_suffix=_env("ENDPOINT_SUFFIX") or StorageDefaults.ENDPOINT_SUFFIX,
                protocol=(_env("PROTOCOL") or StorageDefaults.PROTOCOL).lower(),
                **values
            )
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Invalid configuration for storage connection '{connection_name}': {e}"
            ) from e

        missing = config.missing_fields()
        if missing:
            raise InvalidConfigurationError(
                f"Storage connection '{connection_name}' uses auth mode "
                f"'{auth_mode.value}' but is missing: "
                f"{', '.join(prefix + field.upper() for field in missing)}"
            )

        return config

    def debug_dict(self) -> dict:
        """Return debug-friendly configuration with secrets masked."""
        result = {
            "name": self.name,
            "auth_mode": self.auth_mode.value,
            "account_name": self.account_name,
            "account_url": self.account_url,
            "client_id": self.client_id,
            "tenant_id": self.tenant_id,
            "endpoint_suffix": self.endpoint_suffix,
            "protocol": self.protocol,
        }
        for field in _SENSITIVE_FIELDS:
            result[field] = "***MASKED***" if getattr(self, field) else None
        return result
