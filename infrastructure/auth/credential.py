# ============================================================================
# STORAGE CREDENTIAL RESOLUTION
# ============================================================================
# STATUS: Infrastructure - Canonical credential provider
# PURPOSE: Map a storage connection's auth mode onto an Azure credential
# DEPENDENCIES: azure.identity, azure.core.credentials
# ============================================================================
"""
Storage credential resolution.

Each named storage connection declares an auth mode; this module turns it
into the credential object BlobServiceClient expects. The DefaultAzureCredential
chain is shared process-wide because building it queries several sources.

Credential acquisition is lazy in azure-identity: failures to obtain a token
surface as ClientAuthenticationError on the first storage call, not here.
"""

import threading
from typing import Optional, Union

from azure.core.credentials import AzureNamedKeyCredential, TokenCredential
from azure.identity import (
    ClientSecretCredential,
    DefaultAzureCredential,
    ManagedIdentityCredential,
)

from config.storage_config import StorageConnectionConfig
from core.models.enums import AuthMode

StorageCredential = Union[TokenCredential, AzureNamedKeyCredential]

_credential = None
_credential_lock = threading.Lock()


def get_azure_credential() -> DefaultAzureCredential:
    """Get cached DefaultAzureCredential singleton (built once across threads)."""
    global _credential
    if _credential is None:
        with _credential_lock:
            if _credential is None:
                _credential = DefaultAzureCredential()
    return _credential


def build_storage_credential(config: StorageConnectionConfig) -> Optional[StorageCredential]:
    """
    Build the credential for a storage connection.

    Args:
        config: Resolved storage connection settings

    Returns:
        Credential for BlobServiceClient, or None for connection_string mode
        (the connection string carries its own credential)
    """
    mode = config.auth_mode

    if mode == AuthMode.CONNECTION_STRING:
        return None

    if mode == AuthMode.ACCOUNT_KEY:
        return AzureNamedKeyCredential(config.account_name, config.account_key)

    if mode == AuthMode.CLIENT_SECRET:
        return ClientSecretCredential(
            tenant_id=config.tenant_id,
            client_id=config.client_id,
            client_secret=config.client_secret
        )

    if mode == AuthMode.MANAGED_IDENTITY:
        # User-assigned identity when a client ID is given, system-assigned otherwise
        if config.client_id:
            return ManagedIdentityCredential(client_id=config.client_id)
        return ManagedIdentityCredential()

    return get_azure_credential()


__all__ = ["get_azure_credential", "build_storage_credential", "StorageCredential"]
