# ============================================================================
# CLAUDE CONTEXT - AZURE STORAGE CONNECTION
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage connection handle
# PURPOSE: Build an authenticated BlobServiceClient for a named connection
# EXPORTS: AzureStorageConnection, create_storage_connection, register_storage_connector
# INTERFACES: ConnectionHandle, BlobServiceClientProvider
# DEPENDENCIES: azure-storage-blob, azure-identity, config
# SOURCE: STORAGE_CONNECTION_<NAME>_* environment variables
# PATTERNS: Factory, capability interface
# ENTRY_POINTS: get_connection_registry().get_connection("azure_storage", name)
# ============================================================================

"""
Azure Storage Connection Handle

One AzureStorageConnection wraps one BlobServiceClient. The registry owns it
and reuses it across invocations, so the client's HTTP pipeline (and the
azure-core retry policy inside it) is shared by every operation that names
the same connection.

Client construction by auth mode:
    connection_string -> BlobServiceClient.from_connection_string(...)
    everything else   -> BlobServiceClient(account_url, credential=...)

Usage:
    from infrastructure.connections import get_connection_registry, BlobServiceClientProvider

    handle = get_connection_registry().get_connection("azure_storage", "default")
    client = handle.get_capability(BlobServiceClientProvider).get_blob_service_client()
"""

from typing import Any, Optional

from azure.storage.blob import BlobServiceClient

from config import get_config
from config.storage_config import StorageConnectionConfig
from constants import Connector
from core.models.enums import AuthMode
from util_logger import LoggerFactory, ComponentType

from .auth.credential import build_storage_credential
from .connections import BlobServiceClientProvider, ConnectionHandle, ConnectionRegistry

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "AzureStorageConnection")


class AzureStorageConnection(ConnectionHandle, BlobServiceClientProvider):
    """
    Pooled Azure Storage connection exposing the BlobServiceClientProvider capability.
    """

    def __init__(self, config: StorageConnectionConfig, blob_service: BlobServiceClient,
                 credential: Optional[Any] = None):
        self._config = config
        self._blob_service = blob_service
        self._credential = credential

    @classmethod
    def from_config(cls, config: StorageConnectionConfig) -> 'AzureStorageConnection':
        """
        Build the client for a resolved connection config.

        Raises:
            ValueError: Malformed connection string or account URL
        """
        if config.auth_mode == AuthMode.CONNECTION_STRING:
            logger.info(f"Initializing storage connection '{config.name}' with connection string")
            blob_service = BlobServiceClient.from_connection_string(config.connection_string)
            return cls(config, blob_service)

        credential = build_storage_credential(config)
        logger.info(
            f"Initializing storage connection '{config.name}' for account "
            f"{config.account_name} ({config.auth_mode.value})"
        )
        blob_service = BlobServiceClient(account_url=config.account_url, credential=credential)
        return cls(config, blob_service, credential)

    @property
    def connection_name(self) -> str:
        return self._config.name

    @property
    def config(self) -> StorageConnectionConfig:
        return self._config

    def get_blob_service_client(self) -> BlobServiceClient:
        return self._blob_service

    def close(self) -> None:
        self._blob_service.close()
        # The shared DefaultAzureCredential is not ours to close
        if self._config.auth_mode not in (AuthMode.DEFAULT, AuthMode.CONNECTION_STRING):
            close = getattr(self._credential, "close", None)
            if callable(close):
                close()


def create_storage_connection(connection_name: str) -> AzureStorageConnection:
    """
    Connection factory registered under the Azure Storage connector name.

    Raises:
        InvalidConfigurationError: Connection not configured or incomplete
        ValueError: Malformed connection string
    """
    config = get_config().storage_connection(connection_name)
    return AzureStorageConnection.from_config(config)


def register_storage_connector(registry: ConnectionRegistry) -> None:
    registry.register_factory(Connector.NAME, create_storage_connection)
