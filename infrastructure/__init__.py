"""
Infrastructure Package - Lazy Loading Implementation.

Provides the connection registry and the Azure Storage connection handle
with lazy loading, so importing the package does not read environment
variables or construct Azure SDK clients.

The Azure Functions host imports function_app.py before the worker's
environment and managed identity are guaranteed to be ready. Nothing here
touches configuration until a connection is first requested.

Exports:
    ConnectionRegistry, ConnectionHandle, BlobServiceClientProvider
    get_connection_registry, reset_connection_registry
    AzureStorageConnection
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .connections import ConnectionRegistry as _ConnectionRegistry
    from .connections import ConnectionHandle as _ConnectionHandle
    from .connections import BlobServiceClientProvider as _BlobServiceClientProvider
    from .blob import AzureStorageConnection as _AzureStorageConnection


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name in ("ConnectionRegistry", "ConnectionHandle", "BlobServiceClientProvider",
                "get_connection_registry", "reset_connection_registry"):
        from . import connections
        return getattr(connections, name)

    elif name == "AzureStorageConnection":
        from .blob import AzureStorageConnection
        return AzureStorageConnection

    raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = [
    "ConnectionRegistry",
    "ConnectionHandle",
    "BlobServiceClientProvider",
    "get_connection_registry",
    "reset_connection_registry",
    "AzureStorageConnection",
]
