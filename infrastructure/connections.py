# ============================================================================
# CONNECTION REGISTRY
# ============================================================================
# STATUS: Infrastructure - Named, pooled connection handles
# PURPOSE: Hand out long-lived connection handles by (connector, name)
# EXPORTS: ConnectionHandle, BlobServiceClientProvider, ConnectionRegistry,
#          get_connection_registry, reset_connection_registry
# DEPENDENCIES: azure.storage.blob (type only), azure.core.exceptions
# ============================================================================
"""
Connection Registry.

Connections are addressed by a connector name (e.g. "azure_storage") and a
logical connection name (e.g. "default"). Each connector registers a factory;
the registry builds a handle the first time a name is requested and returns
the same handle afterwards. Callers borrow handles for the duration of one
operation and never close them; close_all() belongs to the process lifecycle
owner.

A handle exposes what it can do through typed capabilities rather than
through its concrete class:

    handle = registry.get_connection("azure_storage", "default")
    provider = handle.get_capability(BlobServiceClientProvider)
    if provider is None:
        ...  # not a blob storage connection

Thread Safety:
    The handle map is guarded by a lock; two threads asking for the same
    name get the same handle and the factory runs once. Factories run
    under a per-name build lock, so a slow build does not hold up lookups
    of connections that are already pooled.

Error Mapping:
    - Unknown connector, registry closed, unexpected factory failure -> ConnectError
    - Factory raises ValueError (e.g. malformed connection string)  -> InvalidConfigurationError
    - InvalidConfigurationError and Azure SDK errors propagate unchanged
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar, TYPE_CHECKING

from azure.core.exceptions import AzureError

from exceptions import ConnectError, ContractViolationError, InvalidConfigurationError
from util_logger import LoggerFactory, ComponentType

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "ConnectionRegistry")

T = TypeVar("T")

ConnectionFactory = Callable[[str], "ConnectionHandle"]


# ============================================================================
# HANDLE + CAPABILITY INTERFACES
# ============================================================================

class ConnectionHandle(ABC):
    """
    A pooled, long-lived connection owned by the registry.
    """

    @property
    @abstractmethod
    def connection_name(self) -> str:
        """Logical name this handle was built for."""

    def get_capability(self, capability: Type[T]) -> Optional[T]:
        """
        Return this handle viewed as the requested capability, or None.

        Args:
            capability: Capability interface (e.g. BlobServiceClientProvider)
        """
        if isinstance(self, capability):
            return self
        return None

    def close(self) -> None:
        """Release underlying resources. Called only by the registry."""


class BlobServiceClientProvider(ABC):
    """Capability: supplies an authenticated azure-storage-blob BlobServiceClient."""

    @abstractmethod
    def get_blob_service_client(self) -> "BlobServiceClient":
        pass


# ============================================================================
# REGISTRY
# ============================================================================

class ConnectionRegistry:
    """
    Thread-safe registry of connection factories and pooled handles.

    Example:
        registry = ConnectionRegistry()
        registry.register_factory("azure_storage", create_storage_connection)
        handle = registry.get_connection("azure_storage", "default")
    """

    def __init__(self):
        self._factories: Dict[str, ConnectionFactory] = {}
        self._handles: Dict[Tuple[str, str], ConnectionHandle] = {}
        self._build_locks: Dict[Tuple[str, str], threading.Lock] = {}
        self._lock = threading.Lock()
        self._closed = False

    def register_factory(self, connector_name: str, factory: ConnectionFactory) -> None:
        """
        Register (or replace) the handle factory for a connector.

        Args:
            connector_name: Connector namespace, e.g. "azure_storage"
            factory: Callable taking a connection name, returning a ConnectionHandle
        """
        with self._lock:
            self._factories[connector_name] = factory
        logger.debug(f"Registered connection factory for connector '{connector_name}'")

    def has_factory(self, connector_name: str) -> bool:
        with self._lock:
            return connector_name in self._factories

    def get_connection(self, connector_name: str, connection_name: str) -> ConnectionHandle:
        """
        Get the pooled handle for a named connection, building it on first use.

        Args:
            connector_name: Connector namespace
            connection_name: Logical connection name

        Returns:
            ConnectionHandle owned by the registry

        Raises:
            ConnectError: Registry closed, unknown connector, or factory failure
            InvalidConfigurationError: Connection configuration unusable
            azure.core.exceptions.AzureError: Raised by the SDK while building the client
        """
        key = (connector_name, connection_name)

        with self._lock:
            self._check_open()
            handle = self._handles.get(key)
            if handle is not None:
                return handle

            factory = self._factories.get(connector_name)
            if factory is None:
                raise ConnectError(f"No connection factory registered for connector '{connector_name}'")
            build_lock = self._build_locks.setdefault(key, threading.Lock())

        # One build per key; lookups of other connections are not blocked meanwhile
        with build_lock:
            with self._lock:
                self._check_open()
                handle = self._handles.get(key)
            if handle is not None:
                return handle

            handle = self._build(factory, connector_name, connection_name)

            with self._lock:
                if not self._closed:
                    self._handles[key] = handle
                    return handle

            handle.close()
            raise ConnectError("Connection registry is closed. Cannot get new connections.")

    def _check_open(self) -> None:
        if self._closed:
            raise ConnectError("Connection registry is closed. Cannot get new connections.")

    @staticmethod
    def _build(factory: ConnectionFactory, connector_name: str, connection_name: str) -> ConnectionHandle:
        logger.info(f"Creating connection '{connection_name}' for connector '{connector_name}'")
        try:
            handle = factory(connection_name)
        except (InvalidConfigurationError, AzureError):
            raise
        except ValueError as e:
            raise InvalidConfigurationError(
                f"Invalid configuration for connection '{connection_name}': {e}"
            ) from e
        except Exception as e:
            raise ConnectError(
                f"Failed to create connection '{connection_name}' for connector "
                f"'{connector_name}': {e}"
            ) from e

        if not isinstance(handle, ConnectionHandle):
            raise ContractViolationError(
                f"Factory for connector '{connector_name}' returned "
                f"{type(handle).__name__}, expected ConnectionHandle"
            )
        return handle

    def close_all(self) -> None:
        """
        Close every pooled handle and refuse further requests.

        Close failures are logged and do not stop the remaining handles
        from being closed.
        """
        with self._lock:
            self._closed = True
            handles = list(self._handles.items())
            self._handles.clear()

        for (connector_name, connection_name), handle in handles:
            try:
                handle.close()
                logger.info(f"Closed connection '{connection_name}' ({connector_name})")
            except Exception as e:
                logger.warning(f"Error closing connection '{connection_name}' (non-fatal): {e}")

    def get_stats(self) -> Dict[str, object]:
        """Registry state for diagnostics."""
        with self._lock:
            return {
                "closed": self._closed,
                "connectors": sorted(self._factories),
                "connections": sorted(f"{c}:{n}" for c, n in self._handles),
            }


# ============================================================================
# PROCESS-WIDE REGISTRY
# ============================================================================

_registry: Optional[ConnectionRegistry] = None
_registry_lock = threading.Lock()


def get_connection_registry() -> ConnectionRegistry:
    """
    Get the process-wide registry with the Azure Storage connector registered.
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                # Imported here: blob.py depends on the interfaces above
                from .blob import register_storage_connector
                registry = ConnectionRegistry()
                register_storage_connector(registry)
                _registry = registry
    return _registry


def reset_connection_registry() -> None:
    """Close and drop the process-wide registry (tests, shutdown)."""
    global _registry
    with _registry_lock:
        if _registry is not None:
            _registry.close_all()
        _registry = None
