"""
Storage test doubles: connection handles and mocked Azure clients.

Azure SDK clients are MagicMocks; the handle and registry types are real
so capability lookup and registry behaviour run as in production.
"""

import random
import string
from unittest.mock import MagicMock

from infrastructure.connections import (
    BlobServiceClientProvider,
    ConnectionHandle,
    ConnectionRegistry,
)


def random_name(prefix: str = "c", length: int = 6) -> str:
    """Generate a random lowercase name (valid as a container or blob name)."""
    return prefix + "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def make_blob_service(container_exists: bool = True, blob_exists: bool = True) -> MagicMock:
    """
    Build a mocked BlobServiceClient.

    Access the nested clients via:
        service.get_container_client.return_value                         (container client)
        service.get_container_client.return_value.get_blob_client.return_value  (blob client)
    """
    service = MagicMock(name="BlobServiceClient")
    container_client = service.get_container_client.return_value
    container_client.exists.return_value = container_exists
    blob_client = container_client.get_blob_client.return_value
    blob_client.exists.return_value = blob_exists
    return service


def container_client_of(service: MagicMock) -> MagicMock:
    return service.get_container_client.return_value


def blob_client_of(service: MagicMock) -> MagicMock:
    return service.get_container_client.return_value.get_blob_client.return_value


class FakeStorageConnection(ConnectionHandle, BlobServiceClientProvider):
    """Handle with the blob service capability backed by a mocked client."""

    def __init__(self, blob_service, name: str = "default"):
        self._blob_service = blob_service
        self._name = name
        self.closed = False

    @property
    def connection_name(self) -> str:
        return self._name

    def get_blob_service_client(self):
        return self._blob_service

    def close(self) -> None:
        self.closed = True


class PlainConnection(ConnectionHandle):
    """Handle without any capability (e.g. some other connector's connection)."""

    def __init__(self, name: str = "default"):
        self._name = name

    @property
    def connection_name(self) -> str:
        return self._name


def make_registry(handle: ConnectionHandle, connector_name: str = "azure_storage") -> ConnectionRegistry:
    """Real registry whose factory always returns the given handle."""
    registry = ConnectionRegistry()
    registry.register_factory(connector_name, lambda name: handle)
    return registry
