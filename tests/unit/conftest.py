"""
Unit test fixtures: mocked storage clients and connection handles.
"""

from unittest.mock import MagicMock

import pytest

from infrastructure.connections import ConnectionRegistry
from services.metadata_uploader import MetadataUploader
from tests.factories.storage_fakes import (
    FakeStorageConnection,
    make_blob_service,
    make_registry,
    random_name,
)


@pytest.fixture
def blob_service():
    """Mocked BlobServiceClient where container and blob both exist."""
    return make_blob_service()


@pytest.fixture
def storage_handle(blob_service):
    return FakeStorageConnection(blob_service)


@pytest.fixture
def registry(storage_handle):
    """Real registry returning the fake storage handle for any name."""
    return make_registry(storage_handle)


@pytest.fixture
def spy_registry(storage_handle):
    """Mock registry recording get_connection calls."""
    mock = MagicMock(spec=ConnectionRegistry)
    mock.get_connection.return_value = storage_handle
    return mock


@pytest.fixture
def uploader(registry):
    return MetadataUploader(registry=registry, default_connection_name="default")


@pytest.fixture
def names():
    """Random container and blob names."""
    return {"container": random_name("ctr"), "blob": f"{random_name('dir')}/{random_name('f')}.tif"}
