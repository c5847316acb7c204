"""
UpdateBlobMetadataTrigger HTTP tests.

Builds real azure.functions.HttpRequest objects and checks status codes and
JSON bodies for each operation outcome.
"""

import json
from unittest.mock import MagicMock

import azure.functions as func
import pytest
from azure.core.exceptions import ClientAuthenticationError, HttpResponseError, ResourceNotFoundError

from infrastructure.connections import ConnectionRegistry
from services.metadata_uploader import MetadataUploader
from triggers.http_base import BaseHttpTrigger
from triggers.update_blob_metadata import UpdateBlobMetadataTrigger
from tests.factories.storage_fakes import (
    FakeStorageConnection,
    blob_client_of,
    make_blob_service,
    make_registry,
)


def _request(container="raw", body=None, method="PUT", params=None) -> func.HttpRequest:
    return func.HttpRequest(
        method=method,
        url=f"/api/storage/containers/{container}/metadata",
        route_params={"container_name": container} if container else {},
        params=params or {},
        body=json.dumps(body).encode() if body is not None else b"",
    )


def _trigger(service=None, registry=None) -> UpdateBlobMetadataTrigger:
    if registry is None:
        registry = make_registry(FakeStorageConnection(service or make_blob_service()))
    return UpdateBlobMetadataTrigger(MetadataUploader(registry=registry, default_connection_name="default"))


def _json(response: func.HttpResponse) -> dict:
    return json.loads(response.get_body())


class TestSuccess:

    def test_metadata_object(self):
        service = make_blob_service()
        response = _trigger(service).handle_request(
            _request(body={"fileName": "a/b.tif", "metadata": {"k1": "v1", "k2": ""}})
        )

        assert response.status_code == 200
        body = _json(response)
        assert body["success"] is True
        assert "description" not in body
        assert "request_id" in body
        assert response.headers["X-Request-ID"] == body["request_id"]
        blob_client_of(service).set_blob_metadata.assert_called_once_with(metadata={"k1": "v1"})

    def test_metadata_json_text_and_path_query(self):
        service = make_blob_service()
        response = _trigger(service).handle_request(
            _request(body={"metadata": '{"owner": "ops"}'}, params={"path": "scene.tif"}, method="POST")
        )

        assert response.status_code == 200
        service.get_container_client.return_value.get_blob_client.assert_called_once_with("scene.tif")

    def test_connection_name_forwarded(self):
        registry = MagicMock(spec=ConnectionRegistry)
        registry.get_connection.return_value = FakeStorageConnection(make_blob_service())
        _trigger(registry=registry).handle_request(
            _request(body={"fileName": "f", "metadata": {}, "connectionName": "archive"})
        )
        registry.get_connection.assert_called_once_with("azure_storage", "archive")


class TestNotFound:

    @pytest.mark.parametrize("container_exists, blob_exists, token", [
        (False, True, "container-does-not-exist"),
        (True, False, "blob-does-not-exist"),
    ])
    def test_absent_is_404(self, container_exists, blob_exists, token):
        service = make_blob_service(container_exists=container_exists, blob_exists=blob_exists)
        response = _trigger(service).handle_request(_request(body={"fileName": "f", "metadata": {}}))

        assert response.status_code == 404
        assert _json(response)["description"] == token
        assert _json(response)["success"] is False


class TestFailures:

    def test_missing_file_name_is_400(self):
        response = _trigger().handle_request(_request(body={"metadata": {"k": "v"}}))

        assert response.status_code == 400
        body = _json(response)
        assert body["error"] == "MISSING_PARAMETERS"
        assert body["description"] == "MISSING_PARAMETERS"

    def test_empty_body_is_missing_parameters(self):
        response = _trigger().handle_request(_request(body=None))
        assert response.status_code == 400
        assert _json(response)["error"] == "MISSING_PARAMETERS"

    def test_authentication_error_is_503(self):
        registry = MagicMock(spec=ConnectionRegistry)
        registry.get_connection.side_effect = ClientAuthenticationError("token expired")
        response = _trigger(registry=registry).handle_request(
            _request(body={"fileName": "f", "metadata": {}})
        )

        assert response.status_code == 503
        body = _json(response)
        assert body["error"] == "AUTHENTICATION_ERROR"
        assert body["description"] == "AUTHENTICATION_ERROR"

    def test_storage_error_is_500(self):
        service = make_blob_service()
        blob_client_of(service).set_blob_metadata.side_effect = HttpResponseError("server busy")
        response = _trigger(service).handle_request(_request(body={"fileName": "f", "metadata": {}}))

        assert response.status_code == 500
        assert _json(response)["error"] == "BLOB_STORAGE_ERROR"

    def test_invalid_metadata_value_is_general_error(self):
        response = _trigger().handle_request(_request(body={"fileName": "f", "metadata": {"k": 1}}))

        assert response.status_code == 500
        assert _json(response)["error"] == "GENERAL_ERROR"

    def test_malformed_body_is_400(self):
        req = func.HttpRequest(
            method="PUT",
            url="/api/storage/containers/raw/metadata",
            route_params={"container_name": "raw"},
            params={},
            body=b"{not json",
        )
        response = _trigger().handle_request(req)
        assert response.status_code == 400
        assert _json(response)["error"] == "Bad request"

    def test_method_not_allowed(self):
        response = _trigger().handle_request(_request(body={}, method="GET"))
        assert response.status_code == 405

    def test_resource_not_found_during_submit_is_storage_error(self):
        service = make_blob_service()
        blob_client_of(service).set_blob_metadata.side_effect = ResourceNotFoundError("blob deleted meanwhile")
        response = _trigger(service).handle_request(_request(body={"fileName": "f", "metadata": {}}))

        assert response.status_code == 500
        assert _json(response)["error"] == "BLOB_STORAGE_ERROR"


class TestBaseTriggerErrorMapping:

    class _Raising(BaseHttpTrigger):

        def __init__(self, error):
            super().__init__("raising")
            self.error = error

        def get_allowed_methods(self):
            return ["PUT"]

        def process_request(self, req):
            raise self.error

    @pytest.mark.parametrize("error, status, label", [
        (ValueError("bad"), 400, "Bad request"),
        (PermissionError("no"), 403, "Forbidden"),
        (FileNotFoundError("gone"), 404, "Not found"),
        (RuntimeError("boom"), 500, "Internal server error"),
    ])
    def test_exception_status(self, error, status, label):
        response = self._Raising(error).handle_request(_request(body={}))
        assert response.status_code == status
        assert _json(response)["error"] == label
