"""
Error code and descriptor tests.
"""

import pytest
from pydantic import ValidationError

from core.errors import (
    ErrorCode,
    ErrorDescriptor,
    error_descriptor,
    get_http_status_code,
    create_error_response,
)


class TestErrorDescriptor:

    def test_fields_readable_via_aliases(self):
        d = ErrorDescriptor(code="GENERAL_ERROR", message="boom")
        assert d.error_code == "GENERAL_ERROR"
        assert d.error_detail == "boom"

    def test_immutable(self):
        d = ErrorDescriptor(code="GENERAL_ERROR", message="boom")
        with pytest.raises(ValidationError):
            d.code = "OTHER"

    def test_equality_by_fields(self):
        a = ErrorDescriptor(code="CONNECTION_ERROR", message="x")
        b = ErrorDescriptor(code="CONNECTION_ERROR", message="x")
        assert a == b
        assert hash(a) == hash(b)
        assert a != ErrorDescriptor(code="CONNECTION_ERROR", message="y")

    def test_message_defaults_to_empty(self):
        assert ErrorDescriptor(code="GENERAL_ERROR").message == ""


class TestErrorDescriptorHelper:

    def test_code_from_enum(self):
        d = error_descriptor(ErrorCode.BLOB_STORAGE_ERROR, "server busy")
        assert d.code == "BLOB_STORAGE_ERROR"
        assert d.message == "server busy"

    def test_exception_message_converted(self):
        d = error_descriptor(ErrorCode.GENERAL_ERROR, RuntimeError("boom"))
        assert d.message == "boom"

    def test_none_message_is_empty(self):
        assert error_descriptor(ErrorCode.GENERAL_ERROR, None).message == ""


class TestErrorCodes:

    def test_closed_set(self):
        assert {c.value for c in ErrorCode} == {
            "MISSING_PARAMETERS",
            "INVALID_CONFIGURATION",
            "CONNECTION_ERROR",
            "AUTHENTICATION_ERROR",
            "BLOB_STORAGE_ERROR",
            "GENERAL_ERROR",
        }

    @pytest.mark.parametrize("code, status", [
        (ErrorCode.MISSING_PARAMETERS, 400),
        (ErrorCode.INVALID_CONFIGURATION, 500),
        (ErrorCode.CONNECTION_ERROR, 503),
        (ErrorCode.AUTHENTICATION_ERROR, 503),
        (ErrorCode.BLOB_STORAGE_ERROR, 500),
        (ErrorCode.GENERAL_ERROR, 500),
    ])
    def test_http_status(self, code, status):
        assert get_http_status_code(code) == status
        assert get_http_status_code(code.value) == status

    def test_unknown_code_rejected(self):
        with pytest.raises(ValueError):
            get_http_status_code("NOT_A_CODE")


class TestCreateErrorResponse:

    def test_structure(self):
        response = create_error_response(
            error_descriptor(ErrorCode.CONNECTION_ERROR, "dns failure"),
            container_name="c1"
        )
        assert response == {
            "success": False,
            "error": "CONNECTION_ERROR",
            "message": "dns failure",
            "http_status": 503,
            "container_name": "c1",
        }
