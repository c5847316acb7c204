"""
MetadataUpdateResult / ResultPayload / OperationStatus tests.

Covers the tagged-union rule (error present exactly for error
statuses) and payload rendering.
"""

import pytest
from pydantic import ValidationError

from core.errors import ErrorCode, ErrorDescriptor
from core.models import (
    MessageContext,
    MetadataUpdateRequest,
    MetadataUpdateResult,
    OperationStatus,
    ResultPayload,
)


class TestOperationStatus:

    def test_error_tokens_match_error_codes(self):
        for code in ErrorCode:
            status = OperationStatus.from_error_code(code)
            assert status.value == code.value
            assert status.is_error

    @pytest.mark.parametrize("status", [
        OperationStatus.SUCCESS,
        OperationStatus.CONTAINER_DOES_NOT_EXIST,
        OperationStatus.BLOB_DOES_NOT_EXIST,
    ])
    def test_normal_outcomes_are_not_errors(self, status):
        assert not status.is_error

    def test_nine_tokens(self):
        assert len(list(OperationStatus)) == 9


class TestMetadataUpdateRequest:

    def test_missing_parameters(self):
        assert MetadataUpdateRequest(container_name="c", blob_name="b").missing_parameters
        assert not MetadataUpdateRequest(container_name="c", blob_name="b", metadata="{}").missing_parameters


class TestMetadataUpdateResult:

    def test_success(self):
        result = MetadataUpdateResult.success({"k": "v"})
        assert result.is_success
        assert result.detail is None
        assert result.error is None
        assert result.submitted_metadata == {"k": "v"}

    @pytest.mark.parametrize("factory, token", [
        (MetadataUpdateResult.container_absent, "container-does-not-exist"),
        (MetadataUpdateResult.blob_absent, "blob-does-not-exist"),
    ])
    def test_absent_outcomes(self, factory, token):
        result = factory()
        assert not result.is_success
        assert result.error is None
        assert result.detail == token

    def test_failure_detail_is_error_code(self):
        result = MetadataUpdateResult.failure(ErrorCode.CONNECTION_ERROR, "dns failure")
        assert result.status == OperationStatus.CONNECTION_ERROR
        assert result.error.message == "dns failure"
        assert result.detail == "CONNECTION_ERROR"

    def test_error_status_requires_descriptor(self):
        with pytest.raises(ValidationError):
            MetadataUpdateResult(status=OperationStatus.GENERAL_ERROR)

    def test_normal_status_rejects_descriptor(self):
        with pytest.raises(ValidationError):
            MetadataUpdateResult(
                status=OperationStatus.SUCCESS,
                error=ErrorDescriptor(code="GENERAL_ERROR", message="x")
            )

    def test_descriptor_code_must_match_status(self):
        with pytest.raises(ValidationError):
            MetadataUpdateResult(
                status=OperationStatus.GENERAL_ERROR,
                error=ErrorDescriptor(code="CONNECTION_ERROR", message="x")
            )


class TestResultPayload:

    def test_from_success(self):
        payload = ResultPayload.from_result(MetadataUpdateResult.success({}))
        assert payload.model_dump(exclude_none=True) == {"success": True}

    def test_from_failure(self):
        payload = ResultPayload.from_result(MetadataUpdateResult.failure(ErrorCode.GENERAL_ERROR, "x"))
        assert payload.model_dump() == {"success": False, "description": "GENERAL_ERROR"}

    def test_from_blob_absent(self):
        payload = ResultPayload.from_result(MetadataUpdateResult.blob_absent())
        assert payload.description == "blob-does-not-exist"

    def test_failed_payload_requires_detail(self):
        with pytest.raises(ValidationError):
            ResultPayload(success=False)

    def test_success_payload_rejects_detail(self):
        with pytest.raises(ValidationError):
            ResultPayload(success=True, description="success")


class TestMessageContext:

    def test_property_access(self):
        context = MessageContext()
        assert context.get_property("containerName") is None
        context.set_property("containerName", "c1")
        assert context.get_property("containerName") == "c1"

    def test_payload_assignment_validated(self):
        context = MessageContext()
        with pytest.raises(ValidationError):
            context.payload = "not a payload"
