"""
Operation Result Data Models.

Represents the inputs and outcome of one blob metadata operation.
No business logic - pure data structures.

Exports:
    MetadataUpdateRequest: The three required parameters plus connection name
    MetadataUpdateResult: Tagged-union outcome (status + optional error)
    ResultPayload: Success flag + optional detail sent back to the caller
"""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.errors import ErrorCode, ErrorDescriptor, error_descriptor
from .enums import OperationStatus


class MetadataUpdateRequest(BaseModel):
    """
    Parameters extracted from the caller's context.

    Every field is optional here; presence is checked by the controller so a
    missing parameter becomes a MISSING_PARAMETERS result, not a validation
    exception.
    """

    model_config = ConfigDict(frozen=True)

    container_name: Optional[str] = Field(default=None, description="Target container")
    blob_name: Optional[str] = Field(default=None, description="Target blob within the container")
    metadata: Optional[str] = Field(default=None, description="JSON text of the metadata mapping")
    connection_name: Optional[str] = Field(default=None, description="Named storage connection")

    @property
    def missing_parameters(self) -> bool:
        return self.container_name is None or self.blob_name is None or self.metadata is None


class MetadataUpdateResult(BaseModel):
    """
    Outcome of one metadata operation.

    status is always set; error is present exactly when status is one of the
    six error tokens, and its code equals the status value.
    """

    model_config = ConfigDict(frozen=True)

    status: OperationStatus = Field(..., description="Outcome token")
    error: Optional[ErrorDescriptor] = Field(default=None, description="Failure detail")
    submitted_metadata: Optional[Dict[str, str]] = Field(
        default=None,
        description="Metadata map sent to the storage service (success only)"
    )

    @model_validator(mode='after')
    def check_error_matches_status(self):
        if self.status.is_error:
            if self.error is None:
                raise ValueError(f"Status {self.status.value} requires an error descriptor")
            if self.error.code != self.status.value:
                raise ValueError(
                    f"Error code {self.error.code} does not match status {self.status.value}"
                )
        elif self.error is not None:
            raise ValueError(f"Status {self.status.value} cannot carry an error descriptor")
        return self

    @classmethod
    def success(cls, submitted_metadata: Dict[str, str]) -> 'MetadataUpdateResult':
        return cls(status=OperationStatus.SUCCESS, submitted_metadata=dict(submitted_metadata))

    @classmethod
    def container_absent(cls) -> 'MetadataUpdateResult':
        return cls(status=OperationStatus.CONTAINER_DOES_NOT_EXIST)

    @classmethod
    def blob_absent(cls) -> 'MetadataUpdateResult':
        return cls(status=OperationStatus.BLOB_DOES_NOT_EXIST)

    @classmethod
    def failure(cls, code: ErrorCode, message: object) -> 'MetadataUpdateResult':
        return cls(
            status=OperationStatus.from_error_code(code),
            error=error_descriptor(code, message)
        )

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def detail(self) -> Optional[str]:
        """Failure detail for the payload: the status token, or None on success."""
        return None if self.is_success else self.status.value


class ResultPayload(BaseModel):
    """
    Structured response document: boolean success flag + optional detail.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(..., description="True only for OperationStatus.SUCCESS")
    description: Optional[str] = Field(default=None, description="Status token when not successful")

    @model_validator(mode='after')
    def check_description(self):
        if self.success and self.description:
            raise ValueError("A successful payload carries no detail")
        if not self.success and not self.description:
            raise ValueError("A failed payload must carry a detail")
        return self

    @classmethod
    def from_result(cls, result: MetadataUpdateResult) -> 'ResultPayload':
        return cls(success=result.is_success, description=result.detail)
