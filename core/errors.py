"""
Error Code Definitions and Error Descriptor.

Centralized error code management for the blob metadata operation. The
taxonomy is closed: every failure surfaces as exactly one of the codes in
ErrorCode, paired with a human-readable detail in an ErrorDescriptor.

Key Features:
    - Explicit error codes for all failure modes
    - Immutable (code, message) descriptor used as the failure carrier
    - HTTP status mapping for the Function App trigger

Exports:
    ErrorCode: Standardized error codes enum
    ErrorDescriptor: Immutable (code, message) pair
    error_descriptor: Build a descriptor from an ErrorCode
    get_http_status_code: HTTP status for an error code
    create_error_response: Standardized error response dict
"""

from enum import Enum
from typing import Dict, Any, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    """
    Standardized error codes surfaced by the metadata operation.

    Values double as the status tokens reported in the result payload.
    """

    MISSING_PARAMETERS = "MISSING_PARAMETERS"  # containerName / fileName / metadata absent
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"  # Named connection unresolvable
    CONNECTION_ERROR = "CONNECTION_ERROR"  # Registry or transport failure
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"  # Token / credential acquisition failed
    BLOB_STORAGE_ERROR = "BLOB_STORAGE_ERROR"  # Storage service rejected the request
    GENERAL_ERROR = "GENERAL_ERROR"  # Anything unclassified


class ErrorDescriptor(BaseModel):
    """
    Immutable error carrier: a stable code plus a detail message.

    Created once per failing invocation, attached to the outbound context,
    never mutated.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Stable error code (ErrorCode value)")
    message: str = Field(default="", description="Human-readable detail message")

    @property
    def error_code(self) -> str:
        return self.code

    @property
    def error_detail(self) -> str:
        return self.message


def error_descriptor(code: ErrorCode, message: object) -> ErrorDescriptor:
    """
    Build a descriptor for one of the fixed error codes.

    Args:
        code: ErrorCode enum value
        message: Detail; exceptions and None are converted to text

    Returns:
        ErrorDescriptor with code drawn from ErrorCode
    """
    return ErrorDescriptor(code=code.value, message="" if message is None else str(message))


def get_http_status_code(error_code: Union[ErrorCode, str]) -> int:
    """
    Get the appropriate HTTP status code for an error code.

    Args:
        error_code: ErrorCode enum value or its string value

    Returns:
        HTTP status code (400, 500, 503)

    Example:
        >>> get_http_status_code(ErrorCode.MISSING_PARAMETERS)
        400
        >>> get_http_status_code(ErrorCode.CONNECTION_ERROR)
        503
    """
    code = ErrorCode(error_code)

    if code == ErrorCode.MISSING_PARAMETERS:
        return 400

    # Upstream dependency unavailable
    if code in {ErrorCode.CONNECTION_ERROR, ErrorCode.AUTHENTICATION_ERROR}:
        return 503

    return 500


def create_error_response(error: ErrorDescriptor, **kwargs: Any) -> Dict[str, Any]:
    """
    Create a standardized error response dictionary.

    Args:
        error: Descriptor for the failure
        **kwargs: Additional fields to include in response

    Returns:
        Dict with standardized error response structure

    Example:
        >>> create_error_response(
        ...     error_descriptor(ErrorCode.BLOB_STORAGE_ERROR, "Server busy"),
        ...     container_name="c1"
        ... )
        {
            "success": False,
            "error": "BLOB_STORAGE_ERROR",
            "message": "Server busy",
            "http_status": 500,
            "container_name": "c1"
        }
    """
    return {
        "success": False,
        "error": error.code,
        "message": error.message,
        "http_status": get_http_status_code(error.code),
        **kwargs
    }
