# ============================================================================
# CLAUDE CONTEXT - EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by config, infrastructure, services and triggers
# PURPOSE: Exception hierarchy separating contract violations, configuration
#          problems, connection-layer failures and host-level signals
# EXPORTS: ContractViolationError, BusinessLogicError, ConfigurationError,
#          InvalidConfigurationError, ConnectError, MetadataDecodeError,
#          OperationFailedError, PayloadBuildError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)
3. Host signals raised by the metadata operation once its response is built

Azure SDK exceptions (azure.core.exceptions) are NOT wrapped here; the
operation controller classifies them directly.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from core.errors import ErrorDescriptor


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Registry factory returns something that is not a ConnectionHandle
        - Controller receives a context object without property access
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.

    These are normal failures that occur during system operation
    and should be handled gracefully without crashing.
    """
    pass


class ConfigurationError(Exception):
    """
    System configuration error.

    Examples:
        - Missing required environment variables
        - Invalid connection strings
        - Malformed configuration files
    """
    pass


class InvalidConfigurationError(ConfigurationError):
    """
    A named storage connection cannot be resolved into a usable client.

    Examples:
        - No STORAGE_CONNECTION_<NAME>_* variables for the requested name
        - Auth mode requires a field that is not set
        - Connection handle lacks the blob service capability
    """
    pass


class ConnectError(BusinessLogicError):
    """
    Connection-layer failure outside of the storage service itself.

    Examples:
        - Connector has no registered connection factory
        - Registry already shut down
        - Connection factory failed for a reason other than configuration
    """
    pass


class MetadataDecodeError(BusinessLogicError):
    """
    Metadata parameter is not a JSON object of string values.

    Examples:
        - Malformed JSON text
        - Top-level JSON array instead of object
        - Numeric or nested value for a metadata key
    """
    pass


class OperationFailedError(BusinessLogicError):
    """
    Recoverable failure signal raised to the host after the response is built.

    Carries the ErrorDescriptor so the host can log or forward it without
    re-reading the message context.
    """

    def __init__(self, message: str, error: Optional['ErrorDescriptor'] = None):
        super().__init__(message)
        self.error = error


class PayloadBuildError(Exception):
    """
    The structured result payload could not be built.

    Non-recoverable: no response can be produced for the caller.
    """
    pass
