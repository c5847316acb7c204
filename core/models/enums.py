"""
Pure Enumeration Types for the metadata operation.

No business logic - pure type definitions only.

Exports:
    OperationStatus: Closed set of outcome tokens
    AuthMode: Supported storage connection authentication modes
"""

from enum import Enum

from core.errors import ErrorCode


class OperationStatus(str, Enum):
    """
    Outcome token of one metadata operation.

    Exactly one is produced per invocation:
    - SUCCESS: metadata replaced
    - CONTAINER_DOES_NOT_EXIST / BLOB_DOES_NOT_EXIST: normal, non-error outcomes
    - the six error tokens share their value with ErrorCode
    """

    SUCCESS = "success"
    CONTAINER_DOES_NOT_EXIST = "container-does-not-exist"
    BLOB_DOES_NOT_EXIST = "blob-does-not-exist"

    MISSING_PARAMETERS = ErrorCode.MISSING_PARAMETERS.value
    INVALID_CONFIGURATION = ErrorCode.INVALID_CONFIGURATION.value
    CONNECTION_ERROR = ErrorCode.CONNECTION_ERROR.value
    AUTHENTICATION_ERROR = ErrorCode.AUTHENTICATION_ERROR.value
    BLOB_STORAGE_ERROR = ErrorCode.BLOB_STORAGE_ERROR.value
    GENERAL_ERROR = ErrorCode.GENERAL_ERROR.value

    @property
    def is_error(self) -> bool:
        return self.value in {code.value for code in ErrorCode}

    @classmethod
    def from_error_code(cls, code: ErrorCode) -> 'OperationStatus':
        return cls(code.value)


class AuthMode(str, Enum):
    """
    How a named storage connection authenticates.

    CONNECTION_STRING: full Azure Storage connection string
    ACCOUNT_KEY: account name + shared key
    CLIENT_SECRET: service principal (tenant, client id, secret)
    MANAGED_IDENTITY: system or user-assigned managed identity
    DEFAULT: DefaultAzureCredential chain
    """

    CONNECTION_STRING = "connection_string"
    ACCOUNT_KEY = "account_key"
    CLIENT_SECRET = "client_secret"
    MANAGED_IDENTITY = "managed_identity"
    DEFAULT = "default"
