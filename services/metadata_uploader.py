# ============================================================================
# BLOB METADATA UPLOADER
# ============================================================================
# STATUS: Service - Operation controller
# PURPOSE: Replace user-defined metadata on an existing blob
# EXPORTS: MetadataUploader
# DEPENDENCIES: azure-core (exception classification), infrastructure.connections
# ============================================================================
"""
Blob Metadata Uploader.

Replaces the user-defined metadata of an existing blob in an existing
container. The operation never creates containers or blobs.

Flow:
    validate inputs -> acquire connection -> check container -> check blob
    -> sanitize + submit -> classify failure -> build response

upload() is the core: it takes a MetadataUpdateRequest and returns a
MetadataUpdateResult for every outcome, raising nothing for classified
failures. execute() adapts it to the message-context convention used by the
host: it writes error properties, always attaches the result payload, then
signals failure by raising OperationFailedError.

Failure classification (first match wins):
    InvalidConfigurationError                    -> INVALID_CONFIGURATION
    ConnectError, ServiceRequestError,
        ServiceResponseError                     -> CONNECTION_ERROR
    ClientAuthenticationError                    -> AUTHENTICATION_ERROR
    HttpResponseError                            -> BLOB_STORAGE_ERROR
    anything else (incl. MetadataDecodeError)    -> GENERAL_ERROR

Exports:
    MetadataUploader: Operation controller
"""

import json
from typing import Any, Optional

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ServiceRequestError,
    ServiceResponseError,
)
from pydantic import ValidationError

from config import get_config
from constants import ContextProperties, Connector, Messages
from core.errors import ErrorCode
from core.logic.metadata import prepare_metadata
from core.models import (
    MessageContext,
    MetadataUpdateRequest,
    MetadataUpdateResult,
    OperationStatus,
    ResultPayload,
)
from exceptions import (
    ConnectError,
    InvalidConfigurationError,
    OperationFailedError,
    PayloadBuildError,
)
from infrastructure.connections import (
    BlobServiceClientProvider,
    ConnectionRegistry,
    get_connection_registry,
)
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.CONTROLLER, "MetadataUploader")


class MetadataUploader:
    """
    Upload-metadata operation controller.

    Holds no per-invocation state; one instance can serve concurrent
    invocations. The registry and default connection name are resolved
    lazily so constructing the controller reads no configuration.

    Example:
        uploader = MetadataUploader()
        result = uploader.upload(MetadataUpdateRequest(
            container_name="raw",
            blob_name="scene.tif",
            metadata='{"owner": "ops"}'
        ))
        result.status  # OperationStatus.SUCCESS
    """

    def __init__(self, registry: Optional[ConnectionRegistry] = None,
                 default_connection_name: Optional[str] = None):
        self._registry = registry
        self._default_connection_name = default_connection_name

    @property
    def registry(self) -> ConnectionRegistry:
        if self._registry is None:
            return get_connection_registry()
        return self._registry

    # ========================================================================
    # CORE OPERATION
    # ========================================================================

    def upload(self, request: MetadataUpdateRequest) -> MetadataUpdateResult:
        """
        Replace the metadata of one blob.

        Args:
            request: Container, blob, metadata JSON and optional connection name

        Returns:
            MetadataUpdateResult - success, container/blob absent, or one of
            the six error statuses with its descriptor
        """
        dims = {
            'container_name': request.container_name,
            'blob_name': request.blob_name,
            'connection_name': request.connection_name,
        }

        if request.missing_parameters:
            logger.warning(Messages.MISSING_PARAMETERS, extra={'custom_dimensions': dims})
            return MetadataUpdateResult.failure(ErrorCode.MISSING_PARAMETERS, Messages.MISSING_PARAMETERS)

        try:
            result = self._apply(request)
        except InvalidConfigurationError as e:
            return self._failed(ErrorCode.INVALID_CONFIGURATION, e, dims)
        except (ConnectError, ServiceRequestError, ServiceResponseError) as e:
            return self._failed(ErrorCode.CONNECTION_ERROR, e, dims)
        except ClientAuthenticationError as e:
            return self._failed(ErrorCode.AUTHENTICATION_ERROR, e, dims)
        except HttpResponseError as e:
            return self._failed(ErrorCode.BLOB_STORAGE_ERROR, e, dims)
        except Exception as e:
            return self._failed(ErrorCode.GENERAL_ERROR, e, dims, exc_info=True)

        logger.info(
            f"Blob metadata operation finished: {result.status.value}",
            extra={'custom_dimensions': {**dims, 'status': result.status.value}}
        )
        return result

    def _apply(self, request: MetadataUpdateRequest) -> MetadataUpdateResult:
        connection_name = self._resolve_connection_name(request)

        logger.debug(f"Acquiring storage connection '{connection_name}'")
        handle = self.registry.get_connection(Connector.NAME, connection_name)
        provider = handle.get_capability(BlobServiceClientProvider)
        if provider is None:
            raise InvalidConfigurationError(
                f"Connection '{connection_name}' does not provide a blob service client"
            )
        blob_service = provider.get_blob_service_client()

        container_client = blob_service.get_container_client(request.container_name)
        if not container_client.exists():
            logger.debug(f"Container does not exist: {request.container_name}")
            return MetadataUpdateResult.container_absent()

        blob_client = container_client.get_blob_client(request.blob_name)
        if not blob_client.exists():
            logger.debug(f"Blob does not exist: {request.container_name}/{request.blob_name}")
            return MetadataUpdateResult.blob_absent()

        metadata = prepare_metadata(request.metadata)
        logger.debug(f"Submitting {len(metadata)} metadata entries to {request.container_name}/{request.blob_name}")
        blob_client.set_blob_metadata(metadata=metadata)
        return MetadataUpdateResult.success(metadata)

    def _resolve_connection_name(self, request: MetadataUpdateRequest) -> str:
        name = request.connection_name or self._default_connection_name
        if not name:
            name = get_config().default_storage_connection
        if not name or not name.strip():
            raise InvalidConfigurationError("No storage connection name given and no default configured")
        return name

    @staticmethod
    def _failed(code: ErrorCode, error: Exception, dims: dict, exc_info: bool = False) -> MetadataUpdateResult:
        logger.error(
            f"{Messages.ERROR_LOG_PREFIX}{error}",
            exc_info=exc_info,
            extra={'custom_dimensions': {
                **dims,
                'error_code': code.value,
                'exception_type': type(error).__name__,
            }}
        )
        return MetadataUpdateResult.failure(code, error)

    # ========================================================================
    # MESSAGE CONTEXT ADAPTER
    # ========================================================================

    @staticmethod
    def _as_text(value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return str(value)

    def request_from_context(self, context: MessageContext) -> MetadataUpdateRequest:
        """Read the operation parameters from the context properties."""
        return MetadataUpdateRequest(
            container_name=self._as_text(context.get_property(ContextProperties.CONTAINER_NAME)),
            blob_name=self._as_text(context.get_property(ContextProperties.FILE_NAME)),
            metadata=self._as_text(context.get_property(ContextProperties.METADATA)),
            connection_name=self._as_text(context.get_property(ContextProperties.CONNECTION_NAME)),
        )

    def execute(self, context: MessageContext) -> None:
        """
        Run the operation against a message context.

        The result payload is attached to the context on every path before
        any failure is raised.

        Raises:
            OperationFailedError: The operation failed; context carries
                ERROR_CODE / ERROR_MESSAGE and the payload
            PayloadBuildError: The result payload could not be built
        """
        result = self.upload(self.request_from_context(context))

        if result.error is not None:
            context.set_property(ContextProperties.ERROR_CODE, result.error.code)
            context.set_property(ContextProperties.ERROR_MESSAGE, result.error.message)
            context.error = result.error

        self.generate_results(context, result)

        if result.error is not None:
            if result.status == OperationStatus.MISSING_PARAMETERS:
                message = Messages.MISSING_PARAMETERS
            else:
                message = f"{Messages.ERROR_LOG_PREFIX}{result.error.message}"
            raise OperationFailedError(message, result.error)

    def generate_results(self, context: MessageContext, result: MetadataUpdateResult) -> ResultPayload:
        """
        Build the result payload and attach it to the context.

        Raises:
            PayloadBuildError: Payload failed validation
        """
        try:
            payload = ResultPayload.from_result(result)
            context.payload = payload
        except ValidationError as e:
            logger.error(f"{Messages.PAYLOAD_BUILD_FAILED} {e}")
            raise PayloadBuildError(Messages.PAYLOAD_BUILD_FAILED) from e
        return payload
