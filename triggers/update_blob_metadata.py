"""
Update Blob Metadata HTTP Trigger.

Replaces the user-defined metadata of an existing blob.

Route:
    PUT|POST /api/storage/containers/{container_name}/metadata

Body:
    {
        "fileName": "folder/scene.tif",       # or ?path=folder/scene.tif
        "metadata": {"owner": "ops"},         # object or JSON text
        "connectionName": "archive"           # optional, default connection otherwise
    }

Responses:
    200 {"success": true}
    404 {"success": false, "description": "container-does-not-exist" | "blob-does-not-exist"}
    400/500/503 {"success": false, "description": <code>, "error": <code>, "message": ...}

Exports:
    UpdateBlobMetadataTrigger: Trigger class
    update_blob_metadata_trigger: Module-level instance used by function_app
"""

from typing import Dict, Any, List, Optional

import azure.functions as func

from constants import ContextProperties
from core.errors import create_error_response
from core.models import MessageContext, OperationStatus
from exceptions import OperationFailedError
from services.metadata_uploader import MetadataUploader

from .http_base import BaseHttpTrigger


_NOT_FOUND_STATUSES = {
    OperationStatus.CONTAINER_DOES_NOT_EXIST,
    OperationStatus.BLOB_DOES_NOT_EXIST,
}


class UpdateBlobMetadataTrigger(BaseHttpTrigger):
    """HTTP adapter over MetadataUploader.execute()."""

    def __init__(self, uploader: Optional[MetadataUploader] = None):
        super().__init__("update_blob_metadata")
        self.uploader = uploader or MetadataUploader()

    def get_allowed_methods(self) -> List[str]:
        return ["PUT", "POST"]

    def build_context(self, req: func.HttpRequest) -> MessageContext:
        """Map route, query and body values onto message context properties."""
        body = self.extract_json_body(req, required=False) or {}

        values = {
            ContextProperties.CONTAINER_NAME: req.route_params.get('container_name'),
            ContextProperties.FILE_NAME: body.get('fileName') or req.params.get('path'),
            ContextProperties.METADATA: body.get('metadata'),
            ContextProperties.CONNECTION_NAME: body.get('connectionName') or req.params.get('connection'),
        }

        # Absent values stay absent so the controller reports MISSING_PARAMETERS
        return MessageContext(properties={k: v for k, v in values.items() if v is not None})

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        context = self.build_context(req)

        try:
            self.uploader.execute(context)
        except OperationFailedError as e:
            self.logger.warning(f"[{self.trigger_name}] {e}")

        payload = context.payload
        data = payload.model_dump(exclude_none=True)

        if context.error is not None:
            return create_error_response(context.error, **data)

        if payload.success:
            return data

        status = OperationStatus(payload.description)
        if status in _NOT_FOUND_STATUSES:
            return {**data, "http_status": 404}

        return data


update_blob_metadata_trigger = UpdateBlobMetadataTrigger()
