"""
Azure Functions entry point for the Blob Metadata Function App.

Exposes one HTTP operation: replace the user-defined metadata of an
existing blob in an existing container of a named storage connection.

Exports:
    app: Azure Function App instance

Dependencies:
    azure.functions: Azure Functions SDK
    triggers/*: HTTP trigger implementations

Endpoints:
    PUT|POST /api/storage/containers/{container_name}/metadata - Update blob metadata

Environment Variables:
    DEFAULT_STORAGE_CONNECTION: Connection used when a request names none (default: "default")
    STORAGE_CONNECTION_<NAME>_AUTH_MODE: connection_string | account_key | client_secret |
                                         managed_identity | default
    STORAGE_CONNECTION_<NAME>_CONNECTION_STRING / _ACCOUNT_NAME / _ACCOUNT_KEY /
        _CLIENT_ID / _TENANT_ID / _CLIENT_SECRET / _ENDPOINT_SUFFIX / _PROTOCOL
    LOG_LEVEL: Default level for component loggers (default: INFO)
    DEBUG_LOGGING: Emit DEBUG-level JSON logs (overrides LOG_LEVEL)
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)  # Microsoft Authentication Library

# Application modules (our code)
from util_logger import LoggerFactory, ComponentType
from config import get_config
from config.env_validation import log_validation_results
from exceptions import InvalidConfigurationError
from triggers.update_blob_metadata import update_blob_metadata_trigger

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")
validation_logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "env_validation")

# ========================================================================
# STARTUP VALIDATION - Report env var problems without blocking startup
# ========================================================================
# A bad connection only fails requests that use it; other connections keep working.
if not log_validation_results(validation_logger):
    logger.error("Environment validation failed - requests using the default connection will fail")

try:
    config = get_config()
    LoggerFactory.set_default_level(config.log_level)
    logger.info(f"Blob metadata app starting (environment={config.environment}, log_level={config.log_level})")
except InvalidConfigurationError as e:
    logger.error(f"Application configuration invalid, keeping default log level: {e}")

# Initialize function app with HTTP auth level
app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


# ============================================================================
# STORAGE METADATA
# ============================================================================

@app.route(route="storage/containers/{container_name}/metadata", methods=["PUT", "POST"])
def update_blob_metadata(req: func.HttpRequest) -> func.HttpResponse:
    """Replace user-defined metadata on an existing blob."""
    return update_blob_metadata_trigger.handle_request(req)
