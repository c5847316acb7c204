"""
Constants for the Blob Metadata Function App.
Centralizes context property names and fixed messages for easy modification.
"""


# Message context property names - Change these to update across entire application
class ContextProperties:
    """Property keys read from / written to the message context"""
    CONTAINER_NAME = "containerName"
    FILE_NAME = "fileName"
    METADATA = "metadata"
    CONNECTION_NAME = "connectionName"

    # Written on failure
    ERROR_CODE = "ERROR_CODE"
    ERROR_MESSAGE = "ERROR_MESSAGE"


# Connector identity
class Connector:
    """Connector name used as the connection registry namespace"""
    NAME = "azure_storage"


# Fixed diagnostic messages
class Messages:
    """Diagnostic messages surfaced to the host"""
    ERROR_LOG_PREFIX = "[azure-storage] Error occurred while updating blob metadata: "
    MISSING_PARAMETERS = (
        "Mandatory parameters [containerName], [fileName] and [metadata] cannot be empty."
    )
    PAYLOAD_BUILD_FAILED = "Unable to build the message."
