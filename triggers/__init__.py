"""
Triggers Package.

Azure Functions HTTP trigger implementations.

HTTP Endpoints:
    /api/storage/containers/{container_name}/metadata: Update blob metadata

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
"""

# Only import base classes to avoid initialization at import time
# Trigger instances should be imported directly from their modules
from .http_base import BaseHttpTrigger

__all__ = [
    'BaseHttpTrigger',
]
