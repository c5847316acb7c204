"""
Core Data Models Package.

Contains pure data structures without business logic.
All business logic is in the core.logic package.

Exports:
    OperationStatus, AuthMode: Enums
    MetadataUpdateRequest, MetadataUpdateResult, ResultPayload: Operation models
    MessageContext: Host message context
"""

# Enums
from .enums import (
    OperationStatus,
    AuthMode
)

# Result models
from .results import (
    MetadataUpdateRequest,
    MetadataUpdateResult,
    ResultPayload
)

# Context models
from .context import MessageContext

__all__ = [
    # Enums
    'OperationStatus',
    'AuthMode',

    # Results
    'MetadataUpdateRequest',
    'MetadataUpdateResult',
    'ResultPayload',

    # Context
    'MessageContext'
]
