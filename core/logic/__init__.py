"""
Core Business Logic Package.

Contains business logic that operates on pure data models.
Separated from models to maintain clean architecture.

Exports:
    Metadata: decode_metadata, sanitize_metadata, prepare_metadata
"""

from .metadata import (
    decode_metadata,
    sanitize_metadata,
    prepare_metadata
)

__all__ = [
    'decode_metadata',
    'sanitize_metadata',
    'prepare_metadata'
]
