"""
Core Components.

Contains the building blocks of the metadata operation, separated from
Azure SDK access and the HTTP host.

Structure:
    models/: Pure data structures (no business logic)
    logic/: Business logic separated from models
    errors.py: Error codes and descriptor

Exports:
    ErrorCode: Fixed error code taxonomy
    ErrorDescriptor: Immutable (code, message) pair
"""

from .errors import ErrorCode, ErrorDescriptor

# Make subpackages available after errors (models depend on it)
from . import models
from . import logic

__all__ = [
    'ErrorCode',
    'ErrorDescriptor',
    'models',
    'logic'
]
