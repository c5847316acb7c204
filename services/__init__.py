"""
Service Layer.

Operation controllers that sit between the HTTP triggers and the
infrastructure layer. Controllers return result models; triggers turn those
into HTTP responses.

Exports:
    MetadataUploader: Replace user-defined metadata on an existing blob
"""

from .metadata_uploader import MetadataUploader

__all__ = [
    'MetadataUploader',
]
