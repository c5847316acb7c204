# ============================================================================
# BLOB METADATA DECODE AND SANITIZE
# ============================================================================
# STATUS: Core - Pure functions
# PURPOSE: Turn the metadata parameter into the map submitted to storage
# ============================================================================
"""
Blob Metadata Decode and Sanitize.

The metadata parameter arrives as JSON text. It must decode to a JSON object
whose values are strings or null. Entries with an empty or null value are
dropped before submission; the storage service replaces blob metadata
wholesale, so whatever survives here is the blob's complete metadata.

Exports:
    decode_metadata: JSON text -> Dict[str, Optional[str]] (validated)
    sanitize_metadata: Drop empty/null values
    prepare_metadata: decode_metadata + sanitize_metadata
"""

import json
from typing import Dict, Optional

from exceptions import MetadataDecodeError


def decode_metadata(raw: str) -> Dict[str, Optional[str]]:
    """
    Decode and validate the metadata JSON text.

    Args:
        raw: JSON text of a key/value mapping

    Returns:
        Mapping of metadata keys to string values (or None for JSON null)

    Raises:
        MetadataDecodeError: Malformed JSON, non-object top level, or a
            value that is neither a string nor null
    """
    if not isinstance(raw, str):
        raise MetadataDecodeError(
            f"Metadata must be JSON text, got {type(raw).__name__}"
        )

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MetadataDecodeError(f"Metadata is not valid JSON: {e}") from e

    if not isinstance(decoded, dict):
        raise MetadataDecodeError(
            f"Metadata must be a JSON object, got {type(decoded).__name__}"
        )

    for key, value in decoded.items():
        if value is not None and not isinstance(value, str):
            raise MetadataDecodeError(
                f"Metadata value for '{key}' must be a string, got {type(value).__name__}"
            )

    return decoded


def sanitize_metadata(metadata: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Keep only entries with a non-empty string value."""
    return {key: value for key, value in metadata.items() if value}


def prepare_metadata(raw: str) -> Dict[str, str]:
    """
    Decode then sanitize; the result is what gets submitted to storage.

    Example:
        >>> prepare_metadata('{"k1": "v1", "k2": ""}')
        {'k1': 'v1'}
    """
    return sanitize_metadata(decode_metadata(raw))
