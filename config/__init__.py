# ============================================================================
# CLAUDE CONTEXT - CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: Configuration package exports and singleton
# EXPORTS: AppConfig, StorageConnectionConfig, get_config, reset_config, debug_config
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: AppConfig, StorageConnectionConfig
# DEPENDENCIES: domain config modules
# PATTERNS: Singleton, composition, facade
# ENTRY_POINTS: from config import get_config
# ============================================================================

"""
Configuration Package

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Application settings
    ├── storage_config.py        # Named storage connections
    ├── defaults.py              # Default values
    └── env_validation.py        # Startup regex validation

Usage:
    # Singleton pattern (preferred)
    from config import get_config
    config = get_config()
    storage = config.storage_connection(config.default_storage_connection)

    # Debug output
    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

from .storage_config import StorageConnectionConfig, storage_env_prefix
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, secrets masked
    """
    try:
        config = get_config()
        result = config.debug_dict()
        try:
            result['storage'] = config.storage_connection(config.default_storage_connection).debug_dict()
        except Exception as e:
            result['storage'] = {'error': str(e)}
        return result
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',

    # Storage
    'StorageConnectionConfig',
    'storage_env_prefix',
]
