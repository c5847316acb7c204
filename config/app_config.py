# ============================================================================
# CLAUDE CONTEXT - APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Configuration - Application settings
# PURPOSE: Top-level settings + lookup of named storage connections
# EXPORTS: AppConfig
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: AppConfig
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables (ENVIRONMENT, LOG_LEVEL, DEFAULT_STORAGE_CONNECTION)
# SCOPE: Global application configuration
# VALIDATION: Pydantic v2 validation
# PATTERNS: Composition, factory classmethod
# ENTRY_POINTS: from config import get_config
# ============================================================================

"""
Application Configuration.

Holds the handful of application-wide settings. Storage connections are not
loaded eagerly: a request may name any connection, so storage_connection()
resolves one on demand from STORAGE_CONNECTION_<NAME>_* variables.

log_level is applied to every component logger at startup
(function_app.py -> LoggerFactory.set_default_level).
"""

import os

from pydantic import BaseModel, Field, ValidationError, field_validator

from exceptions import InvalidConfigurationError
from .defaults import AppDefaults, StorageDefaults
from .storage_config import StorageConnectionConfig


class AppConfig(BaseModel):
    """
    Application configuration.
    """

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Default level for component loggers (DEBUG_LOGGING=true overrides to DEBUG)"
    )

    default_storage_connection: str = Field(
        default=StorageDefaults.DEFAULT_CONNECTION_NAME,
        description="Storage connection used when a request names none"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v

    def storage_connection(self, connection_name: str) -> StorageConnectionConfig:
        """
        Resolve a named storage connection from the environment.

        Raises:
            InvalidConfigurationError: Connection not configured or incomplete
        """
        return StorageConnectionConfig.from_environment(connection_name)

    @classmethod
    def from_environment(cls) -> 'AppConfig':
        """
        Load application config from environment.

        Raises:
            InvalidConfigurationError: A variable fails validation
        """
        try:
            return cls(
                environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
                log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
                default_storage_connection=(
                    os.environ.get("DEFAULT_STORAGE_CONNECTION", "").strip()
                    or StorageDefaults.DEFAULT_CONNECTION_NAME
                )
            )
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid application configuration: {e}") from e

    def debug_dict(self) -> dict:
        return {
            "environment": self.environment,
            "log_level": self.log_level,
            "default_storage_connection": self.default_storage_connection,
        }
