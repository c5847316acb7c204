# ============================================================================
# ENVIRONMENT VARIABLE VALIDATION
# ============================================================================
# STATUS: Configuration - Startup validation with regex patterns
# PURPOSE: Validate env vars at startup to fail fast with clear error messages
# ============================================================================
"""
Environment Variable Validation Module.

Validates environment variables at startup using regex patterns to catch
configuration errors EARLY with clear, actionable error messages.

Two rule sets are checked:
    - ENV_VAR_RULES: application-wide variables (ENVIRONMENT, LOG_LEVEL, ...)
    - storage_connection_rules(name): the STORAGE_CONNECTION_<NAME>_* family
      for one named storage connection (the default connection at startup)

Usage:
    from config.env_validation import validate_environment

    # Returns list of ValidationError (empty if all valid)
    errors = validate_environment()

    for error in errors:
        print(f"{error.var_name}: {error.message}")
        print(f"  Expected: {error.expected_pattern}")
        print(f"  Fix: {error.fix_suggestion}")

Example Validations:
    - STORAGE_CONNECTION_DEFAULT_ACCOUNT_NAME must be lowercase alphanumeric (3-24 chars)
    - STORAGE_CONNECTION_DEFAULT_AUTH_MODE must be a supported auth mode
    - LOG_LEVEL must be a Python logging level name

Exports:
    ENV_VAR_RULES: Dict of application-wide validation rules
    EnvVarRule: Dataclass for one rule
    ValidationError: Dataclass for validation errors
    storage_connection_rules: Rules for one named storage connection
    validate_environment: Main validation function
    validate_single_var: Validate one variable
    get_validation_summary: Summary dict for diagnostics
    log_validation_results: Log errors/warnings, return overall pass/fail
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any

from .defaults import AppDefaults, StorageDefaults
from .storage_config import storage_env_prefix


# ============================================================================
# VALIDATION ERROR
# ============================================================================

@dataclass
class ValidationError:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token", "connection_string"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        # Show first 20 chars for long values
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
        allow_empty: Allow empty string (default False)
        default_value: Default value used if not set (for warning messages)
        warn_on_default: Emit warning when using default value
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str
    allow_empty: bool = False
    default_value: Optional[str] = None
    warn_on_default: bool = True


# ============================================================================
# VALIDATION RULES - Single source of truth for env var formats
# ============================================================================

# Common regex patterns (reusable)
_AZURE_STORAGE_ACCOUNT = re.compile(r"^[a-z0-9]{3,24}$")
_CONNECTION_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,62}$")
_ENVIRONMENT = re.compile(r"^(dev|test|qa|uat|staging|prod|production)$", re.IGNORECASE)
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)
_LOG_LEVEL = re.compile(r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", re.IGNORECASE)
_AUTH_MODE = re.compile(r"^(connection_string|account_key|client_secret|managed_identity|default)$")
_CONNECTION_STRING = re.compile(r"^(?=.*(AccountName=|BlobEndpoint=|UseDevelopmentStorage=true)).+$")
_GUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_ENDPOINT_SUFFIX = re.compile(r"^[a-z0-9][a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE)
_PROTOCOL = re.compile(r"^https?$")
_ANY_NON_EMPTY = re.compile(r"^.+$")


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # APPLICATION
    # =========================================================================
    "ENVIRONMENT": EnvVarRule(
        pattern=_ENVIRONMENT,
        pattern_description="One of dev, test, qa, uat, staging, prod, production",
        required=False,
        fix_suggestion="Set the deployment environment name",
        example="dev",
        default_value=AppDefaults.ENVIRONMENT,
    ),

    "DEBUG_LOGGING": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Use 'true' to emit DEBUG-level logs",
        example="false",
        default_value="false",
        warn_on_default=False,
    ),

    "LOG_LEVEL": EnvVarRule(
        pattern=_LOG_LEVEL,
        pattern_description="Python logging level name",
        required=False,
        fix_suggestion="Use DEBUG, INFO, WARNING, ERROR or CRITICAL",
        example="INFO",
        default_value=AppDefaults.LOG_LEVEL,
        warn_on_default=False,
    ),

    # =========================================================================
    # STORAGE CONNECTIONS
    # =========================================================================
    "DEFAULT_STORAGE_CONNECTION": EnvVarRule(
        pattern=_CONNECTION_NAME,
        pattern_description="Connection name (letters, numbers, underscore, hyphen, dot)",
        required=False,
        fix_suggestion="Name the storage connection used when a request does not specify one",
        example="default",
        default_value=StorageDefaults.DEFAULT_CONNECTION_NAME,
    ),
}


def storage_connection_rules(connection_name: str) -> Dict[str, EnvVarRule]:
    """
    Build validation rules for one named storage connection.

    Only format is checked here; which fields are required depends on the
    auth mode and is enforced by StorageConnectionConfig.from_environment().

    Args:
        connection_name: Logical connection name (e.g. "default", "archive")

    Returns:
        Dict of STORAGE_CONNECTION_<NAME>_* variable names to rules
    """
    prefix = storage_env_prefix(connection_name)
    return {
        f"{prefix}AUTH_MODE": EnvVarRule(
            pattern=_AUTH_MODE,
            pattern_description="connection_string, account_key, client_secret, managed_identity or default",
            required=False,
            fix_suggestion="Pick a supported auth mode (inferred from the fields set when omitted)",
            example="managed_identity",
        ),
        f"{prefix}CONNECTION_STRING": EnvVarRule(
            pattern=_CONNECTION_STRING,
            pattern_description="Azure Storage connection string containing AccountName= or BlobEndpoint=",
            required=False,
            fix_suggestion="Copy the connection string from the storage account's Access keys blade",
            example="DefaultEndpointsProtocol=https;AccountName=myaccount;AccountKey=...;EndpointSuffix=core.windows.net",
        ),
        f"{prefix}ACCOUNT_NAME": EnvVarRule(
            pattern=_AZURE_STORAGE_ACCOUNT,
            pattern_description="Lowercase alphanumeric, 3-24 characters",
            required=False,
            fix_suggestion="Use the storage account name only (not the URL)",
            example="mystorageaccount",
        ),
        f"{prefix}ACCOUNT_KEY": EnvVarRule(
            pattern=_ANY_NON_EMPTY,
            pattern_description="Base64 shared key",
            required=False,
            fix_suggestion="Copy key1 or key2 from the storage account",
            example="<base64 key>",
        ),
        f"{prefix}CLIENT_ID": EnvVarRule(
            pattern=_GUID,
            pattern_description="GUID",
            required=False,
            fix_suggestion="Use the application (client) ID of the service principal or managed identity",
            example="00000000-0000-0000-0000-000000000000",
        ),
        f"{prefix}TENANT_ID": EnvVarRule(
            pattern=_GUID,
            pattern_description="GUID",
            required=False,
            fix_suggestion="Use the directory (tenant) ID",
            example="00000000-0000-0000-0000-000000000000",
        ),
        f"{prefix}CLIENT_SECRET": EnvVarRule(
            pattern=_ANY_NON_EMPTY,
            pattern_description="Client secret value",
            required=False,
            fix_suggestion="Create a client secret for the service principal",
            example="<secret>",
        ),
        f"{prefix}ENDPOINT_SUFFIX": EnvVarRule(
            pattern=_ENDPOINT_SUFFIX,
            pattern_description="DNS suffix (e.g. core.windows.net, core.usgovcloudapi.net)",
            required=False,
            fix_suggestion="Use the storage endpoint suffix of your Azure cloud",
            example="core.windows.net",
            default_value=StorageDefaults.ENDPOINT_SUFFIX,
            warn_on_default=False,
        ),
        f"{prefix}PROTOCOL": EnvVarRule(
            pattern=_PROTOCOL,
            pattern_description="http or https",
            required=False,
            fix_suggestion="Use https (http only for local emulators)",
            example="https",
            default_value=StorageDefaults.PROTOCOL,
            warn_on_default=False,
        ),
    }


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_single_var(
    var_name: str,
    rule: EnvVarRule,
    include_warnings: bool = True
) -> Optional[ValidationError]:
    """
    Validate a single environment variable against its rule.

    Args:
        var_name: Environment variable name
        rule: Validation rule to apply
        include_warnings: Whether to return warnings for vars using defaults

    Returns:
        ValidationError if validation fails or warning if using default, None if passes
    """
    value = os.environ.get(var_name)

    # Check required
    if rule.required and (value is None or (not rule.allow_empty and value == "")):
        return ValidationError(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    # If not required and not set, emit warning if warn_on_default is True
    if value is None or value == "":
        if include_warnings and not rule.required and rule.warn_on_default and rule.default_value is not None:
            return ValidationError(
                var_name=var_name,
                message="Not set, using default value",
                current_value=None,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"Set explicitly or accept default. {rule.fix_suggestion}",
                severity="warning",
            )
        return None

    # Validate pattern
    if not rule.pattern.match(value):
        return ValidationError(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    return None


def _default_rules() -> Dict[str, EnvVarRule]:
    """Application rules plus the rules of the default storage connection."""
    rules = dict(ENV_VAR_RULES)
    default_name = os.environ.get("DEFAULT_STORAGE_CONNECTION") or StorageDefaults.DEFAULT_CONNECTION_NAME
    rules.update(storage_connection_rules(default_name))
    return rules


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[ValidationError]:
    """
    Validate all environment variables against their rules.

    Args:
        rules: Optional custom rules dict (defaults to ENV_VAR_RULES plus the
            default storage connection's rules)
        include_warnings: Whether to include warnings for vars using defaults

    Returns:
        List of ValidationError objects (errors and optionally warnings)
    """
    if rules is None:
        rules = _default_rules()

    results = []
    for var_name, rule in rules.items():
        result = validate_single_var(var_name, rule, include_warnings=include_warnings)
        if result:
            results.append(result)

    return results


def get_validation_summary(include_warnings: bool = True) -> Dict[str, Any]:
    """
    Get a summary of environment variable validation status.

    Args:
        include_warnings: Whether to include warnings in the summary

    Returns:
        Dict with validation summary suitable for a diagnostics endpoint
    """
    rules = _default_rules()
    all_results = validate_environment(rules, include_warnings=include_warnings)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    set_vars = [name for name in rules if os.environ.get(name)]

    return {
        "valid": len(errors) == 0,
        "error_count": len(errors),
        "warning_count": len(warnings),
        "checked_vars": {
            "total": len(rules),
            "set": len(set_vars),
            "using_defaults": len(rules) - len(set_vars),
        },
        "errors": [e.to_dict() for e in errors],
        "warnings": [w.to_dict() for w in warnings],
    }


def log_validation_results(logger=None) -> bool:
    """
    Log validation results at appropriate levels.

    Logs errors at ERROR level, warnings at WARNING level.
    Returns True if no errors (warnings are OK).

    Args:
        logger: Optional logger instance (uses print if None)

    Returns:
        True if no errors, False if there are errors
    """
    all_results = validate_environment(include_warnings=True)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    def _log(level: str, msg: str):
        if logger:
            getattr(logger, level.lower())(msg)
        else:
            print(f"[{level.upper()}] {msg}")

    for error in errors:
        _log("error", f"ENV VAR ERROR: {error.var_name} - {error.message}")
        _log("error", f"  Expected: {error.expected_pattern}")
        _log("error", f"  Fix: {error.fix_suggestion}")

    if warnings:
        _log("warning", f"ENV VARS: {len(warnings)} optional variables using defaults:")
        for warning in warnings:
            default_val = warning.expected_pattern.replace("Default: ", "")
            _log("warning", f"  {warning.var_name} → {default_val}")

    if errors:
        _log("error", f"STARTUP_FAILED: {len(errors)} environment variable errors")
        return False
    if warnings:
        _log("info", f"Environment validation passed ({len(warnings)} vars using defaults)")
    else:
        _log("info", "Environment validation passed (all vars explicitly set)")
    return True


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "ValidationError",
    "storage_connection_rules",
    "validate_environment",
    "validate_single_var",
    "get_validation_summary",
    "log_validation_results",
]
