"""
Storage Authentication Module.

Resolves the credential used by each named storage connection.

Auth modes:
    connection_string: credential embedded in the connection string
    account_key:       AzureNamedKeyCredential
    client_secret:     ClientSecretCredential (service principal)
    managed_identity:  ManagedIdentityCredential (system or user-assigned)
    default:           shared DefaultAzureCredential

Usage:
    from infrastructure.auth import build_storage_credential
    credential = build_storage_credential(config)
"""

from .credential import get_azure_credential, build_storage_credential

__all__ = [
    "get_azure_credential",
    "build_storage_credential",
]
