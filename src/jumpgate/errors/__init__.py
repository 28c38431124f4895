"""Jumpgate Error Handling.

This module provides the exception hierarchy shared by the execution
environment, the token ledgers, the bridge model and the vault.
"""

from .exceptions import (
    AccessControlError,
    AmountTooSmallError,
    AssetUnavailableError,
    ConfigurationError,
    ContractRevert,
    EncodingError,
    ErrorCategory,
    JumpgateError,
    UnsupportedAssetError,
    ValidationError,
)

__all__ = [
    "JumpgateError",
    "ErrorCategory",
    "ValidationError",
    "ConfigurationError",
    "EncodingError",
    # Reverts
    "ContractRevert",
    "AccessControlError",
    "AmountTooSmallError",
    "AssetUnavailableError",
    "UnsupportedAssetError",
]
