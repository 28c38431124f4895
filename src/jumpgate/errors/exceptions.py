"""Exception hierarchy for Jumpgate.

Two families share the ``JumpgateError`` base:

- tooling errors raised before anything reaches the chain (bad
  configuration, malformed arguments, undecodable addresses or payloads)
- contract reverts raised while a transaction executes; the chain rolls the
  world state back and attaches the failed receipt before re-raising
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """What kind of failure an error reports."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    ENCODING = "encoding"
    EXECUTION = "execution"
    ACCESS_CONTROL = "access_control"
    ADMISSION = "admission"
    ASSET = "asset"
    SYSTEM = "system"


def _describe(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)


class JumpgateError(Exception):
    """Base exception for all Jumpgate errors."""

    category = ErrorCategory.SYSTEM

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def details(self) -> Dict[str, Any]:
        """Fields specific to the error type."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": type(self).__name__,
            "category": self.category.value,
            "message": self.message,
            "cause": _describe(self.cause),
        }
        data.update(self.details())
        return data

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message}"


class ValidationError(JumpgateError):
    """An argument does not have the required type or shape."""

    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        expected: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.field = field
        self.value = value
        self.expected = expected

    def details(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "value": _describe(self.value),
            "expected": _describe(self.expected),
        }


class ConfigurationError(JumpgateError):
    """A vault configuration cannot be loaded or is invalid."""

    category = ErrorCategory.CONFIGURATION

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Any = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.config_key = config_key
        self.config_value = config_value

    def details(self) -> Dict[str, Any]:
        return {"config_key": self.config_key, "config_value": _describe(self.config_value)}


class EncodingError(JumpgateError):
    """An address or payload does not decode."""

    category = ErrorCategory.ENCODING

    def __init__(
        self,
        message: str,
        encoding: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause=cause)
        self.encoding = encoding

    def details(self) -> Dict[str, Any]:
        return {"encoding": self.encoding}


class ContractRevert(JumpgateError):
    """A contract call reverted.

    ``reason`` is the exact revert string, empty for reverts without one.
    ``receipt`` is filled in by the chain once the transaction has been
    rolled back; it stays ``None`` for reverts that never reached a chain.
    """

    category = ErrorCategory.EXECUTION

    def __init__(self, reason: str = ""):
        super().__init__(reason or "execution reverted")
        self.reason = reason
        self.receipt = None

    def details(self) -> Dict[str, Any]:
        receipt = self.receipt
        return {
            "reason": self.reason,
            "tx_hash": receipt.tx_hash if receipt else None,
            "sender": receipt.sender if receipt else None,
            "function": receipt.function if receipt else None,
        }


class AccessControlError(ContractRevert):
    """Owner-gated entry point called by someone other than the owner."""

    category = ErrorCategory.ACCESS_CONTROL


class AmountTooSmallError(ContractRevert):
    """Bridging refused because the balance is below the dust cutoff."""

    category = ErrorCategory.ADMISSION


class AssetUnavailableError(ContractRevert):
    """The ledger does not hold the requested balance or token."""

    category = ErrorCategory.ASSET


class UnsupportedAssetError(ContractRevert):
    """The receiving contract cannot accept this asset class."""

    category = ErrorCategory.ASSET
