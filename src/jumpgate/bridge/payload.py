"""
Wormhole token-bridge wire format.

A token transfer is published as a 133-byte big-endian payload:

    offset  size  field
    0       1     payload id (1 = transfer)
    1       32    amount, normalised to at most 8 decimals
    33      32    token address, left-padded
    65      2     token chain id
    67      32    recipient, chain-specific 32-byte encoding
    99      2     recipient chain id
    101     32    arbiter fee, normalised like the amount
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..constants import WORMHOLE_MAX_DECIMALS
from ..errors import EncodingError

PAYLOAD_ID_TRANSFER = 1

TRANSFER_PAYLOAD_LENGTH = 133

_UINT256_MAX = 2**256 - 1
_UINT16_MAX = 2**16 - 1


def normalize_amount(amount: int, decimals: int) -> int:
    """Truncate ``amount`` to Wormhole's 8-decimal precision."""
    if decimals > WORMHOLE_MAX_DECIMALS:
        return amount // 10 ** (decimals - WORMHOLE_MAX_DECIMALS)
    return amount


def denormalize_amount(amount: int, decimals: int) -> int:
    """Scale a normalised amount back to the token's own decimals."""
    if decimals > WORMHOLE_MAX_DECIMALS:
        return amount * 10 ** (decimals - WORMHOLE_MAX_DECIMALS)
    return amount


@dataclass(frozen=True)
class TransferPayload:
    """Decoded token transfer message."""

    amount: int
    token_address: bytes
    token_chain: int
    to: bytes
    to_chain: int
    fee: int

    def __post_init__(self):
        for name in ("amount", "fee"):
            value = getattr(self, name)
            if not 0 <= value <= _UINT256_MAX:
                raise EncodingError(f"{name} {value} does not fit in uint256")
        for name in ("token_chain", "to_chain"):
            value = getattr(self, name)
            if not 0 <= value <= _UINT16_MAX:
                raise EncodingError(f"{name} {value} does not fit in uint16")
        for name in ("token_address", "to"):
            if len(getattr(self, name)) != 32:
                raise EncodingError(f"{name} must be 32 bytes")

    def encode(self) -> bytes:
        """Serialise to the 133-byte wire format."""
        return b"".join(
            [
                PAYLOAD_ID_TRANSFER.to_bytes(1, "big"),
                self.amount.to_bytes(32, "big"),
                bytes(self.token_address),
                self.token_chain.to_bytes(2, "big"),
                bytes(self.to),
                self.to_chain.to_bytes(2, "big"),
                self.fee.to_bytes(32, "big"),
            ]
        )

    @classmethod
    def decode(cls, data: bytes) -> "TransferPayload":
        """Parse the 133-byte wire format."""
        if len(data) != TRANSFER_PAYLOAD_LENGTH:
            raise EncodingError(
                f"Transfer payload must be {TRANSFER_PAYLOAD_LENGTH} bytes, got {len(data)}",
                encoding="wormhole",
            )
        if data[0] != PAYLOAD_ID_TRANSFER:
            raise EncodingError(
                f"Unexpected payload id {data[0]}", encoding="wormhole"
            )

        return cls(
            amount=int.from_bytes(data[1:33], "big"),
            token_address=bytes(data[33:65]),
            token_chain=int.from_bytes(data[65:67], "big"),
            to=bytes(data[67:99]),
            to_chain=int.from_bytes(data[99:101], "big"),
            fee=int.from_bytes(data[101:133], "big"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "payload_id": PAYLOAD_ID_TRANSFER,
            "amount": self.amount,
            "token_address": "0x" + self.token_address.hex(),
            "token_chain": self.token_chain,
            "to": "0x" + self.to.hex(),
            "to_chain": self.to_chain,
            "fee": self.fee,
        }
