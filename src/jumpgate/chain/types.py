"""
Core data types for the Jumpgate execution environment.

Addresses, events, receipts and the per-call execution context shared by
the chain and the contracts running on it.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from web3 import Web3

from ..errors import ValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

MAX_CALL_DEPTH = 1024


def to_address(value: Any) -> str:
    """Normalise an account, contract, hex string or 20-byte value to a checksum address."""
    if hasattr(value, "address"):
        value = value.address

    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValidationError(
                "Address bytes must be 20 bytes long",
                field="address",
                value=value.hex(),
                expected="20 bytes",
            )
        value = "0x" + bytes(value).hex()

    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValidationError(
            f"Invalid address: {value!r}", field="address", value=value
        )

    return Web3.to_checksum_address(value)


def keccak(data: bytes) -> bytes:
    """Keccak-256 digest as plain bytes."""
    return bytes(Web3.keccak(data))


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, Enum):
        return value.value
    return value


class ExecutionState(Enum):
    """Transaction execution states."""

    PENDING = "pending"
    SUCCESS = "success"
    REVERTED = "reverted"


@dataclass
class ExecutionContext:
    """Execution context for a single message call."""

    contract: str
    caller: str
    value: int
    function: str
    call_depth: int = 0

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("Call value must be non-negative")

        if self.call_depth < 0:
            raise ValueError("Call depth must be non-negative")


@dataclass
class Event:
    """An event emitted by a contract during a transaction."""

    name: str
    address: str
    args: Dict[str, Any]
    log_index: int = 0

    def __getitem__(self, key: str) -> Any:
        return self.args[key]

    def __contains__(self, key: str) -> bool:
        return key in self.args

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "name": self.name,
            "address": self.address,
            "log_index": self.log_index,
            "args": {key: _jsonable(value) for key, value in self.args.items()},
        }


class EventLog:
    """Ordered events of one transaction, addressable by event name."""

    def __init__(self, events: Optional[List[Event]] = None):
        self._events: List[Event] = list(events or [])

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __contains__(self, name: str) -> bool:
        return any(event.name == name for event in self._events)

    def __getitem__(self, key: Union[int, str]) -> Event:
        """Index by position, or by name to get the first event with that name."""
        if isinstance(key, int):
            return self._events[key]

        for event in self._events:
            if event.name == key:
                return event

        raise KeyError(f"Event '{key}' was not emitted")

    def get_all(self, name: str) -> List[Event]:
        """Get every event with the given name."""
        return [event for event in self._events if event.name == name]

    def count(self, name: str) -> int:
        """Count events with the given name."""
        return len(self.get_all(name))

    def to_list(self) -> List[Dict[str, Any]]:
        """Convert to a list of dictionaries."""
        return [event.to_dict() for event in self._events]


@dataclass
class TransactionReceipt:
    """Outcome of one transaction."""

    tx_hash: str
    sender: str
    receiver: Optional[str]
    function: str
    value: int = 0
    block_number: int = 0
    status: ExecutionState = ExecutionState.PENDING
    return_value: Any = None
    revert_reason: Optional[str] = None
    contract_address: Optional[str] = None
    events: EventLog = field(default_factory=EventLog)
    timestamp: float = field(default_factory=time.time)

    @property
    def succeeded(self) -> bool:
        """Whether the transaction committed."""
        return self.status == ExecutionState.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert receipt to dictionary."""
        return {
            "tx_hash": self.tx_hash,
            "sender": self.sender,
            "receiver": self.receiver,
            "function": self.function,
            "value": self.value,
            "block_number": self.block_number,
            "status": self.status.value,
            "return_value": _jsonable(self.return_value)
            if not hasattr(self.return_value, "address")
            else self.return_value.address,
            "revert_reason": self.revert_reason,
            "contract_address": self.contract_address,
            "events": self.events.to_list(),
            "timestamp": self.timestamp,
        }
