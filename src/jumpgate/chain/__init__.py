"""
Jumpgate execution environment.

A local, transactional ledger on which the vault, the token ledgers and the
bridge model are deployed:
- Accounts backed by secp256k1 keys
- Contracts with external entry points and views
- Atomic transactions with full rollback on revert
- Events and receipts
"""

from .accounts import Account, Accounts, address_from_private_key
from .chain import ETHER, Chain
from .contract import Contract, external, require
from .types import (
    MAX_CALL_DEPTH,
    ZERO_ADDRESS,
    Event,
    EventLog,
    ExecutionContext,
    ExecutionState,
    TransactionReceipt,
    keccak,
    to_address,
)

__all__ = [
    # Ledger
    "Chain",
    "ETHER",
    # Accounts
    "Account",
    "Accounts",
    "address_from_private_key",
    # Contracts
    "Contract",
    "external",
    "require",
    # Types
    "Event",
    "EventLog",
    "ExecutionContext",
    "ExecutionState",
    "TransactionReceipt",
    "MAX_CALL_DEPTH",
    "ZERO_ADDRESS",
    "keccak",
    "to_address",
]
