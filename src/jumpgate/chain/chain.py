"""
In-process ledger for the Jumpgate execution environment.

The chain owns native balances and deployed contracts and executes every
top-level call as an atomic transaction: world state is captured first and
restored if anything in the call tree raises. Transactions are serialised
behind a re-entrant lock, so calls never interleave.
"""

import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Type

from ..errors import AssetUnavailableError, ContractRevert, ValidationError
from ..logging import LogContext, get_logger
from .accounts import Accounts
from .contract import Contract
from .types import (
    MAX_CALL_DEPTH,
    Event,
    EventLog,
    ExecutionContext,
    ExecutionState,
    TransactionReceipt,
    keccak,
    to_address,
)

logger = get_logger(__name__)

ETHER = 10**18


class Chain:
    """Local chain with automatic mining: one block per transaction."""

    def __init__(
        self,
        chain_id: int = 1,
        accounts: int = 10,
        initial_balance: int = 100 * ETHER,
    ):
        self.id = chain_id
        self.block_number = 0
        self.history: List[TransactionReceipt] = []

        self._balances: Dict[str, int] = {}
        self._contracts: Dict[str, Contract] = {}
        self._nonces: Dict[str, int] = {}
        self._stack: List[ExecutionContext] = []
        self._pending_events: List[Event] = []
        self._snapshots: Dict[int, Dict[str, Any]] = {}
        self._next_snapshot_id = 0
        self._lock = threading.RLock()

        self.accounts = Accounts(self)
        for _ in range(accounts):
            self.accounts.add(initial_balance)

    # ------------------------------------------------------------------
    # State queries

    @property
    def context(self) -> ExecutionContext:
        """Context of the message call currently executing."""
        if not self._stack:
            raise ValidationError("No contract call is executing")
        return self._stack[-1]

    @property
    def in_transaction(self) -> bool:
        """Whether a transaction is executing on this thread."""
        return bool(self._stack)

    def get_balance(self, address: Any) -> int:
        """Native-currency balance of an address."""
        return self._balances.get(to_address(address), 0)

    def get_nonce(self, address: Any) -> int:
        """Number of transactions sent (or contracts created) by an address."""
        return self._nonces.get(to_address(address), 0)

    def is_contract(self, address: Any) -> bool:
        """Whether code is deployed at an address."""
        return to_address(address) in self._contracts

    def get_contract(self, address: Any, expected: Optional[Type[Contract]] = None) -> Contract:
        """Resolve the contract deployed at ``address``.

        Calling into an address without code reverts, as a high-level call
        would on an EVM chain.
        """
        contract = self._contracts.get(to_address(address))
        if contract is None:
            raise ContractRevert("call to non-contract address")
        if expected is not None and not isinstance(contract, expected):
            raise ContractRevert(
                f"contract at {contract.address} is not a {expected.__name__}"
            )
        return contract

    # ------------------------------------------------------------------
    # Transactions

    def dispatch(
        self,
        contract: Contract,
        fn: Callable,
        args: Tuple,
        kwargs: Dict[str, Any],
        sender: Any = None,
        value: int = 0,
        payable: bool = False,
    ) -> Any:
        """Run an external entry point as a transaction or a nested call."""
        with self._lock:
            if self._stack:
                return self._message_call(
                    contract, fn, args, kwargs, self._stack[-1].contract, value, payable
                )

            if sender is None:
                raise ValidationError(
                    f"sender is required to call {fn.__name__}", field="sender"
                )
            sender = to_address(sender)

            return self._transact(
                sender,
                contract.address,
                fn.__name__,
                value,
                lambda: self._message_call(
                    contract, fn, args, kwargs, sender, value, payable
                ),
            )

    def deploy(
        self,
        contract_class: Type[Contract],
        args: Tuple,
        kwargs: Dict[str, Any],
        sender: Any = None,
        value: int = 0,
    ) -> Contract:
        """Deploy ``contract_class`` and return the new instance."""
        with self._lock:
            if self._stack:
                return self._create(contract_class, args, kwargs, self._stack[-1].contract, value)

            if sender is None:
                raise ValidationError("sender is required to deploy", field="sender")
            sender = to_address(sender)

            created: List[Contract] = []

            def create() -> Contract:
                instance = self._create(contract_class, args, kwargs, sender, value)
                created.append(instance)
                return instance

            receipt = self._transact(sender, None, "constructor", value, create)
            instance = created[0]
            receipt.contract_address = instance.address
            instance.tx = receipt
            return instance

    def transfer(self, sender: Any, to: Any, amount: int) -> TransactionReceipt:
        """Native-currency transfer submitted by an externally owned account."""
        with self._lock:
            sender = to_address(sender)
            to = to_address(to)
            return self._transact(
                sender, to, "transfer", amount,
                lambda: self.send_value(sender, to, amount),
            )

    def _transact(
        self,
        sender: str,
        receiver: Optional[str],
        function: str,
        value: int,
        call: Callable[[], Any],
    ) -> TransactionReceipt:
        """Execute ``call`` atomically and record its receipt."""
        if value < 0:
            raise ValidationError("value must be non-negative", field="value", value=value)

        nonce = self._nonces.get(sender, 0)
        self.block_number += 1
        receipt = TransactionReceipt(
            tx_hash=self._tx_hash(sender, nonce),
            sender=sender,
            receiver=receiver,
            function=function,
            value=value,
            block_number=self.block_number,
        )
        log_context = LogContext(
            component="chain",
            operation=function,
            chain_id=self.id,
            tx_hash=receipt.tx_hash,
            contract=receiver,
        )

        snapshot = self._capture_state()
        self._pending_events = []
        try:
            result = call()
        except ContractRevert as exc:
            self._restore_state(snapshot)
            receipt.status = ExecutionState.REVERTED
            receipt.revert_reason = exc.reason
            exc.receipt = receipt
            logger.warning(
                f"Transaction {receipt.tx_hash} ({function}) reverted: {exc.reason!r}",
                context=log_context,
            )
            raise
        except Exception:
            self._restore_state(snapshot)
            receipt.status = ExecutionState.REVERTED
            logger.exception(
                f"Transaction {receipt.tx_hash} ({function}) failed", context=log_context
            )
            raise
        else:
            receipt.status = ExecutionState.SUCCESS
            receipt.return_value = result
            receipt.events = EventLog(self._pending_events)
            logger.debug(
                f"Transaction {receipt.tx_hash} ({function}) succeeded "
                f"with {len(receipt.events)} events",
                context=log_context,
            )
            return receipt
        finally:
            self._pending_events = []
            self._stack.clear()
            # Nonces advance even when the transaction reverts
            self._nonces[sender] = nonce + 1
            self.history.append(receipt)

    def _message_call(
        self,
        contract: Contract,
        fn: Callable,
        args: Tuple,
        kwargs: Dict[str, Any],
        caller: str,
        value: int,
        payable: bool,
    ) -> Any:
        if len(self._stack) >= MAX_CALL_DEPTH:
            raise ContractRevert("max call depth exceeded")
        if self._contracts.get(contract.address) is not contract:
            raise ContractRevert("call to non-contract address")
        if value and not payable:
            # Solidity rejects value sent to non-payable functions without a reason
            raise ContractRevert("")

        self._move_value(caller, contract.address, value)
        self._stack.append(
            ExecutionContext(
                contract=contract.address,
                caller=caller,
                value=value,
                function=fn.__name__,
                call_depth=len(self._stack),
            )
        )
        try:
            return fn(contract, *args, **kwargs)
        finally:
            self._stack.pop()

    def _create(
        self,
        contract_class: Type[Contract],
        args: Tuple,
        kwargs: Dict[str, Any],
        creator: str,
        value: int,
    ) -> Contract:
        if value and not contract_class.payable_constructor:
            raise ContractRevert("")

        address = self._contract_address(creator)
        self._nonces[creator] = self._nonces.get(creator, 0) + 1

        self._move_value(creator, address, value)
        self._stack.append(
            ExecutionContext(
                contract=address,
                caller=creator,
                value=value,
                function="constructor",
                call_depth=len(self._stack),
            )
        )
        try:
            instance = contract_class(self, address, *args, **kwargs)
        finally:
            self._stack.pop()

        self._contracts[address] = instance
        return instance

    # ------------------------------------------------------------------
    # Native currency and events

    def send_value(self, sender: Any, to: Any, amount: int) -> None:
        """Deliver native currency, invoking the recipient's ``receive`` if it is a contract.

        Contracts without a payable ``receive`` entry point reject the value.
        """
        sender = to_address(sender)
        to = to_address(to)

        target = self._contracts.get(to)
        if target is None:
            self._move_value(sender, to, amount)
            return

        receive = getattr(type(target), "receive", None)
        if receive is None or not getattr(receive, "payable", False):
            raise ContractRevert("")

        self._message_call(target, receive.__wrapped__, (), {}, sender, amount, True)

    def self_destruct(self, contract: Contract, beneficiary: Any) -> None:
        """Remove ``contract`` and force its balance onto ``beneficiary``.

        No code runs at the beneficiary, so this can credit contracts that
        otherwise refuse native currency.
        """
        beneficiary = to_address(beneficiary)
        balance = self._balances.pop(contract.address, 0)
        del self._contracts[contract.address]
        if beneficiary != contract.address:
            self._balances[beneficiary] = self._balances.get(beneficiary, 0) + balance

    def mint_native(self, address: Any, amount: int) -> None:
        """Credit native currency out of thin air (genesis allocations, test setup)."""
        address = to_address(address)
        self._balances[address] = self._balances.get(address, 0) + amount

    def emit(self, address: str, name: str, args: Dict[str, Any]) -> None:
        """Record an event for the executing transaction."""
        self._pending_events.append(
            Event(
                name=name,
                address=address,
                args=dict(args),
                log_index=len(self._pending_events),
            )
        )

    def _move_value(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise ContractRevert("negative value transfer")
        if amount == 0:
            return
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise AssetUnavailableError("insufficient balance for transfer")
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount

    # ------------------------------------------------------------------
    # Snapshots

    def _capture_state(self) -> Dict[str, Any]:
        return {
            "balances": dict(self._balances),
            "nonces": dict(self._nonces),
            "contracts": dict(self._contracts),
            "storage": {
                address: contract.export_state()
                for address, contract in self._contracts.items()
            },
        }

    def _restore_state(self, state: Dict[str, Any]) -> None:
        self._balances = dict(state["balances"])
        self._nonces = dict(state["nonces"])
        self._contracts = dict(state["contracts"])
        for address, storage in state["storage"].items():
            self._contracts[address].restore_state(storage)

    def snapshot(self) -> int:
        """Capture the full chain state and return a snapshot id."""
        with self._lock:
            snapshot_id = self._next_snapshot_id
            self._next_snapshot_id += 1
            state = self._capture_state()
            state["block_number"] = self.block_number
            state["history"] = len(self.history)
            self._snapshots[snapshot_id] = state
            return snapshot_id

    def revert_to(self, snapshot_id: int) -> None:
        """Restore the chain to a snapshot taken earlier."""
        with self._lock:
            if snapshot_id not in self._snapshots:
                raise ValidationError(
                    f"Unknown snapshot {snapshot_id}", field="snapshot_id", value=snapshot_id
                )
            state = self._snapshots[snapshot_id]
            self._restore_state(state)
            self.block_number = state["block_number"]
            del self.history[state["history"]:]

    @contextmanager
    def isolate(self) -> Iterator["Chain"]:
        """Undo everything done inside the block."""
        snapshot_id = self.snapshot()
        try:
            yield self
        finally:
            self.revert_to(snapshot_id)
            del self._snapshots[snapshot_id]

    # ------------------------------------------------------------------
    # Address derivation

    def _contract_address(self, creator: str) -> str:
        nonce = self._nonces.get(creator, 0)
        digest = keccak(bytes.fromhex(creator[2:]) + nonce.to_bytes(32, "big"))
        return to_address(digest[-20:])

    def _tx_hash(self, sender: str, nonce: int) -> str:
        digest = keccak(
            bytes.fromhex(sender[2:])
            + nonce.to_bytes(32, "big")
            + self.id.to_bytes(32, "big")
            + self.block_number.to_bytes(32, "big")
        )
        return "0x" + digest.hex()

    def __repr__(self) -> str:
        return f"<Chain id={self.id} block={self.block_number}>"
