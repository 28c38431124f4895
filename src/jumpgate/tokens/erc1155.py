"""
ERC-1155 multi-token ledger.

Safe transfers are the only transfers the standard defines, so every
transfer to a contract requires the receiver to implement
``on_erc1155_received`` (or ``on_erc1155_batch_received``). Receivers
without the hook reject the asset class with ``UnsupportedAssetError``.
"""

from typing import Any, Dict, List, Sequence

from ..chain import ZERO_ADDRESS, Chain, Contract, external, require, to_address
from ..errors import AssetUnavailableError, ContractRevert, UnsupportedAssetError

# bytes4(keccak256("onERC1155Received(address,address,uint256,uint256,bytes)"))
ERC1155_RECEIVED = bytes.fromhex("f23a6e61")
# bytes4(keccak256("onERC1155BatchReceived(address,address,uint256[],uint256[],bytes)"))
ERC1155_BATCH_RECEIVED = bytes.fromhex("bc197c81")


class ERC1155Token(Contract):
    """Multi-token ledger."""

    def __init__(self, chain: Chain, address: str, uri: str = ""):
        super().__init__(chain, address)
        self._uri = uri
        self._balances: Dict[int, Dict[str, int]] = {}
        self._operator_approvals: Dict[str, Dict[str, bool]] = {}

    # Views

    def uri(self, token_id: int) -> str:
        return self._uri

    def balance_of(self, account: Any, token_id: int) -> int:
        account = to_address(account)
        require(account != ZERO_ADDRESS, "ERC1155: address zero is not a valid owner")
        return self._balances.get(token_id, {}).get(account, 0)

    def balance_of_batch(self, accounts: Sequence[Any], token_ids: Sequence[int]) -> List[int]:
        require(
            len(accounts) == len(token_ids),
            "ERC1155: accounts and ids length mismatch",
        )
        return [
            self.balance_of(account, token_id)
            for account, token_id in zip(accounts, token_ids)
        ]

    def is_approved_for_all(self, account: Any, operator: Any) -> bool:
        return self._operator_approvals.get(to_address(account), {}).get(
            to_address(operator), False
        )

    # Entry points

    @external
    def set_approval_for_all(self, operator: Any, approved: bool) -> None:
        operator = to_address(operator)
        require(operator != self.msg_sender, "ERC1155: setting approval status for self")
        self._operator_approvals.setdefault(self.msg_sender, {})[operator] = approved
        self.emit(
            "ApprovalForAll", account=self.msg_sender, operator=operator, approved=approved
        )

    @external
    def safe_transfer_from(
        self, from_: Any, to: Any, token_id: int, amount: int, data: bytes = b""
    ) -> None:
        from_ = to_address(from_)
        to = to_address(to)
        self._check_operator(from_)
        require(to != ZERO_ADDRESS, "ERC1155: transfer to the zero address")

        self._move(from_, to, token_id, amount)
        self.emit(
            "TransferSingle",
            operator=self.msg_sender,
            **{"from": from_, "to": to, "id": token_id, "value": amount},
        )
        self._check_on_received(
            "on_erc1155_received",
            ERC1155_RECEIVED,
            (self.msg_sender, from_, token_id, amount, data),
            to,
        )

    @external
    def safe_batch_transfer_from(
        self,
        from_: Any,
        to: Any,
        token_ids: Sequence[int],
        amounts: Sequence[int],
        data: bytes = b"",
    ) -> None:
        from_ = to_address(from_)
        to = to_address(to)
        self._check_operator(from_)
        require(
            len(token_ids) == len(amounts), "ERC1155: ids and amounts length mismatch"
        )
        require(to != ZERO_ADDRESS, "ERC1155: transfer to the zero address")

        for token_id, amount in zip(token_ids, amounts):
            self._move(from_, to, token_id, amount)
        self.emit(
            "TransferBatch",
            operator=self.msg_sender,
            **{"from": from_, "to": to, "ids": list(token_ids), "values": list(amounts)},
        )
        self._check_on_received(
            "on_erc1155_batch_received",
            ERC1155_BATCH_RECEIVED,
            (self.msg_sender, from_, list(token_ids), list(amounts), data),
            to,
        )

    @external
    def mint(self, to: Any, token_id: int, amount: int, data: bytes = b"") -> None:
        """Mint ``amount`` units of ``token_id``; open to anyone, as on test networks."""
        self._mint(to_address(to), token_id, amount, data)

    # Internals

    def _mint(self, to: str, token_id: int, amount: int, data: bytes = b"") -> None:
        require(to != ZERO_ADDRESS, "ERC1155: mint to the zero address")

        holders = self._balances.setdefault(token_id, {})
        holders[to] = holders.get(to, 0) + amount
        self.emit(
            "TransferSingle",
            operator=self.msg_sender,
            **{"from": ZERO_ADDRESS, "to": to, "id": token_id, "value": amount},
        )
        self._check_on_received(
            "on_erc1155_received",
            ERC1155_RECEIVED,
            (self.msg_sender, ZERO_ADDRESS, token_id, amount, data),
            to,
        )

    def _check_operator(self, from_: str) -> None:
        require(
            from_ == self.msg_sender or self.is_approved_for_all(from_, self.msg_sender),
            "ERC1155: caller is not token owner or approved",
            AssetUnavailableError,
        )

    def _move(self, from_: str, to: str, token_id: int, amount: int) -> None:
        require(amount >= 0, "ERC1155: negative amount")
        holders = self._balances.setdefault(token_id, {})
        balance = holders.get(from_, 0)
        require(
            balance >= amount,
            "ERC1155: insufficient balance for transfer",
            AssetUnavailableError,
        )
        holders[from_] = balance - amount
        holders[to] = holders.get(to, 0) + amount

    def _check_on_received(
        self, hook_name: str, magic: bytes, args: tuple, to: str
    ) -> None:
        if not self.chain.is_contract(to):
            return

        hook = getattr(self.chain.get_contract(to), hook_name, None)
        if hook is None:
            raise UnsupportedAssetError(
                "ERC1155: transfer to non ERC1155Receiver implementer"
            )

        try:
            response = hook(*args)
        except ContractRevert as exc:
            raise UnsupportedAssetError(
                exc.reason or "ERC1155: transfer to non ERC1155Receiver implementer"
            ) from exc
        require(
            response == magic,
            "ERC1155: ERC1155Receiver rejected tokens",
            UnsupportedAssetError,
        )
