"""
ERC-721 non-fungible token ledger.

Follows OpenZeppelin semantics. Transfers of tokens the caller does not own
(or is not approved for) raise ``AssetUnavailableError``. Safe transfers to
contracts require an ``on_erc721_received`` hook on the receiver.
"""

from typing import Any, Dict

from ..chain import ZERO_ADDRESS, Chain, Contract, external, require, to_address
from ..errors import AssetUnavailableError, ContractRevert, UnsupportedAssetError

# bytes4(keccak256("onERC721Received(address,address,uint256,bytes)"))
ERC721_RECEIVED = bytes.fromhex("150b7a02")


class ERC721Token(Contract):
    """Non-fungible token ledger."""

    def __init__(self, chain: Chain, address: str, name: str, symbol: str):
        super().__init__(chain, address)
        self._name = name
        self._symbol = symbol
        self._owners: Dict[int, str] = {}
        self._balances: Dict[str, int] = {}
        self._token_approvals: Dict[int, str] = {}
        self._operator_approvals: Dict[str, Dict[str, bool]] = {}

    # Views

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def balance_of(self, owner: Any) -> int:
        owner = to_address(owner)
        require(owner != ZERO_ADDRESS, "ERC721: address zero is not a valid owner")
        return self._balances.get(owner, 0)

    def owner_of(self, token_id: int) -> str:
        """Current owner of ``token_id``; reverts for unminted ids."""
        owner = self._owners.get(token_id)
        require(owner is not None, "ERC721: invalid token ID", AssetUnavailableError)
        return owner

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def get_approved(self, token_id: int) -> str:
        self.owner_of(token_id)
        return self._token_approvals.get(token_id, ZERO_ADDRESS)

    def is_approved_for_all(self, owner: Any, operator: Any) -> bool:
        return self._operator_approvals.get(to_address(owner), {}).get(
            to_address(operator), False
        )

    # Entry points

    @external
    def approve(self, to: Any, token_id: int) -> None:
        to = to_address(to)
        owner = self.owner_of(token_id)
        require(to != owner, "ERC721: approval to current owner")
        require(
            self.msg_sender == owner or self.is_approved_for_all(owner, self.msg_sender),
            "ERC721: approve caller is not token owner or approved for all",
        )
        self._approve(to, token_id)

    @external
    def set_approval_for_all(self, operator: Any, approved: bool) -> None:
        operator = to_address(operator)
        require(operator != self.msg_sender, "ERC721: approve to caller")
        self._operator_approvals.setdefault(self.msg_sender, {})[operator] = approved
        self.emit(
            "ApprovalForAll", owner=self.msg_sender, operator=operator, approved=approved
        )

    @external
    def transfer_from(self, from_: Any, to: Any, token_id: int) -> None:
        require(
            self._is_approved_or_owner(self.msg_sender, token_id),
            "ERC721: caller is not token owner or approved",
            AssetUnavailableError,
        )
        self._transfer(to_address(from_), to_address(to), token_id)

    @external
    def safe_transfer_from(
        self, from_: Any, to: Any, token_id: int, data: bytes = b""
    ) -> None:
        require(
            self._is_approved_or_owner(self.msg_sender, token_id),
            "ERC721: caller is not token owner or approved",
            AssetUnavailableError,
        )
        from_ = to_address(from_)
        to = to_address(to)
        self._transfer(from_, to, token_id)
        self._check_on_received(self.msg_sender, from_, to, token_id, data)

    @external
    def mint(self, to: Any, token_id: int) -> None:
        """Mint a new token; open to anyone, as on test networks."""
        self._mint(to_address(to), token_id)

    # Internals

    def _is_approved_or_owner(self, spender: str, token_id: int) -> bool:
        if not self.exists(token_id):
            return False
        owner = self._owners[token_id]
        return (
            spender == owner
            or self.is_approved_for_all(owner, spender)
            or self._token_approvals.get(token_id) == spender
        )

    def _approve(self, to: str, token_id: int) -> None:
        self._token_approvals[token_id] = to
        self.emit("Approval", owner=self.owner_of(token_id), approved=to, tokenId=token_id)

    def _transfer(self, from_: str, to: str, token_id: int) -> None:
        require(
            self.owner_of(token_id) == from_,
            "ERC721: transfer from incorrect owner",
            AssetUnavailableError,
        )
        require(to != ZERO_ADDRESS, "ERC721: transfer to the zero address")

        self._token_approvals.pop(token_id, None)
        self._balances[from_] -= 1
        self._balances[to] = self._balances.get(to, 0) + 1
        self._owners[token_id] = to

        self.emit("Transfer", **{"from": from_, "to": to, "tokenId": token_id})

    def _mint(self, to: str, token_id: int) -> None:
        require(to != ZERO_ADDRESS, "ERC721: mint to the zero address")
        require(token_id not in self._owners, "ERC721: token already minted")

        self._balances[to] = self._balances.get(to, 0) + 1
        self._owners[token_id] = to

        self.emit("Transfer", **{"from": ZERO_ADDRESS, "to": to, "tokenId": token_id})

    def _check_on_received(
        self, operator: str, from_: str, to: str, token_id: int, data: bytes
    ) -> None:
        if not self.chain.is_contract(to):
            return

        receiver = self.chain.get_contract(to)
        hook = getattr(receiver, "on_erc721_received", None)
        if hook is None:
            raise UnsupportedAssetError(
                "ERC721: transfer to non ERC721Receiver implementer"
            )

        try:
            response = hook(operator, from_, token_id, data)
        except ContractRevert as exc:
            raise UnsupportedAssetError(
                exc.reason or "ERC721: transfer to non ERC721Receiver implementer"
            ) from exc
        require(
            response == ERC721_RECEIVED,
            "ERC721: transfer to non ERC721Receiver implementer",
            UnsupportedAssetError,
        )
