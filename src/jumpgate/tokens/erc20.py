"""
ERC-20 fungible token ledger.

Follows OpenZeppelin semantics and revert strings. Shortfalls in balance or
allowance raise ``AssetUnavailableError`` so callers can tell them apart from
access-control and admission failures.
"""

from typing import Any, Dict

from ..chain import ZERO_ADDRESS, Chain, Contract, external, require, to_address
from ..errors import AssetUnavailableError

MAX_UINT256 = 2**256 - 1


class ERC20Token(Contract):
    """Fungible token with the full initial supply minted to the deployer."""

    def __init__(
        self,
        chain: Chain,
        address: str,
        name: str,
        symbol: str,
        decimals: int = 18,
        initial_supply: int = 0,
    ):
        super().__init__(chain, address)
        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self._total_supply = 0
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[str, Dict[str, int]] = {}

        if initial_supply:
            self._mint(self.msg_sender, initial_supply)

    # Views

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def decimals(self) -> int:
        return self._decimals

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: Any) -> int:
        """Token balance of ``account``."""
        return self._balances.get(to_address(account), 0)

    def allowance(self, owner: Any, spender: Any) -> int:
        """Remaining amount ``spender`` may pull from ``owner``."""
        return self._allowances.get(to_address(owner), {}).get(to_address(spender), 0)

    # Entry points

    @external
    def transfer(self, to: Any, amount: int) -> bool:
        self._transfer(self.msg_sender, to_address(to), amount)
        return True

    @external
    def approve(self, spender: Any, amount: int) -> bool:
        self._approve(self.msg_sender, to_address(spender), amount)
        return True

    @external
    def transfer_from(self, owner: Any, to: Any, amount: int) -> bool:
        owner = to_address(owner)
        self._spend_allowance(owner, self.msg_sender, amount)
        self._transfer(owner, to_address(to), amount)
        return True

    @external
    def increase_allowance(self, spender: Any, added: int) -> bool:
        spender = to_address(spender)
        self._approve(
            self.msg_sender, spender, self.allowance(self.msg_sender, spender) + added
        )
        return True

    @external
    def decrease_allowance(self, spender: Any, subtracted: int) -> bool:
        spender = to_address(spender)
        current = self.allowance(self.msg_sender, spender)
        require(
            current >= subtracted,
            "ERC20: decreased allowance below zero",
            AssetUnavailableError,
        )
        self._approve(self.msg_sender, spender, current - subtracted)
        return True

    # Internals

    def _transfer(self, sender: str, to: str, amount: int) -> None:
        require(sender != ZERO_ADDRESS, "ERC20: transfer from the zero address")
        require(to != ZERO_ADDRESS, "ERC20: transfer to the zero address")
        require(amount >= 0, "ERC20: negative amount")

        balance = self._balances.get(sender, 0)
        require(
            balance >= amount,
            "ERC20: transfer amount exceeds balance",
            AssetUnavailableError,
        )
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount

        self.emit("Transfer", **{"from": sender, "to": to, "value": amount})

    def _mint(self, account: str, amount: int) -> None:
        require(account != ZERO_ADDRESS, "ERC20: mint to the zero address")

        self._total_supply += amount
        self._balances[account] = self._balances.get(account, 0) + amount

        self.emit("Transfer", **{"from": ZERO_ADDRESS, "to": account, "value": amount})

    def _approve(self, owner: str, spender: str, amount: int) -> None:
        require(owner != ZERO_ADDRESS, "ERC20: approve from the zero address")
        require(spender != ZERO_ADDRESS, "ERC20: approve to the zero address")
        require(0 <= amount <= MAX_UINT256, "ERC20: invalid allowance")

        self._allowances.setdefault(owner, {})[spender] = amount

        self.emit("Approval", owner=owner, spender=spender, value=amount)

    def _spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        current = self.allowance(owner, spender)
        if current == MAX_UINT256:
            return

        require(current >= amount, "ERC20: insufficient allowance", AssetUnavailableError)
        self._approve(owner, spender, current - amount)
