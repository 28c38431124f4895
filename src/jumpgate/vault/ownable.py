"""
Single-owner access control for contracts.
"""

import functools
from typing import Any, Callable

from ..chain import ZERO_ADDRESS, Contract, Chain, external, require, to_address
from ..errors import AccessControlError

NOT_OWNER = "Ownable: caller is not the owner"


def only_owner(fn: Callable) -> Callable:
    """Reject the call unless the immediate caller is the current owner.

    Apply inside ``@external`` so the check runs within the transaction:

        @external
        @only_owner
        def recover(self, ...): ...
    """

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs):
        require(self.msg_sender == self._owner, NOT_OWNER, AccessControlError)
        return fn(self, *args, **kwargs)

    wrapper.only_owner = True
    return wrapper


class Ownable(Contract):
    """Contract with one owner that can hand over or give up control."""

    def __init__(self, chain: Chain, address: str, owner: Any):
        super().__init__(chain, address)
        self._owner = ZERO_ADDRESS
        self._transfer_ownership(to_address(owner))

    @property
    def owner(self) -> str:
        return self._owner

    @external
    @only_owner
    def transfer_ownership(self, new_owner: Any) -> None:
        new_owner = to_address(new_owner)
        require(new_owner != ZERO_ADDRESS, "Ownable: new owner is the zero address")
        self._transfer_ownership(new_owner)

    @external
    @only_owner
    def renounce_ownership(self) -> None:
        """Leave the contract without an owner; owner-only calls become impossible."""
        self._transfer_ownership(ZERO_ADDRESS)

    def _transfer_ownership(self, new_owner: str) -> None:
        previous = self._owner
        self._owner = new_owner
        self.emit("OwnershipTransferred", previousOwner=previous, newOwner=new_owner)
