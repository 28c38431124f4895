"""Tests for single-owner access control."""

import pytest

from jumpgate.chain import ZERO_ADDRESS
from jumpgate.errors import AccessControlError, ErrorCategory
from jumpgate.testing import reverts
from jumpgate.vault import NOT_OWNER


class TestOwnable:
    """Test ownership on the vault."""

    def test_deployer_event(self, jumpgate, owner):
        """Test the ownership event emitted on deployment."""
        event = jumpgate.tx.events["OwnershipTransferred"]
        assert event["previousOwner"] == ZERO_ADDRESS
        assert event["newOwner"] == owner.address

    def test_transfer_ownership(self, jumpgate, owner, stranger):
        """Test handing over ownership."""
        tx = jumpgate.transfer_ownership(stranger, sender=owner)

        assert jumpgate.owner == stranger.address
        assert tx.events["OwnershipTransferred"]["previousOwner"] == owner.address
        assert tx.events["OwnershipTransferred"]["newOwner"] == stranger.address

    def test_new_owner_gains_access(self, jumpgate, owner, stranger):
        """Test that gated calls follow the current owner."""
        jumpgate.transfer_ownership(stranger, sender=owner)

        jumpgate.recover_ether(stranger, sender=stranger)
        with reverts(NOT_OWNER, AccessControlError):
            jumpgate.recover_ether(owner, sender=owner)

    def test_transfer_to_zero_address(self, jumpgate, owner):
        """Test that ownership cannot be handed to nobody."""
        with reverts("Ownable: new owner is the zero address"):
            jumpgate.transfer_ownership(ZERO_ADDRESS, sender=owner)

        assert jumpgate.owner == owner.address

    def test_transfer_by_non_owner(self, jumpgate, owner, non_owner):
        """Test that only the owner can transfer ownership."""
        with reverts(NOT_OWNER, AccessControlError):
            jumpgate.transfer_ownership(non_owner, sender=non_owner)

        assert jumpgate.owner == owner.address

    def test_renounce_ownership(self, jumpgate, owner, stranger):
        """Test giving up ownership locks recovery."""
        jumpgate.renounce_ownership(sender=owner)

        assert jumpgate.owner == ZERO_ADDRESS
        with reverts(NOT_OWNER, AccessControlError):
            jumpgate.recover_ether(stranger, sender=owner)

    def test_access_error_details(self, jumpgate, non_owner, stranger):
        """Test the error raised for non-owner calls."""
        with pytest.raises(AccessControlError) as exc_info:
            jumpgate.recover_erc20(jumpgate.token, stranger, 0, sender=non_owner)

        error = exc_info.value
        assert error.reason == NOT_OWNER
        assert error.category == ErrorCategory.ACCESS_CONTROL
        assert error.receipt.sender == non_owner.address
        assert not error.receipt.succeeded

    def test_bridge_tokens_is_not_gated(self, jumpgate, token, token_holder, non_owner):
        """Test that anyone may sweep the vault."""
        token.transfer(jumpgate, 10**10, sender=token_holder)
        assert jumpgate.bridge_tokens(sender=non_owner).succeeded
