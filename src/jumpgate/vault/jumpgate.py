"""
Jumpgate: a per-deployment vault that forwards one ERC-20 token to a fixed
recipient on a foreign chain through the Wormhole token bridge.

Anyone can sweep the vault with ``bridge_tokens``. Anything else that ends
up in the vault (native currency, other ERC-20s, NFTs, or the token itself)
can be pulled back out by the owner.
"""

from typing import Any

from ..chain import Chain, external, require, to_address
from ..constants import BRIDGE_NONCE, dust_cutoff
from ..errors import AmountTooSmallError, ContractRevert, ValidationError
from ..logging import LogContext, get_logger
from ..tokens import ERC20Token, ERC721Token
from .ownable import Ownable, only_owner

AMOUNT_TOO_SMALL = "Amount too small for bridging!"
SEND_VALUE_FAILED = "Address: unable to send value, recipient may have reverted"

logger = get_logger(__name__)


class Jumpgate(Ownable):
    """Bridging vault bound to one token, destination chain and recipient."""

    def __init__(
        self,
        chain: Chain,
        address: str,
        owner: Any,
        token: Any,
        bridge: Any,
        recipient_chain: int,
        recipient: bytes,
        arbiter_fee: int,
    ):
        super().__init__(chain, address, owner)

        if not isinstance(recipient, (bytes, bytearray)) or len(recipient) != 32:
            raise ValidationError(
                "recipient must be a 32-byte encoded address",
                field="recipient",
                value=recipient,
            )
        for field, value, bits in (
            ("recipient_chain", recipient_chain, 16),
            ("arbiter_fee", arbiter_fee, 256),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 2**bits:
                raise ValidationError(
                    f"{field} must fit in uint{bits}",
                    field=field,
                    value=value,
                    expected=f"0 <= {field} <= {2**bits - 1}",
                )

        self._token = to_address(token)
        self._bridge = to_address(bridge)
        self._recipient_chain = int(recipient_chain)
        self._recipient = bytes(recipient)
        self._arbiter_fee = arbiter_fee

        self.emit(
            "JumpgateCreated",
            _token=self._token,
            _bridge=self._bridge,
            _recipientChain=self._recipient_chain,
            _recipient=self._recipient,
            _arbiterFee=self._arbiter_fee,
        )

    @property
    def token(self) -> str:
        return self._token

    @property
    def bridge(self) -> str:
        return self._bridge

    @property
    def recipient_chain(self) -> int:
        return self._recipient_chain

    @property
    def recipient(self) -> bytes:
        return self._recipient

    @property
    def arbiter_fee(self) -> int:
        return self._arbiter_fee

    def dust_cutoff(self) -> int:
        """Smallest balance ``bridge_tokens`` accepts, from the token's live decimals."""
        return dust_cutoff(self._erc20().decimals())

    @external
    def bridge_tokens(self) -> int:
        """Sweep the whole token balance to the recipient; returns the bridge sequence.

        The dust cutoff is per token, ``10**(decimals - 8)`` for the token's
        live decimals; ``BRIDGE_DUST_CUTOFF`` is only its value at 18 decimals.
        """
        token = self._erc20()
        amount = token.balance_of(self.address)
        require(
            amount >= dust_cutoff(token.decimals()), AMOUNT_TOO_SMALL, AmountTooSmallError
        )

        token.approve(self._bridge, amount)
        sequence = self.chain.get_contract(self._bridge).transfer_tokens(
            self._token,
            amount,
            self._recipient_chain,
            self._recipient,
            self._arbiter_fee,
            BRIDGE_NONCE,
        )

        self.emit(
            "TokensBridged",
            _token=self._token,
            _bridge=self._bridge,
            _recipientChain=self._recipient_chain,
            _recipient=self._recipient,
            _arbiterFee=self._arbiter_fee,
            _amount=amount,
            _nonce=BRIDGE_NONCE,
            _transferSequence=sequence,
        )
        logger.info(
            f"Swept {amount} of {self._token} to chain {self._recipient_chain} "
            f"as transfer {sequence}",
            context=self._log_context("bridge_tokens"),
        )
        return sequence

    @external
    @only_owner
    def recover_ether(self, recipient: Any) -> None:
        """Send the whole native balance, possibly zero, to ``recipient``."""
        recipient = to_address(recipient)
        amount = self.balance()
        try:
            self.chain.send_value(self.address, recipient, amount)
        except ContractRevert as exc:
            raise ContractRevert(SEND_VALUE_FAILED) from exc

        self.emit("EtherRecovered", _recipient=recipient, _amount=amount)
        logger.info(
            f"Recovered {amount} wei to {recipient}", context=self._log_context("recover_ether")
        )

    @external
    @only_owner
    def recover_erc20(self, token: Any, recipient: Any, amount: int) -> None:
        """Transfer ``amount`` of any ERC-20 held by the vault to ``recipient``."""
        token = to_address(token)
        recipient = to_address(recipient)
        self.chain.get_contract(token, ERC20Token).transfer(recipient, amount)

        self.emit("ERC20Recovered", _token=token, _recipient=recipient, _amount=amount)
        logger.info(
            f"Recovered {amount} of {token} to {recipient}",
            context=self._log_context("recover_erc20"),
        )

    @external
    @only_owner
    def recover_erc721(self, token: Any, token_id: int, recipient: Any) -> None:
        """Safe-transfer one NFT held by the vault to ``recipient``."""
        token = to_address(token)
        recipient = to_address(recipient)
        self.chain.get_contract(token, ERC721Token).safe_transfer_from(
            self.address, recipient, token_id
        )

        self.emit("ERC721Recovered", _token=token, _tokenId=token_id, _recipient=recipient)
        logger.info(
            f"Recovered NFT {token_id} of {token} to {recipient}",
            context=self._log_context("recover_erc721"),
        )

    def _erc20(self) -> ERC20Token:
        return self.chain.get_contract(self._token, ERC20Token)

    def _log_context(self, operation: str) -> LogContext:
        return LogContext(
            component="vault",
            operation=operation,
            chain_id=self.chain.id,
            contract=self.address,
        )
