"""
Local model of the Wormhole core bridge and token bridge.

The core bridge assigns a per-emitter sequence number to every published
message. The token bridge locks ERC-20 tokens it pulls from the sender and
publishes a transfer payload for guardians to relay to the destination
chain. Guardian signing and redemption on the foreign chain are outside
this model.
"""

from typing import Any, Dict

from ..chain import Chain, Contract, external, require, to_address
from ..constants import BRIDGE_CONSISTENCY_LEVEL
from ..logging import LogContext, get_logger
from ..tokens import ERC20Token
from .encoding import ChainId
from .payload import TransferPayload, normalize_amount

logger = get_logger(__name__)


class WormholeCore(Contract):
    """Core message bridge: sequences and publishes messages."""

    def __init__(
        self,
        chain: Chain,
        address: str,
        chain_id: int = ChainId.ETHEREUM,
        message_fee: int = 0,
    ):
        super().__init__(chain, address)
        self._chain_id = int(chain_id)
        self._message_fee = message_fee
        self._sequences: Dict[str, int] = {}

    def chain_id(self) -> int:
        return self._chain_id

    def message_fee(self) -> int:
        return self._message_fee

    def next_sequence(self, emitter: Any) -> int:
        """Sequence number the next message from ``emitter`` will get."""
        return self._sequences.get(to_address(emitter), 0)

    @external(payable=True)
    def publish_message(self, nonce: int, payload: bytes, consistency_level: int) -> int:
        require(self.msg_value == self._message_fee, "invalid fee")

        emitter = self.msg_sender
        sequence = self._sequences.get(emitter, 0)
        self._sequences[emitter] = sequence + 1

        self.emit(
            "LogMessagePublished",
            sender=emitter,
            sequence=sequence,
            nonce=nonce,
            payload=bytes(payload),
            consistencyLevel=consistency_level,
        )
        return sequence


class WormholeTokenBridge(Contract):
    """Token bridge: locks native ERC-20 tokens and publishes transfers."""

    def __init__(
        self,
        chain: Chain,
        address: str,
        wormhole: Any,
        chain_id: int = ChainId.ETHEREUM,
        finality: int = BRIDGE_CONSISTENCY_LEVEL,
    ):
        super().__init__(chain, address)
        self._wormhole = to_address(wormhole)
        self._chain_id = int(chain_id)
        self._finality = finality
        self._outstanding: Dict[str, int] = {}

    def wormhole(self) -> str:
        """Address of the core bridge."""
        return self._wormhole

    def chain_id(self) -> int:
        return self._chain_id

    def finality(self) -> int:
        """Consistency level transfers are published with."""
        return self._finality

    def outstanding_bridged(self, token: Any) -> int:
        """Normalised amount of ``token`` locked here for foreign chains."""
        return self._outstanding.get(to_address(token), 0)

    @external(payable=True)
    def transfer_tokens(
        self,
        token: Any,
        amount: int,
        recipient_chain: int,
        recipient: bytes,
        arbiter_fee: int,
        nonce: int,
    ) -> int:
        """Lock ``amount`` of ``token`` and publish a transfer; returns the sequence."""
        token = to_address(token)
        require(int(recipient_chain) != self._chain_id, "invalid target chain")
        require(len(recipient) == 32, "invalid recipient")

        erc20 = self.chain.get_contract(token, ERC20Token)
        decimals = erc20.decimals()

        # Measure what actually arrived, for fee-on-transfer tokens
        balance_before = erc20.balance_of(self.address)
        erc20.transfer_from(self.msg_sender, self.address, amount)
        received = erc20.balance_of(self.address) - balance_before

        normalized_amount = normalize_amount(received, decimals)
        normalized_fee = normalize_amount(arbiter_fee, decimals)
        require(normalized_fee <= normalized_amount, "fee exceeds amount")
        require(normalized_amount > 0, "transfer amount too small")

        self._outstanding[token] = self._outstanding.get(token, 0) + normalized_amount

        payload = TransferPayload(
            amount=normalized_amount,
            token_address=bytes.fromhex(token[2:]).rjust(32, b"\x00"),
            token_chain=self._chain_id,
            to=bytes(recipient),
            to_chain=int(recipient_chain),
            fee=normalized_fee,
        )
        core = self.chain.get_contract(self._wormhole, WormholeCore)
        sequence = core.publish_message(
            nonce, payload.encode(), self._finality, value=self.msg_value
        )

        logger.info(
            f"Published transfer of {received} {erc20.symbol()} to chain "
            f"{recipient_chain} with sequence {sequence}",
            context=LogContext(
                component="bridge",
                operation="transfer_tokens",
                chain_id=self.chain.id,
                contract=self.address,
            ),
        )
        return sequence
