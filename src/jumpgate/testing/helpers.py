"""
Helpers for tests and local simulations.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Type

from ..bridge.encoding import ChainId, TERRA_PREFIX, bech32_encode, convert_bits
from ..bridge.wormhole import WormholeCore, WormholeTokenBridge
from ..chain import Chain, to_address
from ..config import JumpgateConfig
from ..errors import ContractRevert
from ..vault import Jumpgate, deploy_jumpgate
from .mocks import MockERC20


class RevertCapture:
    """Holds the revert raised inside a ``reverts`` block."""

    def __init__(self):
        self.error: Optional[ContractRevert] = None

    @property
    def reason(self) -> Optional[str]:
        return self.error.reason if self.error else None


@contextmanager
def reverts(
    reason: Optional[str] = None, error: Type[ContractRevert] = ContractRevert
) -> Iterator[RevertCapture]:
    """Assert that the block reverts, optionally with an exact ``reason``.

    ``reverts("")`` matches a revert without a reason string.
    """
    capture = RevertCapture()
    try:
        yield capture
    except ContractRevert as exc:
        capture.error = exc
        if not isinstance(exc, error):
            raise AssertionError(
                f"Expected {error.__name__}, got {type(exc).__name__}: {exc.reason!r}"
            ) from exc
        if reason is not None and exc.reason != reason:
            raise AssertionError(
                f"Expected revert reason {reason!r}, got {exc.reason!r}"
            ) from exc
    else:
        raise AssertionError("Transaction did not revert")


def terra_address(raw: bytes) -> str:
    """Human-readable Terra address for 20 or 32 raw bytes."""
    return bech32_encode(TERRA_PREFIX, convert_bits(raw, 8, 5))


@dataclass
class Environment:
    """Contracts deployed by ``deploy_environment``."""

    chain: Chain
    core: WormholeCore
    bridge: WormholeTokenBridge
    token: MockERC20
    jumpgate: Jumpgate
    config: JumpgateConfig

    @property
    def contracts(self) -> List[Any]:
        return [self.core, self.bridge, self.token, self.jumpgate]


def deploy_environment(
    chain: Chain,
    deployer: Any = None,
    recipient_chain: Any = ChainId.TERRA,
    recipient: Optional[str] = None,
    arbiter_fee: int = 0,
    owner: Any = None,
) -> Environment:
    """Deploy a Wormhole core, token bridge, mock token and vault.

    Without an explicit ``recipient`` the vault forwards to a Terra address
    built from the deployer's own address bytes.
    """
    deployer = to_address(deployer if deployer is not None else chain.accounts[0])

    core = WormholeCore.deploy(chain, sender=deployer)
    bridge = WormholeTokenBridge.deploy(chain, core.address, sender=deployer)
    token = MockERC20.deploy(chain, sender=deployer)

    if recipient is None:
        recipient = terra_address(bytes.fromhex(deployer[2:]))

    config = JumpgateConfig(
        recipient_chain=recipient_chain,
        recipient=recipient,
        owner=to_address(owner) if owner is not None else None,
        token=token.address,
        bridge=bridge.address,
        arbiter_fee=arbiter_fee,
    )
    jumpgate = deploy_jumpgate(chain, config, sender=deployer)

    return Environment(
        chain=chain,
        core=core,
        bridge=bridge,
        token=token,
        jumpgate=jumpgate,
        config=config,
    )
