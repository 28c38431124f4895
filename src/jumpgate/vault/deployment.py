"""Deploy vaults from a ``JumpgateConfig``."""

from typing import Any

from ..chain import Chain, to_address
from ..config import JumpgateConfig
from ..errors import ConfigurationError
from ..logging import LogContext, get_logger
from .jumpgate import Jumpgate

logger = get_logger(__name__)


def deploy_jumpgate(chain: Chain, config: JumpgateConfig, sender: Any) -> Jumpgate:
    """Deploy a vault described by ``config``; ``sender`` owns it unless the config names an owner."""
    missing = [key for key in ("token", "bridge") if getattr(config, key) is None]
    if missing:
        raise ConfigurationError(
            f"Cannot deploy without {' and '.join(missing)}", config_key=missing[0]
        )

    owner = config.owner or to_address(sender)
    jumpgate = Jumpgate.deploy(
        chain,
        owner,
        config.token,
        config.bridge,
        config.recipient_chain,
        config.encoded_recipient(),
        config.arbiter_fee,
        sender=sender,
    )

    logger.info(
        f"Deployed Jumpgate {jumpgate.address} bridging {config.token} "
        f"to {config.recipient} on chain {config.recipient_chain}",
        context=LogContext(
            component="vault",
            operation="deploy",
            chain_id=chain.id,
            tx_hash=jumpgate.tx.tx_hash,
            contract=jumpgate.address,
        ),
    )
    return jumpgate
