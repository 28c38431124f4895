"""
Jumpgate - per-deployment vaults that bridge one token to a fixed recipient
on a foreign chain through Wormhole.

This package provides:
- The Jumpgate vault with owner-gated asset recovery
- A local transactional ledger to run it on
- ERC-20, ERC-721 and ERC-1155 token ledgers
- A model of the Wormhole core and token bridge
- Destination address encoders and the transfer payload codec
"""

__version__ = "0.1.0"
__author__ = "Jumpgate Contributors"

from .bridge import (
    ChainId,
    TransferPayload,
    WormholeCore,
    WormholeTokenBridge,
    get_address_encoder,
)
from .chain import Account, Chain, Contract, TransactionReceipt, external, require
from .config import JumpgateConfig
from .constants import (
    BRIDGE_CONSISTENCY_LEVEL,
    BRIDGE_DUST_CUTOFF,
    BRIDGE_NONCE,
    WORMHOLE_MAX_DECIMALS,
    dust_cutoff,
)
from .errors import (
    AccessControlError,
    AmountTooSmallError,
    AssetUnavailableError,
    ConfigurationError,
    ContractRevert,
    EncodingError,
    JumpgateError,
    UnsupportedAssetError,
    ValidationError,
)
from .tokens import ERC20Token, ERC721Token, ERC1155Token
from .vault import Jumpgate, Ownable, deploy_jumpgate, only_owner

__all__ = [
    # Vault
    "Jumpgate",
    "Ownable",
    "only_owner",
    "deploy_jumpgate",
    "JumpgateConfig",
    # Execution environment
    "Chain",
    "Account",
    "Contract",
    "TransactionReceipt",
    "external",
    "require",
    # Tokens
    "ERC20Token",
    "ERC721Token",
    "ERC1155Token",
    # Bridge
    "WormholeCore",
    "WormholeTokenBridge",
    "TransferPayload",
    "ChainId",
    "get_address_encoder",
    # Constants
    "BRIDGE_NONCE",
    "BRIDGE_CONSISTENCY_LEVEL",
    "BRIDGE_DUST_CUTOFF",
    "WORMHOLE_MAX_DECIMALS",
    "dust_cutoff",
    # Errors
    "JumpgateError",
    "ValidationError",
    "ConfigurationError",
    "EncodingError",
    "ContractRevert",
    "AccessControlError",
    "AmountTooSmallError",
    "AssetUnavailableError",
    "UnsupportedAssetError",
]
