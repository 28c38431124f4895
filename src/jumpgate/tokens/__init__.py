"""
Token ledgers for Jumpgate.

OpenZeppelin-compatible ERC-20, ERC-721 and ERC-1155 contracts running on
the Jumpgate execution environment.
"""

from .erc20 import MAX_UINT256, ERC20Token
from .erc721 import ERC721_RECEIVED, ERC721Token
from .erc1155 import ERC1155_BATCH_RECEIVED, ERC1155_RECEIVED, ERC1155Token

__all__ = [
    "ERC20Token",
    "ERC721Token",
    "ERC1155Token",
    "MAX_UINT256",
    "ERC721_RECEIVED",
    "ERC1155_RECEIVED",
    "ERC1155_BATCH_RECEIVED",
]
