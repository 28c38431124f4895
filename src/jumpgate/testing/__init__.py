"""Testing support for Jumpgate.

Mock token contracts, the self-destructing ``Destrudo`` helper and utilities
for asserting reverts and standing up a local bridging environment.
"""

from .helpers import Environment, RevertCapture, deploy_environment, reverts, terra_address
from .mocks import MOCK_ERC20_SUPPLY, Destrudo, MockERC20, MockERC721, MockERC1155

__all__ = [
    "MockERC20",
    "MockERC721",
    "MockERC1155",
    "Destrudo",
    "MOCK_ERC20_SUPPLY",
    "reverts",
    "RevertCapture",
    "deploy_environment",
    "Environment",
    "terra_address",
]
