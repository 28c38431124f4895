"""Shared fixtures for the Jumpgate test suite."""

import pytest

from jumpgate.bridge import (
    ChainId,
    WormholeCore,
    WormholeTokenBridge,
    b58encode,
    encode_terra_address,
)
from jumpgate.chain import Chain
from jumpgate.logging import LogConfig, LogLevel, MemoryHandler, setup_logging, shutdown_logging
from jumpgate.testing import Destrudo, MockERC20, MockERC721, MockERC1155, terra_address
from jumpgate.vault import Jumpgate

TERRA_RANDOM_ADDRESS = terra_address(bytes.fromhex("8d3c9f2b6a1e0f74c5d2b9e8a7f6013c4d5e6f70"))
SOLANA_RANDOM_ADDRESS = b58encode(
    bytes.fromhex("3b9f1c0d7e6a5b4c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b9c")
)


@pytest.fixture
def chain():
    return Chain()


@pytest.fixture
def accounts(chain):
    return chain.accounts


@pytest.fixture
def owner(accounts):
    return accounts[0]


@pytest.fixture
def non_owner(accounts):
    return accounts[1]


@pytest.fixture
def stranger(accounts):
    return accounts[2]


# test as the owner and a non-owner
@pytest.fixture(params=["owner", "non_owner"])
def sender(request):
    return request.getfixturevalue(request.param)


@pytest.fixture(
    params=[
        (ChainId.TERRA, TERRA_RANDOM_ADDRESS),
        (ChainId.SOLANA, SOLANA_RANDOM_ADDRESS),
    ],
    ids=["terra", "solana"],
)
def deploy_params(request):
    return request.param


# ERC20
@pytest.fixture
def token_holder(accounts):
    return accounts.add()


@pytest.fixture
def token(chain, token_holder):
    return MockERC20.deploy(chain, sender=token_holder)


# ERC721
@pytest.fixture
def nft_holder(accounts):
    return accounts.add()


@pytest.fixture
def nft(chain, nft_holder):
    return MockERC721.deploy(chain, sender=nft_holder)


@pytest.fixture
def nft_id():
    return 0


# ERC1155
@pytest.fixture
def multitoken_holder(accounts):
    return accounts.add()


@pytest.fixture
def multitoken(chain, multitoken_holder):
    return MockERC1155.deploy(chain, sender=multitoken_holder)


@pytest.fixture
def multitoken_id():
    return 0


@pytest.fixture
def destrudo(chain, owner):
    return Destrudo.deploy(chain, sender=owner)


# Wormhole
@pytest.fixture
def core(chain, owner):
    return WormholeCore.deploy(chain, sender=owner)


@pytest.fixture
def bridge(chain, owner, core):
    return WormholeTokenBridge.deploy(chain, core, sender=owner)


@pytest.fixture
def jumpgate(chain, owner, token, bridge):
    return Jumpgate.deploy(
        chain,
        owner.address,
        token.address,
        bridge.address,
        ChainId.TERRA,
        encode_terra_address(TERRA_RANDOM_ADDRESS),
        0,
        sender=owner,
    )


@pytest.fixture
def memory_logs():
    """Route all log output into memory for the duration of a test."""
    manager = setup_logging(LogConfig(level=LogLevel.TRACE))
    manager.remove_handler("console")
    handler = MemoryHandler()
    handler.set_level(LogLevel.TRACE)
    manager.add_handler("memory", handler)
    yield handler
    shutdown_logging()
