"""Tests for vault configuration and deployment."""

import json

import pytest

from jumpgate.bridge import ChainId, b58encode, encode_terra_address
from jumpgate.chain import to_address
from jumpgate.config import JumpgateConfig
from jumpgate.errors import ConfigurationError
from jumpgate.testing import deploy_environment, terra_address
from jumpgate.vault import Jumpgate, deploy_jumpgate

TERRA_ADDRESS = terra_address(b"\x42" * 20)
SOLANA_ADDRESS = b58encode(b"\x24" * 32)
EVM_ADDRESS = "0x" + "ab" * 20


class TestJumpgateConfig:
    """Test configuration validation."""

    def test_terra(self):
        """Test a Terra destination."""
        config = JumpgateConfig(recipient_chain=ChainId.TERRA, recipient=TERRA_ADDRESS)

        assert config.recipient_chain == 3
        assert config.encoded_recipient() == b"\x00" * 12 + b"\x42" * 20
        assert config.arbiter_fee == 0
        assert config.owner is None

    def test_solana_by_name(self):
        """Test chain names and numeric strings."""
        assert JumpgateConfig("solana", SOLANA_ADDRESS).recipient_chain == ChainId.SOLANA
        assert JumpgateConfig("1", SOLANA_ADDRESS).encoded_recipient() == b"\x24" * 32

    def test_evm_destination(self):
        """Test an EVM destination chain."""
        config = JumpgateConfig("bsc", EVM_ADDRESS)
        assert config.encoded_recipient() == b"\x00" * 12 + b"\xab" * 20

    def test_addresses_checksummed(self, owner):
        """Test that contract addresses are normalised."""
        config = JumpgateConfig(
            "terra", TERRA_ADDRESS, owner=owner.address.lower(), token=EVM_ADDRESS
        )
        assert config.owner == owner.address
        assert config.token == to_address(EVM_ADDRESS)

    @pytest.mark.parametrize("chain", ["moon", 999, "999", None, [1], {}])
    def test_unknown_chain(self, chain):
        """Test destinations that are not Wormhole chains."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig(chain, TERRA_ADDRESS)
        assert exc_info.value.config_key == "recipient_chain"

    def test_chain_without_encoder(self):
        """Test known chains without an address encoding."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig("algorand", TERRA_ADDRESS)
        assert exc_info.value.config_key == "recipient"

    @pytest.mark.parametrize(
        "chain, recipient",
        [
            ("terra", "terra1invalid"),
            ("terra", SOLANA_ADDRESS),
            ("solana", TERRA_ADDRESS),
            ("solana", b58encode(b"\x01" * 20)),
            ("ethereum", "0x1234"),
        ],
    )
    def test_invalid_recipient(self, chain, recipient):
        """Test recipients that do not match the destination chain."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig(chain, recipient)
        assert exc_info.value.config_key == "recipient"

    @pytest.mark.parametrize("fee", [-1, 1.5, "10", True, 2**256])
    def test_invalid_arbiter_fee(self, fee):
        """Test that the fee must be a uint256."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig("terra", TERRA_ADDRESS, arbiter_fee=fee)
        assert exc_info.value.config_key == "arbiter_fee"

    def test_invalid_address(self):
        """Test malformed contract addresses."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig("terra", TERRA_ADDRESS, bridge="0xnot-an-address")
        assert exc_info.value.config_key == "bridge"


class TestConfigLoading:
    """Test loading configuration from dicts, files and the environment."""

    def test_dict_round_trip(self):
        """Test to_dict and from_dict."""
        config = JumpgateConfig("terra", TERRA_ADDRESS, arbiter_fee=7)
        data = config.to_dict()

        assert data["recipient_chain"] == 3
        assert data["recipient"] == TERRA_ADDRESS
        assert JumpgateConfig.from_dict(data) == config

    def test_unknown_keys(self):
        """Test that typos in keys are reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig.from_dict(
                {"recipient_chain": "terra", "recipient": TERRA_ADDRESS, "fee": 1}
            )
        assert exc_info.value.config_key == "fee"

    def test_incomplete(self):
        """Test configurations missing required keys."""
        with pytest.raises(ConfigurationError, match="Incomplete configuration"):
            JumpgateConfig.from_dict({"recipient_chain": "terra"})

    def test_from_file(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "vault.json"
        path.write_text(
            json.dumps({"recipient_chain": "solana", "recipient": SOLANA_ADDRESS})
        )

        config = JumpgateConfig.from_file(path)
        assert config.recipient_chain == ChainId.SOLANA

    def test_from_missing_file(self, tmp_path):
        """Test unreadable files."""
        with pytest.raises(ConfigurationError, match="Cannot read"):
            JumpgateConfig.from_file(tmp_path / "missing.json")

    def test_from_invalid_json(self, tmp_path):
        """Test files that are not JSON."""
        path = tmp_path / "vault.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            JumpgateConfig.from_file(path)

    def test_from_non_object(self, tmp_path):
        """Test JSON files that do not hold an object."""
        path = tmp_path / "vault.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="JSON object"):
            JumpgateConfig.from_file(str(path))

    def test_from_env(self, owner):
        """Test loading from environment variables."""
        environ = {
            "JUMPGATE_RECIPIENT_CHAIN": "terra",
            "JUMPGATE_RECIPIENT": TERRA_ADDRESS,
            "JUMPGATE_OWNER": owner.address,
            "JUMPGATE_ARBITER_FEE": "25",
            "UNRELATED": "ignored",
        }

        config = JumpgateConfig.from_env(environ=environ)

        assert config.recipient_chain == ChainId.TERRA
        assert config.owner == owner.address
        assert config.arbiter_fee == 25

    def test_from_env_prefix(self):
        """Test a custom variable prefix."""
        environ = {"VAULT_RECIPIENT_CHAIN": "1", "VAULT_RECIPIENT": SOLANA_ADDRESS}
        config = JumpgateConfig.from_env(prefix="VAULT_", environ=environ)
        assert config.recipient_chain == ChainId.SOLANA

    def test_from_env_bad_fee(self):
        """Test non-numeric fees."""
        environ = {
            "JUMPGATE_RECIPIENT_CHAIN": "terra",
            "JUMPGATE_RECIPIENT": TERRA_ADDRESS,
            "JUMPGATE_ARBITER_FEE": "lots",
        }
        with pytest.raises(ConfigurationError) as exc_info:
            JumpgateConfig.from_env(environ=environ)
        assert exc_info.value.config_key == "JUMPGATE_ARBITER_FEE"


class TestDeployment:
    """Test deploying vaults from configuration."""

    def test_deploy_jumpgate(self, chain, owner, token, bridge):
        """Test that the vault reflects its configuration."""
        config = JumpgateConfig(
            "terra", TERRA_ADDRESS, token=token.address, bridge=bridge.address, arbiter_fee=3
        )

        jumpgate = deploy_jumpgate(chain, config, sender=owner)

        assert isinstance(jumpgate, Jumpgate)
        assert jumpgate.owner == owner.address
        assert jumpgate.token == token.address
        assert jumpgate.bridge == bridge.address
        assert jumpgate.recipient_chain == ChainId.TERRA
        assert jumpgate.recipient == encode_terra_address(TERRA_ADDRESS)
        assert jumpgate.arbiter_fee == 3

    def test_configured_owner(self, chain, owner, stranger, token, bridge):
        """Test deploying on behalf of another owner."""
        config = JumpgateConfig(
            "terra",
            TERRA_ADDRESS,
            owner=stranger.address,
            token=token.address,
            bridge=bridge.address,
        )

        jumpgate = deploy_jumpgate(chain, config, sender=owner)
        assert jumpgate.owner == stranger.address

    def test_missing_contracts(self, chain, owner, token):
        """Test that token and bridge are required to deploy."""
        config = JumpgateConfig("terra", TERRA_ADDRESS, token=token.address)

        with pytest.raises(ConfigurationError, match="bridge") as exc_info:
            deploy_jumpgate(chain, config, sender=owner)
        assert exc_info.value.config_key == "bridge"

    def test_deploy_logged(self, memory_logs, chain, owner, token, bridge):
        """Test the deployment log entry."""
        config = JumpgateConfig(
            "terra", TERRA_ADDRESS, token=token.address, bridge=bridge.address
        )

        jumpgate = deploy_jumpgate(chain, config, sender=owner)

        entries = [
            log for log in memory_logs.get_logs() if log["context"].get("operation") == "deploy"
        ]
        assert entries[-1]["context"]["contract"] == jumpgate.address
        assert entries[-1]["context"]["component"] == "vault"

    def test_deploy_environment(self, chain, owner):
        """Test the full local environment."""
        env = deploy_environment(chain)

        assert env.jumpgate.owner == owner.address
        assert env.jumpgate.token == env.token.address
        assert env.jumpgate.bridge == env.bridge.address
        assert env.bridge.wormhole() == env.core.address
        assert env.config.recipient == terra_address(bytes.fromhex(owner.address[2:]))
        assert len(env.contracts) == 4

    def test_deploy_environment_solana(self, chain, stranger):
        """Test environments bridging to Solana."""
        env = deploy_environment(
            chain, recipient_chain=ChainId.SOLANA, recipient=SOLANA_ADDRESS, owner=stranger
        )

        assert env.jumpgate.owner == stranger.address
        assert env.jumpgate.recipient == b"\x24" * 32
