"""
Deployment configuration for Jumpgate vaults.

A ``JumpgateConfig`` describes one vault with a human-readable destination
address; the address is encoded for the destination chain only when the
vault is deployed. Configurations load from dicts, JSON files or
``JUMPGATE_*`` environment variables.
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .bridge.encoding import get_address_encoder, resolve_chain_id
from .chain import to_address
from .errors import ConfigurationError, EncodingError, ValidationError

ENV_PREFIX = "JUMPGATE_"


@dataclass
class JumpgateConfig:
    """Configuration for a single vault."""

    # Destination
    recipient_chain: Union[int, str]
    recipient: str

    # Contracts; filled in by the deployer when left empty
    owner: Optional[str] = None
    token: Optional[str] = None
    bridge: Optional[str] = None

    arbiter_fee: int = 0

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration."""
        try:
            self.recipient_chain = int(resolve_chain_id(self.recipient_chain))
        except ValidationError as exc:
            raise ConfigurationError(
                exc.message,
                config_key="recipient_chain",
                config_value=self.recipient_chain,
                cause=exc,
            ) from exc

        try:
            self.encoded_recipient()
        except (EncodingError, ValidationError) as exc:
            raise ConfigurationError(
                f"Invalid recipient for chain {self.recipient_chain}: {exc.message}",
                config_key="recipient",
                config_value=self.recipient,
                cause=exc,
            ) from exc

        for key in ("owner", "token", "bridge"):
            value = getattr(self, key)
            if value is None:
                continue
            try:
                setattr(self, key, to_address(value))
            except ValidationError as exc:
                raise ConfigurationError(
                    f"{key} is not a valid address", config_key=key, config_value=value
                ) from exc

        fee = self.arbiter_fee
        if isinstance(fee, bool) or not isinstance(fee, int) or not 0 <= fee < 2**256:
            raise ConfigurationError(
                "Arbiter fee must fit in uint256",
                config_key="arbiter_fee",
                config_value=self.arbiter_fee,
            )

    def encoded_recipient(self) -> bytes:
        """Recipient in the destination chain's 32-byte encoding."""
        return get_address_encoder(self.recipient_chain)(self.recipient)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JumpgateConfig":
        """Create from dictionary; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                config_key=unknown[0],
            )
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigurationError(f"Incomplete configuration: {exc}") from exc

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JumpgateConfig":
        """Load a JSON configuration file."""
        path = Path(path)
        try:
            with path.open() as f:
                data = json.load(f)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read configuration file {path}: {exc}", cause=exc
            ) from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Invalid JSON in configuration file {path}: {exc}", cause=exc
            ) from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must hold a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, environ: Optional[Mapping[str, str]] = None
    ) -> "JumpgateConfig":
        """Load from ``<prefix>RECIPIENT_CHAIN``, ``<prefix>RECIPIENT`` and friends."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in environ:
                data[f.name] = environ[key]

        if "arbiter_fee" in data:
            try:
                data["arbiter_fee"] = int(data["arbiter_fee"])
            except ValueError as exc:
                raise ConfigurationError(
                    "Arbiter fee must be an integer",
                    config_key=prefix + "ARBITER_FEE",
                    config_value=data["arbiter_fee"],
                ) from exc
        return cls.from_dict(data)
