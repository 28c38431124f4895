"""
Externally owned accounts for the Jumpgate execution environment.

Keys are secp256k1 and addresses follow the Ethereum derivation: the last
20 bytes of the Keccak-256 digest of the uncompressed public key.
"""

from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .types import TransactionReceipt, keccak, to_address

if TYPE_CHECKING:
    from .chain import Chain


def address_from_private_key(private_key: ec.EllipticCurvePrivateKey) -> str:
    """Derive the checksum address controlled by a secp256k1 key."""
    if not isinstance(private_key.curve, ec.SECP256K1):
        raise ValueError("Private key must use secp256k1 curve")

    public_bytes = private_key.public_key().public_bytes(
        Encoding.X962, PublicFormat.UncompressedPoint
    )
    # Drop the 0x04 uncompressed point prefix
    return to_address(keccak(public_bytes[1:])[-20:])


class Account:
    """An externally owned account on a ``Chain``."""

    def __init__(
        self,
        chain: "Chain",
        address: str,
        private_key: Optional[ec.EllipticCurvePrivateKey] = None,
    ):
        self.chain = chain
        self.address = to_address(address)
        self.private_key = private_key

    @classmethod
    def generate(cls, chain: "Chain") -> "Account":
        """Generate a new account with a random key."""
        private_key = ec.generate_private_key(ec.SECP256K1())
        return cls(chain, address_from_private_key(private_key), private_key)

    def balance(self) -> int:
        """Native-currency balance."""
        return self.chain.get_balance(self.address)

    def transfer(self, to: Any, amount: int) -> TransactionReceipt:
        """Send native currency from this account."""
        return self.chain.transfer(self, to, amount)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return other.lower() == self.address.lower()
        if hasattr(other, "address"):
            return other.address == self.address
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"<Account '{self.address}'>"


class Accounts:
    """Funded accounts available on a chain."""

    def __init__(self, chain: "Chain"):
        self.chain = chain
        self._accounts: List[Account] = []

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __getitem__(self, index: int) -> Account:
        return self._accounts[index]

    def __contains__(self, item: Any) -> bool:
        return any(account == item for account in self._accounts)

    def add(self, balance: int = 0) -> Account:
        """Create a new account, optionally funded."""
        account = Account.generate(self.chain)
        self._accounts.append(account)
        if balance:
            self.chain.mint_native(account.address, balance)
        return account

    def at(self, address: Any) -> Account:
        """Wrap an existing address, e.g. an impersonated holder."""
        address = to_address(address)
        for account in self._accounts:
            if account.address == address:
                return account
        account = Account(self.chain, address)
        self._accounts.append(account)
        return account
