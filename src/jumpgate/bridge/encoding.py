"""
Destination address encoding for Wormhole transfers.

Wormhole carries recipients as 32-byte values whose layout depends on the
destination chain. This module turns human-readable addresses into that
form (and back):
- Terra: bech32 with the ``terra`` prefix, left-padded to 32 bytes
- Solana: base58 public keys, exactly 32 bytes
- EVM chains: 20-byte addresses, left-padded to 32 bytes
"""

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..chain import to_address
from ..errors import EncodingError, ValidationError


class ChainId(IntEnum):
    """Wormhole chain ids."""

    SOLANA = 1
    ETHEREUM = 2
    TERRA = 3
    BSC = 4
    POLYGON = 5
    AVALANCHE = 6
    OASIS = 7
    ALGORAND = 8
    FANTOM = 10
    TERRA2 = 18


ADDRESS_LENGTH = 32

TERRA_PREFIX = "terra"

# BIP-173
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


# ----------------------------------------------------------------------
# Bech32


def _bech32_polymod(values: Sequence[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = (checksum & 0x1FFFFFF) << 5 ^ value
        for i in range(5):
            checksum ^= _BECH32_GENERATOR[i] if ((top >> i) & 1) else 0
    return checksum


def _bech32_hrp_expand(hrp: str) -> List[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _bech32_checksum(hrp: str, data: Sequence[int]) -> List[int]:
    values = _bech32_hrp_expand(hrp) + list(data)
    polymod = _bech32_polymod(values + [0] * 6) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def bech32_encode(hrp: str, data: Sequence[int]) -> str:
    """Encode 5-bit ``data`` under human-readable prefix ``hrp``."""
    combined = list(data) + _bech32_checksum(hrp, data)
    return hrp + "1" + "".join(BECH32_CHARSET[d] for d in combined)


def bech32_decode(bech: str) -> Tuple[str, List[int]]:
    """Decode a bech32 string into its prefix and 5-bit data (checksum stripped)."""
    if any(ord(c) < 33 or ord(c) > 126 for c in bech):
        raise EncodingError(f"Invalid character in bech32 string {bech!r}", encoding="bech32")
    if bech.lower() != bech and bech.upper() != bech:
        raise EncodingError(f"Mixed case bech32 string {bech!r}", encoding="bech32")

    bech = bech.lower()
    separator = bech.rfind("1")
    if separator < 1 or separator + 7 > len(bech) or len(bech) > 90:
        raise EncodingError(f"Malformed bech32 string {bech!r}", encoding="bech32")

    hrp = bech[:separator]
    data = []
    for c in bech[separator + 1:]:
        index = BECH32_CHARSET.find(c)
        if index == -1:
            raise EncodingError(
                f"Invalid bech32 data character {c!r}", encoding="bech32"
            )
        data.append(index)

    if _bech32_polymod(_bech32_hrp_expand(hrp) + data) != 1:
        raise EncodingError(f"Invalid bech32 checksum in {bech!r}", encoding="bech32")

    return hrp, data[:-6]


def convert_bits(data: Sequence[int], from_bits: int, to_bits: int, pad: bool = True) -> List[int]:
    """Regroup a sequence of ``from_bits`` integers into ``to_bits`` integers."""
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise EncodingError(f"Value {value} does not fit in {from_bits} bits")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)

    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & max_value):
        raise EncodingError("Invalid padding in bit conversion")

    return result


# ----------------------------------------------------------------------
# Base58


def b58encode(data: bytes) -> str:
    """Base58 (Bitcoin alphabet) encoding."""
    number = int.from_bytes(data, "big")
    encoded = ""
    while number:
        number, remainder = divmod(number, 58)
        encoded = BASE58_ALPHABET[remainder] + encoded

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return BASE58_ALPHABET[0] * leading_zeros + encoded


def b58decode(text: str) -> bytes:
    """Base58 (Bitcoin alphabet) decoding."""
    number = 0
    for c in text:
        index = BASE58_ALPHABET.find(c)
        if index == -1:
            raise EncodingError(f"Invalid base58 character {c!r}", encoding="base58")
        number = number * 58 + index

    leading_zeros = len(text) - len(text.lstrip(BASE58_ALPHABET[0]))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading_zeros + body


# ----------------------------------------------------------------------
# Chain-specific encoders


def _left_pad(raw: bytes) -> bytes:
    if len(raw) > ADDRESS_LENGTH:
        raise EncodingError(
            f"Address of {len(raw)} bytes does not fit in {ADDRESS_LENGTH} bytes"
        )
    return raw.rjust(ADDRESS_LENGTH, b"\x00")


def encode_terra_address(address: str) -> bytes:
    """Encode a ``terra1...`` account or contract address."""
    hrp, data = bech32_decode(address)
    if hrp != TERRA_PREFIX:
        raise EncodingError(
            f"Expected '{TERRA_PREFIX}' address prefix, got '{hrp}'", encoding="bech32"
        )

    raw = bytes(convert_bits(data, 5, 8, pad=False))
    if len(raw) not in (20, 32):
        raise EncodingError(
            f"Terra addresses are 20 or 32 bytes, got {len(raw)}", encoding="bech32"
        )
    return _left_pad(raw)


def decode_terra_address(encoded: bytes) -> str:
    """Render a 32-byte recipient as a ``terra1...`` address."""
    encoded = _check_length(encoded)
    raw = encoded[12:] if encoded[:12] == b"\x00" * 12 else encoded
    return bech32_encode(TERRA_PREFIX, convert_bits(raw, 8, 5))


def encode_solana_address(address: str) -> bytes:
    """Encode a base58 Solana public key."""
    raw = b58decode(address)
    if len(raw) != ADDRESS_LENGTH:
        raise EncodingError(
            f"Solana addresses are {ADDRESS_LENGTH} bytes, got {len(raw)}",
            encoding="base58",
        )
    return raw


def decode_solana_address(encoded: bytes) -> str:
    return b58encode(_check_length(encoded))


def encode_evm_address(address: str) -> bytes:
    """Encode a 20-byte EVM address."""
    try:
        checksummed = to_address(address)
    except ValidationError as exc:
        raise EncodingError(str(exc.message), encoding="hex", cause=exc) from exc
    return _left_pad(bytes.fromhex(checksummed[2:]))


def decode_evm_address(encoded: bytes) -> str:
    encoded = _check_length(encoded)
    if encoded[:12] != b"\x00" * 12:
        raise EncodingError("EVM recipient must be left-padded with zeros", encoding="hex")
    return to_address(encoded[12:])


def _check_length(encoded: bytes) -> bytes:
    if len(encoded) != ADDRESS_LENGTH:
        raise EncodingError(
            f"Encoded recipients are {ADDRESS_LENGTH} bytes, got {len(encoded)}"
        )
    return bytes(encoded)


_EVM_CHAINS = (
    ChainId.ETHEREUM,
    ChainId.BSC,
    ChainId.POLYGON,
    ChainId.AVALANCHE,
    ChainId.OASIS,
    ChainId.FANTOM,
)

ENCODERS: Dict[int, Callable[[str], bytes]] = {
    ChainId.SOLANA: encode_solana_address,
    ChainId.TERRA: encode_terra_address,
    **{chain_id: encode_evm_address for chain_id in _EVM_CHAINS},
}

DECODERS: Dict[int, Callable[[bytes], str]] = {
    ChainId.SOLANA: decode_solana_address,
    ChainId.TERRA: decode_terra_address,
    **{chain_id: decode_evm_address for chain_id in _EVM_CHAINS},
}


def resolve_chain_id(chain: object) -> ChainId:
    """Accept a chain id or a chain name such as ``"terra"``."""
    if isinstance(chain, str) and not chain.isdigit():
        try:
            return ChainId[chain.upper()]
        except KeyError:
            raise ValidationError(
                f"Unknown chain '{chain}'",
                field="chain",
                value=chain,
                expected=[c.name.lower() for c in ChainId],
            ) from None
    try:
        return ChainId(int(chain))
    except (TypeError, ValueError):
        raise ValidationError(
            f"Unknown Wormhole chain id {chain!r}", field="chain", value=chain
        ) from None


def get_address_encoder(chain: object) -> Callable[[str], bytes]:
    """Encoder for the destination chain (id or name)."""
    chain_id = resolve_chain_id(chain)
    encoder: Optional[Callable[[str], bytes]] = ENCODERS.get(chain_id)
    if encoder is None:
        raise ValidationError(
            f"No address encoder for chain {chain_id.name.lower()}",
            field="chain",
            value=int(chain_id),
        )
    return encoder


def get_address_decoder(chain: object) -> Callable[[bytes], str]:
    """Decoder for the destination chain (id or name)."""
    chain_id = resolve_chain_id(chain)
    decoder = DECODERS.get(chain_id)
    if decoder is None:
        raise ValidationError(
            f"No address decoder for chain {chain_id.name.lower()}",
            field="chain",
            value=int(chain_id),
        )
    return decoder
