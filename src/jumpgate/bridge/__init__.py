"""
Wormhole bridge model for Jumpgate.

This module provides:
- The core message bridge and the token bridge contracts
- The token transfer payload codec
- Destination address encoders per Wormhole chain
"""

from .encoding import (
    ChainId,
    b58decode,
    b58encode,
    bech32_decode,
    bech32_encode,
    convert_bits,
    decode_evm_address,
    decode_solana_address,
    decode_terra_address,
    encode_evm_address,
    encode_solana_address,
    encode_terra_address,
    get_address_decoder,
    get_address_encoder,
    resolve_chain_id,
)
from .payload import (
    PAYLOAD_ID_TRANSFER,
    TRANSFER_PAYLOAD_LENGTH,
    TransferPayload,
    denormalize_amount,
    normalize_amount,
)
from .wormhole import WormholeCore, WormholeTokenBridge

__all__ = [
    # Contracts
    "WormholeCore",
    "WormholeTokenBridge",
    # Payload
    "TransferPayload",
    "PAYLOAD_ID_TRANSFER",
    "TRANSFER_PAYLOAD_LENGTH",
    "normalize_amount",
    "denormalize_amount",
    # Encoding
    "ChainId",
    "encode_terra_address",
    "encode_solana_address",
    "encode_evm_address",
    "decode_terra_address",
    "decode_solana_address",
    "decode_evm_address",
    "get_address_encoder",
    "get_address_decoder",
    "resolve_chain_id",
    "bech32_encode",
    "bech32_decode",
    "convert_bits",
    "b58encode",
    "b58decode",
]
