"""Tests for the Wormhole transfer payload."""

import dataclasses

import pytest

from jumpgate.bridge import (
    PAYLOAD_ID_TRANSFER,
    TRANSFER_PAYLOAD_LENGTH,
    ChainId,
    TransferPayload,
    denormalize_amount,
    normalize_amount,
)
from jumpgate.errors import EncodingError


@pytest.fixture
def payload():
    return TransferPayload(
        amount=123_456_789,
        token_address=b"\x00" * 12 + b"\xaa" * 20,
        token_chain=ChainId.ETHEREUM,
        to=b"\x11" * 32,
        to_chain=ChainId.TERRA,
        fee=5,
    )


class TestNormalization:
    """Test 8-decimal amount normalisation."""

    @pytest.mark.parametrize(
        "amount, decimals, expected",
        [
            (10**18, 18, 10**8),
            (10**10 - 1, 18, 0),
            (10**10, 18, 1),
            (123, 6, 123),
            (123, 8, 123),
            (12345, 10, 123),
        ],
    )
    def test_normalize(self, amount, decimals, expected):
        """Test truncation to 8 decimals."""
        assert normalize_amount(amount, decimals) == expected

    def test_denormalize(self):
        """Test scaling back to token decimals."""
        assert denormalize_amount(10**8, 18) == 10**18
        assert denormalize_amount(42, 6) == 42


class TestTransferPayload:
    """Test the transfer payload codec."""

    def test_layout(self, payload):
        """Test field offsets of the encoded payload."""
        data = payload.encode()

        assert len(data) == TRANSFER_PAYLOAD_LENGTH
        assert data[0] == PAYLOAD_ID_TRANSFER
        assert int.from_bytes(data[1:33], "big") == 123_456_789
        assert data[33:65] == payload.token_address
        assert data[65:67] == b"\x00\x02"
        assert data[67:99] == b"\x11" * 32
        assert data[99:101] == b"\x00\x03"
        assert int.from_bytes(data[101:133], "big") == 5

    def test_decode(self, payload):
        """Test parsing an encoded payload."""
        assert TransferPayload.decode(payload.encode()) == payload

    def test_decode_wrong_length(self, payload):
        """Test truncated payloads."""
        with pytest.raises(EncodingError):
            TransferPayload.decode(payload.encode()[:-1])

    def test_decode_wrong_id(self, payload):
        """Test payloads of another type."""
        data = b"\x03" + payload.encode()[1:]
        with pytest.raises(EncodingError):
            TransferPayload.decode(data)

    @pytest.mark.parametrize(
        "changes",
        [
            {"amount": -1},
            {"fee": 2**256},
            {"to_chain": 2**16},
            {"token_address": b"\x00" * 20},
            {"to": b"\x00" * 33},
        ],
    )
    def test_out_of_range_fields(self, payload, changes):
        """Test fields that do not fit their wire width."""
        with pytest.raises(EncodingError):
            dataclasses.replace(payload, **changes)

    def test_to_dict(self, payload):
        """Test the JSON-friendly representation."""
        data = payload.to_dict()
        assert data["to"] == "0x" + "11" * 32
        assert data["to_chain"] == 3
        assert data["amount"] == 123_456_789
