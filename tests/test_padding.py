import pytest
from Crypto.Util.Padding import pad as pycryptodome_pad

from blockcrack.errors import PaddingError, PaddingInvalid
from blockcrack.padding import is_padding_valid, pad, unpad


def test_pad_partial_block():
    assert pad(b"YELLOW SUBMARINE", 20) == b"YELLOW SUBMARINE\x04\x04\x04\x04"


def test_pad_entire_block():
    assert pad(b"YELLOW", 6) == b"YELLOW" + b"\x06" * 6


@pytest.mark.parametrize("data, block_size", [(b"", 16), (b"YELLOW", 0), (b"YELLOW", -4)])
def test_pad_nothing_to_pad(data, block_size):
    with pytest.raises(PaddingError):
        pad(data, block_size)


def test_unpad():
    assert unpad(b"YELLOW SUBMARINE\x04\x04\x04\x04", 20) == b"YELLOW SUBMARINE"
    assert unpad(b"YELLOW\x06\x06\x06\x06\x06\x06", 6) == b"YELLOW"


@pytest.mark.parametrize("data", [
    b"ICE ICE BABY\x05\x05\x05\x05",
    b"ICE ICE BABY\x01\x02\x03\x04",
    b"ICE ICE BABY\x00\x00\x00\x00",
    b"ICE ICE BABY\x04\x04\x04\x11",
    b"\x03\x03",
    b"",
])
def test_unpad_rejects_bad_padding(data):
    with pytest.raises(PaddingInvalid):
        unpad(data, 16)
    assert not is_padding_valid(data, 16)


def test_padding_invalid_is_a_value_error():
    with pytest.raises(ValueError):
        unpad(b"ICE ICE BABY\x01\x02\x03\x04", 16)


@pytest.mark.parametrize("data", [b"a", b"YELLOW SUBMARINE", b"x" * 31, bytes(range(256))])
@pytest.mark.parametrize("block_size", [1, 8, 16, 20, 255])
def test_round_trip(data, block_size):
    padded = pad(data, block_size)
    assert len(padded) % block_size == 0
    assert len(padded) > len(data)
    assert unpad(padded, block_size) == data


@pytest.mark.parametrize("data", [b"a", b"YELLOW SUBMARINE", b"something extremely random"])
def test_matches_pycryptodome(data):
    assert pad(data, 16) == pycryptodome_pad(data, 16)


def test_tampered_padding_is_rejected():
    padded = pad(b"YELLOW SUBMARINE", 20)
    for i in range(len(padded) - 4, len(padded)):
        tampered = bytearray(padded)
        tampered[i] ^= 0xFF
        with pytest.raises(PaddingInvalid):
            unpad(bytes(tampered), 20)
