import pytest
from Crypto.Cipher import AES

from blockcrack.errors import ShapeError
from blockcrack.modes import (cbc_decrypt, cbc_encrypt, ecb_decrypt, ecb_encrypt,
                              split_blocks, xor_bytes)
from blockcrack.padding import pad, unpad
from blockcrack.primitive import decrypt_block, encrypt_block, random_bytes

KEY = b"YELLOW SUBMARINE"
IV = b"0000000000000000"


def test_xor_bytes():
    assert xor_bytes(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"


def test_split_blocks():
    assert split_blocks(b"a" * 20, 16) == [b"a" * 16, b"a" * 4]


def test_block_primitive_round_trip():
    block = b"sixteen byte blk"
    assert decrypt_block(encrypt_block(block, KEY), KEY) == block


def test_block_primitive_rejects_partial_block():
    with pytest.raises(ShapeError):
        encrypt_block(b"short", KEY)
    with pytest.raises(ShapeError):
        decrypt_block(b"x" * 17, KEY)


def test_cbc_full_circle():
    data = b"something extremely random"
    decrypted = cbc_decrypt(cbc_encrypt(data, KEY, IV), KEY, IV)
    assert decrypted == pad(data, 16)
    assert unpad(decrypted, 16) == data


@pytest.mark.parametrize("length", [1, 15, 16, 17, 100])
def test_cbc_matches_pycryptodome(length):
    key, iv, data = random_bytes(16), random_bytes(16), random_bytes(length)
    expected = AES.new(key, AES.MODE_CBC, iv).encrypt(pad(data, 16))
    assert cbc_encrypt(data, key, iv) == expected
    assert cbc_decrypt(expected, key, iv) == pad(data, 16)


@pytest.mark.parametrize("length", [1, 16, 33])
def test_ecb_matches_pycryptodome(length):
    key, data = random_bytes(16), random_bytes(length)
    expected = AES.new(key, AES.MODE_ECB).encrypt(pad(data, 16))
    assert ecb_encrypt(data, key) == expected
    assert ecb_decrypt(expected, key) == pad(data, 16)


def test_cbc_hides_repeated_blocks():
    ciphertext = cbc_encrypt(b"A" * 64, KEY, IV)
    blocks = split_blocks(ciphertext)
    assert len(set(blocks)) == len(blocks)


def test_decrypt_rejects_bad_length():
    with pytest.raises(ShapeError):
        cbc_decrypt(b"x" * 17, KEY, IV)
    with pytest.raises(ShapeError):
        ecb_decrypt(b"x" * 15, KEY)


def test_rejects_bad_iv():
    with pytest.raises(ShapeError):
        cbc_encrypt(b"data", KEY, b"short iv")
    with pytest.raises(ShapeError):
        cbc_decrypt(b"x" * 16, KEY, b"x" * 17)
