import pytest

from blockcrack.attack.detect import (CBC, ECB, detect_mode, detect_oracle_mode,
                                      encryption_oracle, get_block_size)
from blockcrack.attack.ecb.suffix_oracle import SecretSuffixOracle
from blockcrack.errors import UnattackableOracle
from blockcrack.modes import cbc_encrypt, ecb_encrypt
from blockcrack.primitive import random_bytes

KEY = b"YELLOW SUBMARINE"


def test_detect_mode_on_known_ciphertexts():
    plaintext = b"A" * 48
    assert detect_mode(ecb_encrypt(plaintext, KEY)) == ECB
    assert detect_mode(cbc_encrypt(plaintext, KEY, random_bytes(16))) == CBC


@pytest.mark.parametrize("data", [
    b"A" * 48,
    b"things repeated things repeated things repeated",
])
def test_guess_block_cipher(data):
    for _ in range(20):
        ciphertext, expected = encryption_oracle(data)
        assert detect_mode(ciphertext) == expected


def test_detect_oracle_mode():
    oracle = SecretSuffixOracle(prefix_range=(0, 40))
    assert detect_oracle_mode(oracle.encrypt) == ECB
    assert detect_oracle_mode(lambda data: cbc_encrypt(data, KEY, random_bytes(16))) == CBC


@pytest.mark.parametrize("key_size", [16, 24, 32])
def test_block_size(key_size):
    oracle = SecretSuffixOracle(key_size=key_size)
    assert get_block_size(oracle.encrypt) == 16


def test_key_size():
    assert SecretSuffixOracle(key_size=16).key_size() == 16


def test_block_size_not_found():
    with pytest.raises(UnattackableOracle) as excinfo:
        get_block_size(lambda data: b"\x00" * 32, max_attempts=10)
    assert excinfo.value.reason == "block size"
