"""
ECB secret-suffix oracle - simulates a vulnerable encryption service

Every call encrypts  prefix || attacker bytes || secret  with AES-ECB under a
key chosen once at construction. The prefix is empty unless a range is given,
in which case a random number of random bytes is drawn once and reused for
the lifetime of the oracle. Same input => same output.
"""

import base64
from typing import Optional, Tuple

from ...modes import ecb_encrypt
from ...primitive import random_bytes, random_int, random_key
from ..detect import get_block_size

# Configuration
SECRET_B64 = (
    "Um9sbGluJyBpbiBteSA1LjAKV2l0aCBteSByYWctdG9wIGRvd24gc28gbXkg"
    "aGFpciBjYW4gYmxvdwpUaGUgZ2lybGllcyBvbiBzdGFuZGJ5IHdhdmluZyBq"
    "dXN0IHRvIHNheSBoaQpEaWQgeW91IHN0b3A/IE5vLCBJIGp1c3QgZHJvdmUg"
    "YnkK"
)
DEFAULT_SECRET = base64.b64decode(SECRET_B64)


class SecretSuffixOracle:
    """
    Holds the key, the secret suffix and the optional prefix.

    Attacks only ever get the bound `encrypt` method.
    """

    def __init__(self, suffix: Optional[bytes] = None, key_size: int = 16,
                 prefix_range: Optional[Tuple[int, int]] = None) -> None:
        self._key = random_key(key_size)
        self._suffix = DEFAULT_SECRET if suffix is None else bytes(suffix)
        if not self._suffix:
            raise ValueError("secret suffix must not be empty")

        if prefix_range is None:
            self._prefix = b""
        else:
            lo, hi = prefix_range
            if lo < 0 or hi < lo:
                raise ValueError(f"invalid prefix range {prefix_range}")
            self._prefix = random_bytes(random_int(lo, hi))

    def encrypt(self, data):
        """Encrypts prefix + data + secret using AES-ECB mode"""
        return ecb_encrypt(self._prefix + data + self._suffix, self._key)

    def __call__(self, data):
        return self.encrypt(data)

    def key_size(self):
        """Block size seen through the oracle (equal to the key size for AES-128)."""
        return get_block_size(self.encrypt)
