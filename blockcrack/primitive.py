"""
Raw block primitive and randomness source.

Only single-block AES calls are used here (AES in MODE_ECB on exactly one
block); every mode in this package is built on top of these two functions.
"""

import random

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from .errors import ShapeError

BLOCK_SIZE = AES.block_size     # 16 bytes


def encrypt_block(block: bytes, key: bytes) -> bytes:
    """Encrypt exactly one block with AES."""
    if len(block) != BLOCK_SIZE:
        raise ShapeError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return AES.new(key, AES.MODE_ECB).encrypt(block)


def decrypt_block(block: bytes, key: bytes) -> bytes:
    """Decrypt exactly one block with AES."""
    if len(block) != BLOCK_SIZE:
        raise ShapeError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return AES.new(key, AES.MODE_ECB).decrypt(block)


def random_bytes(n: int) -> bytes:
    return get_random_bytes(n)


def random_int(lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi]."""
    return random.randint(lo, hi)


def random_key(key_size: int = 16) -> bytes:
    """Random AES key (16, 24 or 32 bytes)."""
    if key_size not in AES.key_size:
        raise ValueError(f"invalid AES key size {key_size}")
    return get_random_bytes(key_size)
