"""
ECB and CBC built from the raw block primitive and XOR.

CBC:
  encrypt: C[i] = E_k(P[i] ^ C[i-1]), C[-1] = IV
  decrypt: P[i] = D_k(C[i]) ^ C[i-1]

Decryption returns the padded plaintext; callers strip it with unpad().
"""

from typing import List

from .errors import ShapeError
from .padding import pad
from .primitive import BLOCK_SIZE, decrypt_block, encrypt_block


def xor_bytes(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def split_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> List[bytes]:
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]


def _check_shape(data: bytes) -> None:
    if len(data) % BLOCK_SIZE != 0:
        raise ShapeError(f"length {len(data)} is not a multiple of {BLOCK_SIZE}")


def _check_iv(iv: bytes) -> None:
    if len(iv) != BLOCK_SIZE:
        raise ShapeError(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}")


def ecb_encrypt(plaintext: bytes, key: bytes) -> bytes:
    """Pad and encrypt every block independently."""
    padded = pad(plaintext, BLOCK_SIZE)
    return b"".join(encrypt_block(block, key) for block in split_blocks(padded))


def ecb_decrypt(ciphertext: bytes, key: bytes) -> bytes:
    _check_shape(ciphertext)
    return b"".join(decrypt_block(block, key) for block in split_blocks(ciphertext))


def cbc_encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Pad and encrypt in CBC mode. The IV is not part of the output."""
    _check_iv(iv)
    previous = iv
    out = []
    for block in split_blocks(pad(plaintext, BLOCK_SIZE)):
        previous = encrypt_block(xor_bytes(block, previous), key)
        out.append(previous)
    return b"".join(out)


def cbc_decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt in CBC mode; the result is still padded."""
    _check_iv(iv)
    _check_shape(ciphertext)
    previous = iv
    out = []
    for block in split_blocks(ciphertext):
        out.append(xor_bytes(decrypt_block(block, key), previous))
        previous = block
    return b"".join(out)
