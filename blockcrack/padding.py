"""
PKCS#7 padding.

Padding is always present: an already aligned input gets a full extra block,
so unpad() can always strip it again.
"""

from .errors import PaddingError, PaddingInvalid


def pad(data: bytes, block_size: int) -> bytes:
    """Append n bytes of value n so that len(data) becomes a multiple of block_size."""
    if not data or block_size <= 0:
        raise PaddingError("nothing to pad")
    if block_size > 255:
        raise PaddingError(f"block size {block_size} does not fit in a padding byte")
    n = block_size - (len(data) % block_size)
    return bytes(data) + bytes([n]) * n


def unpad(data: bytes, block_size: int) -> bytes:
    """
    Strip PKCS#7 padding.

    Raises PaddingInvalid unless the last byte n satisfies 1 <= n <= block_size
    and the final n bytes all equal n.
    """
    if not data:
        raise PaddingInvalid("no data to unpad")
    n = data[-1]
    if n < 1 or n > block_size or n > len(data):
        raise PaddingInvalid(f"invalid padding length {n}")
    if data[-n:] != bytes([n]) * n:
        raise PaddingInvalid("inconsistent padding bytes")
    return bytes(data[:-n])


def is_padding_valid(data: bytes, block_size: int) -> bool:
    try:
        unpad(data, block_size)
    except PaddingInvalid:
        return False
    return True
