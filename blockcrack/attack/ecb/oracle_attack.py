#!/usr/bin/env python3
"""
ECB Oracle Attack - Byte-by-byte attack to recover the secret suffix
Exploits ECB mode deterministic encryption weakness

Principle:
  1. Feed B-1-(p mod B) filler bytes so that secret byte p is the last byte
     of block p // B, and record that block.
  2. Feed filler + recovered bytes + candidate for each of the 256 candidates;
     the candidate whose block matches is secret byte p.
  3. Repeat until every byte of the secret is known.

With a random prefix in front of the attacker input, first measure the
prefix length, then pad it out to a block boundary and drop its blocks:
the oracle seen through that view is the simple one again.
"""

import sys
import warnings

from tqdm.auto import tqdm

from ...errors import (AlignmentFailure, BlockCrackError, DataInconsistency,
                       DataInconsistencyWarning, UnattackableOracle)
from ...modes import split_blocks
from ..detect import ECB, detect_oracle_mode, get_block_size
from .suffix_oracle import SecretSuffixOracle

# Configuration
FILLER = b"A"                   # byte used to align the target byte
CHECK_FILLER = b"B"             # second filler for the alignment sanity round
PREFIX_FILLER = b"\x00"
MARKERS = (b"Y", b"Z")          # marker blocks used to find the prefix boundary


def check_attackable(oracle):
    """
    Check block size, output shape and mode. Returns the block size.
    Raises UnattackableOracle naming the unmet precondition.
    """
    block_size = get_block_size(oracle)
    if block_size < 2:
        raise UnattackableOracle("block size", f"output grows by {block_size} byte, no block structure")

    length = len(oracle(b""))
    if length % block_size != 0:
        raise UnattackableOracle("shape", f"output length {length} is not a multiple of {block_size}")

    mode = detect_oracle_mode(oracle, block_size)
    if mode != ECB:
        raise UnattackableOracle("mode", f"detected {mode}, not {ECB}")

    return block_size


def get_secret_length(oracle, block_size):
    """Detects secret length by observing when padding causes a new block"""
    initial_length = len(oracle(b""))

    for i in range(1, block_size + 1):
        new_length = len(oracle(FILLER * i))
        if new_length > initial_length:
            return initial_length - i

    raise UnattackableOracle("block size", f"no new block after {block_size} bytes")


def recover_byte(oracle, known, block_size, filler=FILLER, strict=False):
    """
    Recover the secret byte that follows `known`.

    All 256 candidates are tried. Several matches keep the lowest byte and
    emit a DataInconsistencyWarning (DataInconsistency when strict).
    """
    position = len(known)
    start = block_size * (position // block_size)
    end = start + block_size

    # Align target byte to end of block
    padding = filler * (block_size - 1 - position % block_size)

    # Get reference ciphertext
    reference_block = oracle(padding)[start:end]

    matches = [c for c in range(256)
               if oracle(padding + known + bytes([c]))[start:end] == reference_block]

    if not matches:
        raise DataInconsistency(f"no candidate matches secret byte {position}")
    if len(matches) > 1:
        message = f"{len(matches)} candidates match secret byte {position}, keeping 0x{matches[0]:02x}"
        if strict:
            raise DataInconsistency(message)
        warnings.warn(message, DataInconsistencyWarning, stacklevel=2)

    return bytes([matches[0]])


def _recover(oracle, block_size, length, known=b"", strict=False, verbose=False):
    for _ in tqdm(range(len(known), length), desc="secret", unit="B",
                  disable=not verbose, leave=False):
        known = known + recover_byte(oracle, known, block_size, strict=strict)
        if verbose:
            tqdm.write(f"[+] Secret progress: {known!r}", file=sys.stderr)
    return known


def recover_secret(oracle, block_size=None, strict=False, verbose=False):
    """
    Recover the secret appended by an ECB oracle without a prefix.

    `block_size` skips the precondition checks when the caller already ran them.
    """
    if block_size is None:
        block_size = check_attackable(oracle)

    length = get_secret_length(oracle, block_size)
    if verbose:
        print(f"[+] Block size: {block_size} bytes, secret length: {length} bytes", file=sys.stderr)

    return _recover(oracle, block_size, length, strict=strict, verbose=verbose)


def _find_marker_pair(oracle, filler_length, marker, first_block):
    block_size = len(marker)
    blocks = split_blocks(oracle(PREFIX_FILLER * filler_length + marker * 2), block_size)
    # once aligned, the marker pair starts in the first or second block we touch
    for j in range(first_block, min(first_block + 2, len(blocks) - 1)):
        if blocks[j] == blocks[j + 1]:
            return j
    return None


def find_prefix_length(oracle, block_size):
    """
    Measure the length of the prefix the oracle puts in front of our input.

    The first block that differs between two one-byte inputs is the first
    block we touch. Then filler is grown until two marker blocks land on a
    block boundary (two adjacent identical blocks); the hit is confirmed
    with a second marker so that a coincidence in the prefix or suffix is
    not taken for the boundary.
    """
    first = split_blocks(oracle(FILLER), block_size)
    second = split_blocks(oracle(CHECK_FILLER), block_size)
    diverging = [i for i, (a, b) in enumerate(zip(first, second)) if a != b]
    if not diverging:
        raise AlignmentFailure("attacker input does not change the ciphertext")
    first_block = diverging[0]

    markers = [m * block_size for m in MARKERS]
    for filler_length in range(block_size):
        j = _find_marker_pair(oracle, filler_length, markers[0], first_block)
        if j is None:
            continue
        if all(_find_marker_pair(oracle, filler_length, m, first_block) == j for m in markers[1:]):
            return j * block_size - filler_length

    raise AlignmentFailure(f"no block boundary found after block {first_block}")


class AlignedOracle:
    """
    View of an oracle with the prefix padded to a block boundary and its
    blocks removed from every output.
    """

    def __init__(self, oracle, prefix_length, block_size, filler=PREFIX_FILLER):
        self._oracle = oracle
        self._filler = filler * ((block_size - prefix_length % block_size) % block_size)
        self._skip = block_size * ((prefix_length + len(self._filler)) // block_size)

    def __call__(self, data):
        return self._oracle(self._filler + data)[self._skip:]


def check_alignment(view, block_size, prefix_length):
    """
    Sanity round: byte 0 of the secret must come out unique, and the same
    whatever the filler. Returns it, or raises AlignmentFailure.
    """
    try:
        first = recover_byte(view, b"", block_size, strict=True)
        second = recover_byte(view, b"", block_size, filler=CHECK_FILLER, strict=True)
    except DataInconsistency as e:
        raise AlignmentFailure(f"prefix length {prefix_length} does not align: {e}") from e
    if first != second:
        raise AlignmentFailure(f"prefix length {prefix_length} does not give a stable alignment")
    return first


def recover_secret_harder(oracle, strict=False, verbose=False):
    """Recover the secret from an ECB oracle that prepends an unknown, fixed prefix."""
    block_size = check_attackable(oracle)
    prefix_length = find_prefix_length(oracle, block_size)
    view = AlignedOracle(oracle, prefix_length, block_size)

    length = get_secret_length(view, block_size)
    if verbose:
        print(f"[+] Block size: {block_size} bytes, prefix length: {prefix_length} bytes, "
              f"secret length: {length} bytes", file=sys.stderr)
    if length <= 0:
        return b""

    known = check_alignment(view, block_size, prefix_length)

    return _recover(view, block_size, length, known, strict=strict, verbose=verbose)


def main(harder=False, prefix_range=None, secret=None, verbose=False):
    print("[*] Starting ECB Oracle Attack...")

    if harder and prefix_range is None:
        prefix_range = (1, 64)
    oracle = SecretSuffixOracle(suffix=secret, prefix_range=prefix_range if harder else None)

    try:
        print(f"[+] Block size: {oracle.key_size()} bytes")
        print("[*] Recovering secret...")
        if harder:
            recovered = recover_secret_harder(oracle.encrypt, verbose=verbose)
        else:
            recovered = recover_secret(oracle.encrypt, verbose=verbose)
    except BlockCrackError as e:
        print(f"[!] Attack failed: {e}")
        return 1

    print(f"\n[+] Recovered secret ({len(recovered)} bytes):")
    print(recovered.decode(errors="replace"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
