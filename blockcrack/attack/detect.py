"""
ECB/CBC detection oracle.

ECB encrypts each block on its own, so repeated plaintext blocks give
repeated ciphertext blocks. CBC chains every block with the previous
ciphertext block and never does.

To guarantee a collision under ECB, feed the oracle at least 3 blocks of one
repeated byte: whatever prefix the oracle adds, two of them are aligned.
"""

from typing import Tuple

from ..errors import UnattackableOracle
from ..modes import cbc_encrypt, ecb_encrypt, split_blocks
from ..primitive import BLOCK_SIZE, random_bytes, random_int, random_key

# Configuration
ECB = "ECB"
CBC = "CBC"
MAX_BLOCK_SIZE_PROBES = 64      # input lengths tried before giving up on the block size


def has_repeated_block(ciphertext, block_size=BLOCK_SIZE):
    blocks = split_blocks(ciphertext, block_size)
    return len(blocks) != len(set(blocks))


def detect_mode(ciphertext, block_size=BLOCK_SIZE):
    """Return ECB if any two blocks of the ciphertext are identical, CBC otherwise."""
    return ECB if has_repeated_block(ciphertext, block_size) else CBC


def detect_oracle_mode(oracle, block_size=BLOCK_SIZE):
    """Drive the oracle with 3 blocks of 'A' and classify the output."""
    return detect_mode(oracle(b"A" * (3 * block_size)), block_size)


def get_block_size(oracle, max_attempts=MAX_BLOCK_SIZE_PROBES):
    """Detect the block size by observing ciphertext length changes."""
    initial_length = len(oracle(b""))

    for i in range(1, max_attempts + 1):
        new_length = len(oracle(b"A" * i))
        if new_length != initial_length:
            return new_length - initial_length

    raise UnattackableOracle("block size",
                             f"output length did not change within {max_attempts} bytes")


def encryption_oracle(data: bytes) -> Tuple[bytes, str]:
    """
    Encrypt data under a fresh random key, surrounded by 5-10 random bytes
    on each side, with ECB or CBC picked at random.

    Returns (ciphertext, mode) so the guess can be checked.
    """
    key = random_key(BLOCK_SIZE)
    plaintext = random_bytes(random_int(5, 10)) + data + random_bytes(random_int(5, 10))

    if random_int(0, 1):
        return ecb_encrypt(plaintext, key), ECB
    return cbc_encrypt(plaintext, key, random_bytes(BLOCK_SIZE)), CBC


def main(rounds=10):
    print(f"[*] Guessing the mode of {rounds} random encryptions...")
    correct = 0
    for i in range(rounds):
        ciphertext, mode = encryption_oracle(b"A" * (3 * BLOCK_SIZE))
        guess = detect_mode(ciphertext)
        correct += guess == mode
        print(f"    {i:02d}: guessed {guess}, actual {mode}")
    print(f"[+] {correct}/{rounds} correct")
    return 0 if correct == rounds else 1
