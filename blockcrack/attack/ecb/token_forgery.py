#!/usr/bin/env python3
"""
AES-128 ECB profile token forgery

A server issues tokens AES-ECB(email=X&uid=NNNN&role=user) and trusts the
role found in them. ECB encrypts each 16-byte block independently, so blocks
from different tokens can be cut and pasted together.

Principle:
  1. Grow the email until "email=...&uid=NNNN&role=" ends on a block
     boundary; the last block of that token is then "user" + padding.
  2. Register an email that puts "admin" + valid PKCS#7 padding in a block
     of its own (the server never checks what the email contains).
  3. Replace the last block of the first token with that block. The result
     decrypts to  email=...&uid=NNNN&role=admin.

Usage: python3 -m blockcrack forge me@test.com
"""

import sys
from typing import Callable, Optional

from ...errors import AlignmentFailure, BlockCrackError
from ...modes import ecb_decrypt, ecb_encrypt, split_blocks
from ...padding import pad, unpad
from ...primitive import BLOCK_SIZE, random_key
from ...profile import Profile, decode, profile_for, sanitize
from ..detect import get_block_size

# Configuration
EMAIL_PREFIX = "email="         # start of every encoded profile
ROLE_USER = "user"
ROLE_ADMIN = "admin"
FILLER = "A"

TokenOracle = Callable[[str], bytes]


class ProfileForger:
    """Token server: issues ECB tokens for emails and reads them back."""

    def __init__(self, key_size: int = 16) -> None:
        self._key = random_key(key_size)

    def new_token(self, email: str) -> bytes:
        """Encrypt a fresh 'user' profile for email."""
        return ecb_encrypt(profile_for(email).encode(), self._key)

    def decrypt(self, token: bytes) -> str:
        return unpad(ecb_decrypt(token, self._key), BLOCK_SIZE).decode()

    def profile(self, token: bytes) -> Profile:
        return decode(self.decrypt(token))

    def login(self, token: bytes) -> str:
        try:
            profile = self.profile(token)
        except (ValueError, UnicodeDecodeError):
            return "Invalid token !"
        if profile.role == ROLE_ADMIN:
            return f"Hello admin {profile.email}"
        return f"Hello {profile.email}, you are a simple {profile.role}"

    def escalate(self, base_email: str, max_attempts: Optional[int] = None) -> bytes:
        """Run the cut-and-paste attack against this server's new_token()."""
        return escalate(self.new_token, base_email, max_attempts)


def _shape(local: str, extra: int, domain: str) -> str:
    return local + FILLER * extra + domain


def escalate(new_token: TokenOracle, base_email: str, max_attempts: Optional[int] = None,
             verbose: bool = False) -> bytes:
    """
    Forge a token whose profile has role 'admin', using only new_token().

    Raises AlignmentFailure if growing the local part of base_email by up to
    max_attempts bytes (2 blocks by default) never aligns the role value.
    """
    block_size = get_block_size(lambda data: new_token(data.decode()))
    if max_attempts is None:
        max_attempts = 2 * block_size

    local, at, domain = sanitize(base_email).partition("@")
    domain = at + domain

    # 1) Find how many filler bytes make the encoded profile block aligned
    base_length = len(new_token(_shape(local, 0, domain)))
    for extra in range(1, max_attempts + 1):
        if len(new_token(_shape(local, extra, domain))) > base_length:
            break
    else:
        raise AlignmentFailure(f"token length did not change within {max_attempts} extra bytes")

    # 2) Push "user" alone into the last block and keep everything before it
    email = _shape(local, extra + len(ROLE_USER), domain)
    head = split_blocks(new_token(email), block_size)[:-1]

    # 3) Block "admin" + padding, aligned right after "email="
    fill = (-len(EMAIL_PREFIX)) % block_size
    admin_block = pad(ROLE_ADMIN.encode(), block_size).decode()
    index = (len(EMAIL_PREFIX) + fill) // block_size
    admin = split_blocks(new_token(FILLER * fill + admin_block + domain), block_size)[index]

    if verbose:
        for i, block in enumerate(head + [admin]):
            print(f"Block {i}: {block.hex()}", file=sys.stderr)

    # Assemble the malicious token by concatenating the chosen ECB blocks
    return b"".join(head) + admin


def main(base_email: str = "me@test.com", verbose: bool = False) -> int:
    print("AES-128 ECB profile token forgery\n")
    server = ProfileForger()

    token = server.new_token(base_email)
    print(f"Honest token : {token.hex()}")
    print(f"Login result : {server.login(token)}\n")

    try:
        forged = escalate(server.new_token, base_email, verbose=verbose)
    except BlockCrackError as e:
        print(f"[!] Forgery failed: {e}")
        return 1

    print(f"Forged token : {forged.hex()}")
    print(f"Decrypted    : {server.decrypt(forged)!r}")
    print(f"Login result : {server.login(forged)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
