"""
blockcrack: ECB and CBC modes built from a raw AES block, and
chosen-plaintext attacks against ECB oracles.
"""

__version__ = "0.1.0"
