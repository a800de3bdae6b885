"""
Errors raised by the block modes and the attacks built on top of them.

Malformed-input errors also derive from ValueError, the same way
pycryptodome's own padding helpers report bad input.
"""


class BlockCrackError(Exception):
    """Base class for every error raised by blockcrack."""


class PaddingError(BlockCrackError, ValueError):
    """Nothing to pad (empty input or non-positive block size)."""


class PaddingInvalid(BlockCrackError, ValueError):
    """Trailing bytes do not form valid PKCS#7 padding."""


class ShapeError(BlockCrackError, ValueError):
    """Input length is not a multiple of the block size, or the IV is not one block."""


class UnattackableOracle(BlockCrackError):
    """
    An oracle precondition is not met.

    `reason` names it: "block size", "shape" or "mode".
    """

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = f"oracle is not attackable: {reason}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class AlignmentFailure(BlockCrackError):
    """Attacker input could not be aligned on a block boundary."""


class DataInconsistency(BlockCrackError):
    """Zero or several candidate bytes matched where exactly one was expected."""


class DataInconsistencyWarning(UserWarning):
    """Several candidate bytes matched; the lowest one was kept."""
