"""Exception hierarchy for EC ElGamal operations."""

from __future__ import annotations


class ElGamalError(Exception):
    """Base class for failures raised by keygen, encrypt and decrypt."""


class GroupOperationError(ElGamalError):
    """An arithmetic or allocation step in the group backend failed.

    The backend's own exception is chained as ``__cause__``.
    """


class MessageNotFound(ElGamalError):
    """Decryption searched every candidate below ``bound`` without a match."""

    def __init__(self, bound: int) -> None:
        super().__init__(f"no message t < {bound} satisfies t*G == M")
        self.bound = bound
