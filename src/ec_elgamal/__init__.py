"""Elliptic curve ElGamal over pluggable prime-order groups.

Keys, ciphertexts and messages are plain scalars and points of the
chosen group backend; decryption brute-forces a small message domain.
"""

from __future__ import annotations

from ec_elgamal.elgamal import ElGamal, decrypt, encrypt, keygen
from ec_elgamal.errors import ElGamalError, GroupOperationError, MessageNotFound
from ec_elgamal.groups import get_group
from ec_elgamal.types import Ciphertext, ElGamalConfig, KeyPair

__version__ = "0.1.0"

__all__ = [
    "Ciphertext",
    "ElGamal",
    "ElGamalConfig",
    "ElGamalError",
    "GroupOperationError",
    "KeyPair",
    "MessageNotFound",
    "decrypt",
    "encrypt",
    "get_group",
    "keygen",
]
