"""Dataclass definitions for keys, ciphertexts and scheme configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass
class ElGamalConfig:
    """Configuration for an ElGamal instance."""

    # Draw k over the backend's full scalar width instead of [0, n)
    ephemeral_full_width: bool = False
    # Default search bound for decrypt; None searches the whole group
    message_domain: int | None = None


@dataclass(frozen=True)
class KeyPair:
    """A private scalar and the public point derived from it."""

    private: int
    public: Any


@dataclass(frozen=True)
class Ciphertext:
    """ElGamal ciphertext (M1, M2) = (k*G, m*G + k*B)."""

    m1: Any
    m2: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.m1
        yield self.m2
