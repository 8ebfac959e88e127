"""Elliptic curve ElGamal in the exponent.

Washington, "Elliptic Curves: Number Theory and Cryptography", 2008, p. 175,
with the message carried as a scalar m and embedded as m*G:

    keygen:   s <- [1, n),  B = s*G
    encrypt:  k fresh,      (M1, M2) = (k*G, m*G + k*B)
    decrypt:  M = M2 - s*M1, then find t with t*G == M

Recovering t is a discrete log, solved here by walking t = 0, 1, 2, ...
So decryption costs O(m) group additions and is only usable for small
message domains.
"""

from __future__ import annotations

from typing import Callable

from ec_elgamal.errors import MessageNotFound
from ec_elgamal.groups.base import Group, Point
from ec_elgamal.scope import OperationScope
from ec_elgamal.types import Ciphertext, ElGamalConfig, KeyPair


class ElGamal:
    """Key generation, encryption and decryption over one group.

    The group handle is built (and torn down) by the caller. This class
    holds no per-call state, so one instance can serve concurrent callers
    as long as the backend's random source is thread-safe.
    """

    def __init__(self, group: Group, config: ElGamalConfig | None = None) -> None:
        self.group = group
        self.config = config or ElGamalConfig()

    def keygen(self) -> KeyPair:
        """Sample a private scalar s in [1, n) and derive B = s*G."""
        group = self.group
        with OperationScope(group, "keygen") as scope:
            P = scope.borrow(group.get_generator())
            n = group.get_order()
            s = scope.hold(self._nonzero_scalar(lambda: group.scalar_random_below(n)))
            B = scope.hold(group.point_scalar_mul(P, s))
            return KeyPair(private=scope.keep(s), public=scope.keep(B))

    def encrypt(self, public: Point, m: int) -> Ciphertext:
        """Encrypt the scalar m under `public` with a fresh ephemeral k."""
        if m < 0:
            raise ValueError(f"message must be non-negative, got {m}")
        group = self.group
        with OperationScope(group, "encrypt") as scope:
            P = scope.borrow(group.get_generator())
            scope.borrow(public)
            scope.borrow(m)
            k = scope.hold(self._ephemeral())
            M = scope.hold(group.point_scalar_mul(P, m))
            M1 = scope.hold(group.point_scalar_mul(P, k))
            h = scope.hold(group.point_scalar_mul(public, k))
            M2 = scope.hold(group.point_add(M, h))
            return Ciphertext(m1=scope.keep(M1), m2=scope.keep(M2))

    def decrypt(
        self,
        private: int,
        ciphertext: Ciphertext,
        domain: int | None = None,
    ) -> int:
        """Recover m from (M1, M2) by searching t in [0, min(domain, n)).

        Raises MessageNotFound when no t below the bound matches, which is
        what happens for a message outside the domain or a foreign key.
        """
        if domain is None:
            domain = self.config.message_domain
        if domain is not None and domain <= 0:
            raise ValueError(f"domain must be positive, got {domain}")

        group = self.group
        M1, M2 = ciphertext
        with OperationScope(group, "decrypt") as scope:
            scope.borrow(M1)
            scope.borrow(M2)
            scope.borrow(private)
            P = scope.borrow(group.get_generator())
            n = group.get_order()
            bound = n if domain is None else min(domain, n)

            h = scope.hold(group.point_scalar_mul(M1, private))
            M = scope.hold(group.point_sub(M2, h))

            # tP tracks t*G; one addition per step instead of a fresh multiply
            t = scope.hold(0)
            tP = scope.borrow(group.identity())
            while not group.scalar_equal(t, bound):
                if group.point_equal(tP, M):
                    return scope.keep(t)
                tP = scope.replace(tP, group.point_add(tP, P))
                t = scope.replace(t, group.scalar_increment(t))
            raise MessageNotFound(bound)

    def add_ciphertexts(self, c1: Ciphertext, c2: Ciphertext) -> Ciphertext:
        """Componentwise sum; decrypts to m1 + m2 under the same key."""
        group = self.group
        with OperationScope(group, "add_ciphertexts") as scope:
            for point in (c1.m1, c1.m2, c2.m1, c2.m2):
                scope.borrow(point)
            M1 = scope.hold(group.point_add(c1.m1, c2.m1))
            M2 = scope.hold(group.point_add(c1.m2, c2.m2))
            return Ciphertext(m1=scope.keep(M1), m2=scope.keep(M2))

    def _ephemeral(self) -> int:
        group = self.group
        if self.config.ephemeral_full_width:
            return self._nonzero_scalar(group.scalar_random_full_width)
        n = group.get_order()
        return self._nonzero_scalar(lambda: group.scalar_random_below(n))

    def _nonzero_scalar(self, sample: Callable[[], int]) -> int:
        """Draw from `sample` until the scalar is non-zero."""
        group = self.group
        while True:
            x = sample()
            if not group.scalar_equal(x, 0):
                return x
            group.release(x)


def keygen(group: Group) -> KeyPair:
    return ElGamal(group).keygen()


def encrypt(group: Group, public: Point, m: int) -> Ciphertext:
    return ElGamal(group).encrypt(public, m)


def decrypt(
    group: Group,
    private: int,
    ciphertext: Ciphertext,
    domain: int | None = None,
) -> int:
    return ElGamal(group).decrypt(private, ciphertext, domain)
