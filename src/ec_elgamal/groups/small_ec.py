"""Toy elliptic curve groups over small prime fields.

Short Weierstrass curves y^2 = x^3 + ax + b over F_p, restricted to the
subgroup of largest prime order. Small enough that a discrete log over the
whole group is a brute-force loop, which is what makes exhaustive
decryption testable end to end.
"""

from __future__ import annotations

import numpy as np

AffinePoint = tuple[int, int] | None


def largest_prime_factor(n: int) -> int:
    """Largest prime dividing n (n >= 2)."""
    factor = 1
    d = 2
    while d * d <= n:
        while n % d == 0:
            factor = d
            n //= d
        d += 1
    if n > 1:
        factor = n
    return factor


class SmallEC:
    """Elliptic curve over F_p with full arithmetic.

    Supports point enumeration, subgroup generator finding, and standard
    add/multiply operations. For small primes only (p < ~10^6).
    The point at infinity is represented as None.
    """

    def __init__(self, p: int, a: int, b: int) -> None:
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise ValueError(f"singular curve: a={a}, b={b} over F_{p}")
        self.p = p
        self.a = a
        self.b = b
        self._points: list[AffinePoint] | None = None
        self._order: int | None = None
        self._subgroup_order: int | None = None
        self._gen: tuple[int, int] | None = None

    @classmethod
    def with_large_subgroup(cls, p: int, max_cofactor: int = 4) -> SmallEC:
        """First curve over F_p whose prime subgroup has cofactor <= max_cofactor.

        Tries y^2 = x^3 + 7 first, then scans other (a, b).
        """
        candidates = [(0, 7)] + [
            (a, b) for b in range(1, min(p, 30)) for a in range(0, min(p, 20))
        ]
        for a, b in candidates:
            if (4 * a * a * a + 27 * b * b) % p == 0:
                continue
            curve = cls(p, a, b)
            if curve.order // largest_prime_factor(curve.order) <= max_cofactor:
                return curve
        raise ValueError(f"no curve over F_{p} with cofactor <= {max_cofactor}")

    @property
    def order(self) -> int:
        """Number of points on the curve, infinity included."""
        if self._order is None:
            self._enumerate()
        assert self._order is not None
        return self._order

    @property
    def subgroup_order(self) -> int:
        """Prime order n of the subgroup generated by `generator`."""
        if self._subgroup_order is None:
            self._find_generator()
        assert self._subgroup_order is not None
        return self._subgroup_order

    @property
    def generator(self) -> tuple[int, int]:
        if self._gen is None:
            self._find_generator()
        assert self._gen is not None
        return self._gen

    @property
    def points(self) -> list[AffinePoint]:
        if self._points is None:
            self._enumerate()
        assert self._points is not None
        return self._points

    def contains(self, P: AffinePoint) -> bool:
        if P is None:
            return True
        x, y = P
        return (y * y - x * x * x - self.a * x - self.b) % self.p == 0

    def _enumerate(self) -> None:
        points: list[AffinePoint] = [None]  # infinity
        p, a, b = self.p, self.a, self.b
        qr: dict[int, list[int]] = {}
        for y in range(p):
            qr.setdefault((y * y) % p, []).append(y)
        for x in range(p):
            rhs = (x * x * x + a * x + b) % p
            if rhs in qr:
                for y in qr[rhs]:
                    points.append((x, y))
        self._points = points
        self._order = len(points)

    def _find_generator(self) -> None:
        n = largest_prime_factor(self.order)
        cofactor = self.order // n
        for pt in self.points[1:]:
            H = self.multiply(pt, cofactor)
            if H is not None and self.multiply(H, n) is None:
                self._gen = H
                self._subgroup_order = n
                return
        raise ValueError(f"no point of order {n} on curve over F_{self.p}")

    def add(self, P: AffinePoint, Q: AffinePoint) -> AffinePoint:
        if P is None:
            return Q
        if Q is None:
            return P
        p = self.p
        x1, y1 = P
        x2, y2 = Q
        if x1 == x2 and y1 == (p - y2) % p:
            return None
        if P == Q:
            lam = (3 * x1 * x1 + self.a) * pow(2 * y1, p - 2, p) % p
        else:
            lam = (y2 - y1) * pow((x2 - x1) % p, p - 2, p) % p
        x3 = (lam * lam - x1 - x2) % p
        y3 = (lam * (x1 - x3) - y1) % p
        return (x3, y3)

    def neg(self, P: AffinePoint) -> AffinePoint:
        if P is None:
            return None
        return (P[0], (self.p - P[1]) % self.p)

    def multiply(self, P: AffinePoint, k: int) -> AffinePoint:
        if k < 0:
            P = self.neg(P)
            k = -k
        if k == 0 or P is None:
            return None
        result: AffinePoint = None
        addend = P
        while k:
            if k & 1:
                result = self.add(result, addend)
            addend = self.add(addend, addend)
            k >>= 1
        return result


class SmallECGroup:
    """`Group` backend over the prime-order subgroup of a `SmallEC`.

    Randomness comes from a numpy Generator so tests can pin a seed.
    Curve parameters are computed once here and never change, but the
    Generator is mutable and not thread-safe: give each thread its own
    group (or its own `rng`).
    """

    def __init__(
        self,
        curve: SmallEC,
        name: str | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.curve = curve
        self.name = name or f"y^2 = x^3 + {curve.a}x + {curve.b} over F_{curve.p}"
        self.rng = rng if rng is not None else np.random.default_rng()
        self._generator = curve.generator
        self._order = curve.subgroup_order
        # Double-width big number, as sampled without reducing by the order
        self.scalar_bits = 2 * self._order.bit_length()

    def __repr__(self) -> str:
        return f"SmallECGroup({self.name!r}, order={self._order})"

    def get_generator(self) -> tuple[int, int]:
        return self._generator

    def get_order(self) -> int:
        return self._order

    def identity(self) -> AffinePoint:
        return None

    def scalar_random_below(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return int(self.rng.integers(0, bound))

    def scalar_random_full_width(self) -> int:
        return int(self.rng.integers(0, 1 << self.scalar_bits))

    def point_scalar_mul(self, point: AffinePoint, scalar: int) -> AffinePoint:
        self._check(point)
        return self.curve.multiply(point, scalar % self._order)

    def point_add(self, p: AffinePoint, q: AffinePoint) -> AffinePoint:
        self._check(p)
        self._check(q)
        return self.curve.add(p, q)

    def point_sub(self, p: AffinePoint, q: AffinePoint) -> AffinePoint:
        self._check(p)
        self._check(q)
        return self.curve.add(p, self.curve.neg(q))

    def point_equal(self, p: AffinePoint, q: AffinePoint) -> bool:
        return p == q

    def scalar_equal(self, a: int, b: int) -> bool:
        return a == b

    def scalar_increment(self, a: int) -> int:
        return a + 1

    def release(self, value: object) -> None:
        # Python objects; nothing to free
        return None

    def _check(self, point: AffinePoint) -> None:
        if not self.curve.contains(point):
            raise ValueError(f"point {point} is not on {self.name}")


# -- Standard test fields (y^2 = x^3 + 7 tried first, secp256k1 family) --

SMALL_CURVES = {
    "p97": 97,
    "p251": 251,
    "p509": 509,
    "p1021": 1021,
    "p2039": 2039,
    "p4093": 4093,
}


def small_group(name: str, rng: np.random.Generator | None = None) -> SmallECGroup:
    """Build the toy group registered under `name` in SMALL_CURVES."""
    return SmallECGroup(SmallEC.with_large_subgroup(SMALL_CURVES[name]), name=name, rng=rng)
