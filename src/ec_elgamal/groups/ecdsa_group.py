"""`Group` backend over the named curves of the ``ecdsa`` package.

Point arithmetic, curve parameters and random sampling all come from
``ecdsa``; this module only adapts them to the group interface.
"""

from __future__ import annotations

from ecdsa.curves import Curve, curve_by_name
from ecdsa.ellipticcurve import INFINITY, AbstractPoint, PointJacobi
from ecdsa.util import randrange


class EcdsaGroup:
    """Prime-order group generated by the base point of an ``ecdsa`` curve."""

    def __init__(self, curve: Curve | str) -> None:
        if isinstance(curve, str):
            curve = curve_by_name(curve)
        if not isinstance(curve.generator, PointJacobi):
            raise ValueError(f"{curve.name} is not a short Weierstrass curve")
        self.curve = curve
        self.name = curve.name
        self._generator = curve.generator
        self._order = int(curve.order)
        self.scalar_bits = 2 * self._order.bit_length()

    def __repr__(self) -> str:
        return f"EcdsaGroup({self.name!r})"

    def get_generator(self) -> PointJacobi:
        return self._generator

    def get_order(self) -> int:
        return self._order

    def identity(self) -> AbstractPoint:
        return INFINITY

    def scalar_random_below(self, bound: int) -> int:
        # ecdsa's randrange draws from [1, bound); zero is never returned
        if bound <= 1:
            raise ValueError(f"bound must exceed 1, got {bound}")
        return randrange(bound)

    def scalar_random_full_width(self) -> int:
        return randrange(1 << self.scalar_bits)

    def point_scalar_mul(self, point: AbstractPoint, scalar: int) -> AbstractPoint:
        scalar %= self._order
        if scalar == 0 or point == INFINITY:
            return INFINITY
        return point * scalar

    def point_add(self, p: AbstractPoint, q: AbstractPoint) -> AbstractPoint:
        if p == INFINITY:
            return q
        if q == INFINITY:
            return p
        return p + q

    def point_sub(self, p: AbstractPoint, q: AbstractPoint) -> AbstractPoint:
        if q == INFINITY:
            return p
        return self.point_add(p, -q)

    def point_equal(self, p: AbstractPoint, q: AbstractPoint) -> bool:
        if p == INFINITY and q == INFINITY:
            return True
        if p == INFINITY or q == INFINITY:
            return False
        return p.x() == q.x() and p.y() == q.y()

    def scalar_equal(self, a: int, b: int) -> bool:
        return a == b

    def scalar_increment(self, a: int) -> int:
        return a + 1

    def release(self, value: object) -> None:
        # ecdsa points are garbage collected
        return None
