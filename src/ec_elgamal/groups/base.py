"""Capability interface every group backend provides.

The ElGamal operations only ever talk to a group through these methods,
so a toy curve and a production curve are interchangeable.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

Point = Any


@runtime_checkable
class Group(Protocol):
    """Prime-order elliptic curve group."""

    name: str

    def get_generator(self) -> Point: ...

    def get_order(self) -> int: ...

    def identity(self) -> Point: ...

    def scalar_random_below(self, bound: int) -> int: ...

    def scalar_random_full_width(self) -> int: ...

    def point_scalar_mul(self, point: Point, scalar: int) -> Point: ...

    def point_add(self, p: Point, q: Point) -> Point: ...

    def point_sub(self, p: Point, q: Point) -> Point: ...

    def point_equal(self, p: Point, q: Point) -> bool: ...

    def scalar_equal(self, a: int, b: int) -> bool: ...

    def scalar_increment(self, a: int) -> int: ...

    def release(self, value: Any) -> None:
        """Return a temporary to the backend. Called once per temporary."""
        ...
