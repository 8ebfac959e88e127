"""Scoped ownership of group temporaries.

Every scalar or point an operation creates is registered with an
`OperationScope`. On leaving the ``with`` block each distinct registered
object is released exactly once, whether the block returned normally or
raised. Objects the operation does not own (the group's generator and
identity, the caller's inputs) and objects handed back to the caller are
never released, even when a temporary turns out to be the same object.
Faults raised by the backend inside the block surface as
`GroupOperationError`.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, TypeVar

from ec_elgamal.errors import ElGamalError, GroupOperationError
from ec_elgamal.groups.base import Group

T = TypeVar("T")


def _contains(values: list[Any], value: Any) -> bool:
    return any(v is value for v in values)


class OperationScope:
    """Context manager tracking temporaries for one keygen/encrypt/decrypt."""

    def __init__(self, group: Group, operation: str) -> None:
        self.group = group
        self.operation = operation
        self._held: list[Any] = []
        self._borrowed: list[Any] = []
        self._kept: list[Any] = []
        self._released: list[Any] = []

    def __enter__(self) -> OperationScope:
        return self

    def hold(self, value: T) -> T:
        """Register a temporary; returns it unchanged."""
        self._held.append(value)
        return value

    def borrow(self, value: T) -> T:
        """Use a value owned by someone else; it is never released here."""
        self._borrowed.append(value)
        return value

    def keep(self, value: T) -> T:
        """Mark a value that leaves the operation as part of its result."""
        self._kept.append(value)
        return value

    def replace(self, old: Any, new: T) -> T:
        """Drop one hold on `old`, releasing it if nothing else refers to it."""
        for i, held in enumerate(self._held):
            if held is old:
                del self._held[i]
                break
        if not _contains(self._held, old):
            self._release(old, self._borrowed + self._kept)
        return self.hold(new)

    def _release(self, value: Any, protected: list[Any]) -> None:
        if _contains(protected, value) or _contains(self._released, value):
            return
        if value is self.group.identity():
            return
        self._released.append(value)
        self.group.release(value)

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        # Kept values only reach the caller when the block returned
        protected = self._borrowed if exc is not None else self._borrowed + self._kept
        held, self._held = self._held, []
        for value in reversed(held):
            self._release(value, protected)
        self._borrowed, self._kept, self._released = [], [], []
        if exc is None or isinstance(exc, ElGamalError):
            return False
        if isinstance(exc, Exception):
            raise GroupOperationError(
                f"{self.operation} failed on {self.group.name}: {exc}"
            ) from exc
        return False
