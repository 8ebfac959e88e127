"""Group backends for EC ElGamal.

Toy curves (``SMALL_CURVES``) are tried first, then the curves
shipped with the ``ecdsa`` package.
"""

from __future__ import annotations

import numpy as np
from ecdsa.curves import UnknownCurveError, curve_by_name

from ec_elgamal.groups.base import Group
from ec_elgamal.groups.ecdsa_group import EcdsaGroup
from ec_elgamal.groups.small_ec import SMALL_CURVES, SmallEC, SmallECGroup, small_group


def get_group(name: str, rng: np.random.Generator | None = None) -> Group:
    """Resolve a curve name to a group handle.

    `rng` only applies to toy curves; library curves sample from the
    OS entropy source.
    """
    if name in SMALL_CURVES:
        return small_group(name, rng=rng)
    try:
        return EcdsaGroup(curve_by_name(name))
    except UnknownCurveError:
        raise ValueError(f"unknown curve: {name!r}") from None


__all__ = [
    "EcdsaGroup",
    "Group",
    "SMALL_CURVES",
    "SmallEC",
    "SmallECGroup",
    "get_group",
    "small_group",
]
