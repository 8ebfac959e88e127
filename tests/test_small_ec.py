"""Tests for the toy curve arithmetic and its group adapter."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from ec_elgamal.groups.small_ec import (
    SMALL_CURVES,
    SmallEC,
    SmallECGroup,
    largest_prime_factor,
    small_group,
)


class TestLargestPrimeFactor:
    def test_prime(self):
        assert largest_prime_factor(97) == 97

    def test_composite(self):
        assert largest_prime_factor(252) == 7

    def test_power_of_two(self):
        assert largest_prime_factor(64) == 2

    def test_prime_times_small(self):
        assert largest_prime_factor(4 * 1019) == 1019


class TestSmallEC:
    @pytest.fixture(scope="class")
    def curve(self):
        return SmallEC.with_large_subgroup(97)

    def test_singular_curve_rejected(self):
        with pytest.raises(ValueError):
            SmallEC(97, 0, 0)

    def test_order_counts_infinity(self, curve):
        assert curve.order == len(curve.points)
        assert curve.points[0] is None

    def test_all_points_on_curve(self, curve):
        assert all(curve.contains(pt) for pt in curve.points)

    def test_hasse_bound(self, curve):
        assert abs(curve.order - (curve.p + 1)) <= 2 * int(curve.p**0.5) + 1

    def test_cofactor_is_small(self, curve):
        assert curve.order // curve.subgroup_order <= 4

    def test_generator_has_subgroup_order(self, curve):
        G = curve.generator
        n = curve.subgroup_order
        assert G is not None
        assert curve.multiply(G, n) is None
        assert curve.multiply(G, n - 1) == curve.neg(G)

    def test_subgroup_order_is_prime(self, curve):
        assert largest_prime_factor(curve.subgroup_order) == curve.subgroup_order

    def test_add_inverse_is_infinity(self, curve):
        G = curve.generator
        assert curve.add(G, curve.neg(G)) is None

    def test_infinity_is_neutral(self, curve):
        G = curve.generator
        assert curve.add(None, G) == G
        assert curve.add(G, None) == G

    def test_multiply_matches_repeated_addition(self, curve):
        G = curve.generator
        acc = None
        for k in range(12):
            assert curve.multiply(G, k) == acc
            acc = curve.add(acc, G)

    def test_negative_scalar(self, curve):
        G = curve.generator
        assert curve.multiply(G, -3) == curve.neg(curve.multiply(G, 3))

    def test_multiplication_distributes(self, curve):
        G = curve.generator
        lhs = curve.multiply(G, 5 + 9)
        rhs = curve.add(curve.multiply(G, 5), curve.multiply(G, 9))
        assert lhs == rhs


class TestSmallECGroup:
    @pytest.fixture(scope="class")
    def group(self):
        return small_group("p251", rng=np.random.default_rng(42))

    def test_registered_names_build(self):
        for name in ("p97", "p251"):
            assert small_group(name).name == name
        assert set(SMALL_CURVES) >= {"p97", "p1021", "p4093"}

    def test_order_is_subgroup_order(self, group):
        assert group.get_order() == group.curve.subgroup_order

    def test_identity_is_none(self, group):
        assert group.identity() is None

    def test_random_below_in_range(self, group):
        draws = [group.scalar_random_below(10) for _ in range(200)]
        assert min(draws) >= 0
        assert max(draws) < 10
        assert len(set(draws)) > 1

    def test_random_below_rejects_empty_range(self, group):
        with pytest.raises(ValueError):
            group.scalar_random_below(0)

    def test_full_width_exceeds_order(self, group):
        n = group.get_order()
        draws = [group.scalar_random_full_width() for _ in range(200)]
        assert max(draws) >= n
        assert max(draws) < 1 << group.scalar_bits

    def test_seeded_rng_is_reproducible(self):
        a = small_group("p97", rng=np.random.default_rng(7))
        b = small_group("p97", rng=np.random.default_rng(7))
        n = a.get_order()
        assert [a.scalar_random_below(n) for _ in range(5)] == [
            b.scalar_random_below(n) for _ in range(5)
        ]

    def test_scalar_mul_reduces_mod_order(self, group):
        G = group.get_generator()
        n = group.get_order()
        assert group.point_scalar_mul(G, n + 3) == group.point_scalar_mul(G, 3)
        assert group.point_scalar_mul(G, n) is None

    def test_point_sub_undoes_add(self, group):
        G = group.get_generator()
        P = group.point_scalar_mul(G, 11)
        Q = group.point_scalar_mul(G, 4)
        assert group.point_sub(group.point_add(P, Q), Q) == P
        assert group.point_sub(P, P) is None

    def test_off_curve_point_rejected(self, group):
        G = group.get_generator()
        bad = (G[0], (G[1] + 1) % group.curve.p)
        with pytest.raises(ValueError):
            group.point_add(G, bad)

    def test_scalar_helpers(self, group):
        assert group.scalar_equal(3, 3)
        assert not group.scalar_equal(3, 4)
        assert group.scalar_increment(41) == 42

    def test_wraps_explicit_curve(self):
        curve = SmallEC.with_large_subgroup(509)
        group = SmallECGroup(curve)
        assert "509" in group.name
        assert group.get_generator() == curve.generator

    def test_group_per_thread_shares_curve(self):
        curve = SmallEC.with_large_subgroup(251)

        def draws(seed):
            group = SmallECGroup(curve, rng=np.random.default_rng(seed))
            n = group.get_order()
            return [group.scalar_random_below(n) for _ in range(50)]

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(draws, [1, 1, 2, 2]))
        assert results[0] == results[1]
        assert results[2] == results[3]
        assert results[0] != results[2]
