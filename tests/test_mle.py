"""Tests for multilinear extensions over the boolean hypercube."""

import itertools

import pytest

from primitives.field import get_field, to_bits
from primitives.mle import eq, eq_table, evaluate_mle, mle_interpolate


class TestEq:
    """Lagrange basis polynomial of the hypercube."""

    @pytest.mark.parametrize("n", [1, 2, 3])
    def test_basis_property(self, gf101, n: int) -> None:
        """eq(b, b') is 1 when b == b' and 0 at every other boolean point."""
        cube = list(itertools.product([0, 1], repeat=n))
        for b in cube:
            for b_prime in cube:
                expected = 1 if b == b_prime else 0
                assert int(eq(list(b), gf101(list(b_prime)))) == expected

    def test_product_formula(self, gf101) -> None:
        point = gf101([3, 10, 50])
        # bits (1, 0, 1): r0 * (1 - r1) * r2
        assert int(eq([1, 0, 1], point)) == (3 * (1 - 10) * 50) % 101

    def test_length_mismatch(self, gf101) -> None:
        with pytest.raises(ValueError):
            eq([1, 0], gf101([1, 2, 3]))

    def test_alias(self) -> None:
        assert mle_interpolate is eq


class TestEqTable:
    """All basis values at once."""

    def test_matches_eq(self, gf101) -> None:
        point = gf101([7, 42, 99])
        table = eq_table(point)
        assert len(table) == 8
        for i in range(8):
            assert table[i] == eq(to_bits(i, 3), point)

    def test_sums_to_one(self, gf101) -> None:
        """The basis is a partition of unity at any point."""
        table = eq_table(gf101([5, 17, 33, 64]))
        assert int(table.sum()) == 1


class TestEvaluateMle:
    """Extension of a value table."""

    def test_agrees_on_hypercube(self, gf101) -> None:
        values = gf101([4, 8, 15, 16, 23, 42, 7, 9])
        for i in range(8):
            assert evaluate_mle(values, gf101(to_bits(i, 3))) == values[i]

    def test_padding_is_zero(self, gf101) -> None:
        values = gf101([4, 8, 15])
        assert int(evaluate_mle(values, gf101([1, 1]))) == 0
        assert evaluate_mle(values, gf101([0, 1])) == gf101(15)

    def test_multilinear_in_each_coordinate(self, gf101) -> None:
        """f(.., t, ..) = (1 - t) f(.., 0, ..) + t f(.., 1, ..)."""
        values = gf101([3, 1, 4, 1, 5, 9, 2, 6])
        t = gf101(37)
        at_t = evaluate_mle(values, gf101([11, 37, 80]))
        at_0 = evaluate_mle(values, gf101([11, 0, 80]))
        at_1 = evaluate_mle(values, gf101([11, 1, 80]))
        assert at_t == (gf101(1) - t) * at_0 + t * at_1

    def test_too_many_values(self, gf101) -> None:
        with pytest.raises(ValueError):
            evaluate_mle(gf101([1, 2, 3, 4, 5]), gf101([1, 2]))

    def test_works_at_large_prime(self) -> None:
        gf = get_field()
        values = gf([1, 2, 3, 4])
        assert evaluate_mle(values, gf([1, 1])) == gf(4)
