"""Tests for univariate polynomials in evaluation form."""

import pytest

from primitives.field import get_field
from primitives.polynomial import interpolate_at, sum_over_boolean


class TestInterpolateAt:
    """Evaluation of a polynomial given by its values at 0..d."""

    def test_quadratic(self, gf101) -> None:
        # p(x) = 3x^2 + 2x + 1
        evals = gf101([1, 6, 17])
        assert int(interpolate_at(evals, gf101(5))) == (3 * 25 + 2 * 5 + 1) % 101

    def test_nodes_are_reproduced(self, gf101) -> None:
        evals = gf101([9, 2, 77, 40])
        for i in range(4):
            assert interpolate_at(evals, gf101(i)) == evals[i]

    def test_linear_extrapolation(self, gf17) -> None:
        # p(x) = 4 + 3x
        assert int(interpolate_at(gf17([4, 7]), gf17(10))) == (4 + 30) % 17

    def test_constant(self, gf101) -> None:
        assert interpolate_at(gf101([33]), gf101(12)) == gf101(33)

    def test_field_too_small(self) -> None:
        gf2 = get_field(2)
        with pytest.raises(ValueError):
            interpolate_at(gf2([1, 0, 1]), gf2(1))

    def test_empty(self, gf101) -> None:
        with pytest.raises(ValueError):
            interpolate_at(gf101([1, 2])[:0], gf101(1))


def test_sum_over_boolean(gf17) -> None:
    assert int(sum_over_boolean(gf17([9, 12, 5]))) == 4
