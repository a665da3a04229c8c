"""Primitives - Field arithmetic, multilinear extensions and univariate polynomials."""

from primitives.field import (
    DEFAULT_PRIME,
    GOLDILOCKS_PRIME,
    ceil_log2,
    get_field,
    to_bits,
    to_field_vector,
    to_ints,
)
from primitives.mle import eq, eq_table, evaluate_mle, mle_interpolate
from primitives.polynomial import interpolate_at, sum_over_boolean

__all__ = [
    # Field
    "DEFAULT_PRIME",
    "GOLDILOCKS_PRIME",
    "get_field",
    "to_field_vector",
    "to_ints",
    "ceil_log2",
    "to_bits",
    # MLE
    "eq",
    "mle_interpolate",
    "eq_table",
    "evaluate_mle",
    # Polynomials
    "interpolate_at",
    "sum_over_boolean",
]
