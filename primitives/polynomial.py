"""Univariate polynomials exchanged in sum-check rounds.

Round and line polynomials travel in evaluation form: a degree <= d polynomial
is sent as its values at 0, 1, ..., d. Both prover and verifier only ever need
p(0) + p(1) and p(r) for a challenge r, so coefficient form never appears on
the wire.
"""

import galois


def interpolate_at(evaluations: galois.FieldArray, x: galois.FieldArray) -> galois.FieldArray:
    """Value at x of the polynomial through (i, evaluations[i]), i = 0..d.

    Args:
        evaluations: Field vector of d + 1 values
        x: Field scalar

    Returns:
        Field scalar p(x)

    Raises:
        ValueError: If evaluations is empty or the field has fewer than d + 1 elements
    """
    n = len(evaluations)
    if n == 0:
        raise ValueError("Cannot interpolate an empty evaluation list")
    field = type(evaluations)
    if n == 1:
        return evaluations[0]
    if n > field.order:
        raise ValueError(f"GF({field.order}) has too few elements for {n} interpolation nodes")
    nodes = field(list(range(n)))
    return galois.lagrange_poly(nodes, evaluations)(x)


def sum_over_boolean(evaluations: galois.FieldArray) -> galois.FieldArray:
    """p(0) + p(1) for a polynomial in evaluation form."""
    return evaluations[0] + evaluations[1]
