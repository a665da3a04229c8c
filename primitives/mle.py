"""Multilinear extensions over the boolean hypercube.

A function f: {0,1}^n -> F has a unique multilinear extension

    f~(r) = sum_{b in {0,1}^n} f(b) * eq(b, r)

where eq(b, r) = prod_i (r_i if b_i == 1 else 1 - r_i) is the Lagrange basis
polynomial of the hypercube: it is 1 at r == b and 0 at every other boolean
point. Labels are little-endian, so entry i of a table is f(to_bits(i, n)).
"""

from typing import Sequence

import galois
import numpy as np


def eq(bits: Sequence[int], point: galois.FieldArray) -> galois.FieldArray:
    """Lagrange basis polynomial eq(bits, point).

    Args:
        bits: Boolean label, one 0/1 entry per variable
        point: Field vector of the same length

    Returns:
        Field scalar prod_i (point_i if bits_i else 1 - point_i)

    Raises:
        ValueError: If bits and point differ in length
    """
    if len(bits) != len(point):
        raise ValueError(f"Dimension mismatch: {len(bits)} bits vs point of length {len(point)}")
    field = type(point)
    one = field(1)
    result = one
    for bit, r in zip(bits, point):
        result = result * (r if bit else one - r)
    return result


# Alias kept for callers that think in terms of interpolation.
mle_interpolate = eq


def eq_table(point: galois.FieldArray) -> galois.FieldArray:
    """All 2^n basis values eq(to_bits(i, n), point), indexed by i.

    Built by doubling: after fixing variable j the table holds
    [t * (1 - r_j), t * r_j], which puts bit j of the index on variable j.
    """
    field = type(point)
    one = field(1)
    table = field([1])
    for r in point:
        table = np.concatenate([table * (one - r), table * r])
    return table


def evaluate_mle(values: galois.FieldArray, point: galois.FieldArray) -> galois.FieldArray:
    """Evaluate the multilinear extension of a value table at a field point.

    Entries past len(values) (up to 2^n) are treated as zero.

    Raises:
        ValueError: If the table has more than 2^n entries
    """
    n_vars = len(point)
    if len(values) > (1 << n_vars):
        raise ValueError(f"{len(values)} values do not fit in a {n_vars}-variable hypercube")
    table = eq_table(point)
    return np.add.reduce(values * table[:len(values)])
