"""Prime field GF(p) for circuit values and protocol messages.

Uses galois for all field arithmetic. A field class is built once per modulus
and carried by the circuit, so every element in a protocol run shares one
modulus; galois refuses to mix elements of different fields.

The default modulus is the Goldilocks prime. Tests use small primes (17, 101)
so that soundness behaviour is observable.
"""

from functools import lru_cache
from typing import Iterable, List

import galois

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001
DEFAULT_PRIME = GOLDILOCKS_PRIME

FieldClass = type[galois.FieldArray]


@lru_cache(maxsize=None)
def get_field(prime: int = DEFAULT_PRIME) -> FieldClass:
    """Return the prime field GF(prime).

    Args:
        prime: Field modulus. Must be prime; extension fields are rejected.

    Returns:
        galois FieldArray subclass for GF(prime)

    Raises:
        ValueError: If prime is not a prime >= 2
    """
    if prime < 2:
        raise ValueError(f"prime must be >= 2, got {prime}")
    if not galois.is_prime(prime):
        raise ValueError(f"modulus must be prime, got {prime}")
    return galois.GF(prime)


# --- Conversions ---

def to_field_vector(field: FieldClass, values: Iterable) -> galois.FieldArray:
    """Build a 1-D field array from ints or field scalars, reducing ints mod p."""
    return field([int(v) % field.order for v in values])


def to_ints(values: Iterable) -> List[int]:
    """Canonical integer representatives of field elements."""
    return [int(v) for v in values]


# --- Bit Helpers ---

def ceil_log2(n: int) -> int:
    """Smallest k with 2^k >= n (0 for n <= 1)."""
    if n <= 1:
        return 0
    return (n - 1).bit_length()


def to_bits(value: int, width: int) -> List[int]:
    """Little-endian bit expansion: bit j of value is (value >> j) & 1."""
    return [(value >> j) & 1 for j in range(width)]
