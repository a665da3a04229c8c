"""Verifier randomness.

Each challenge is an independent, uniform element of the field. Without a
seed the draws come from the operating system's CSPRNG; a seed makes a run
reproducible, which is what the tests rely on.
"""

import random
from typing import Optional

import galois

from primitives.field import FieldClass


class ChallengeSource:
    """Uniform field-element sampler."""

    def __init__(self, field: FieldClass, seed: Optional[int] = None):
        self.field = field
        self.seeded = seed is not None
        self._rng = random.Random(seed) if self.seeded else random.SystemRandom()

    def draw(self) -> galois.FieldArray:
        """One uniform element of the field."""
        return self.field(self._rng.randrange(self.field.order))

    def draw_vector(self, n: int) -> galois.FieldArray:
        """n independent uniform elements as a field vector."""
        return self.field([self._rng.randrange(self.field.order) for _ in range(n)])
