"""Run configuration for the circuit verification protocol."""

import json
import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from primitives.field import DEFAULT_PRIME


@dataclass
class ProtocolConfig:
    """Parameters of one protocol run.

    Attributes:
        prime: Field modulus shared by every element of the run
        seed: Challenge seed (None draws from OS randomness)
        trace_path: Where to write the JSON protocol trace (None to skip)
        log_level: Logging level name used by the command line entry point
    """
    prime: int = DEFAULT_PRIME
    seed: Optional[int] = None
    trace_path: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if isinstance(self.prime, bool) or not isinstance(self.prime, int):
            raise ValueError(f"prime must be an integer, got {self.prime!r}")
        if self.prime < 2:
            raise ValueError(f"prime must be >= 2, got {self.prime}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, j: Dict[str, Any]) -> "ProtocolConfig":
        """Build a config from a parsed JSON object.

        Primes may be given as decimal strings, since JSON readers in other
        languages lose precision above 2^53.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(j) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        values = dict(j)
        if isinstance(values.get("prime"), str):
            try:
                values["prime"] = int(values["prime"], 0)
            except ValueError:
                raise ValueError(f"prime must be an integer, got {values['prime']!r}") from None
        return cls(**values)

    @classmethod
    def from_json(cls, path: str) -> "ProtocolConfig":
        """Load a config from a JSON file."""
        with open(path) as f:
            j = json.load(f)
        if not isinstance(j, dict):
            raise ValueError(f"Config file {path} must hold a JSON object")
        return cls.from_dict(j)
