"""Protocol trace data structures and serialization.

The trace records every message of a run: the claimed outputs, each layer's
round polynomials and challenges, the line polynomial that merges the two
next-layer claims, and the final verdict. It is a debugging aid; verification
never reads it back.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

# --- Trace Data Structures ---


@dataclass
class RoundRecord:
    """One sum-check round: prover polynomial (evaluations at 0..d) and the reply."""
    evaluations: list[int] = field(default_factory=list)
    challenge: Optional[int] = None


@dataclass
class LayerRecord:
    """Sum-check session reducing a claim on one layer to a claim on the next.

    Attributes:
        layer: Layer under test (its values are the claim's subject)
        point: Field point the incoming claim is about
        claim: Claimed value of the layer's extension at point
        rounds: The 2 * bit_width sum-check rounds
        line: Evaluations at 0..bit_width of the next layer's extension on the
              line through the two final sub-claim points
        tau: Challenge selecting the point on that line
    """
    layer: int
    point: list[int] = field(default_factory=list)
    claim: int = 0
    rounds: list[RoundRecord] = field(default_factory=list)
    line: list[int] = field(default_factory=list)
    tau: Optional[int] = None


@dataclass
class ProtocolTrace:
    """Complete record of one protocol run."""
    prime: int
    bit_width: int
    claimed_outputs: list[int] = field(default_factory=list)
    layers: list[LayerRecord] = field(default_factory=list)
    input_point: list[int] = field(default_factory=list)
    input_claim: Optional[int] = None
    accepted: bool = False
    reason: str = ""

    @property
    def verdict(self) -> str:
        """"Accept" or "Reject"."""
        return "Accept" if self.accepted else "Reject"


# --- JSON Serialization ---

def _strs(values: list[int]) -> list[str]:
    return [str(v) for v in values]


def _ints(values: list[str]) -> list[int]:
    return [int(v) for v in values]


def _opt_str(value: Optional[int]) -> Optional[str]:
    return None if value is None else str(value)


def _opt_int(value: Optional[str]) -> Optional[int]:
    return None if value is None else int(value)


def trace_to_json(trace: ProtocolTrace) -> dict[str, Any]:
    """Convert a trace to a JSON-serializable dictionary.

    Field elements are written as decimal strings so that 64-bit values
    survive readers that parse numbers as doubles.
    """
    return {
        "prime": str(trace.prime),
        "bitWidth": trace.bit_width,
        "claimedOutputs": _strs(trace.claimed_outputs),
        "layers": [
            {
                "layer": rec.layer,
                "point": _strs(rec.point),
                "claim": str(rec.claim),
                "rounds": [
                    {"evals": _strs(r.evaluations), "challenge": _opt_str(r.challenge)}
                    for r in rec.rounds
                ],
                "line": _strs(rec.line),
                "tau": _opt_str(rec.tau),
            }
            for rec in trace.layers
        ],
        "inputPoint": _strs(trace.input_point),
        "inputClaim": _opt_str(trace.input_claim),
        "accepted": trace.accepted,
        "reason": trace.reason,
    }


def trace_from_json(j: dict[str, Any]) -> ProtocolTrace:
    """Rebuild a trace from the dictionary produced by trace_to_json."""
    layers = []
    for lj in j["layers"]:
        rounds = [
            RoundRecord(evaluations=_ints(rj["evals"]), challenge=_opt_int(rj["challenge"]))
            for rj in lj["rounds"]
        ]
        layers.append(LayerRecord(
            layer=lj["layer"],
            point=_ints(lj["point"]),
            claim=int(lj["claim"]),
            rounds=rounds,
            line=_ints(lj["line"]),
            tau=_opt_int(lj["tau"]),
        ))
    return ProtocolTrace(
        prime=int(j["prime"]),
        bit_width=j["bitWidth"],
        claimed_outputs=_ints(j["claimedOutputs"]),
        layers=layers,
        input_point=_ints(j["inputPoint"]),
        input_claim=_opt_int(j["inputClaim"]),
        accepted=j["accepted"],
        reason=j["reason"],
    )


def save_trace(trace: ProtocolTrace, path: str) -> None:
    """Write a trace as indented JSON."""
    with open(path, "w") as f:
        json.dump(trace_to_json(trace), f, indent=2)


def load_trace(path: str) -> ProtocolTrace:
    """Read a trace written by save_trace."""
    with open(path) as f:
        return trace_from_json(json.load(f))
