"""Protocol - Layered circuits and the sum-check based verification protocol."""

from protocol.challenges import ChallengeSource
from protocol.circuit import CircuitFormatError, Gate, GateOp, LayeredCircuit
from protocol.circuit_loader import circuit_to_text, format_circuit, load_circuit, parse_circuit
from protocol.config import ProtocolConfig
from protocol.gkr import prove_and_verify, run_protocol
from protocol.proof import (
    LayerRecord,
    ProtocolTrace,
    RoundRecord,
    load_trace,
    save_trace,
    trace_from_json,
    trace_to_json,
)
from protocol.prover import DEGREE_BOUND, ProverState
from protocol.verifier import Phase, VerifierState

__all__ = [
    # Circuit
    "Gate",
    "GateOp",
    "LayeredCircuit",
    "CircuitFormatError",
    "parse_circuit",
    "load_circuit",
    "circuit_to_text",
    "format_circuit",
    # Protocol
    "ChallengeSource",
    "ProtocolConfig",
    "ProverState",
    "VerifierState",
    "Phase",
    "DEGREE_BOUND",
    "prove_and_verify",
    "run_protocol",
    # Trace
    "RoundRecord",
    "LayerRecord",
    "ProtocolTrace",
    "trace_to_json",
    "trace_from_json",
    "save_trace",
    "load_trace",
]
