"""Circuit description text format.

One layer per line, output layer first:

    0,1,*
    0,1,+ 2,3,+
    2 3 4 5

Every line but the last lists gates as left,right,op with op in {+, *};
left and right index gates of the following line. The last line lists the
integer input values. Blank lines and lines starting with '#' are ignored.
"""

import logging
import time
from pathlib import Path
from typing import List, Union

from primitives.field import DEFAULT_PRIME, get_field
from protocol.circuit import CircuitFormatError, Gate, GateOp, LayeredCircuit

logger = logging.getLogger(__name__)

_OPS = {op.value: op for op in GateOp}


def _parse_int(token: str, line_no: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise CircuitFormatError(f"Line {line_no}: {token!r} is not an integer") from None


def _parse_gate(token: str, line_no: int) -> Gate:
    parts = token.split(",")
    if len(parts) != 3:
        raise CircuitFormatError(f"Line {line_no}: gate {token!r} must have 3 fields, got {len(parts)}")
    left, right, symbol = parts
    if symbol not in _OPS:
        raise CircuitFormatError(f"Line {line_no}: unknown operation {symbol!r} in gate {token!r}")
    return Gate(left=_parse_int(left, line_no), right=_parse_int(right, line_no), op=_OPS[symbol])


def parse_circuit(text: str, prime: int = DEFAULT_PRIME) -> LayeredCircuit:
    """Parse a circuit description and evaluate it.

    Raises:
        CircuitFormatError: On any malformed line or out-of-range wiring
    """
    lines = []
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if line and not line.startswith("#"):
            lines.append((line_no, line))
    if not lines:
        raise CircuitFormatError("Empty circuit description")

    layers: List[List[Gate]] = []
    last = len(lines) - 1
    for pos, (line_no, line) in enumerate(lines):
        tokens = line.split()
        has_gates = [("," in tok) for tok in tokens]
        if pos == last:
            if any(has_gates):
                raise CircuitFormatError(f"Line {line_no}: last line must list input values")
            layers.append([Gate.input(_parse_int(tok, line_no)) for tok in tokens])
        else:
            if not all(has_gates):
                raise CircuitFormatError(f"Line {line_no}: expected gates 'left,right,op' (input values belong on the last line)")
            layers.append([_parse_gate(tok, line_no) for tok in tokens])

    circuit = LayeredCircuit(layers, get_field(prime))
    start = time.perf_counter_ns()
    circuit.evaluate()
    logger.info("Circuit evaluation took %dns", time.perf_counter_ns() - start)
    return circuit


def load_circuit(path: Union[str, Path], prime: int = DEFAULT_PRIME) -> LayeredCircuit:
    """Read and parse a circuit description file."""
    with open(path) as f:
        return parse_circuit(f.read(), prime)


def circuit_to_text(circuit: LayeredCircuit) -> str:
    """Serialize a circuit in the format parse_circuit reads."""
    lines = []
    for layer in circuit.layers[:-1]:
        lines.append(" ".join(f"{g.left},{g.right},{g.op.value}" for g in layer))
    lines.append(" ".join(str(int(g.value)) for g in circuit.layers[-1]))
    return "\n".join(lines) + "\n"


def format_circuit(circuit: LayeredCircuit) -> str:
    """Readable dump: left,right,value per gate, value only for inputs."""
    lines = []
    for layer in circuit.layers[:-1]:
        lines.append(" ".join(
            f"{g.left},{g.right},{'?' if g.value is None else int(g.value)}" for g in layer
        ))
    lines.append(" ".join(str(int(g.value)) for g in circuit.layers[-1]))
    return "\n".join(lines)
