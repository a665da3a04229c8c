"""Layered arithmetic circuits and their multilinear extensions.

Layer 0 holds the outputs, the last layer holds the circuit inputs. Every
non-input gate reads two gates of the next (deeper) layer and adds or
multiplies them in the field. Gates within a layer are addressed by
little-endian labels of bit_width bits; every layer is conceptually padded to
2^bit_width positions with zero-valued gates that are never wired.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import galois
import numpy as np

from primitives.field import FieldClass, ceil_log2
from primitives.mle import eq_table, evaluate_mle


class CircuitFormatError(ValueError):
    """Malformed circuit description or structure."""


class GateOp(Enum):
    ADD = "+"
    MULT = "*"


# --- Data Structures ---

@dataclass
class Gate:
    """One gate. Input gates carry only a value (op is None)."""
    left: int = 0
    right: int = 0
    op: Optional[GateOp] = None
    value: Optional[galois.FieldArray] = None

    @classmethod
    def input(cls, value) -> "Gate":
        return cls(op=None, value=value)

    @property
    def is_input(self) -> bool:
        return self.op is None

    def wiring(self) -> Tuple[int, int]:
        return (self.left, self.right)


class LayeredCircuit:
    """Layered arithmetic circuit over a prime field.

    Built once, evaluated once, then only read by the protocol. The circuit
    owns its field class; input values are reduced into it at construction.

    Attributes:
        layers: Gate lists, output layer first, input layer last
        field: galois prime field class
        bit_width: Label width shared by every layer
    """

    def __init__(self, layers: Sequence[Sequence[Gate]], field: FieldClass):
        self.field = field
        self.layers: List[List[Gate]] = [[replace(gate) for gate in layer] for layer in layers]
        self._evaluated = False

        self.validate()
        for gate in self.layers[-1]:
            gate.value = field(int(gate.value) % field.order)

        max_gates = max(len(layer) for layer in self.layers)
        # A one-gate circuit still gets a single label bit.
        self.bit_width = max(1, ceil_log2(max_gates))

    # --- Structure ---

    def validate(self) -> None:
        """Check gate kinds and wiring ranges.

        Raises:
            CircuitFormatError: On any structural defect
        """
        if not self.layers:
            raise CircuitFormatError("Circuit has no layers")
        for i, layer in enumerate(self.layers):
            if not layer:
                raise CircuitFormatError(f"Layer {i} has no gates")

        last = len(self.layers) - 1
        for i, layer in enumerate(self.layers):
            for j, gate in enumerate(layer):
                if i == last:
                    if not gate.is_input:
                        raise CircuitFormatError(f"Input gate {j} has an operation")
                    if gate.value is None:
                        raise CircuitFormatError(f"Input gate {j} has no value")
                    continue
                if gate.is_input:
                    raise CircuitFormatError(f"Gate {j} at layer {i} has no operation")
                n_next = len(self.layers[i + 1])
                for idx in gate.wiring():
                    if not 0 <= idx < n_next:
                        raise CircuitFormatError(
                            f"Gate {j} at layer {i} reads gate {idx}, "
                            f"but layer {i + 1} has {n_next} gates"
                        )

    @property
    def num_layers(self) -> int:
        return len(self.layers)

    @property
    def input_layer(self) -> int:
        return len(self.layers) - 1

    @property
    def is_evaluated(self) -> bool:
        return self._evaluated

    # --- Evaluation ---

    def evaluate(self) -> galois.FieldArray:
        """Compute every gate value bottom-up and return the output values.

        Recomputes from the input layer each time, so repeated calls give
        identical values.
        """
        self.validate()
        for i in range(self.input_layer - 1, -1, -1):
            below = self.layers[i + 1]
            for gate in self.layers[i]:
                a = below[gate.left].value
                b = below[gate.right].value
                gate.value = a + b if gate.op is GateOp.ADD else a * b
        self._evaluated = True
        return self.output_values()

    # --- Queries ---

    def get_layer(self, layer: int) -> Sequence[Gate]:
        self._check_layer(layer)
        return tuple(self.layers[layer])

    def get_gate_value(self, layer: int, index: int) -> galois.FieldArray:
        self._check_values(layer)
        return self.layers[layer][index].value

    def get_wiring(self, layer: int, index: int) -> Tuple[int, int]:
        self._check_layer(layer)
        if layer == self.input_layer:
            raise IndexError("Input gates have no wiring")
        return self.layers[layer][index].wiring()

    def set_gate_value(self, layer: int, index: int, value) -> None:
        """Overwrite one stored value (simulates a prover holding a bad trace)."""
        self._check_values(layer)
        self.layers[layer][index].value = self.field(int(value) % self.field.order)

    def layer_values(self, layer: int) -> galois.FieldArray:
        """Stored values of one layer as a field vector, in gate order."""
        self._check_values(layer)
        return self.field([int(gate.value) for gate in self.layers[layer]])

    def output_values(self) -> galois.FieldArray:
        return self.layer_values(0)

    def input_values(self) -> galois.FieldArray:
        return self.layer_values(self.input_layer)

    # --- Multilinear Extensions ---

    def mle_gate_val(self, layer: int, point: galois.FieldArray) -> galois.FieldArray:
        """Extension of "value of gate i at this layer", evaluated at point."""
        self._check_point(point)
        return evaluate_mle(self.layer_values(layer), point)

    def mle_wiring(
        self,
        layer: int,
        query_point: galois.FieldArray,
        left_point: galois.FieldArray,
        right_point: galois.FieldArray,
        op: GateOp,
    ) -> galois.FieldArray:
        """Extension of the add~ / mult~ wiring predicate of a layer.

        Sums eq(g || a || b, query || left || right) over the gates g of the
        layer whose operation is op, with (a, b) the wiring of g. The basis
        polynomial factors over the three label blocks, so each block is looked
        up in its own eq table.
        """
        for point in (query_point, left_point, right_point):
            self._check_point(point)
        if layer == self.input_layer:
            raise IndexError("Input layer has no wiring predicate")
        self._check_layer(layer)

        gates, lefts, rights = self._wiring_indices(layer, op)
        if len(gates) == 0:
            return self.field(0)
        terms = eq_table(query_point)[gates] * eq_table(left_point)[lefts] * eq_table(right_point)[rights]
        return np.add.reduce(terms)

    # --- Internal Helpers ---

    def _wiring_indices(self, layer: int, op: GateOp) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        selected = [(j, g.left, g.right) for j, g in enumerate(self.layers[layer]) if g.op is op]
        if not selected:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty, empty
        gates, lefts, rights = (np.array(col, dtype=np.int64) for col in zip(*selected))
        return gates, lefts, rights

    def _check_layer(self, layer: int) -> None:
        if not 0 <= layer < len(self.layers):
            raise IndexError(f"Layer {layer} out of range for {len(self.layers)} layers")

    def _check_values(self, layer: int) -> None:
        self._check_layer(layer)
        if layer != self.input_layer and not self._evaluated:
            raise RuntimeError("Circuit has not been evaluated. Call evaluate() first.")

    def _check_point(self, point: galois.FieldArray) -> None:
        if len(point) != self.bit_width:
            raise ValueError(f"Dimension mismatch: point has {len(point)} coordinates, bit_width is {self.bit_width}")
