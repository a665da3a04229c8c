"""Sum-check prover for one layer transition.

For the layer under test i and a field point z, the prover convinces the
verifier that

    W_i(z) = sum_{x, y in {0,1}^k} add~(z, x, y) (W(x) + W(y)) + mult~(z, x, y) W(x) W(y)

where W is the extension of layer i + 1's values and k the circuit bit width.
Round r fixes one variable of (x, y): rounds 0..k-1 walk x, rounds k..2k-1
walk y. Because the wiring predicates are sums of eq terms over real gates,
the remaining boolean sum collapses per gate onto that gate's own input
labels, so each round polynomial is computed exactly gate by gate. Every term
is a product of two polynomials linear in the round variable, so the degree
never exceeds 2.

The prover is a set of pure functions over ProverState; the orchestrator owns
the state and feeds challenges back in.
"""

import logging
from dataclasses import dataclass, replace
from typing import Tuple

import galois

from primitives.field import to_bits, to_field_vector, to_ints
from primitives.mle import eq, eq_table, evaluate_mle
from protocol.circuit import GateOp, LayeredCircuit

logger = logging.getLogger(__name__)

# Degree of every round polynomial in the round variable.
DEGREE_BOUND = 2


@dataclass(frozen=True, eq=False)
class ProverState:
    """Session state of one layer transition.

    Attributes:
        layer: Layer under test; the sum runs over layer + 1
        point: Field point the current claim is about
        challenges: Verifier challenges received so far in this layer
    """
    layer: int
    point: galois.FieldArray
    challenges: Tuple[int, ...] = ()


# --- Messages ---

def claimed_outputs(circuit: LayeredCircuit) -> galois.FieldArray:
    """Output values the prover asserts."""
    return circuit.output_values()


def start_layer(circuit: LayeredCircuit, layer: int, point: galois.FieldArray) -> ProverState:
    """Open the session that reduces a claim on layer to a claim on layer + 1."""
    if not 0 <= layer < circuit.input_layer:
        raise IndexError(f"No sum-check session for layer {layer}")
    if len(point) != circuit.bit_width:
        raise ValueError(f"Dimension mismatch: point has {len(point)} coordinates, bit_width is {circuit.bit_width}")
    return ProverState(layer=layer, point=point)


def round_polynomial(circuit: LayeredCircuit, state: ProverState) -> galois.FieldArray:
    """Evaluations at 0..DEGREE_BOUND of the current round polynomial.

    Variables already challenged are fixed to their challenges, the round
    variable is X and everything after it is summed over {0,1}.
    """
    k = circuit.bit_width
    rnd = len(state.challenges)
    if rnd >= 2 * k:
        raise RuntimeError(f"Layer {state.layer} has only {2 * k} rounds")

    field = circuit.field
    below = circuit.layer_values(state.layer + 1)
    gates = circuit.get_layer(state.layer)
    eq_z = eq_table(state.point)
    on_left = rnd < k

    if on_left:
        prefix = list(state.challenges)
    else:
        prefix = list(state.challenges[k:])
        left_point = to_field_vector(field, state.challenges[:k])
        left_value = evaluate_mle(below, left_point)
    pos = len(prefix)

    evals = []
    for t in range(DEGREE_BOUND + 1):
        head = field(prefix + [t])
        total = field(0)
        for g, gate in enumerate(gates):
            if on_left:
                bits = to_bits(gate.left, k)
                weight = eq(bits[:pos + 1], head)
                a = evaluate_mle(below, field(prefix + [t] + bits[pos + 1:]))
                b = below[gate.right]
            else:
                bits = to_bits(gate.right, k)
                weight = eq(to_bits(gate.left, k), left_point) * eq(bits[:pos + 1], head)
                a = left_value
                b = evaluate_mle(below, field(prefix + [t] + bits[pos + 1:]))
            term = a + b if gate.op is GateOp.ADD else a * b
            total = total + eq_z[g] * weight * term
        evals.append(total)

    message = to_field_vector(field, evals)
    logger.debug("layer %d round %d: evals %s", state.layer, rnd, to_ints(message))
    return message


def receive_challenge(state: ProverState, challenge: galois.FieldArray) -> ProverState:
    """Record the verifier's reply to the last round polynomial."""
    return replace(state, challenges=state.challenges + (int(challenge),))


def line_polynomial(circuit: LayeredCircuit, state: ProverState) -> galois.FieldArray:
    """Restriction of the next layer's extension to the line r_x -> r_y.

    After the 2k rounds the claim depends on W(r_x) and W(r_y). Sending
    q(t) = W(r_x + t (r_y - r_x)) at t = 0..k hands the verifier both values
    (q(0), q(1)) and lets it carry a single claim q(tau) at a random point of
    the line into the next layer. q has degree at most k.
    """
    k = circuit.bit_width
    if len(state.challenges) != 2 * k:
        raise RuntimeError(f"Line polynomial requested after {len(state.challenges)} of {2 * k} rounds")

    field = circuit.field
    below = circuit.layer_values(state.layer + 1)
    r_x = to_field_vector(field, state.challenges[:k])
    r_y = to_field_vector(field, state.challenges[k:])
    direction = r_y - r_x

    evals = [evaluate_mle(below, r_x + field(t) * direction) for t in range(k + 1)]
    message = to_field_vector(field, evals)
    logger.debug("layer %d line: evals %s", state.layer, to_ints(message))
    return message
