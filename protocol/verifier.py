"""Sum-check verifier and layer-to-layer claim reduction.

The verifier walks a fixed state machine:

    ROUND (2k times) -> LAYER_CHECK -> ROUND ... -> INPUT_CHECK -> ACCEPT

and drops to REJECT at the first failed check. A rejection is the normal way
a cheating prover is caught, so it is a state, not an exception. Every
function takes the current state and returns the next one; nothing is
mutated.

The verifier reads only the circuit's wiring and its public inputs. Wire
values of the inner layers belong to the prover.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

import galois

from primitives.field import to_field_vector
from primitives.mle import evaluate_mle
from primitives.polynomial import interpolate_at, sum_over_boolean
from protocol.challenges import ChallengeSource
from protocol.circuit import GateOp, LayeredCircuit
from protocol.prover import DEGREE_BOUND

logger = logging.getLogger(__name__)


class Phase(Enum):
    ROUND = auto()
    LAYER_CHECK = auto()
    INPUT_CHECK = auto()
    ACCEPT = auto()
    REJECT = auto()


@dataclass(frozen=True, eq=False)
class VerifierState:
    """Verifier view of the run.

    Attributes:
        layer: Layer the current claim is about
        point: Field point of the claim
        claim: Claimed value (of the layer's extension before the rounds,
               of the current round's partial sum during them)
        challenges: Round challenges issued in this layer
        phase: Next step of the state machine
        reason: Why the run was rejected
        line_challenge: Point on the merge line chosen when entering this layer
    """
    layer: int
    point: galois.FieldArray
    claim: galois.FieldArray
    challenges: Tuple[int, ...] = ()
    phase: Phase = Phase.ROUND
    reason: str = ""
    line_challenge: Optional[int] = None


# --- Internal Helpers ---

def _reject(state: VerifierState, reason: str) -> VerifierState:
    logger.info("Reject at layer %d: %s", state.layer, reason)
    return replace(state, phase=Phase.REJECT, reason=reason)


def _entry_phase(circuit: LayeredCircuit, layer: int) -> Phase:
    return Phase.INPUT_CHECK if layer == circuit.input_layer else Phase.ROUND


def _expect_phase(state: VerifierState, phase: Phase) -> None:
    if state.phase is not phase:
        raise RuntimeError(f"Verifier is in phase {state.phase.name}, not {phase.name}")


# --- State Machine ---

def start(circuit: LayeredCircuit, outputs: galois.FieldArray, challenges: ChallengeSource) -> VerifierState:
    """Turn the prover's output claim into a claim about one point.

    With a single output gate the point is that gate's label. A wider output
    layer is checked at a random point of its extension, which binds every
    output at once.
    """
    field = circuit.field
    k = circuit.bit_width
    n_outputs = len(circuit.get_layer(0))

    if n_outputs == 1:
        point = field([0] * k)
    else:
        point = challenges.draw_vector(k)
    state = VerifierState(layer=0, point=point, claim=field(0), phase=_entry_phase(circuit, 0))

    if len(outputs) != n_outputs:
        return _reject(state, f"{len(outputs)} output values claimed for {n_outputs} output gates")
    return replace(state, claim=evaluate_mle(outputs, point))


def check_round(
    circuit: LayeredCircuit,
    state: VerifierState,
    evaluations: galois.FieldArray,
    challenges: ChallengeSource,
) -> VerifierState:
    """Check one round polynomial and answer with a fresh challenge."""
    _expect_phase(state, Phase.ROUND)
    rnd = len(state.challenges)

    if len(evaluations) != DEGREE_BOUND + 1:
        return _reject(state, f"round {rnd} polynomial has {len(evaluations)} evaluations, expected {DEGREE_BOUND + 1}")
    if sum_over_boolean(evaluations) != state.claim:
        return _reject(state, f"round {rnd}: p(0) + p(1) does not match the claim")

    r = challenges.draw()
    done = rnd + 1 == 2 * circuit.bit_width
    return replace(
        state,
        claim=interpolate_at(evaluations, r),
        challenges=state.challenges + (int(r),),
        phase=Phase.LAYER_CHECK if done else Phase.ROUND,
    )


def check_layer(
    circuit: LayeredCircuit,
    state: VerifierState,
    line: galois.FieldArray,
    challenges: ChallengeSource,
) -> VerifierState:
    """Final check of a layer's sum-check and reduction to the next layer.

    The line polynomial supplies W(r_x) = q(0) and W(r_y) = q(1). The verifier
    evaluates the wiring predicates itself and requires

        claim == add~(z, r_x, r_y) (q(0) + q(1)) + mult~(z, r_x, r_y) q(0) q(1)

    then continues with the single claim q(tau) at l(tau) for a random tau.
    """
    _expect_phase(state, Phase.LAYER_CHECK)
    field = circuit.field
    k = circuit.bit_width

    if len(line) != k + 1:
        return _reject(state, f"line polynomial has {len(line)} evaluations, expected {k + 1}")

    r_x = to_field_vector(field, state.challenges[:k])
    r_y = to_field_vector(field, state.challenges[k:])
    w0, w1 = line[0], line[1]

    add = circuit.mle_wiring(state.layer, state.point, r_x, r_y, GateOp.ADD)
    mult = circuit.mle_wiring(state.layer, state.point, r_x, r_y, GateOp.MULT)
    if add * (w0 + w1) + mult * w0 * w1 != state.claim:
        return _reject(state, "final sum-check evaluation does not match the wiring predicates")

    tau = challenges.draw()
    next_layer = state.layer + 1
    return VerifierState(
        layer=next_layer,
        point=r_x + tau * (r_y - r_x),
        claim=interpolate_at(line, tau),
        phase=_entry_phase(circuit, next_layer),
        line_challenge=int(tau),
    )


def check_inputs(circuit: LayeredCircuit, state: VerifierState) -> VerifierState:
    """Compare the last claim with the extension of the public inputs."""
    _expect_phase(state, Phase.INPUT_CHECK)
    expected = evaluate_mle(circuit.input_values(), state.point)
    if expected != state.claim:
        return _reject(state, "claim does not match the input values")
    return replace(state, phase=Phase.ACCEPT)
