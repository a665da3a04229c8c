"""Layer-by-layer verification of a circuit evaluation.

Drives prover and verifier in strict request/response order: the prover
sends a message, the verifier checks it and answers with a challenge, and
only then does the next step begin. Starting from the claimed outputs, each
layer's sum-check reduces the claim to one about the next layer, until the
verifier can check the last claim against the public inputs on its own.
"""

import logging
from typing import Optional, Sequence

from primitives.field import to_field_vector, to_ints
from protocol import prover, verifier
from protocol.challenges import ChallengeSource
from protocol.circuit import LayeredCircuit
from protocol.proof import LayerRecord, ProtocolTrace, RoundRecord
from protocol.verifier import Phase

logger = logging.getLogger(__name__)


def prove_and_verify(
    circuit: LayeredCircuit,
    seed: Optional[int] = None,
    claimed_outputs: Optional[Sequence[int]] = None,
) -> ProtocolTrace:
    """Run the full protocol and record every message.

    Args:
        circuit: Circuit holding the prover's wire values. Evaluated here if it
                 has not been; an evaluated circuit is used as-is, so values
                 altered after evaluation act as a dishonest prover's trace.
        seed: Challenge seed (None draws from OS randomness)
        claimed_outputs: Output values to assert instead of the stored ones

    Returns:
        ProtocolTrace with accepted set to the verdict

    Raises:
        ValueError: If the field is too small for the interpolation nodes
    """
    field = circuit.field
    k = circuit.bit_width
    if field.order <= max(k, prover.DEGREE_BOUND):
        raise ValueError(
            f"GF({field.order}) is too small for bit_width {k} and degree bound {prover.DEGREE_BOUND}"
        )
    if not circuit.is_evaluated:
        circuit.evaluate()

    challenges = ChallengeSource(field, seed)
    if claimed_outputs is None:
        outputs = prover.claimed_outputs(circuit)
    else:
        outputs = to_field_vector(field, claimed_outputs)
    trace = ProtocolTrace(prime=field.order, bit_width=k, claimed_outputs=to_ints(outputs))

    vstate = verifier.start(circuit, outputs, challenges)
    while vstate.phase is Phase.ROUND:
        record = LayerRecord(layer=vstate.layer, point=to_ints(vstate.point), claim=int(vstate.claim))
        trace.layers.append(record)
        pstate = prover.start_layer(circuit, vstate.layer, vstate.point)

        while vstate.phase is Phase.ROUND:
            evals = prover.round_polynomial(circuit, pstate)
            vstate = verifier.check_round(circuit, vstate, evals, challenges)
            if vstate.phase is Phase.REJECT:
                record.rounds.append(RoundRecord(evaluations=to_ints(evals)))
                break
            r = vstate.challenges[-1]
            record.rounds.append(RoundRecord(evaluations=to_ints(evals), challenge=r))
            pstate = prover.receive_challenge(pstate, field(r))

        if vstate.phase is Phase.LAYER_CHECK:
            line = prover.line_polynomial(circuit, pstate)
            record.line = to_ints(line)
            vstate = verifier.check_layer(circuit, vstate, line, challenges)
            if vstate.phase is not Phase.REJECT:
                record.tau = vstate.line_challenge

    if vstate.phase is Phase.INPUT_CHECK:
        trace.input_point = to_ints(vstate.point)
        trace.input_claim = int(vstate.claim)
        vstate = verifier.check_inputs(circuit, vstate)

    trace.accepted = vstate.phase is Phase.ACCEPT
    trace.reason = vstate.reason
    logger.info("%s (%d layers, bit_width %d)", trace.verdict, circuit.num_layers, k)
    return trace


def run_protocol(
    circuit: LayeredCircuit,
    seed: Optional[int] = None,
    claimed_outputs: Optional[Sequence[int]] = None,
) -> bool:
    """True on Accept, False on Reject (see ProtocolTrace.verdict)."""
    return prove_and_verify(circuit, seed=seed, claimed_outputs=claimed_outputs).accepted
