"""Command line entry point: load a circuit, run the protocol, print the verdict.

Usage:
    python run_gkr.py circuits/sum_product.txt --prime 101 --seed 7 -v
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from protocol.circuit import CircuitFormatError
from protocol.circuit_loader import format_circuit, load_circuit
from protocol.config import ProtocolConfig
from protocol.gkr import prove_and_verify
from protocol.proof import save_trace


def _build_config(args: argparse.Namespace) -> ProtocolConfig:
    config = ProtocolConfig.from_json(args.config) if args.config else ProtocolConfig()
    overrides = {}
    if args.prime is not None:
        overrides["prime"] = args.prime
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.trace_out is not None:
        overrides["trace_path"] = str(args.trace_out)
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return dataclasses.replace(config, **overrides)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Verify a layered arithmetic circuit evaluation with the sum-check protocol'
    )
    parser.add_argument(
        'circuit',
        type=Path,
        help='Path to circuit description (one layer per line, inputs last)'
    )
    parser.add_argument(
        '--prime',
        type=int,
        default=None,
        help='Field modulus (default: Goldilocks)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Challenge seed for a reproducible run (default: OS randomness)'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=None,
        help='JSON file with prime, seed, trace_path and log_level'
    )
    parser.add_argument(
        '--trace-out',
        type=Path,
        default=None,
        help='Write the JSON protocol trace to this path'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log every round polynomial'
    )

    args = parser.parse_args(argv)

    try:
        config = _build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.circuit.exists():
        print(f"Error: Circuit file not found: {args.circuit}", file=sys.stderr)
        return 2

    try:
        circuit = load_circuit(args.circuit, config.prime)
    except CircuitFormatError as e:
        print(f"Error: malformed circuit: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Circuit")
    print("-" * 42)
    print(format_circuit(circuit))
    print("-" * 42)

    try:
        trace = prove_and_verify(circuit, seed=config.seed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if config.trace_path:
        save_trace(trace, config.trace_path)
        print(f"Written protocol trace to {config.trace_path}")

    print(trace.verdict)
    return 0 if trace.accepted else 1


if __name__ == '__main__':
    sys.exit(main())
