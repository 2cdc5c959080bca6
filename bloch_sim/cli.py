"""Command-line front end: run a gate sequence and print the resulting state.

Usage:
    bloch-sim --qubits 2 H:0 CNOT:0,1
    bloch-sim --qubits 1 --initial 1 Rx:0@1.5708 --summary
    bloch-sim --list-gates
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from bloch_sim.core.config import AppConfig
from bloch_sim.core.logging_setup import configure_logging
from bloch_sim.engine.circuit import QuantumCircuit, QuantumGate
from bloch_sim.engine.errors import (
    InvalidConfiguration, InvalidGateSpec, SimulatorError,
)
from bloch_sim.engine.gate_registry import GateRegistry
from bloch_sim.engine.simulator import QuantumState, Simulator

logger = logging.getLogger(__name__)


def parse_gate_token(token: str) -> QuantumGate:
    """Parse ``NAME:q0[,q1[,q2]][@angle]`` into an unchecked-range descriptor."""
    name, sep, rest = token.partition(":")
    if not sep or not name or not rest:
        raise InvalidGateSpec(f"Gate token must look like NAME:q0[,q1][@angle], got '{token}'")
    qubit_part, at, angle_part = rest.partition("@")
    try:
        qubits = tuple(int(q) for q in qubit_part.split(","))
    except ValueError:
        raise InvalidGateSpec(f"Bad qubit list in '{token}'") from None
    angle = None
    if at:
        try:
            angle = float(angle_part)
        except ValueError:
            raise InvalidGateSpec(f"Bad angle in '{token}'") from None
    return QuantumGate.create(name, qubits, angle)


def format_summary(circuit: QuantumCircuit, state: QuantumState) -> str:
    lines = ["basis      amplitude                 probability"]
    for idx, (amp, prob) in enumerate(zip(state.amplitudes, state.probabilities)):
        lines.append(f"|{circuit.basis_label(idx)}>  "
                     f"{amp.real:+.6f} {amp.imag:+.6f}i    {prob:.6f}")
    lines.append("")
    lines.append("qubit  bloch (x, y, z)                 entropy  purity")
    for q, (b, s, p) in enumerate(zip(state.bloch_vectors, state.entropies(),
                                      state.purities())):
        lines.append(f"q{q}     ({b.x:+.4f}, {b.y:+.4f}, {b.z:+.4f})"
                     f"    {s:.4f}   {p:.4f}")
    return "\n".join(lines)


def format_gate_list() -> str:
    lines = []
    for g in GateRegistry.instance().all_gates():
        arity = g.num_qubits
        angle = " angle" if g.parameterized else ""
        lines.append(f"{g.name:<6} {arity}q{angle:<7} {g.display_name}: {g.description}")
    return "\n".join(lines)


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bloch-sim",
        description="Simulate a gate sequence on a 1-5 qubit register.",
    )
    parser.add_argument("gates", nargs="*", metavar="GATE",
                        help="gate token NAME:q0[,q1[,q2]][@angle], applied in order")
    parser.add_argument("-n", "--qubits", type=int, default=config.default_qubits,
                        help=f"number of qubits, at most {config.max_qubits} "
                             "(default: %(default)s)")
    parser.add_argument("-i", "--initial", type=int, default=None,
                        help="initial computational basis index (default: "
                             f"{config.default_initial_state} if it fits the register, else 0)")
    parser.add_argument("--summary", action="store_true",
                        help="print a table instead of JSON")
    parser.add_argument("--indent", type=int, default=2,
                        help="JSON indentation (default: %(default)s)")
    parser.add_argument("--list-gates", action="store_true",
                        help="list the supported gates and exit")
    parser.add_argument("--log-level", default=config.log_level,
                        help="logging level (default: %(default)s)")
    return parser


def resolve_initial_state(args: argparse.Namespace, config: AppConfig) -> int:
    """Explicit --initial wins; the saved default applies only if it fits."""
    if args.initial is not None:
        return args.initial
    if 0 <= config.default_initial_state < (1 << max(args.qubits, 0)):
        return config.default_initial_state
    return 0


def main(argv: list[str] | None = None, config: AppConfig | None = None) -> int:
    if config is None:
        config = AppConfig.load()
    args = build_parser(config).parse_args(argv)
    configure_logging(args.log_level)

    if args.list_gates:
        print(format_gate_list())
        return 0

    try:
        if args.qubits > config.max_qubits:
            raise InvalidConfiguration(
                f"--qubits {args.qubits} exceeds the configured maximum "
                f"of {config.max_qubits}")
        circuit = QuantumCircuit(num_qubits=args.qubits,
                                 initial_state=resolve_initial_state(args, config))
        for token in args.gates:
            circuit.add_gate(parse_gate_token(token))
        result = Simulator.run(circuit)
    except SimulatorError as exc:
        logger.debug("Rejected input", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.summary:
        print(format_summary(circuit, result.state))
    else:
        print(json.dumps(result.state.to_dict(), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
