"""Quantum circuit simulator - applies gate sequences to state vectors."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generator, Iterable

import numpy as np

from .analysis import (
    BlochVector, bloch_vector, density_matrix, entropy, purity,
    reduced_density_matrix,
)
from .circuit import QuantumCircuit, QuantumGate, validate_register
from .complex_number import ComplexNumber
from .gate_registry import GateRegistry
from .gates import GateKind
from .state_vector import StateVector

logger = logging.getLogger(__name__)


def _frozen(array: np.ndarray) -> np.ndarray:
    out = np.array(array, dtype=np.complex128, copy=True)
    out.flags.writeable = False
    return out


@dataclass(frozen=True, eq=False)
class QuantumState:
    """Snapshot of a register: amplitudes plus everything derived from them.

    Arrays are private read-only copies, so a snapshot never changes
    after the simulator that produced it moves on.
    """
    amplitudes: np.ndarray
    density_matrix: np.ndarray
    reduced_states: tuple[np.ndarray, ...]
    bloch_vectors: tuple[BlochVector, ...]

    @classmethod
    def from_amplitudes(cls, amplitudes: np.ndarray) -> QuantumState:
        psi = _frozen(amplitudes)
        rho = _frozen(density_matrix(psi))
        n = len(psi).bit_length() - 1
        reduced = tuple(_frozen(reduced_density_matrix(rho, q)) for q in range(n))
        return cls(
            amplitudes=psi,
            density_matrix=rho,
            reduced_states=reduced,
            bloch_vectors=tuple(bloch_vector(r) for r in reduced),
        )

    @property
    def num_qubits(self) -> int:
        return len(self.bloch_vectors)

    @property
    def probabilities(self) -> np.ndarray:
        return np.abs(self.amplitudes) ** 2

    def entropies(self) -> list[float]:
        return [entropy(b) for b in self.bloch_vectors]

    def purities(self) -> list[float]:
        return [purity(b) for b in self.bloch_vectors]

    def to_dict(self) -> dict:
        """Plain-value form ({"re", "im"} pairs) for a display layer."""
        def _cx(z) -> dict:
            return ComplexNumber.from_complex(z).to_dict()

        def _matrix(m: np.ndarray) -> list[list[dict]]:
            return [[_cx(z) for z in row] for row in m]

        return {
            "num_qubits": self.num_qubits,
            "amplitudes": [_cx(z) for z in self.amplitudes],
            "density_matrix": _matrix(self.density_matrix),
            "reduced_states": [_matrix(r) for r in self.reduced_states],
            "bloch_vectors": [b.to_dict() for b in self.bloch_vectors],
            "entropies": self.entropies(),
            "purities": self.purities(),
        }


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """Result of a full simulation run."""
    state: QuantumState
    circuit_hash: int
    gate_count: int
    elapsed_s: float


class Simulator:
    """Owns one register and applies gate descriptors to it in order.

    A simulator belongs to a single run: build it, apply the sequence,
    take a snapshot, drop it. It must not be shared between threads.
    """

    def __init__(self, num_qubits: int, initial_basis_index: int = 0):
        validate_register(num_qubits, initial_basis_index)
        self._state = StateVector(num_qubits, initial_basis_index)
        self._registry = GateRegistry.instance()
        self._initial = initial_basis_index
        logger.debug("Simulator created: %d qubit(s), initial |%s>",
                     num_qubits, format(int(initial_basis_index), f"0{num_qubits}b"))

    @property
    def num_qubits(self) -> int:
        return self._state.num_qubits

    @property
    def state(self) -> StateVector:
        """Copy of the current state vector."""
        return self._state.copy()

    def apply_gate(self, gate: QuantumGate):
        """Validate ``gate`` against this register, then apply it.

        Raises InvalidGateSpec without touching the amplitudes if the
        descriptor is malformed.
        """
        gate.validate(self.num_qubits)
        _DISPATCH[gate.kind](self, gate)
        logger.debug("Applied %s", gate.label())

    def apply_gates(self, gates: Iterable[QuantumGate]):
        for gate in gates:
            self.apply_gate(gate)

    def snapshot(self) -> QuantumState:
        return QuantumState.from_amplitudes(self._state.data)

    # ---- Dispatch targets -------------------------------------------------

    def _apply_single(self, gate: QuantumGate):
        matrix = self._registry.get(gate.kind).matrix(gate.angle)
        self._state.apply_single_qubit_gate(gate.qubit_indices[0], matrix)

    def _apply_cnot(self, gate: QuantumGate):
        control, target = gate.qubit_indices
        self._state.apply_cnot(control, target)

    def _apply_cz(self, gate: QuantumGate):
        control, target = gate.qubit_indices
        self._state.apply_cz(control, target)

    def _apply_swap(self, gate: QuantumGate):
        a, b = gate.qubit_indices
        self._state.apply_swap(a, b)

    def _apply_ccnot(self, gate: QuantumGate):
        c1, c2, target = gate.qubit_indices
        self._state.apply_ccnot(c1, c2, target)

    # ---- Whole-circuit runs -----------------------------------------------

    @classmethod
    def run(cls, circuit: QuantumCircuit) -> SimulationResult:
        """Fresh simulator, every gate in order, then one snapshot."""
        t0 = time.perf_counter()
        sim = cls(circuit.num_qubits, circuit.initial_state)
        sim.apply_gates(circuit.gates)
        state = sim.snapshot()
        elapsed = time.perf_counter() - t0
        logger.info("Simulated %d gate(s) on %d qubit(s) in %.4fs",
                    circuit.gate_count(), circuit.num_qubits, elapsed)
        return SimulationResult(
            state=state,
            circuit_hash=circuit.circuit_hash(),
            gate_count=circuit.gate_count(),
            elapsed_s=elapsed,
        )

    @classmethod
    def run_step_by_step(
        cls, circuit: QuantumCircuit,
    ) -> Generator[tuple[QuantumState, int], None, None]:
        """Yields (snapshot, gate_index) after each gate, starting at -1."""
        sim = cls(circuit.num_qubits, circuit.initial_state)
        yield sim.snapshot(), -1
        for i, gate in enumerate(circuit.gates):
            sim.apply_gate(gate)
            yield sim.snapshot(), i

    def __repr__(self) -> str:
        return f"Simulator(num_qubits={self.num_qubits}, initial={self._initial})"


_SINGLE_KINDS = (
    GateKind.X, GateKind.Y, GateKind.Z, GateKind.H,
    GateKind.S, GateKind.SDG, GateKind.T, GateKind.TDG,
    GateKind.RX, GateKind.RY, GateKind.RZ, GateKind.PHASE,
)

_DISPATCH: dict[GateKind, Callable[[Simulator, QuantumGate], None]] = {
    **{kind: Simulator._apply_single for kind in _SINGLE_KINDS},
    GateKind.CNOT: Simulator._apply_cnot,
    GateKind.CZ: Simulator._apply_cz,
    GateKind.SWAP: Simulator._apply_swap,
    GateKind.CCNOT: Simulator._apply_ccnot,
}

_missing = set(GateKind) - set(_DISPATCH)
if _missing:
    raise RuntimeError(f"No engine routine for gate kind(s): "
                       f"{sorted(k.value for k in _missing)}")
