"""State-vector engine: gate catalog, amplitude kernels and observables."""

from .analysis import (
    BlochVector, StateAnalysis, bloch_vector, density_matrix, entropy,
    purity, reduced_density_matrix, reduced_density_matrices,
)
from .circuit import MAX_QUBITS, MIN_QUBITS, QuantumCircuit, QuantumGate
from .complex_number import ComplexNumber
from .errors import InvalidConfiguration, InvalidGateSpec, SimulatorError
from .gate_registry import GateRegistry
from .gates import GateCategory, GateDefinition, GateKind
from .simulator import QuantumState, SimulationResult, Simulator
from .state_vector import StateVector

__all__ = [
    "BlochVector", "ComplexNumber", "GateCategory", "GateDefinition",
    "GateKind", "GateRegistry", "InvalidConfiguration", "InvalidGateSpec",
    "MAX_QUBITS", "MIN_QUBITS", "QuantumCircuit", "QuantumGate",
    "QuantumState", "SimulationResult", "Simulator", "SimulatorError",
    "StateAnalysis", "StateVector", "bloch_vector", "density_matrix",
    "entropy", "purity", "reduced_density_matrix", "reduced_density_matrices",
]
