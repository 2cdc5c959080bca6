"""Bloch circuit simulator.

Dense state-vector simulation of 1-5 qubit registers, with density
matrices, per-qubit reduced states and Bloch vectors for display.
"""

from bloch_sim.engine import (
    BlochVector, ComplexNumber, GateKind, InvalidConfiguration,
    InvalidGateSpec, QuantumCircuit, QuantumGate, QuantumState, Simulator,
    SimulatorError, entropy, purity,
)

__version__ = "1.0.0"

__all__ = [
    "BlochVector", "ComplexNumber", "GateKind", "InvalidConfiguration",
    "InvalidGateSpec", "QuantumCircuit", "QuantumGate", "QuantumState",
    "Simulator", "SimulatorError", "entropy", "purity", "__version__",
]
