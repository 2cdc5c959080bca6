"""Gate catalog using the Singleton pattern."""

from __future__ import annotations

from .gates import (
    GateCategory, GateDefinition, GateKind, _const,
    X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX,
    S_MATRIX, S_DAG_MATRIX, T_MATRIX, T_DAG_MATRIX,
    rx_matrix, ry_matrix, rz_matrix, phase_matrix,
)


class GateRegistry:
    """Singleton registry mapping every GateKind to its GateDefinition."""

    _instance: GateRegistry | None = None

    def __init__(self):
        self._gates: dict[GateKind, GateDefinition] = {}

    @classmethod
    def instance(cls) -> GateRegistry:
        if cls._instance is None:
            cls._instance = cls()
            cls._instance._register_builtins()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _register_builtins(self):
        # Single-qubit fixed gates
        self.register(GateDefinition(
            kind=GateKind.X, display_name="Pauli-X",
            category=GateCategory.SINGLE, parameterized=False,
            description="Bit flip gate", symbol="X",
            matrix_func=_const(X_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.Y, display_name="Pauli-Y",
            category=GateCategory.SINGLE, parameterized=False,
            description="Bit and phase flip gate", symbol="Y",
            matrix_func=_const(Y_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.Z, display_name="Pauli-Z",
            category=GateCategory.SINGLE, parameterized=False,
            description="Phase flip gate", symbol="Z",
            matrix_func=_const(Z_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.H, display_name="Hadamard",
            category=GateCategory.SINGLE, parameterized=False,
            description="Creates superposition", symbol="H",
            matrix_func=_const(H_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.S, display_name="S Gate",
            category=GateCategory.SINGLE, parameterized=False,
            description="Phase gate (π/2)", symbol="S",
            matrix_func=_const(S_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.SDG, display_name="S† Gate",
            category=GateCategory.SINGLE, parameterized=False,
            description="S gate dagger", symbol="S†",
            matrix_func=_const(S_DAG_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.T, display_name="T Gate",
            category=GateCategory.SINGLE, parameterized=False,
            description="Phase gate (π/4)", symbol="T",
            matrix_func=_const(T_MATRIX)))

        self.register(GateDefinition(
            kind=GateKind.TDG, display_name="T† Gate",
            category=GateCategory.SINGLE, parameterized=False,
            description="T gate dagger", symbol="T†",
            matrix_func=_const(T_DAG_MATRIX)))

        # Single-qubit parameterized gates
        self.register(GateDefinition(
            kind=GateKind.RX, display_name="Rx(θ)",
            category=GateCategory.SINGLE, parameterized=True,
            description="Rotation around X-axis", symbol="Rx",
            matrix_func=rx_matrix))

        self.register(GateDefinition(
            kind=GateKind.RY, display_name="Ry(θ)",
            category=GateCategory.SINGLE, parameterized=True,
            description="Rotation around Y-axis", symbol="Ry",
            matrix_func=ry_matrix))

        self.register(GateDefinition(
            kind=GateKind.RZ, display_name="Rz(θ)",
            category=GateCategory.SINGLE, parameterized=True,
            description="Rotation around Z-axis", symbol="Rz",
            matrix_func=rz_matrix))

        self.register(GateDefinition(
            kind=GateKind.PHASE, display_name="Phase(φ)",
            category=GateCategory.SINGLE, parameterized=True,
            description="Phase rotation", symbol="P",
            matrix_func=phase_matrix))

        # Multi-qubit gates (applied as index permutations by the engine)
        self.register(GateDefinition(
            kind=GateKind.CNOT, display_name="CNOT",
            category=GateCategory.TWO, parameterized=False,
            description="Controlled NOT gate", symbol="CX"))

        self.register(GateDefinition(
            kind=GateKind.CZ, display_name="CZ",
            category=GateCategory.TWO, parameterized=False,
            description="Controlled Z gate", symbol="CZ"))

        self.register(GateDefinition(
            kind=GateKind.SWAP, display_name="SWAP",
            category=GateCategory.TWO, parameterized=False,
            description="Swap two qubits", symbol="SW"))

        self.register(GateDefinition(
            kind=GateKind.CCNOT, display_name="Toffoli",
            category=GateCategory.THREE, parameterized=False,
            description="Controlled-controlled NOT", symbol="CCX"))

    def register(self, gate_def: GateDefinition):
        self._gates[gate_def.kind] = gate_def

    def get(self, kind: GateKind | str) -> GateDefinition:
        kind = GateKind.parse(kind)
        if kind not in self._gates:
            raise KeyError(f"Gate '{kind.value}' not found in registry")
        return self._gates[kind]

    def all_gates(self) -> list[GateDefinition]:
        return list(self._gates.values())

    def single_qubit_gates(self) -> list[GateDefinition]:
        return [g for g in self._gates.values()
                if g.category == GateCategory.SINGLE]

    def multi_qubit_gates(self) -> list[GateDefinition]:
        return [g for g in self._gates.values()
                if g.category in (GateCategory.TWO, GateCategory.THREE)]

    def parameterized_gates(self) -> list[GateDefinition]:
        return [g for g in self._gates.values() if g.parameterized]

    def gate_names(self) -> list[str]:
        return [k.value for k in self._gates]
