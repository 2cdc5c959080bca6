"""Quantum gate matrix definitions and the closed gate catalog types."""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Callable
from enum import Enum

from .errors import InvalidGateSpec


class GateCategory(Enum):
    SINGLE = "single"
    TWO = "two"
    THREE = "three"

    @property
    def arity(self) -> int:
        return _ARITY[self]


_ARITY = {GateCategory.SINGLE: 1, GateCategory.TWO: 2, GateCategory.THREE: 3}


class GateKind(Enum):
    """Every gate the simulator knows. The set is closed.

    Values are the canonical names used in descriptors and on the
    command line.
    """
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    SDG = "Sdg"
    T = "T"
    TDG = "Tdg"
    RX = "Rx"
    RY = "Ry"
    RZ = "Rz"
    PHASE = "Phase"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    CCNOT = "CCNOT"

    @classmethod
    def parse(cls, name) -> GateKind:
        """Resolve a gate name (case-insensitive, common aliases allowed)."""
        if isinstance(name, GateKind):
            return name
        key = str(name).strip().upper()
        kind = _NAME_LOOKUP.get(key)
        if kind is None:
            raise InvalidGateSpec(f"Unknown gate type '{name}'")
        return kind


_NAME_LOOKUP: dict[str, GateKind] = {k.value.upper(): k for k in GateKind}
_NAME_LOOKUP.update({
    "S_DAG": GateKind.SDG,
    "SDAG": GateKind.SDG,
    "T_DAG": GateKind.TDG,
    "TDAG": GateKind.TDG,
    "P": GateKind.PHASE,
    "CX": GateKind.CNOT,
    "CCX": GateKind.CCNOT,
    "TOFFOLI": GateKind.CCNOT,
})


@dataclass(frozen=True)
class GateDefinition:
    """Immutable catalog entry for one gate kind."""
    kind: GateKind
    display_name: str
    category: GateCategory
    parameterized: bool
    description: str
    symbol: str
    matrix_func: Callable[..., np.ndarray] | None = None

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def num_qubits(self) -> int:
        return self.category.arity

    def matrix(self, angle: float | None = None) -> np.ndarray:
        """The 2x2 unitary of a single-qubit gate.

        Multi-qubit gates have no matrix at this level; the engine
        applies them as index permutations.
        """
        if self.matrix_func is None:
            raise InvalidGateSpec(f"{self.name} has no single-qubit matrix form")
        if self.parameterized:
            if angle is None:
                raise InvalidGateSpec(f"{self.name} requires an angle")
            return self.matrix_func(angle)
        if angle is not None:
            raise InvalidGateSpec(f"{self.name} does not take an angle")
        return self.matrix_func()


# --- Fixed single-qubit gate matrices ---

X_MATRIX = np.array([[0, 1],
                      [1, 0]], dtype=np.complex128)

Y_MATRIX = np.array([[0, -1j],
                      [1j, 0]], dtype=np.complex128)

Z_MATRIX = np.array([[1, 0],
                      [0, -1]], dtype=np.complex128)

H_MATRIX = np.array([[1, 1],
                      [1, -1]], dtype=np.complex128) / np.sqrt(2)

S_MATRIX = np.array([[1, 0],
                      [0, 1j]], dtype=np.complex128)

S_DAG_MATRIX = np.array([[1, 0],
                          [0, -1j]], dtype=np.complex128)

T_MATRIX = np.array([[1, 0],
                      [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)

T_DAG_MATRIX = np.array([[1, 0],
                          [0, np.exp(-1j * np.pi / 4)]], dtype=np.complex128)

for _m in (X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX,
           S_MATRIX, S_DAG_MATRIX, T_MATRIX, T_DAG_MATRIX):
    _m.flags.writeable = False


# --- Parameterized single-qubit gate functions (angles in radians) ---

def rx_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -1j * s],
                      [-1j * s, c]], dtype=np.complex128)


def ry_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s],
                      [s, c]], dtype=np.complex128)


def rz_matrix(theta: float) -> np.ndarray:
    return np.array([[np.exp(-1j * theta / 2), 0],
                      [0, np.exp(1j * theta / 2)]], dtype=np.complex128)


def phase_matrix(phi: float) -> np.ndarray:
    return np.array([[1, 0],
                      [0, np.exp(1j * phi)]], dtype=np.complex128)


def _const(matrix: np.ndarray) -> Callable[[], np.ndarray]:
    """Returns a no-arg callable that returns the given matrix."""
    def _fn() -> np.ndarray:
        return matrix
    return _fn
