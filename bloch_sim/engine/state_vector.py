"""Core quantum state representation using state vectors."""

from __future__ import annotations

import numpy as np


class StateVector:
    """Represents an n-qubit pure state as a complex numpy array.

    Basis index i encodes the joint state with qubit 0 in the most
    significant bit, so qubit q is bit ``n - 1 - q`` of i. Every gate
    kernel works on a precomputed index array with shifts and masks and
    writes a fresh array, never materializing the 2^n x 2^n operator.
    """

    def __init__(self, num_qubits: int, initial_basis_index: int = 0):
        if num_qubits < 1:
            raise ValueError(f"num_qubits must be >= 1, got {num_qubits}")
        dim = 1 << num_qubits
        if initial_basis_index < 0 or initial_basis_index >= dim:
            raise ValueError(
                f"Basis index {initial_basis_index} out of range [0, {dim - 1}]")
        self._num_qubits = num_qubits
        self._indices = np.arange(dim)
        self._data = np.zeros(dim, dtype=np.complex128)
        self._data[initial_basis_index] = 1.0 + 0.0j

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dim(self) -> int:
        return len(self._data)

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the amplitudes."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    @property
    def probabilities(self) -> np.ndarray:
        """Returns |amplitude|^2 for each basis state."""
        return np.abs(self._data) ** 2

    def norm(self) -> float:
        return float(np.sqrt(np.sum(self.probabilities)))

    # ---- Bit helpers ------------------------------------------------------

    def _mask(self, qubit: int) -> int:
        if qubit < 0 or qubit >= self._num_qubits:
            raise ValueError(
                f"Qubit index {qubit} out of range [0, {self._num_qubits - 1}]")
        return 1 << (self._num_qubits - 1 - qubit)

    def _masks(self, *qubits: int) -> list[int]:
        if len(set(qubits)) != len(qubits):
            raise ValueError(f"Qubit indices must be distinct, got {qubits}")
        return [self._mask(q) for q in qubits]

    def _permute(self, source: np.ndarray):
        """new[i] = old[source[i]]; source must be a permutation."""
        self._data = self._data[source]

    # ---- Gate kernels -----------------------------------------------------

    def apply_single_qubit_gate(self, target: int, matrix: np.ndarray):
        """Apply a 2x2 unitary U to one qubit: (I x .. x U x .. x I)|psi>.

        For each basis index i with target bit b, U[j][b] * psi[i] is added
        to the amplitude of i with the target bit set to j.
        """
        mask = self._mask(target)
        u = np.asarray(matrix, dtype=np.complex128)
        if u.shape != (2, 2):
            raise ValueError(f"Expected a 2x2 matrix, got shape {u.shape}")

        idx = self._indices
        bit = (idx & mask) != 0
        # new[i] = U[b_i][0] * psi[i with bit 0] + U[b_i][1] * psi[i with bit 1]
        amp0 = self._data[idx & ~mask]
        amp1 = self._data[idx | mask]
        row = bit.astype(np.intp)
        self._data = u[row, 0] * amp0 + u[row, 1] * amp1

    def apply_cnot(self, control: int, target: int):
        """Flip the target bit wherever the control bit is 1."""
        c_mask, t_mask = self._masks(control, target)
        idx = self._indices
        source = np.where((idx & c_mask) != 0, idx ^ t_mask, idx)
        self._permute(source)

    def apply_cz(self, control: int, target: int):
        """Negate amplitudes whose control and target bits are both 1."""
        c_mask, t_mask = self._masks(control, target)
        both = c_mask | t_mask
        idx = self._indices
        scale = np.where((idx & both) == both, -1.0, 1.0)
        self._data = self._data * scale

    def apply_swap(self, a: int, b: int):
        """Exchange qubits a and b. No-op when a == b."""
        if a == b:
            self._mask(a)
            return
        a_mask, b_mask = self._masks(a, b)
        idx = self._indices
        differ = ((idx & a_mask) != 0) != ((idx & b_mask) != 0)
        source = np.where(differ, idx ^ (a_mask | b_mask), idx)
        self._permute(source)

    def apply_ccnot(self, control1: int, control2: int, target: int):
        """Toffoli: flip the target bit only when both controls are 1."""
        c1_mask, c2_mask, t_mask = self._masks(control1, control2, target)
        both = c1_mask | c2_mask
        idx = self._indices
        source = np.where((idx & both) == both, idx ^ t_mask, idx)
        self._permute(source)

    # ---- Misc -------------------------------------------------------------

    def copy(self) -> StateVector:
        """Deep copy of this state vector."""
        sv = StateVector.__new__(StateVector)
        sv._num_qubits = self._num_qubits
        sv._indices = self._indices
        sv._data = self._data.copy()
        return sv

    @classmethod
    def from_amplitudes(cls, amplitudes) -> StateVector:
        """Wrap an existing amplitude array (length must be a power of two)."""
        data = np.asarray(amplitudes, dtype=np.complex128).copy()
        dim = data.shape[0] if data.ndim == 1 else 0
        if dim < 2 or dim & (dim - 1):
            raise ValueError(f"Amplitude vector length must be 2^n, got shape {data.shape}")
        sv = cls(dim.bit_length() - 1)
        sv._data = data
        return sv

    def __repr__(self) -> str:
        return f"StateVector(num_qubits={self._num_qubits})"
