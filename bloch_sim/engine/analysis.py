"""Observables derived from a finished state vector.

All functions here are pure: they take arrays (or a BlochVector) and
return new values. No GUI or PyQt6 dependencies -- this module belongs
to the engine layer.

Provides:
- density_matrix / reduced_density_matrix: rho = |psi><psi| and its
  single-qubit partial traces
- bloch_vector, entropy, purity: single-qubit summaries for display
- StateAnalysis: general density-matrix checks and metrics
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class BlochVector:
    """Point in (or on) the unit ball describing one qubit's state.

    |r| = 1 for a pure qubit, |r| < 1 when it is entangled with the rest
    of the register.
    """
    x: float
    y: float
    z: float

    @property
    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


def _num_qubits_for(dim: int) -> int:
    if dim < 2 or dim & (dim - 1):
        raise ValueError(f"Dimension must be a power of two >= 2, got {dim}")
    return dim.bit_length() - 1


# ---- Density matrices -----------------------------------------------------

def density_matrix(amplitudes: np.ndarray) -> np.ndarray:
    """rho[i, j] = psi[i] * conj(psi[j]) for all 2^n x 2^n pairs."""
    psi = np.asarray(amplitudes, dtype=np.complex128)
    return np.outer(psi, np.conj(psi))


def reduced_density_matrix(rho: np.ndarray, target: int) -> np.ndarray:
    """Partial trace of rho over every qubit except ``target``.

    rho[i, j] contributes to reduced[bit(i), bit(j)] exactly when i and j
    agree on all other bit positions. Pairing each index that has the
    target bit cleared with the same index with the bit set enumerates
    those pairs once per environment state.
    """
    rho = np.asarray(rho, dtype=np.complex128)
    dim = rho.shape[0]
    if rho.shape != (dim, dim):
        raise ValueError(f"Expected a square matrix, got shape {rho.shape}")
    n = _num_qubits_for(dim)
    if target < 0 or target >= n:
        raise ValueError(f"Qubit {target} out of range [0, {n - 1}]")

    mask = 1 << (n - 1 - target)
    idx = np.arange(dim)
    env0 = idx[(idx & mask) == 0]
    env1 = env0 | mask
    branches = (env0, env1)

    reduced = np.empty((2, 2), dtype=np.complex128)
    for a in range(2):
        for b in range(2):
            reduced[a, b] = np.sum(rho[branches[a], branches[b]])
    return reduced


def reduced_density_matrices(rho: np.ndarray) -> list[np.ndarray]:
    """One 2x2 reduced state per qubit, in qubit order."""
    n = _num_qubits_for(np.asarray(rho).shape[0])
    return [reduced_density_matrix(rho, q) for q in range(n)]


# ---- Single-qubit summaries -----------------------------------------------

def bloch_vector(reduced: np.ndarray) -> BlochVector:
    """(x, y, z) = (2 Re rho01, -2 Im rho01, rho00 - rho11)."""
    rho01 = complex(reduced[0][1])
    x = 2.0 * rho01.real
    y = -2.0 * rho01.imag
    z = float(np.real(reduced[0][0]) - np.real(reduced[1][1]))
    return BlochVector(float(x), float(y), z)


def _log2_safe(value: float) -> float:
    return math.log2(value) if value > 0 else 0.0


def entropy(bloch: BlochVector) -> float:
    """Von Neumann entropy in bits of the qubit described by ``bloch``.

    Eigenvalues of the reduced state are (1 + r)/2 and (1 - r)/2 with
    r = |bloch|; 0 log2 0 is taken as 0. r is clamped to [0, 1] so
    round-off on a pure state cannot push the result negative.
    """
    r = min(bloch.length, 1.0)
    lambda1 = (1.0 + r) / 2.0
    lambda2 = (1.0 - r) / 2.0
    s = -(lambda1 * _log2_safe(lambda1) + lambda2 * _log2_safe(lambda2))
    return max(0.0, s)


def purity(bloch: BlochVector) -> float:
    """Tr(rho^2) = (1 + |r|^2) / 2; 1 for pure, 0.5 for maximally mixed."""
    return (1.0 + bloch.x ** 2 + bloch.y ** 2 + bloch.z ** 2) / 2.0


# =========================================================================
# StateAnalysis -- density-matrix checks and metrics
# =========================================================================

class StateAnalysis:
    """Static methods for quantitative analysis of quantum states."""

    @staticmethod
    def trace(rho: np.ndarray) -> complex:
        return complex(np.trace(rho))

    @staticmethod
    def is_hermitian(rho: np.ndarray, tol: float = 1e-9) -> bool:
        return bool(np.allclose(rho, np.conj(rho).T, atol=tol))

    @staticmethod
    def is_valid_density_matrix(rho: np.ndarray, tol: float = 1e-9) -> bool:
        """Hermitian, unit trace and no eigenvalue below -tol."""
        if not StateAnalysis.is_hermitian(rho, tol):
            return False
        if abs(StateAnalysis.trace(rho) - 1.0) > tol:
            return False
        return bool(np.all(np.linalg.eigvalsh(rho) > -tol))

    @staticmethod
    def purity_dm(rho: np.ndarray) -> float:
        """Purity Tr(rho^2) for a density matrix."""
        return float(np.real(np.trace(rho @ rho)))

    @staticmethod
    def von_neumann_entropy_dm(rho: np.ndarray) -> float:
        """Von Neumann entropy S(rho) = -Tr(rho log2 rho) in bits."""
        eigvals = np.linalg.eigvalsh(rho)
        eigvals = eigvals[eigvals > 1e-15]  # filter near-zero
        return float(max(0.0, -np.sum(eigvals * np.log2(eigvals))))
