"""Validation errors raised by the simulation engine."""

from __future__ import annotations


class SimulatorError(ValueError):
    """Base class for input validation failures in the engine."""


class InvalidGateSpec(SimulatorError):
    """Malformed gate descriptor.

    Raised for out-of-range or duplicate qubit indices, the wrong number
    of indices for the gate kind, or an angle given to a fixed gate
    (or missing from a parameterized one). Raised before any amplitude
    is touched.
    """


class InvalidConfiguration(SimulatorError):
    """Qubit count or initial basis index outside the supported range."""
