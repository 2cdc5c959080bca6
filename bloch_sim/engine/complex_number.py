"""Immutable complex value used at the boundary of the engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Number


@dataclass(frozen=True)
class ComplexNumber:
    """An ordered pair (re, im) of floats.

    The engine keeps amplitudes in complex128 arrays; this type is what
    results look like once they leave it (e.g. ``QuantumState.to_dict``).
    """
    re: float = 0.0
    im: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "re", float(self.re))
        object.__setattr__(self, "im", float(self.im))

    @classmethod
    def from_complex(cls, value) -> ComplexNumber:
        z = complex(value)
        return cls(z.real, z.imag)

    @classmethod
    def from_dict(cls, data: dict) -> ComplexNumber:
        return cls(data.get("re", 0.0), data.get("im", 0.0))

    def to_dict(self) -> dict:
        return {"re": self.re, "im": self.im}

    def _coerce(self, other) -> ComplexNumber | None:
        if isinstance(other, ComplexNumber):
            return other
        if isinstance(other, Number):
            return ComplexNumber.from_complex(other)
        return None

    def __add__(self, other) -> ComplexNumber:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return ComplexNumber(self.re + o.re, self.im + o.im)

    __radd__ = __add__

    def __sub__(self, other) -> ComplexNumber:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return ComplexNumber(self.re - o.re, self.im - o.im)

    def __rsub__(self, other) -> ComplexNumber:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other) -> ComplexNumber:
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return ComplexNumber(self.re * o.re - self.im * o.im,
                             self.re * o.im + self.im * o.re)

    __rmul__ = __mul__

    def __neg__(self) -> ComplexNumber:
        return ComplexNumber(-self.re, -self.im)

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __abs__(self) -> float:
        return math.hypot(self.re, self.im)

    def conjugate(self) -> ComplexNumber:
        return ComplexNumber(self.re, -self.im)

    def abs_squared(self) -> float:
        return self.re * self.re + self.im * self.im

    def is_close(self, other, tol: float = 1e-9) -> bool:
        o = self._coerce(other)
        if o is None:
            return False
        return abs(self - o) <= tol

    def __repr__(self) -> str:
        sign = "+" if self.im >= 0 else "-"
        return f"ComplexNumber({self.re:g} {sign} {abs(self.im):g}i)"
