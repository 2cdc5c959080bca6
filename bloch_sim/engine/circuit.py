"""Gate descriptors and the ordered gate sequence a user builds."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from numbers import Integral, Real

from .errors import InvalidConfiguration, InvalidGateSpec
from .gate_registry import GateRegistry
from .gates import GateKind

MIN_QUBITS = 1
MAX_QUBITS = 5


def validate_register(num_qubits: int, initial_state: int = 0) -> None:
    """Raise InvalidConfiguration unless 1 <= n <= 5 and 0 <= index < 2^n."""
    if isinstance(num_qubits, bool) or not isinstance(num_qubits, Integral):
        raise InvalidConfiguration(
            f"num_qubits must be an integer, got {num_qubits!r}")
    if num_qubits < MIN_QUBITS or num_qubits > MAX_QUBITS:
        raise InvalidConfiguration(
            f"num_qubits must be {MIN_QUBITS}-{MAX_QUBITS}, got {num_qubits}")
    if isinstance(initial_state, bool) or not isinstance(initial_state, Integral):
        raise InvalidConfiguration(
            f"initial basis index must be an integer, got {initial_state!r}")
    dim = 1 << num_qubits
    if initial_state < 0 or initial_state >= dim:
        raise InvalidConfiguration(
            f"initial basis index must be in [0, {dim - 1}], got {initial_state}")


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class QuantumGate:
    """One gate in a sequence: kind, the qubits it acts on, optional angle.

    ``qubit_indices`` holds one index for single-qubit gates, (control,
    target) for CNOT/CZ, the two operands for SWAP, and (control1,
    control2, target) for CCNOT. ``angle`` is in radians and is present
    only for Rx, Ry, Rz and Phase.
    """
    kind: GateKind
    qubit_indices: tuple[int, ...]
    angle: float | None = None
    gate_id: str = field(default_factory=_new_id, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "kind", GateKind.parse(self.kind))
        object.__setattr__(self, "qubit_indices", tuple(self.qubit_indices))

    @classmethod
    def create(cls, kind: GateKind | str, qubits, angle: float | None = None,
               num_qubits: int | None = None) -> QuantumGate:
        """Build a descriptor and validate it.

        Without ``num_qubits`` only the register-independent checks run.
        """
        if isinstance(qubits, Integral):
            qubits = (qubits,)
        gate = cls(GateKind.parse(kind), tuple(qubits), angle)
        gate.validate(num_qubits)
        return gate

    @property
    def definition(self):
        return GateRegistry.instance().get(self.kind)

    @property
    def target(self) -> int:
        return self.qubit_indices[-1]

    @property
    def controls(self) -> tuple[int, ...]:
        if self.kind in (GateKind.CNOT, GateKind.CZ, GateKind.CCNOT):
            return self.qubit_indices[:-1]
        return ()

    def validate(self, num_qubits: int | None = None) -> None:
        gate_def = self.definition
        name = gate_def.name
        qubits = self.qubit_indices

        if len(qubits) != gate_def.num_qubits:
            raise InvalidGateSpec(
                f"{name} acts on {gate_def.num_qubits} qubit(s), "
                f"got {len(qubits)} index(es)")
        for q in qubits:
            if isinstance(q, bool) or not isinstance(q, Integral):
                raise InvalidGateSpec(f"{name}: qubit index {q!r} is not an integer")
            if q < 0 or (num_qubits is not None and q >= num_qubits):
                upper = "" if num_qubits is None else f", {num_qubits - 1}"
                raise InvalidGateSpec(
                    f"{name}: qubit index {q} out of range [0{upper}]")
        if len(set(qubits)) != len(qubits):
            raise InvalidGateSpec(f"{name}: qubit indices must be distinct, got {qubits}")

        if gate_def.parameterized:
            if self.angle is None:
                raise InvalidGateSpec(f"{name} requires an angle")
            if (isinstance(self.angle, bool) or not isinstance(self.angle, Real)
                    or not math.isfinite(self.angle)):
                raise InvalidGateSpec(f"{name}: angle must be a finite number, "
                                      f"got {self.angle!r}")
        elif self.angle is not None:
            raise InvalidGateSpec(f"{name} does not take an angle")

    def label(self) -> str:
        """Short human-readable form, e.g. ``CNOT(0,1)`` or ``Rx(1.5708)[2]``."""
        qubits = ",".join(str(q) for q in self.qubit_indices)
        if self.angle is not None:
            return f"{self.kind.value}({self.angle:.4g})[{qubits}]"
        return f"{self.kind.value}({qubits})"

    def to_dict(self) -> dict:
        d = {
            "id": self.gate_id,
            "type": self.kind.value,
            "qubits": list(self.qubit_indices),
        }
        if self.angle is not None:
            d["angle"] = self.angle
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuantumGate:
        try:
            kind, qubits = data["type"], data["qubits"]
        except KeyError as exc:
            raise InvalidGateSpec(f"Gate dict is missing {exc.args[0]!r}") from None
        if not isinstance(qubits, (list, tuple)):
            raise InvalidGateSpec(f"Gate dict 'qubits' must be a list, got {qubits!r}")
        gate = cls(
            kind=GateKind.parse(kind),
            qubit_indices=tuple(qubits),
            angle=data.get("angle"),
        )
        if data.get("id"):
            object.__setattr__(gate, "gate_id", data["id"])
        gate.validate()
        return gate


@dataclass
class QuantumCircuit:
    """The gate sequence on an n-qubit register, applied in list order."""
    num_qubits: int = 2
    gates: list[QuantumGate] = field(default_factory=list)
    initial_state: int = 0

    def __post_init__(self):
        validate_register(self.num_qubits, self.initial_state)
        for g in self.gates:
            g.validate(self.num_qubits)

    def add_gate(self, gate: QuantumGate) -> QuantumGate:
        gate.validate(self.num_qubits)
        self.gates.append(gate)
        return gate

    def _index_of(self, gate_id: str) -> int:
        for i, g in enumerate(self.gates):
            if g.gate_id == gate_id:
                return i
        return -1

    def remove_gate(self, gate_id: str) -> bool:
        idx = self._index_of(gate_id)
        if idx == -1:
            return False
        del self.gates[idx]
        return True

    def move_gate(self, gate_id: str, direction: str) -> bool:
        """Swap a gate with its neighbour. Returns False if nothing moved."""
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
        idx = self._index_of(gate_id)
        if idx == -1:
            return False
        dest = idx - 1 if direction == "up" else idx + 1
        if dest < 0 or dest >= len(self.gates):
            return False
        self.gates[idx], self.gates[dest] = self.gates[dest], self.gates[idx]
        return True

    def clear(self):
        self.gates.clear()

    def set_num_qubits(self, n: int):
        validate_register(n)
        # Remove gates that reference qubits >= n
        self.gates = [g for g in self.gates
                      if all(q < n for q in g.qubit_indices)]
        self.num_qubits = n
        if self.initial_state >= (1 << n):
            self.initial_state = 0

    def set_initial_state(self, index: int):
        validate_register(self.num_qubits, index)
        self.initial_state = index

    def gate_count(self) -> int:
        return len(self.gates)

    def basis_label(self, index: int) -> str:
        """Bit string of a basis index, qubit 0 leftmost."""
        return format(index, f"0{self.num_qubits}b")

    def copy(self) -> QuantumCircuit:
        return QuantumCircuit(self.num_qubits, list(self.gates), self.initial_state)

    def circuit_hash(self) -> int:
        """Hash of the circuit structure for cache invalidation checks."""
        parts: list = [self.num_qubits, self.initial_state]
        for g in self.gates:
            parts.append((g.kind.value, g.qubit_indices, g.angle))
        return hash(tuple(parts))

    def to_dict(self) -> dict:
        return {
            "num_qubits": self.num_qubits,
            "initial_state": self.initial_state,
            "gates": [g.to_dict() for g in self.gates],
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuantumCircuit:
        return cls(
            num_qubits=data["num_qubits"],
            initial_state=data.get("initial_state", 0),
            gates=[QuantumGate.from_dict(g) for g in data.get("gates", [])],
        )
