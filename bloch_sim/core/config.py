"""Application configuration management."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from bloch_sim.engine.circuit import MAX_QUBITS, MIN_QUBITS

logger = logging.getLogger(__name__)

_PERSISTED = (
    "default_qubits",
    "default_initial_state",
    "max_qubits",
    "log_level",
    "step_delay_ms",
)


@dataclass
class AppConfig:
    """Persistent application configuration."""
    default_qubits: int = 2
    default_initial_state: int = 0
    max_qubits: int = MAX_QUBITS
    log_level: str = "WARNING"
    step_delay_ms: int = 0

    _config_dir: Path = field(
        default_factory=lambda: Path.home() / ".bloch_sim",
        repr=False)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def _normalize(self):
        self.max_qubits = min(max(int(self.max_qubits), MIN_QUBITS), MAX_QUBITS)
        self.default_qubits = min(max(int(self.default_qubits), MIN_QUBITS),
                                  self.max_qubits)
        if not 0 <= self.default_initial_state < (1 << self.default_qubits):
            self.default_initial_state = 0
        self.step_delay_ms = max(0, int(self.step_delay_ms))

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in _PERSISTED}

    def save(self):
        self._config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> AppConfig:
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))
        if config.config_path.exists():
            try:
                with open(config.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be a JSON object")
                for key, value in data.items():
                    if key in _PERSISTED:
                        setattr(config, key, value)
                config._normalize()
            except (json.JSONDecodeError, OSError, TypeError, ValueError):
                logger.warning("Ignoring unreadable config file %s",
                               config.config_path, exc_info=True)
                config = cls(_config_dir=config._config_dir)
        return config
