"""Simulation controller using QThread worker pattern for non-blocking runs."""

from __future__ import annotations

import logging
import time

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot, QMutex

from bloch_sim.core.config import AppConfig
from bloch_sim.engine.circuit import QuantumCircuit
from bloch_sim.engine.simulator import Simulator

logger = logging.getLogger(__name__)


class SimulationWorker(QObject):
    """Worker object that performs one simulation run in a background thread.

    The worker holds its own copy of the circuit, so the caller may keep
    editing the original while the run is in flight.
    """

    # Signals emitted by the worker
    finished = pyqtSignal(object)          # SimulationResult
    step_updated = pyqtSignal(object, int) # (QuantumState, gate_index)
    error = pyqtSignal(str)
    progress = pyqtSignal(int)             # percentage 0-100

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._circuit: QuantumCircuit | None = None
        self._step_mode: bool = False
        self._step_delay_ms: int = 0
        self._stop_requested: bool = False
        self._mutex = QMutex()

    def configure(
        self,
        circuit: QuantumCircuit,
        step_mode: bool = False,
        step_delay_ms: int = 0,
    ) -> None:
        """Configure the worker before starting.

        Must be called before the thread starts.
        """
        self._circuit = circuit.copy()
        self._step_mode = step_mode
        self._step_delay_ms = max(0, step_delay_ms)
        self._stop_requested = False

    def request_stop(self) -> None:
        """Request the worker to stop before the next gate."""
        self._mutex.lock()
        self._stop_requested = True
        self._mutex.unlock()

    def _is_stopped(self) -> bool:
        self._mutex.lock()
        stopped = self._stop_requested
        self._mutex.unlock()
        return stopped

    @pyqtSlot()
    def run(self) -> None:
        """Execute the simulation. Called when the thread starts."""
        try:
            if self._circuit is None:
                self.error.emit("No circuit configured")
                return
            if self._is_stopped():
                return

            if self._step_mode:
                self._run_step_by_step()
            else:
                self._run_full()
        except Exception as exc:
            logger.error("Simulation failed.", exc_info=True)
            self.error.emit(f"Simulation error: {exc}")

    def _run_full(self) -> None:
        result = Simulator.run(self._circuit)
        if not self._is_stopped():
            self.progress.emit(100)
            self.finished.emit(result)

    def _run_step_by_step(self) -> None:
        """Emit the snapshot after each gate, then the full result."""
        total_steps = self._circuit.gate_count() + 1  # +1 for initial state

        for step_idx, (state, gate_idx) in enumerate(
                Simulator.run_step_by_step(self._circuit)):
            if self._is_stopped():
                return

            self.step_updated.emit(state, gate_idx)
            self.progress.emit(min(int((step_idx + 1) / total_steps * 100), 99))

            if self._step_delay_ms > 0 and step_idx < total_steps - 1:
                # Sleep in small intervals so we can check for stop
                elapsed = 0
                interval = 50  # ms
                while elapsed < self._step_delay_ms:
                    if self._is_stopped():
                        return
                    sleep_time = min(interval, self._step_delay_ms - elapsed)
                    time.sleep(sleep_time / 1000.0)
                    elapsed += interval

        if self._is_stopped():
            return
        self._run_full()


class SimulationController(QObject):
    """Runs simulations on a background thread, one run at a time.

    Each run gets a fresh QThread and worker; a second run is refused
    while one is active.
    """

    # Public signals
    simulation_started = pyqtSignal()
    simulation_finished = pyqtSignal(object)      # SimulationResult
    step_state_updated = pyqtSignal(object, int)   # (QuantumState, gate_index)
    error_occurred = pyqtSignal(str)
    progress_updated = pyqtSignal(int)             # percentage 0-100

    def __init__(self, parent: QObject | None = None,
                 config: AppConfig | None = None):
        super().__init__(parent)

        self._thread: QThread | None = None
        self._worker: SimulationWorker | None = None
        self._step_delay_ms: int = 0
        self._running: bool = False
        if config is not None:
            self.set_step_delay(config.step_delay_ms)

    @property
    def is_running(self) -> bool:
        """Whether a simulation is currently running."""
        return self._running

    @property
    def step_delay_ms(self) -> int:
        return self._step_delay_ms

    def set_step_delay(self, delay_ms: int) -> None:
        """Set the delay between steps in step-by-step mode."""
        self._step_delay_ms = max(0, delay_ms)

    def run_simulation(self, circuit: QuantumCircuit) -> bool:
        """Run a full simulation in a background thread.

        Returns False (and emits error_occurred) if a run is already active.
        """
        return self._start_worker(circuit, step_mode=False)

    def run_step_by_step(self, circuit: QuantumCircuit) -> bool:
        """Run gate by gate, emitting step_state_updated after each gate."""
        return self._start_worker(circuit, step_mode=True)

    def stop_simulation(self) -> None:
        """Stop the current run at the next gate boundary."""
        if self._worker is not None:
            self._worker.request_stop()
        self._cleanup_thread()

    def _start_worker(self, circuit: QuantumCircuit, step_mode: bool) -> bool:
        if self._running:
            self.error_occurred.emit("A simulation is already running")
            return False

        self._cleanup_thread()

        self._thread = QThread()
        self._worker = SimulationWorker()
        self._worker.configure(
            circuit=circuit,
            step_mode=step_mode,
            step_delay_ms=self._step_delay_ms,
        )

        # Move worker to thread
        self._worker.moveToThread(self._thread)

        # Connect signals
        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._on_finished)
        self._worker.step_updated.connect(self.step_state_updated)
        self._worker.error.connect(self._on_error)
        self._worker.progress.connect(self.progress_updated)

        # Cleanup connections
        self._worker.finished.connect(self._thread.quit)
        self._worker.error.connect(self._thread.quit)
        self._thread.finished.connect(self._on_thread_finished)

        self._running = True
        self.simulation_started.emit()
        self._thread.start()
        logger.debug("Started %s run on %d qubit(s)",
                     "step-by-step" if step_mode else "full", circuit.num_qubits)
        return True

    def _on_finished(self, result) -> None:
        self._running = False
        self.simulation_finished.emit(result)

    def _on_error(self, message: str) -> None:
        self._running = False
        self.error_occurred.emit(message)

    def _on_thread_finished(self) -> None:
        self._running = False

    def _cleanup_thread(self) -> None:
        """Clean up the previous thread and worker.

        Runs are short and bounded, so the thread is always allowed to
        finish its current gate rather than being terminated.
        """
        if self._thread is not None:
            if self._worker is not None:
                self._worker.request_stop()
            if self._thread.isRunning():
                self._thread.quit()
                self._thread.wait()

        self._worker = None
        self._thread = None
        self._running = False
