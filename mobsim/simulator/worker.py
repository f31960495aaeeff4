# mobsim/simulator/worker.py
from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

from mobsim import logs
from mobsim.config.simulation_config import SimulationConfig
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation
from mobsim.simulator.driver import Simulator
from mobsim.simulator.result import SimulationResult
from mobsim.utils.errors import InvalidStateError

WorkerStatus = Literal["PENDING", "RUNNING", "SUCCESS", "FAILED"]

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

class SimulationWorker:
    """
    One simulation run on its own thread.

    Runs are fully independent: each worker builds its own Simulator,
    SimulationContext, random generator and Instrumentation.
    A failure inside the thread is kept and re-raised by join().
    """

    def __init__(
        self,
        params: SimulationConfig | Mapping[str, Any] | str,
        name: str | None = None,
        *,
        inst: Instrumentation | NoOpInstrumentation | None = None,
    ) -> None:
        cfg = SimulationConfig.coerce(params)
        if name is not None:
            cfg = cfg.with_overrides(run_name=name)

        self.cfg = cfg
        self.name = cfg.run_name
        self.inst = inst if inst is not None else Instrumentation()

        self.status: WorkerStatus = "PENDING"
        self.result: SimulationResult | None = None
        self.error: BaseException | None = None
        self.started_at: str | None = None
        self.finished_at: str | None = None

        self._thread = threading.Thread(
            target=self._target,
            name=f"sim-{self.name}",
        )

    # --------------------------------------------------
    def start(self) -> "SimulationWorker":
        if self.status != "PENDING":
            raise InvalidStateError(f"[SimulationWorker] {self.name} already started ({self.status})")
        self.status = "RUNNING"
        self.started_at = _now()
        self._thread.start()
        return self

    def join(self, timeout: float | None = None) -> SimulationResult | None:
        """
        Wait for the run. Re-raises the run's exception, if any.
        Returns None only when timeout expires first.
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            return None
        if self.error is not None:
            raise self.error
        return self.result

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    # --------------------------------------------------
    def _target(self) -> None:
        try:
            self.result = Simulator(self.cfg, inst=self.inst).run()
            self.status = "SUCCESS"
        except Exception as e:
            self.error = e
            self.status = "FAILED"
            logs.error(f"[SimulationWorker] {self.name} failed: {e}")
        finally:
            self.finished_at = _now()
