#!filepath: mobsim/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from mobsim.observability.metrics import MetricRecorder
from mobsim.observability.progress import ProgressReporter
from mobsim.observability.timeline_reporter import TimelineReporter
from mobsim.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Instrumentation for one simulation run (leaf-only accounting + parent scope).

    Rules:
    1. the timeline only records leaf timers (record=True)
    2. parent timers (record=False) only bound wall time, no side effects
    3. one Instrumentation per run, never shared between parallel runs
    4. nothing here logs on the per-sample hot path except ProgressReporter
    """

    enabled: bool = True
    progress_every: int = 1

    def __post_init__(self):
        self.progress = ProgressReporter(enabled=self.enabled, every=self.progress_every)
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()
        # parent scopes: name -> elapsed_seconds
        self.scopes: Dict[str, float] = {}

    # ---------------------------------------------------------
    # context manager timer
    # ---------------------------------------------------------
    def timer(self, name: str, *, record: bool = True):
        """
        Context-manager timer.

        Parameters
        ----------
        name : str
            timer name
        record : bool
            - True  : leaf, written to the timeline
            - False : parent scope, elapsed kept in ``scopes`` only
        """
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)

                if record:
                    inst.timeline[name] = elapsed
                else:
                    inst.scopes[name] = elapsed

        return _ctx()

    def elapsed(self, name: str) -> float:
        return self.timeline.get(name, self.scopes.get(name, 0.0))

    # ---------------------------------------------------------
    # timeline output (cold path)
    # ---------------------------------------------------------
    def generate_timeline_report(self, run_name: str):
        reporter = TimelineReporter(self.timeline, run_name)
        reporter.print()


# -------------------------------------------------------------
# No-op Instrumentation
# -------------------------------------------------------------
class NoOpInstrumentation:
    """Used when observability is disabled."""

    def __init__(self):
        self.progress = ProgressReporter(enabled=False)
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}
        self.scopes: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def elapsed(self, name: str) -> float:
        return 0.0

    def generate_timeline_report(self, run_name: str):
        pass


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
