#!filepath: mobsim/observability/timeline_reporter.py
from typing import Dict

from mobsim import logs


class TimelineReporter:
    """
    Per-run timeline report:
    - leaf timer -> elapsed seconds
    """

    def __init__(self, timeline: Dict[str, float], run_name: str):
        self.timeline = timeline
        self.run_name = run_name

    def total(self) -> float:
        return sum(self.timeline.values())

    def print(self):
        logs.info(f"[Timeline] ===== Simulation timeline for run {self.run_name} =====")

        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")

        logs.info(f"[Timeline] Total{'':<27} {self.total():>8.3f}s")
        logs.info("[Timeline] ===========================================")
