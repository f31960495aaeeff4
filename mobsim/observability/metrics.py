#!filepath: mobsim/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from mobsim import logs


@dataclass
class MetricRecorder:
    """
    Run-level metrics (final statistics of a simulation run).
    """
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any) -> None:
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def record_many(self, values: Dict[str, Any]) -> None:
        for name, value in values.items():
            self.record(name, value)

    def get(self, name: str, default: Any = None) -> Any:
        return self.metrics.get(name, default)
