# mobsim/simulator/result.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class SimulationResult:
    """
    SimulationResult (FINAL / FROZEN)

    Immutable facts of one finished run, used for:
      - batch summaries
      - regression tests
      - CLI reporting
    """

    # -----------------------
    # identity
    # -----------------------
    run_name: str
    seed: int
    model: str

    # -----------------------
    # time
    # -----------------------
    duration: float
    step: float
    samples: int
    size: float

    # -----------------------
    # nodes / events
    # -----------------------
    unique_nodes: int
    node_joins: int
    avg_nodes: float
    avg_node_time: float
    events: int

    # -----------------------
    # artifacts
    # -----------------------
    outputs: Dict[str, Path] = field(default_factory=dict)
    elapsed_s: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_name": self.run_name,
            "seed": self.seed,
            "model": self.model,
            "duration": self.duration,
            "step": self.step,
            "samples": self.samples,
            "size": self.size,
            "unique_nodes": self.unique_nodes,
            "node_joins": self.node_joins,
            "avg_nodes": self.avg_nodes,
            "avg_node_time": self.avg_node_time,
            "events": self.events,
            "trace": str(self.outputs["trace"]) if "trace" in self.outputs else None,
            "elapsed_s": self.elapsed_s,
        }
