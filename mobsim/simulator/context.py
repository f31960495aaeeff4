# mobsim/simulator/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

from mobsim.config.simulation_config import SimulationConfig
from mobsim.core.event_log import EventLog
from mobsim.core.events import Event
from mobsim.core.interfaces import MobilityModel, Module
from mobsim.core.registry import NodeRegistry
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation


@dataclass
class SimulationContext:
    """
    SimulationContext (FROZEN)

    The only state of one simulation run, passed explicitly to the mobility
    model and to every module. Nothing here is shared between runs.

    Contract:
    - cfg is READ-ONLY
    - rng is the run's only random source (seeded from cfg.seed)
    - the node set changes only through ``nodes``; events only through ``events``
    - no business logic: the driver owns the loop, the registry owns membership
    """

    # injected once
    cfg: SimulationConfig
    rng: np.random.Generator
    inst: Instrumentation | NoOpInstrumentation

    # clock
    time: float = 0.0
    sample: int = 0
    samples: int = 0

    # world
    modules: List[Module] = field(default_factory=list)
    events: EventLog = field(default_factory=EventLog)
    nodes: NodeRegistry = field(init=False)
    model: Optional[MobilityModel] = None

    # statistics (accumulators during the loop, averages after it)
    avg_nodes: float = 0.0
    avg_node_time: float = 0.0

    # artifacts written by modules, e.g. {"trace": Path(...)}
    outputs: Dict[str, Path] = field(default_factory=dict)

    def __post_init__(self):
        # the registry broadcasts to the same list the driver iterates
        self.nodes = NodeRegistry(self.modules)

    # --------------------------------------------------
    # convenience for models
    # --------------------------------------------------
    def add_event(self, event: Event) -> None:
        self.events.append(event)

    @property
    def step(self) -> float:
        return self.cfg.step

    @property
    def size(self) -> float:
        return self.cfg.size

    @property
    def unique_nodes(self) -> int:
        return self.nodes.unique_nodes

    @property
    def node_joins(self) -> int:
        return self.nodes.node_joins
