# mobsim/trace/context.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from mobsim.config.simulation_config import PausePolicy
from mobsim.core.events import Event
from mobsim.trace.header import TraceHeader


@dataclass
class TraceContext:
    """
    TraceContext (FINAL)

    Carrier between trace steps. No business logic.

    Inputs are set by whoever builds the pipeline; steps fill the outputs
    in order: matrix -> bytes_written -> verified.
    """

    # inputs
    events: Iterable[Event]
    header: TraceHeader
    path: Path
    pause_policy: PausePolicy = PausePolicy.HOLD
    overwrite: bool = False

    # outputs
    matrix: Optional[np.ndarray] = None
    slots_filled: int = 0
    bytes_written: int = 0
    verified: bool = False
