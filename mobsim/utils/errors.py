# mobsim/utils/errors.py
from __future__ import annotations

from typing import Dict


class SimulationError(RuntimeError):
    """
    Base class of every failure a simulation run reports to its caller.
    """


class ParameterError(SimulationError, ValueError):
    """
    Raised for missing or malformed simulation parameters (duration, step, size, seed...).
    Detected before the step loop starts.
    """


class ModelSelectionError(SimulationError, LookupError):
    """
    Raised when a mobility model or module name does not resolve to a registered component.
    Detected before the step loop starts.
    """


class InvalidStateError(SimulationError):
    """
    Raised on node lifecycle violations (remove before add, double remove).
    """


class TraceIOError(OSError, SimulationError):
    """
    Raised when the trace file cannot be opened, written or closed,
    or when the post-write header check does not match what was written.
    """


class DataCompletenessError(SimulationError):
    """
    The event log does not supply exactly ``duration_steps * node_count`` position slots.
    """

    def __init__(self, message: str, *, expected: int, actual: int, missing: Dict[int, int] | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        # node id -> number of slots short
        self.missing: Dict[int, int] = dict(missing or {})


class TraceIndexError(SimulationError, IndexError):
    """
    A node identity or a node-relative slot index falls outside the trace matrix.
    """
