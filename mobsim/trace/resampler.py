# mobsim/trace/resampler.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from mobsim import logs
from mobsim.config.simulation_config import PausePolicy
from mobsim.core.event_log import EventLog
from mobsim.core.events import Event, Join, Leave, Move, Pause
from mobsim.utils.errors import DataCompletenessError, TraceIndexError


class TraceResampler:
    """
    TraceResampler (FROZEN)

    Sparse event log -> dense matrix[t][n] = (x, y), shape (duration_steps, node_count, 2).

    Contract:
      - events are ordered by (node, start), stable; input order is irrelevant
      - node j's slot-bearing events, in time order, fill column j rows 0, 1, 2, ...
      - Move always occupies a slot (its destination)
      - Pause occupies a slot only under PausePolicy.HOLD
      - Join / Leave never occupy a slot
      - node id outside [0, node_count) or a run longer than duration_steps -> TraceIndexError
      - any node with fewer than duration_steps slots -> DataCompletenessError
      - nothing is ever zero-filled
    """

    def __init__(
        self,
        node_count: int,
        duration_steps: int,
        pause_policy: PausePolicy = PausePolicy.HOLD,
    ) -> None:
        if node_count < 0 or duration_steps < 0:
            raise ValueError(
                f"[TraceResampler] negative shape: node_count={node_count} duration_steps={duration_steps}"
            )
        self.node_count = int(node_count)
        self.duration_steps = int(duration_steps)
        self.pause_policy = PausePolicy(pause_policy)

        # node id -> slots consumed by the last resample()
        self.filled: Dict[int, int] = {}

    # --------------------------------------------------
    def slot_position(self, event: Event) -> Optional[Tuple[float, float]]:
        """
        Position an event contributes to the grid, or None when it occupies no slot.
        """
        if isinstance(event, Move):
            return event.position
        if isinstance(event, Pause):
            if self.pause_policy is PausePolicy.HOLD:
                return event.position
            return None
        if isinstance(event, (Join, Leave)):
            return None
        raise TypeError(f"[TraceResampler] unsupported event type: {type(event).__name__}")

    @staticmethod
    def order(events: Iterable[Event]) -> List[Event]:
        if isinstance(events, EventLog):
            return events.sorted_by_node_time()
        return sorted(events, key=lambda e: e.sort_key)

    # --------------------------------------------------
    def resample(self, events: Iterable[Event]) -> np.ndarray:
        n_steps, n_nodes = self.duration_steps, self.node_count

        # NaN until written: an unfilled cell can never pass for a position
        matrix = np.full((n_steps, n_nodes, 2), np.nan, dtype=np.float64)
        filled = np.zeros(n_nodes, dtype=np.int64)

        for event in self.order(events):
            position = self.slot_position(event)
            if position is None:
                continue

            node = event.node
            if not 0 <= node < n_nodes:
                raise TraceIndexError(
                    f"[TraceResampler] event node {node} outside [0, {n_nodes}) ({event!r})"
                )

            row = int(filled[node])
            if row >= n_steps:
                raise TraceIndexError(
                    f"[TraceResampler] node {node} slot {row} outside its run of {n_steps} steps "
                    f"({event!r})"
                )

            matrix[row, node, 0] = position[0]
            matrix[row, node, 1] = position[1]
            filled[node] += 1

        self.filled = {j: int(c) for j, c in enumerate(filled)}

        expected = n_steps * n_nodes
        consumed = int(filled.sum())
        missing = {j: n_steps - c for j, c in self.filled.items() if c < n_steps}

        logs.info(
            f"[TraceResampler] nodes={n_nodes} steps={n_steps} "
            f"slots={consumed}/{expected} policy={self.pause_policy.value}"
        )

        if consumed != expected or missing:
            shown = dict(list(missing.items())[:10])
            raise DataCompletenessError(
                f"[TraceResampler] incomplete trace: {consumed} of {expected} slots filled, "
                f"{len(missing)} node(s) short, first: {shown}",
                expected=expected,
                actual=consumed,
                missing=missing,
            )

        return matrix
