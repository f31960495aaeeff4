from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(eq=False)
class MobileNode:
    """
    A simulated mobile node.

    ``id`` is None until the NodeRegistry admits the node; join / leave times are
    written by the registry only. Identity equality (eq=False): two nodes at the
    same place are still two nodes.
    """

    x: float = 0.0
    y: float = 0.0

    id: Optional[int] = None
    join_time: Optional[float] = None
    leave_time: Optional[float] = None

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def active(self) -> bool:
        return self.id is not None and self.leave_time is None

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"MobileNode(id={self.id}, x={self.x:.3f}, y={self.y:.3f})"
