from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple


class EventType(Enum):
    MOVE = 1
    PAUSE = 2
    JOIN = 3
    LEAVE = 4


# -------------------------
# Base
# -------------------------
@dataclass(frozen=True)
class Event:
    node: int      # owning node identity
    start: float   # simulation time the event starts at

    event_type: ClassVar[EventType]

    @property
    def sort_key(self) -> Tuple[int, float]:
        return self.node, self.start


# -------------------------
# Move
# -------------------------
@dataclass(frozen=True)
class Move(Event):
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    travel: float  # travel duration

    event_type: ClassVar[EventType] = EventType.MOVE

    @property
    def position(self) -> Tuple[float, float]:
        # trace slots carry the destination
        return self.to_x, self.to_y


# -------------------------
# Pause
# -------------------------
@dataclass(frozen=True)
class Pause(Event):
    x: float
    y: float
    duration: float

    event_type: ClassVar[EventType] = EventType.PAUSE

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


# -------------------------
# Join / Leave
# -------------------------
@dataclass(frozen=True)
class Join(Event):
    event_type: ClassVar[EventType] = EventType.JOIN


@dataclass(frozen=True)
class Leave(Event):
    event_type: ClassVar[EventType] = EventType.LEAVE
