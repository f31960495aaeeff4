from __future__ import annotations

from collections import Counter
from typing import Iterator, List, Tuple

from mobsim.core.events import Event, EventType


class EventLog:
    """
    EventLog (append-only)

    - insertion order == emission order during the simulation, NOT time order
    - events are immutable and never removed
    - consumers that need (node, start) order call sorted_by_node_time()
    """

    def __init__(self) -> None:
        self._events: List[Event] = []
        self._counts: Counter = Counter()

    # --------------------------------------------------
    def append(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError(f"[EventLog] not an Event: {event!r}")
        self._events.append(event)
        self._counts[event.event_type] += 1

    def extend(self, events) -> None:
        for event in events:
            self.append(event)

    # --------------------------------------------------
    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    @property
    def events(self) -> Tuple[Event, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._events)

    def count(self, event_type: EventType) -> int:
        return self._counts[event_type]

    def of_node(self, node: int) -> List[Event]:
        return [e for e in self._events if e.node == node]

    # --------------------------------------------------
    def sorted_by_node_time(self) -> List[Event]:
        """
        Events ordered by (node ascending, start ascending).

        list.sort is stable, so ties keep their insertion order.
        The log itself is left untouched.
        """
        return sorted(self._events, key=lambda e: e.sort_key)
