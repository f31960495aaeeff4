"""
Core World Model (FROZEN)

Defines WHAT the simulated world is, independent of any model, module or output format.

Invariants:
- Time is a float in simulation units; during sample k it equals k * step.
- Node identities are dense per run (0..N-1) and never reused.
- Events (Move, Pause, Join, Leave) are immutable historical facts, appended in emission order.
- The node set changes ONLY through NodeRegistry.add_node / remove_node.

Core explicitly does NOT:
- Perform IO
- Decide how or when time advances
- Generate paths (mobility models do)

Time advancement is always external (mobsim.simulator.driver).
"""
from mobsim.core.events import Event, EventType, Join, Leave, Move, Pause
from mobsim.core.event_log import EventLog
from mobsim.core.interfaces import MobilityModel, Module
from mobsim.core.node import MobileNode
from mobsim.core.registry import NodeRegistry

__all__ = [
    "Event", "EventType", "Move", "Pause", "Join", "Leave",
    "EventLog",
    "MobileNode",
    "NodeRegistry",
    "MobilityModel", "Module",
]
