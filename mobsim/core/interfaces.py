from __future__ import annotations

from typing import TYPE_CHECKING

from mobsim.core.node import MobileNode

if TYPE_CHECKING:
    from mobsim.simulator.context import SimulationContext


class MobilityModel:
    """
    Pluggable mobility model.

    next() advances one step: it may move nodes, append events to ctx.events
    and add / remove nodes through ctx.nodes.
    """

    name: str = ""

    def __init__(self, ctx: "SimulationContext") -> None:
        self.ctx = ctx

    def init(self) -> None:
        raise NotImplementedError

    def next(self) -> None:
        raise NotImplementedError

    def finish(self) -> None:
        raise NotImplementedError


class Module:
    """
    Observer invoked once per step and at lifecycle boundaries.

    Every hook defaults to a no-op; subclasses override what they observe.
    """

    name: str = ""

    def __init__(self, ctx: "SimulationContext") -> None:
        self.ctx = ctx

    def init(self) -> None:
        pass

    def next(self) -> None:
        pass

    def finish(self) -> None:
        pass

    def add_node(self, time: float, node: MobileNode) -> None:
        pass

    def remove_node(self, time: float, node: MobileNode) -> None:
        pass
