# mobsim/mobility/fixed.py
from __future__ import annotations

from mobsim.core.events import Join, Leave, Move
from mobsim.core.interfaces import MobilityModel
from mobsim.core.node import MobileNode
from mobsim.mobility.params import model_param
from mobsim.simulator.context import SimulationContext
from mobsim.utils.errors import ParameterError


class FixedModel(MobilityModel):
    """
    Stationary nodes.

    NODES nodes are placed uniformly at random in [0, size]^2 at t=0 and never move;
    every sample emits one zero-length Move per node so the dense trace is complete.
    """

    name = "FIXED"

    def __init__(self, ctx: SimulationContext) -> None:
        super().__init__(ctx)
        self.node_count = model_param(ctx.cfg, "NODES", 10, int)
        if self.node_count < 0:
            raise ParameterError(f"[FixedModel] NODES must be >= 0, got {self.node_count}")

    def init(self) -> None:
        ctx = self.ctx
        for _ in range(self.node_count):
            x, y = ctx.rng.uniform(0.0, ctx.size, size=2)
            node = MobileNode(float(x), float(y))
            ctx.nodes.add_node(ctx.time, node)
            ctx.add_event(Join(node=node.id, start=ctx.time))

    def next(self) -> None:
        ctx = self.ctx
        for node in ctx.nodes.active:
            ctx.add_event(
                Move(
                    node=node.id,
                    start=ctx.time,
                    from_x=node.x,
                    from_y=node.y,
                    to_x=node.x,
                    to_y=node.y,
                    travel=ctx.step,
                )
            )

    def finish(self) -> None:
        ctx = self.ctx
        for node in ctx.nodes.active:
            ctx.add_event(Leave(node=node.id, start=ctx.time))
            ctx.nodes.remove_node(ctx.time, node)
