# mobsim/mobility/rwp.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from mobsim.core.events import Join, Leave, Move, Pause
from mobsim.core.interfaces import MobilityModel
from mobsim.core.node import MobileNode
from mobsim.mobility.params import model_param
from mobsim.simulator.context import SimulationContext
from mobsim.utils.errors import ParameterError


@dataclass
class _Leg:
    target_x: float
    target_y: float
    speed: float
    pause_left: int = 0


class RandomWaypointModel(MobilityModel):
    """
    Random waypoint, stepped.

    Each node walks toward a uniformly drawn waypoint at a speed drawn from
    [SPEED_MIN, SPEED_MAX], one Move per travelling sample. On arrival it pauses
    for 0..PAUSE_MAX samples, one Pause per paused sample, then draws a new leg.

    All randomness comes from ctx.rng, in node-id order.
    """

    name = "RWP"

    def __init__(self, ctx: SimulationContext) -> None:
        super().__init__(ctx)
        cfg = ctx.cfg
        self.node_count = model_param(cfg, "NODES", 10, int)
        self.speed_min = model_param(cfg, "SPEED_MIN", 1.0, float)
        self.speed_max = model_param(cfg, "SPEED_MAX", 10.0, float)
        self.pause_max = model_param(cfg, "PAUSE_MAX", 0, int)

        if self.node_count < 0:
            raise ParameterError(f"[RandomWaypointModel] NODES must be >= 0, got {self.node_count}")
        if not 0 < self.speed_min <= self.speed_max:
            raise ParameterError(
                f"[RandomWaypointModel] need 0 < SPEED_MIN <= SPEED_MAX, "
                f"got {self.speed_min}, {self.speed_max}"
            )
        if self.pause_max < 0:
            raise ParameterError(f"[RandomWaypointModel] PAUSE_MAX must be >= 0, got {self.pause_max}")

        self._legs: Dict[int, _Leg] = {}

    # --------------------------------------------------
    def init(self) -> None:
        ctx = self.ctx
        for _ in range(self.node_count):
            x, y = ctx.rng.uniform(0.0, ctx.size, size=2)
            node = MobileNode(float(x), float(y))
            ctx.nodes.add_node(ctx.time, node)
            ctx.add_event(Join(node=node.id, start=ctx.time))
            self._legs[node.id] = self._new_leg()

    def next(self) -> None:
        ctx = self.ctx
        dt = ctx.step

        for node in ctx.nodes.active:
            leg = self._legs[node.id]

            if leg.pause_left > 0:
                ctx.add_event(Pause(node=node.id, start=ctx.time, x=node.x, y=node.y, duration=dt))
                leg.pause_left -= 1
                if leg.pause_left == 0:
                    self._legs[node.id] = self._new_leg()
                continue

            self._advance(node, leg, dt)

    def finish(self) -> None:
        ctx = self.ctx
        for node in ctx.nodes.active:
            ctx.add_event(Leave(node=node.id, start=ctx.time))
            ctx.nodes.remove_node(ctx.time, node)

    # --------------------------------------------------
    # internal
    # --------------------------------------------------
    def _new_leg(self) -> _Leg:
        rng = self.ctx.rng
        x, y = rng.uniform(0.0, self.ctx.size, size=2)
        speed = rng.uniform(self.speed_min, self.speed_max)
        return _Leg(target_x=float(x), target_y=float(y), speed=float(speed))

    def _advance(self, node: MobileNode, leg: _Leg, dt: float) -> None:
        ctx = self.ctx
        dx = leg.target_x - node.x
        dy = leg.target_y - node.y
        dist = math.hypot(dx, dy)
        reach = leg.speed * dt

        if dist <= reach:
            new_x, new_y = leg.target_x, leg.target_y
            travel = dist / leg.speed
            arrived = True
        else:
            new_x = node.x + dx / dist * reach
            new_y = node.y + dy / dist * reach
            travel = dt
            arrived = False

        ctx.add_event(
            Move(
                node=node.id,
                start=ctx.time,
                from_x=node.x,
                from_y=node.y,
                to_x=new_x,
                to_y=new_y,
                travel=travel,
            )
        )
        node.move_to(new_x, new_y)

        if arrived:
            leg.pause_left = int(ctx.rng.integers(0, self.pause_max + 1))
            if leg.pause_left == 0:
                self._legs[node.id] = self._new_leg()
