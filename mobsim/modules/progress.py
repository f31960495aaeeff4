# mobsim/modules/progress.py
from __future__ import annotations

from mobsim import logs
from mobsim.core.interfaces import Module
from mobsim.core.node import MobileNode
from mobsim.simulator.context import SimulationContext


class ProgressModule(Module):
    """
    Logs one progress line per sample (through Instrumentation.progress)
    and every membership change.
    """

    name = "PROGRESS"

    def __init__(self, ctx: SimulationContext) -> None:
        super().__init__(ctx)
        self.task = f"simulation[{ctx.cfg.run_name}]"
        self.joins = 0
        self.leaves = 0

    def init(self) -> None:
        self.ctx.inst.progress.start(self.task, self.ctx.samples, unit="samples")

    def next(self) -> None:
        ctx = self.ctx
        ctx.inst.progress.update(
            self.task,
            ctx.sample + 1,
            ctx.samples,
            unit="samples",
            extra=f"time={ctx.time} nodes={ctx.nodes.active_count}",
        )

    def finish(self) -> None:
        self.ctx.inst.progress.done(self.task)
        logs.info(
            f"[ProgressModule] joins={self.joins} leaves={self.leaves} "
            f"avg_nodes={self.ctx.avg_nodes:.3f} avg_node_time={self.ctx.avg_node_time:.3f}"
        )

    def add_node(self, time: float, node: MobileNode) -> None:
        self.joins += 1
        logs.debug(f"[ProgressModule] node {node.id} joined at t={time}")

    def remove_node(self, time: float, node: MobileNode) -> None:
        self.leaves += 1
        logs.debug(f"[ProgressModule] node {node.id} left at t={time}")
