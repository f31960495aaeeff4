# mobsim/trace/formatter.py
from __future__ import annotations

from mobsim import logs
from mobsim.core.interfaces import Module
from mobsim.simulator.context import SimulationContext
from mobsim.trace.context import TraceContext
from mobsim.trace.header import TraceHeader
from mobsim.trace.pipeline import TracePipeline
from mobsim.utils.errors import TraceIOError
from mobsim.utils.filesystem import FileSystem


class BinaryTraceFormatter(Module):
    """
    BinaryTraceFormatter (FINAL)

    Output module: at finish, turns the run's event log into the dense binary
    trace ``<output_dir>/trace-<run_name>.xml``.

    Rules:
      - node_count = distinct node identities issued during the run
      - duration_steps = number of loop samples
      - MBR = [0, size] x [0, size]
      - a trace file that already exists is refused at init, before the loop runs
    """

    name = "XML"

    def __init__(self, ctx: SimulationContext) -> None:
        super().__init__(ctx)
        self.path = ctx.cfg.trace_path
        self.trace: TraceContext | None = None

    def init(self) -> None:
        cfg = self.ctx.cfg
        if not cfg.overwrite and FileSystem.file_exists(self.path):
            raise TraceIOError(f"[BinaryTraceFormatter] trace already exists: {self.path}")
        try:
            FileSystem.ensure_dir(self.path.parent)
        except OSError as e:
            raise TraceIOError(f"[BinaryTraceFormatter] cannot create {self.path.parent}: {e}") from e

    def finish(self) -> None:
        ctx = self.ctx
        cfg = ctx.cfg

        header = TraceHeader.for_area(
            node_count=ctx.unique_nodes,
            duration_steps=ctx.samples,
            size=cfg.size,
        )
        trace = TraceContext(
            events=ctx.events,
            header=header,
            path=self.path,
            pause_policy=cfg.pause_policy,
            overwrite=cfg.overwrite,
        )

        self.trace = TracePipeline(inst=ctx.inst).run(trace)
        ctx.outputs["trace"] = self.path

        logs.info(f"[BinaryTraceFormatter] number of nodes: {header.node_count}")
        logs.info(f"[BinaryTraceFormatter] duration: {header.duration_steps}")
        logs.info(f"[BinaryTraceFormatter] slots filled: {self.trace.slots_filled}")
        logs.info(f"[BinaryTraceFormatter] trace dumped to {self.path}")
