# mobsim/trace/steps.py
from __future__ import annotations

from mobsim import logs
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation
from mobsim.trace.context import TraceContext
from mobsim.trace.reader import TraceReader
from mobsim.trace.resampler import TraceResampler
from mobsim.trace.writer import TraceWriter
from mobsim.utils.errors import InvalidStateError


class TraceStep:
    """
    Trace step base class (FROZEN)

    Rules:
      - a step never enters the timeline itself; only its leaf timer does
      - instrumentation is optional, behaviour never depends on it
    """

    def __init__(self, inst: Instrumentation | NoOpInstrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def timed(self):
        """Step-level parent scope, not recorded in the timeline."""
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: TraceContext) -> TraceContext:
        raise NotImplementedError


class ResampleStep(TraceStep):
    """events -> ctx.matrix"""

    def run(self, ctx: TraceContext) -> TraceContext:
        header = ctx.header
        resampler = TraceResampler(
            node_count=header.node_count,
            duration_steps=header.duration_steps,
            pause_policy=ctx.pause_policy,
        )

        with self.timed():
            with self.inst.timer("trace_resample"):
                ctx.matrix = resampler.resample(ctx.events)

        ctx.slots_filled = sum(resampler.filled.values())
        return ctx


class WriteTraceStep(TraceStep):
    """ctx.matrix -> file"""

    def run(self, ctx: TraceContext) -> TraceContext:
        if ctx.matrix is None:
            raise InvalidStateError(f"[{self.step_name}] no matrix, ResampleStep must run first")

        writer = TraceWriter(overwrite=ctx.overwrite)
        with self.timed():
            with self.inst.timer("trace_write"):
                ctx.bytes_written = writer.write(ctx.path, ctx.header, ctx.matrix)

        self.inst.metrics.record("trace_bytes", ctx.bytes_written)
        return ctx


class VerifyTraceStep(TraceStep):
    """re-read header + size check"""

    def run(self, ctx: TraceContext) -> TraceContext:
        with self.timed():
            with self.inst.timer("trace_verify"):
                TraceReader.verify(ctx.path, ctx.header)

        ctx.verified = True
        logs.debug(f"[{self.step_name}] {ctx.path} ok")
        return ctx
