# mobsim/trace/pipeline.py
from __future__ import annotations

from typing import List, Optional

from mobsim import logs
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation
from mobsim.trace.context import TraceContext
from mobsim.trace.steps import ResampleStep, TraceStep, VerifyTraceStep, WriteTraceStep


class TracePipeline:
    """
    TracePipeline (FINAL / FROZEN)

    Runs its steps in order on one TraceContext:

        ResampleStep -> WriteTraceStep -> VerifyTraceStep

    The pipeline owns ordering only; it has no timer of its own.
    """

    def __init__(
        self,
        *,
        steps: Optional[List[TraceStep]] = None,
        inst: Instrumentation | NoOpInstrumentation | None = None,
    ) -> None:
        self.inst = inst if inst is not None else NoOpInstrumentation()
        self.steps = steps if steps is not None else self.default_steps(self.inst)

    @staticmethod
    def default_steps(inst) -> List[TraceStep]:
        return [
            ResampleStep(inst=inst),
            WriteTraceStep(inst=inst),
            VerifyTraceStep(inst=inst),
        ]

    def run(self, ctx: TraceContext) -> TraceContext:
        logs.info(f"[TracePipeline] ====== START {ctx.path.name} ======")

        for step in self.steps:
            logs.debug(f"[TracePipeline] running step={step.step_name}")
            ctx = step.run(ctx)

        logs.info(f"[TracePipeline] ====== DONE {ctx.path.name} ======")
        return ctx
