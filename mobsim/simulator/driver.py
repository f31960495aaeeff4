# mobsim/simulator/driver.py
from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from mobsim import logs
from mobsim.config.simulation_config import SimulationConfig
from mobsim.mobility.factory import MobilityModelFactory
from mobsim.modules.factory import ModuleFactory
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation
from mobsim.simulator.context import SimulationContext
from mobsim.simulator.result import SimulationResult


class Simulator:
    """
    Simulator (FROZEN)

    Time-stepped driver of one simulation run:

        configure -> model.init -> modules.init
        -> samples x (model.next -> modules.next -> time += step)
        -> model.finish -> averages -> modules.finish

    Rules:
      - parameters, model and module names are validated BEFORE anything is initialized
      - each sample fully completes before the next one starts
      - the driver never exits the process; every failure propagates to the caller
    """

    def __init__(
        self,
        params: SimulationConfig | Mapping[str, Any] | str,
        *,
        inst: Instrumentation | NoOpInstrumentation | None = None,
    ) -> None:
        self.params = params
        self.inst = inst if inst is not None else Instrumentation()
        self.ctx: SimulationContext | None = None

    # --------------------------------------------------
    @logs.catch(msg="simulation run failed", log_time=False)
    def run(self) -> SimulationResult:
        # ① parameters (ParameterError)
        cfg = SimulationConfig.coerce(self.params)
        scope = f"run_{cfg.run_name}"

        logs.info(
            f"[Simulator] ====== START run={cfg.run_name} model={cfg.model} "
            f"seed={cfg.seed} duration={cfg.duration} step={cfg.step} ======"
        )

        with self.inst.timer(scope, record=False):
            # ② components (ModelSelectionError), nothing initialized yet
            ctx = self._configure(cfg)
            self.ctx = ctx

            # ③ step loop
            self._simulate(ctx)

        result = self._result(ctx, elapsed=self.inst.elapsed(scope))

        self.inst.metrics.record_many(
            {
                "unique_nodes": result.unique_nodes,
                "node_joins": result.node_joins,
                "avg_nodes": result.avg_nodes,
                "avg_node_time": result.avg_node_time,
                "events": result.events,
            }
        )
        self.inst.generate_timeline_report(cfg.run_name)

        logs.info(
            f"[Simulator] ====== DONE run={cfg.run_name} samples={result.samples} "
            f"elapsed={result.elapsed_s:.3f}s ======"
        )
        return result

    # --------------------------------------------------
    # internal
    # --------------------------------------------------
    def _configure(self, cfg: SimulationConfig) -> SimulationContext:
        # every name must resolve before anything is built
        MobilityModelFactory.resolve(cfg.model)
        ModuleFactory.resolve_all(cfg)

        ctx = SimulationContext(
            cfg=cfg,
            rng=np.random.default_rng(cfg.seed),
            inst=self.inst,
        )
        ctx.samples = cfg.samples
        ctx.model = MobilityModelFactory.create(cfg.model, ctx)
        ctx.modules.extend(ModuleFactory.create_all(cfg, ctx))

        logs.info(
            f"[Simulator] model={type(ctx.model).__name__} "
            f"modules={[type(m).__name__ for m in ctx.modules]} samples={ctx.samples}"
        )
        return ctx

    def _simulate(self, ctx: SimulationContext) -> None:
        model = ctx.model
        step = ctx.cfg.step

        with self.inst.timer("init"):
            model.init()
            for module in ctx.modules:
                module.init()

        with self.inst.timer("simulate"):
            for sample in range(ctx.samples):
                ctx.sample = sample

                # update node positions
                model.next()

                for module in ctx.modules:
                    module.next()

                ctx.avg_nodes += ctx.nodes.active_count

                # time observed by sample k is k * step
                ctx.time = (sample + 1) * step

        with self.inst.timer("model_finish"):
            model.finish()

        ctx.avg_nodes = ctx.avg_nodes / ctx.samples if ctx.samples else 0.0
        joins = ctx.nodes.node_joins
        ctx.avg_node_time = ctx.nodes.participation_time / joins if joins else 0.0

        # modules may open their own leaf timers (trace steps)
        with self.inst.timer("modules_finish", record=False):
            for module in ctx.modules:
                module.finish()

    @staticmethod
    def _result(ctx: SimulationContext, *, elapsed: float) -> SimulationResult:
        cfg = ctx.cfg
        return SimulationResult(
            run_name=cfg.run_name,
            seed=cfg.seed,
            model=cfg.model,
            duration=cfg.duration,
            step=cfg.step,
            samples=ctx.samples,
            size=cfg.size,
            unique_nodes=ctx.nodes.unique_nodes,
            node_joins=ctx.nodes.node_joins,
            avg_nodes=ctx.avg_nodes,
            avg_node_time=ctx.avg_node_time,
            events=len(ctx.events),
            outputs=dict(ctx.outputs),
            elapsed_s=elapsed,
        )
