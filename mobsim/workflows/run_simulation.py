#!filepath: mobsim/workflows/run_simulation.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pandas as pd

from mobsim import logs
from mobsim.config.simulation_config import SimulationConfig
from mobsim.observability.instrumentation import Instrumentation, NoOpInstrumentation
from mobsim.simulator.driver import Simulator
from mobsim.simulator.parallel.executor import ParallelExecutor, RunOutcome
from mobsim.simulator.result import SimulationResult
from mobsim.simulator.worker import SimulationWorker
from mobsim.utils.filesystem import FileSystem

SUMMARY_COLUMNS = [
    "run_name",
    "seed",
    "model",
    "duration",
    "step",
    "samples",
    "size",
    "unique_nodes",
    "node_joins",
    "avg_nodes",
    "avg_node_time",
    "events",
    "trace",
    "elapsed_s",
    "status",
    "error",
]


def run_simulation(
    cfg: SimulationConfig,
    *,
    inst: Instrumentation | NoOpInstrumentation | None = None,
) -> SimulationResult:
    """
    One run on the calling thread.
    """
    return Simulator(cfg, inst=inst).run()


def batch_configs(base: SimulationConfig, seeds: Iterable[int]) -> List[SimulationConfig]:
    """
    One config per seed; run_name = seed-<seed> so every run writes its own trace.
    """
    return [base.with_overrides(seed=int(seed), run_name=f"seed-{int(seed)}") for seed in seeds]


def _run_worker(cfg: SimulationConfig) -> SimulationResult:
    # thread-per-run: the worker owns its own Simulator / context / rng
    worker = SimulationWorker(cfg, inst=Instrumentation(progress_every=max(1, cfg.samples // 10)))
    worker.start()
    return worker.join()


def run_batch(
    base: SimulationConfig,
    seeds: Iterable[int],
    *,
    max_workers: int | None = None,
    fail_fast: bool = False,
    report: str | Path | None = None,
) -> pd.DataFrame:
    """
    Independent runs, one per seed, in parallel threads.

    Returns one summary row per seed, in seed order. Failed runs keep their row
    with status=FAILED and the error message. When ``report`` is given the
    summary is also written as CSV.
    """
    configs = batch_configs(base, seeds)
    logs.info(f"[Batch] ====== START runs={len(configs)} model={base.model} ======")

    outcomes: List[RunOutcome[SimulationResult]] = ParallelExecutor.run(
        items=configs,
        handler=_run_worker,
        max_workers=max_workers,
        fail_fast=fail_fast,
        name_of=lambda c: c.run_name,
    )

    rows = []
    for cfg, outcome in zip(configs, outcomes):
        if outcome.ok:
            row = outcome.result.to_dict()
            row.update(status="SUCCESS", error=None)
        else:
            row = {"run_name": cfg.run_name, "seed": cfg.seed, "model": cfg.model}
            row.update(status="FAILED", error=f"{type(outcome.error).__name__}: {outcome.error}")
        rows.append(row)

    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)

    if report is not None:
        report = Path(report)
        FileSystem.ensure_dir(report.parent)
        df.to_csv(report, index=False)
        logs.info(f"[Batch] summary written to {report}")

    failed = int((df["status"] == "FAILED").sum())
    logs.info(f"[Batch] ====== DONE runs={len(df)} failed={failed} ======")
    return df
