#!filepath: tests/simulator/test_parallel_runs.py
import threading
import time

import pandas as pd
import pytest

from mobsim.core.interfaces import MobilityModel
from mobsim.mobility.factory import MobilityModelFactory
from mobsim.simulator.parallel.executor import ParallelExecutor
from mobsim.simulator.worker import SimulationWorker
from mobsim.utils.errors import InvalidStateError, ModelSelectionError, ParameterError
from mobsim.workflows.run_simulation import batch_configs, run_batch, run_simulation


class _FlakyModel(MobilityModel):
    """Fails for seed 2 only."""

    def init(self):
        if self.ctx.cfg.seed == 2:
            raise ParameterError("seed 2 is cursed")

    def next(self):
        pass

    def finish(self):
        pass


# ============================================================
# SimulationWorker
# ============================================================
def test_worker_runs_on_its_own_thread(synthetic_registry, make_config, out_dir):
    worker = SimulationWorker(make_config(), name="w1")
    assert worker.status == "PENDING"
    # interpreter exit waits for an unjoined run to finish its trace
    assert not worker._thread.daemon

    result = worker.start().join()

    assert worker.status == "SUCCESS"
    assert result.run_name == "w1"
    assert (out_dir / "trace-w1.xml").stat().st_size == 168
    assert worker.started_at is not None and worker.finished_at is not None


def test_worker_join_reraises(synthetic_registry, make_config):
    worker = SimulationWorker(make_config(model="MN"))
    worker.start()

    with pytest.raises(ModelSelectionError):
        worker.join()

    assert worker.status == "FAILED"
    assert isinstance(worker.error, ModelSelectionError)


def test_worker_cannot_start_twice(synthetic_registry, make_config):
    worker = SimulationWorker(make_config())
    worker.start()
    worker.join()

    with pytest.raises(InvalidStateError):
        worker.start()


def test_worker_rejects_bad_parameters_up_front():
    with pytest.raises(ParameterError):
        SimulationWorker("MODEL=RWP,TIME=-1,SIMULATION_SIZE=10,SEED=1")


# ============================================================
# ParallelExecutor
# ============================================================
def test_outcomes_keep_input_order():
    def handler(delay):
        time.sleep(delay)
        return threading.current_thread().name, delay

    outcomes = ParallelExecutor.run(items=[0.05, 0.01, 0.03], handler=handler, max_workers=3)

    assert [o.result[1] for o in outcomes] == [0.05, 0.01, 0.03]
    assert all(o.ok for o in outcomes)


def test_sequential_when_single_worker():
    outcomes = ParallelExecutor.run(items=[1, 2, 3], handler=lambda x: x * 2, max_workers=1)
    assert [o.result for o in outcomes] == [2, 4, 6]
    assert [o.name for o in outcomes] == ["1", "2", "3"]


def test_empty_items():
    assert ParallelExecutor.run(items=[], handler=lambda x: x) == []


@pytest.mark.parametrize("workers", [1, 3])
def test_fail_fast_raises_first_error(workers):
    def handler(x):
        if x == 2:
            raise ValueError("boom")
        return x

    with pytest.raises(ValueError, match="boom"):
        ParallelExecutor.run(items=[1, 2, 3], handler=handler, max_workers=workers, fail_fast=True)


@pytest.mark.parametrize("workers", [1, 3])
def test_collect_errors_without_fail_fast(workers):
    def handler(x):
        if x == 2:
            raise ValueError("boom")
        return x

    outcomes = ParallelExecutor.run(items=[1, 2, 3], handler=handler, max_workers=workers, fail_fast=False)

    assert [o.ok for o in outcomes] == [True, False, True]
    assert isinstance(outcomes[1].error, ValueError)
    assert outcomes[2].result == 3


# ============================================================
# batch
# ============================================================
def test_batch_configs_name_runs_by_seed(make_config):
    configs = batch_configs(make_config(), [3, 1])

    assert [c.seed for c in configs] == [3, 1]
    assert [c.run_name for c in configs] == ["seed-3", "seed-1"]


def test_parallel_runs_match_sequential_runs(make_config, tmp_path):
    params = {"NODES": 4, "SPEED_MIN": 1.0, "SPEED_MAX": 4.0, "PAUSE_MAX": 2}
    par = make_config(model="RWP", duration=40, size=150, output_dir=tmp_path / "par", model_params=params)
    seq = par.with_overrides(output_dir=tmp_path / "seq")

    df = run_batch(par, [1, 2, 3, 4], max_workers=4)
    for cfg in batch_configs(seq, [1, 2, 3, 4]):
        run_simulation(cfg)

    assert list(df["status"]) == ["SUCCESS"] * 4
    for seed in (1, 2, 3, 4):
        name = f"trace-seed-{seed}.xml"
        assert (tmp_path / "par" / name).read_bytes() == (tmp_path / "seq" / name).read_bytes()


def test_batch_report_keeps_failed_runs(monkeypatch, make_config, tmp_path):
    monkeypatch.setitem(MobilityModelFactory._REGISTRY, "FLAKY", _FlakyModel)
    report = tmp_path / "reports" / "batch.csv"

    df = run_batch(make_config(model="FLAKY", format=None), [1, 2, 3], max_workers=2, report=report)

    assert list(df["run_name"]) == ["seed-1", "seed-2", "seed-3"]
    assert list(df["status"]) == ["SUCCESS", "FAILED", "SUCCESS"]
    assert "cursed" in df.loc[1, "error"]

    back = pd.read_csv(report)
    assert len(back) == 3
    assert list(back["seed"]) == [1, 2, 3]
