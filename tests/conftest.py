# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from mobsim.config.simulation_config import SimulationConfig
from mobsim.core.events import Join, Leave, Move
from mobsim.core.interfaces import MobilityModel, Module
from mobsim.core.node import MobileNode
from mobsim.mobility.factory import MobilityModelFactory
from mobsim.modules.factory import ModuleFactory


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


# ============================================================
# synthetic components
# ============================================================
class GridModel(MobilityModel):
    """
    NODES nodes; during sample i node j moves to (i, j * 10).
    Exactly one Move per node per sample.
    """

    name = "GRID"

    def __init__(self, ctx):
        super().__init__(ctx)
        self.node_count = int(ctx.cfg.model_params.get("NODES", 2))

    def init(self):
        for _ in range(self.node_count):
            node = MobileNode()
            self.ctx.nodes.add_node(self.ctx.time, node)
            self.ctx.add_event(Join(node=node.id, start=self.ctx.time))

    def next(self):
        ctx = self.ctx
        for node in ctx.nodes.active:
            x, y = float(ctx.sample), float(node.id * 10)
            ctx.add_event(
                Move(
                    node=node.id,
                    start=ctx.time,
                    from_x=node.x,
                    from_y=node.y,
                    to_x=x,
                    to_y=y,
                    travel=ctx.step,
                )
            )
            node.move_to(x, y)

    def finish(self):
        ctx = self.ctx
        for node in ctx.nodes.active:
            ctx.add_event(Leave(node=node.id, start=ctx.time))
            ctx.nodes.remove_node(ctx.time, node)


class EmptyModel(MobilityModel):
    """No node ever joins."""

    name = "EMPTY"

    def init(self):
        pass

    def next(self):
        pass

    def finish(self):
        pass


class CountingModule(Module):
    """Records every hook call and the clock seen by next()."""

    name = "COUNTER"

    def __init__(self, ctx):
        super().__init__(ctx)
        self.calls = []
        self.times = []
        self.joined = []
        self.left = []
        self.seen_averages = None

    def init(self):
        self.calls.append("init")

    def next(self):
        self.calls.append("next")
        self.times.append(self.ctx.time)

    def finish(self):
        self.calls.append("finish")
        self.seen_averages = (self.ctx.avg_nodes, self.ctx.avg_node_time)

    def add_node(self, time, node):
        self.joined.append((time, node.id))

    def remove_node(self, time, node):
        self.left.append((time, node.id))


@pytest.fixture
def synthetic_registry(monkeypatch):
    """
    Registers GRID / EMPTY models and the COUNTER module for one test.
    """
    monkeypatch.setitem(MobilityModelFactory._REGISTRY, "GRID", GridModel)
    monkeypatch.setitem(MobilityModelFactory._REGISTRY, "EMPTY", EmptyModel)
    monkeypatch.setitem(ModuleFactory._REGISTRY, "COUNTER", CountingModule)
    return {"GRID": GridModel, "EMPTY": EmptyModel, "COUNTER": CountingModule}


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def make_config(out_dir: Path):
    """
    Factory fixture for SimulationConfig (testing only).

    Defaults describe the 4-step, 2-node, 100x100 grid run; any field can be overridden.
    """

    def _make(**overrides) -> SimulationConfig:
        data = dict(
            duration=4,
            step=1.0,
            size=100,
            seed=7,
            model="GRID",
            format="XML",
            output_dir=out_dir,
            model_params={"NODES": 2},
        )
        data.update(overrides)
        return SimulationConfig.build(data)

    return _make
