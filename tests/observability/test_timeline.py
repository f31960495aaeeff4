#!filepath: tests/observability/test_timeline.py

import pytest
from loguru import logger

from mobsim.observability.timeline_reporter import TimelineReporter


def test_timeline_log_output():
    tl = {
        "init": 1.23,
        "simulate": 2.34,
    }
    reporter = TimelineReporter(tl, "main")

    captured = []

    sink_id = logger.add(lambda msg: captured.append(str(msg)))

    reporter.print()

    logger.remove(sink_id)

    output = "\n".join(captured)

    assert "Simulation timeline for run main" in output
    assert "init" in output
    assert "1.23" in output
    assert "simulate" in output
    assert reporter.total() == pytest.approx(3.57)
