#!filepath: tests/trace/test_resampler.py
from dataclasses import dataclass

import numpy as np
import pytest

from mobsim.config.simulation_config import PausePolicy
from mobsim.core.event_log import EventLog
from mobsim.core.events import Event, Join, Leave, Move, Pause
from mobsim.trace.resampler import TraceResampler
from mobsim.utils.errors import DataCompletenessError, TraceIndexError


def _move(node, start, x, y):
    return Move(node=node, start=start, from_x=0.0, from_y=0.0, to_x=x, to_y=y, travel=1.0)


def _full_grid(duration, nodes):
    return [_move(j, float(i), float(i), float(j * 10)) for i in range(duration) for j in range(nodes)]


def test_complete_log_fills_every_cell():
    matrix = TraceResampler(node_count=2, duration_steps=4).resample(_full_grid(4, 2))

    assert matrix.shape == (4, 2, 2)
    assert matrix.dtype == np.float64
    for i in range(4):
        for j in range(2):
            assert tuple(matrix[i, j]) == (float(i), float(j * 10))


def test_missing_move_is_reported_not_zero_filled():
    events = _full_grid(4, 2)
    # drop node 1's last move
    events = [e for e in events if not (e.node == 1 and e.start == 3.0)]

    with pytest.raises(DataCompletenessError) as exc:
        TraceResampler(node_count=2, duration_steps=4).resample(events)

    err = exc.value
    assert err.expected == 8
    assert err.actual == 7
    assert err.missing == {1: 1}


def test_node_without_any_event_is_reported():
    events = [_move(0, float(i), 1.0, 1.0) for i in range(3)]

    with pytest.raises(DataCompletenessError) as exc:
        TraceResampler(node_count=2, duration_steps=3).resample(events)

    assert exc.value.missing == {1: 3}


def test_out_of_order_log_resamples_like_sorted_one():
    shuffled = [_move(1, 2.0, 12.0, 12.0), _move(0, 1.0, 1.0, 1.0), _move(1, 1.0, 11.0, 11.0), _move(0, 2.0, 2.0, 2.0)]
    ordered = sorted(shuffled, key=lambda e: (e.node, e.start))

    resampler = TraceResampler(node_count=2, duration_steps=2)
    a = resampler.resample(shuffled)
    b = resampler.resample(ordered)

    np.testing.assert_array_equal(a, b)
    assert tuple(a[0, 1]) == (11.0, 11.0)
    assert tuple(a[1, 1]) == (12.0, 12.0)


def test_event_log_input_is_accepted():
    log = EventLog()
    log.extend(reversed(_full_grid(3, 2)))

    matrix = TraceResampler(node_count=2, duration_steps=3).resample(log)

    assert tuple(matrix[2, 1]) == (2.0, 10.0)


def test_join_and_leave_take_no_slot():
    events = [Join(node=0, start=0.0)] + [_move(0, float(i), float(i), 0.0) for i in range(2)]
    events.append(Leave(node=0, start=2.0))

    matrix = TraceResampler(node_count=1, duration_steps=2).resample(events)

    assert matrix[:, 0, 0].tolist() == [0.0, 1.0]


def test_pause_holds_a_slot_by_default():
    events = [
        _move(0, 0.0, 5.0, 5.0),
        Pause(node=0, start=1.0, x=5.0, y=5.0, duration=1.0),
        _move(0, 2.0, 6.0, 6.0),
    ]

    matrix = TraceResampler(node_count=1, duration_steps=3).resample(events)

    assert matrix[:, 0].tolist() == [[5.0, 5.0], [5.0, 5.0], [6.0, 6.0]]


def test_pause_omitted_under_omit_policy():
    events = [
        _move(0, 0.0, 5.0, 5.0),
        Pause(node=0, start=1.0, x=5.0, y=5.0, duration=1.0),
        _move(0, 2.0, 6.0, 6.0),
    ]

    resampler = TraceResampler(node_count=1, duration_steps=3, pause_policy=PausePolicy.OMIT)
    with pytest.raises(DataCompletenessError):
        resampler.resample(events)

    matrix = TraceResampler(node_count=1, duration_steps=2, pause_policy="omit").resample(events)
    assert matrix[:, 0].tolist() == [[5.0, 5.0], [6.0, 6.0]]


def test_too_many_slots_for_a_node():
    events = [_move(0, float(i), 0.0, 0.0) for i in range(3)]

    with pytest.raises(TraceIndexError):
        TraceResampler(node_count=1, duration_steps=2).resample(events)


def test_node_identity_outside_matrix():
    events = _full_grid(2, 2) + [_move(5, 0.0, 0.0, 0.0)]

    with pytest.raises(TraceIndexError):
        TraceResampler(node_count=2, duration_steps=2).resample(events)


def test_trace_index_error_is_an_index_error():
    with pytest.raises(IndexError):
        TraceResampler(node_count=1, duration_steps=1).resample([_move(-1, 0.0, 0.0, 0.0)])


def test_unknown_event_type_is_rejected():
    @dataclass(frozen=True)
    class Teleport(Event):
        x: float

    with pytest.raises(TypeError):
        TraceResampler(node_count=1, duration_steps=1).resample([Teleport(node=0, start=0.0, x=1.0)])


def test_empty_shape_accepts_empty_log():
    matrix = TraceResampler(node_count=0, duration_steps=0).resample([])
    assert matrix.shape == (0, 0, 2)


def test_filled_counts_per_node():
    resampler = TraceResampler(node_count=2, duration_steps=3)
    resampler.resample(_full_grid(3, 2))

    assert resampler.filled == {0: 3, 1: 3}


def test_default_policy_counts_pauses_omit_counts_moves_only():
    events = [_move(0, 0.0, 1.0, 1.0), Pause(node=0, start=1.0, x=1.0, y=1.0, duration=1.0)]

    matrix = TraceResampler(1, 2).resample(events)
    assert matrix[:, 0].tolist() == [[1.0, 1.0], [1.0, 1.0]]

    with pytest.raises(DataCompletenessError):
        TraceResampler(1, 2, pause_policy=PausePolicy.OMIT).resample(events)
