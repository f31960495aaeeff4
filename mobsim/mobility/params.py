# mobsim/mobility/params.py
from __future__ import annotations

from typing import Any, Callable, TypeVar

from mobsim.config.simulation_config import SimulationConfig
from mobsim.utils.errors import ParameterError

T = TypeVar("T")


def model_param(cfg: SimulationConfig, name: str, default: T, cast: Callable[[Any], T]) -> T:
    """
    Read one model parameter (e.g. NODES) from cfg.model_params.

    Malformed values are ParameterError; models read their parameters in __init__,
    so the error surfaces before the step loop.
    """
    raw = cfg.model_params.get(name.upper(), default)
    try:
        return cast(raw)
    except (TypeError, ValueError) as e:
        raise ParameterError(f"[{cfg.model}] parameter {name} is malformed: {raw!r}") from e
