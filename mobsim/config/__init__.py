from .app_config import AppConfig
from .log_config import LogConfig
from .simulation_config import SimulationConfig, PausePolicy
from .parameters import parse_parameter_string

__all__ = [
    "AppConfig",
    "LogConfig",
    "SimulationConfig",
    "PausePolicy",
    "parse_parameter_string",
]
