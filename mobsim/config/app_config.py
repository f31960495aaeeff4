#!filepath: mobsim/config/app_config.py
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .simulation_config import SimulationConfig


def project_root() -> str:
    """
    Repository root, derived from this file:
    mobsim/config/app_config.py -> mobsim/config -> mobsim -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    simulation: SimulationConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - default: mobsim/config/base.yml
        - does not depend on the current working directory
        - MOBSIM_OUTPUT_DIR overrides simulation.output_dir
        """
        root = project_root()

        # 1) .env at the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) config file
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        simulation = dict(raw.get("simulation") or {})
        output_dir = os.getenv("MOBSIM_OUTPUT_DIR")
        if output_dir:
            simulation["output_dir"] = output_dir

        return cls(
            log=LogConfig(**(raw.get("log") or {})),
            simulation=SimulationConfig.build(simulation),
        )

    def with_params(self, params: dict) -> "AppConfig":
        """
        Apply KEY=VALUE parameters on top of the loaded simulation section.
        """
        if not params:
            return self

        base = {
            "TIME": self.simulation.duration,
            "STEP": self.simulation.step,
            "SIMULATION_SIZE": self.simulation.size,
            "SEED": self.simulation.seed,
            "MODEL": self.simulation.model,
            "OUTPUT_DIRECTORY": str(self.simulation.output_dir),
            "RUN_NAME": self.simulation.run_name,
            "PAUSE_POLICY": self.simulation.pause_policy.value,
            "OVERWRITE": int(self.simulation.overwrite),
            "MODULES": ";".join(self.simulation.modules),
        }
        if self.simulation.format:
            base["FORMAT"] = self.simulation.format
        if self.simulation.input_dir is not None:
            base["INPUT_DIRECTORY"] = str(Path(self.simulation.input_dir))
        base.update(self.simulation.model_params)
        base.update({k.upper(): v for k, v in params.items()})

        return AppConfig(
            log=self.log,
            simulation=SimulationConfig.from_params(base),
        )
