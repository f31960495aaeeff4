#!filepath: mobsim/config/simulation_config.py
from __future__ import annotations

import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mobsim.config.parameters import parse_parameter_string
from mobsim.utils.errors import ParameterError


class PausePolicy(str, Enum):
    """
    How Pause events are treated when the event log is resampled into the trace matrix.

    - HOLD : every Pause event occupies one slot at its (held) position
    - OMIT : only Move events occupy slots, pauses leave no trace

    OMIT is the strict Move-only count: a log of [Move@0, Pause@1] fills a
    two-step grid under HOLD but is incomplete under OMIT.
    """
    HOLD = "hold"
    OMIT = "omit"


# parameter-string keys -> SimulationConfig fields
_PARAM_KEYS: Dict[str, str] = {
    "TIME": "duration",
    "STEP": "step",
    "SIMULATION_SIZE": "size",
    "SEED": "seed",
    "MODEL": "model",
    "FORMAT": "format",
    "INPUT_DIRECTORY": "input_dir",
    "OUTPUT_DIRECTORY": "output_dir",
    "RUN_NAME": "run_name",
    "PAUSE_POLICY": "pause_policy",
    "OVERWRITE": "overwrite",
}

# boolean switches that attach a named module
_MODULE_SWITCHES: Tuple[str, ...] = ("GUI", "PROGRESS")


class SimulationConfig(BaseModel):
    """
    SimulationConfig (FROZEN)

    One simulation run, fully described:
      - validated once, read-only afterwards
      - every component receives it through SimulationContext, never through globals
      - model / format / modules are names, resolved by the registries before the loop starts
    """

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    # -------------------------
    # time
    # -------------------------
    duration: float = Field(..., gt=0)
    step: float = Field(1.0, gt=0)

    # -------------------------
    # area / randomness
    # -------------------------
    size: float = Field(..., ge=0)
    seed: int

    # -------------------------
    # components
    # -------------------------
    model: str = Field(..., min_length=1)
    format: Optional[str] = None
    modules: Tuple[str, ...] = ()
    model_params: Dict[str, Any] = Field(default_factory=dict)

    # -------------------------
    # io
    # -------------------------
    input_dir: Optional[Path] = None
    output_dir: Path = Field(default_factory=Path.cwd)
    run_name: str = Field("main", min_length=1)
    overwrite: bool = False

    # -------------------------
    # trace
    # -------------------------
    pause_policy: PausePolicy = PausePolicy.HOLD

    @field_validator("modules", mode="before")
    @classmethod
    def _normalize_modules(cls, v):
        if isinstance(v, str):
            v = v.split(";")
        names: list = []
        for name in v or ():
            name = str(name).strip().upper()
            if name and name not in names:
                names.append(name)
        return tuple(names)

    @field_validator("model_params", mode="before")
    @classmethod
    def _normalize_model_params(cls, v):
        if not isinstance(v, Mapping):
            return v
        return {str(k).strip().upper(): val for k, val in v.items()}

    # --------------------------------------------------
    # derived
    # --------------------------------------------------
    @property
    def samples(self) -> int:
        """Number of loop iterations: floor(duration / step)."""
        return int(math.floor(self.duration / self.step))

    @property
    def trace_path(self) -> Path:
        # binary content, the .xml suffix is the name downstream tools look for
        return Path(self.output_dir) / f"trace-{self.run_name}.xml"

    # --------------------------------------------------
    # construction
    # --------------------------------------------------
    @classmethod
    def build(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """
        Validate a field mapping. Any validation failure is reported as ParameterError.
        """
        try:
            return cls(**dict(data))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "<root>"
                for err in e.errors()
            )
            raise ParameterError(f"[SimulationConfig] invalid parameters: {fields}\n{e}") from e

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "SimulationConfig":
        """
        Build from KEY=VALUE parameters (TIME, STEP, SIMULATION_SIZE, SEED, MODEL ...).

        Known keys map onto fields, GUI=1 / PROGRESS=1 attach modules,
        MODULES=A;B lists extra module names, everything else is a model parameter.
        """
        data: Dict[str, Any] = {}
        modules: list[str] = []
        model_params: Dict[str, Any] = {}

        for key, value in params.items():
            k = key.strip().upper()
            if k in _PARAM_KEYS:
                data[_PARAM_KEYS[k]] = value
            elif k in _MODULE_SWITCHES:
                if _is_enabled(k, value):
                    modules.append(k)
            elif k == "MODULES":
                modules.extend(m.strip().upper() for m in str(value).split(";") if m.strip())
            else:
                model_params[k] = value

        if isinstance(data.get("pause_policy"), str):
            data["pause_policy"] = data["pause_policy"].strip().lower()
        if isinstance(data.get("format"), str):
            data["format"] = data["format"].strip().upper()
        if isinstance(data.get("model"), str):
            data["model"] = data["model"].strip().upper()

        data["modules"] = tuple(modules)
        data["model_params"] = model_params
        return cls.build(data)

    @classmethod
    def coerce(cls, params: "SimulationConfig | Mapping[str, Any] | str") -> "SimulationConfig":
        """
        Accept a ready config, a KEY=VALUE parameter string, or a KEY -> VALUE mapping.
        """
        if isinstance(params, SimulationConfig):
            return params
        if isinstance(params, str):
            return cls.from_params(parse_parameter_string(params))
        if isinstance(params, Mapping):
            return cls.from_params(params)
        raise ParameterError(f"[SimulationConfig] unsupported parameter type: {type(params).__name__}")

    def with_overrides(self, **changes: Any) -> "SimulationConfig":
        """
        Copy with changed fields, re-validated (model_copy would skip validation).
        """
        data = self.model_dump()
        data.update(changes)
        return SimulationConfig.build(data)


def _is_enabled(key: str, value: Any) -> bool:
    try:
        return int(str(value).strip()) == 1
    except ValueError as e:
        raise ParameterError(f"[SimulationConfig] {key} must be 0 or 1, got {value!r}") from e
