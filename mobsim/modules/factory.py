# mobsim/modules/factory.py
from __future__ import annotations

from typing import Dict, List, Type

from mobsim.config.simulation_config import SimulationConfig
from mobsim.core.interfaces import Module
from mobsim.modules.progress import ProgressModule
from mobsim.simulator.context import SimulationContext
from mobsim.trace.formatter import BinaryTraceFormatter
from mobsim.utils.errors import ModelSelectionError


class ModuleFactory:
    """
    ModuleFactory (FINAL / FROZEN)

    Output formats and observer modules, registered statically.

    Registration order of the built modules:
      1. cfg.format (at most one output format)
      2. cfg.modules, in the listed order

    Unknown names (QUALNET, NAM, NS-2, PDF, GUI ...) are rejected before the run starts.
    """

    _REGISTRY: Dict[str, Type[Module]] = {
        # binary dense trace; "XML" is the historical name of the same output
        "XML": BinaryTraceFormatter,
        "BINARY": BinaryTraceFormatter,
        "PROGRESS": ProgressModule,
    }

    # --------------------------------------------------
    @classmethod
    def resolve(cls, name: str) -> Type[Module]:
        key = name.strip().upper()
        if key not in cls._REGISTRY:
            available = ", ".join(sorted(cls._REGISTRY))
            raise ModelSelectionError(
                f"[ModuleFactory] unknown module or format: {name} (available: {available})"
            )
        return cls._REGISTRY[key]

    @classmethod
    def resolve_all(cls, cfg: SimulationConfig) -> List[Type[Module]]:
        names: List[str] = []
        if cfg.format:
            names.append(cfg.format)
        names.extend(cfg.modules)
        return [cls.resolve(name) for name in names]

    @classmethod
    def create_all(cls, cfg: SimulationConfig, ctx: SimulationContext) -> List[Module]:
        # resolve every name first: one bad name builds nothing
        classes = cls.resolve_all(cfg)
        return [module_cls(ctx) for module_cls in classes]

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls._REGISTRY)
