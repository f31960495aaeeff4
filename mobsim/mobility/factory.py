# mobsim/mobility/factory.py
from __future__ import annotations

from typing import Dict, Type

from mobsim.core.interfaces import MobilityModel
from mobsim.mobility.fixed import FixedModel
from mobsim.mobility.rwp import RandomWaypointModel
from mobsim.simulator.context import SimulationContext
from mobsim.utils.errors import ModelSelectionError


class MobilityModelFactory:
    """
    MobilityModelFactory (FINAL / FROZEN)

    Registration is centralized and static:
      - every model is listed in _REGISTRY under its parameter name
      - no dynamic discovery, no side-effect registration
      - adding a model is a deliberate code change here

    Names are resolved once, at configuration time; an unknown name is an error,
    never a silently missing model.
    """

    _REGISTRY: Dict[str, Type[MobilityModel]] = {
        "FIXED": FixedModel,
        "RWP": RandomWaypointModel,
        # road-network / grid / transit models plug in here
    }

    # --------------------------------------------------
    @classmethod
    def resolve(cls, name: str | None) -> Type[MobilityModel]:
        if not name:
            raise ModelSelectionError(
                "[MobilityModelFactory] no mobility model specified, use the MODEL parameter"
            )

        key = name.strip().upper()
        if key not in cls._REGISTRY:
            available = ", ".join(sorted(cls._REGISTRY))
            raise ModelSelectionError(
                f"[MobilityModelFactory] unknown mobility model: {name} (available: {available})"
            )
        return cls._REGISTRY[key]

    @classmethod
    def create(cls, name: str | None, ctx: SimulationContext) -> MobilityModel:
        model_cls = cls.resolve(name)
        return model_cls(ctx)

    @classmethod
    def available(cls) -> list[str]:
        return sorted(cls._REGISTRY)
