"""Конфиги kinemaviz.

- схемы параметров механизмов: `kinemaviz.config.mechanisms`;
- параметры драйвера симуляции: `kinemaviz.config.simulation`.
"""

from __future__ import annotations

from .mechanisms import (  # noqa: F401
    ELLIPTICAL_TRAMMEL_PARAMS,
    FOUR_BAR_PARAMS,
    MechanismParam,
    PEAUCELLIER_PARAMS,
    QUICK_RETURN_PARAMS,
    SCOTCH_YOKE_PARAMS,
    SLIDER_CRANK_PARAMS,
    WATTS_LINKAGE_PARAMS,
    default_values,
)
from .simulation import DEFAULT_SIMULATION_CONFIG, SimulationConfig  # noqa: F401

__all__ = [
    "MechanismParam",
    "default_values",
    "FOUR_BAR_PARAMS",
    "SLIDER_CRANK_PARAMS",
    "SCOTCH_YOKE_PARAMS",
    "QUICK_RETURN_PARAMS",
    "WATTS_LINKAGE_PARAMS",
    "PEAUCELLIER_PARAMS",
    "ELLIPTICAL_TRAMMEL_PARAMS",
    "SimulationConfig",
    "DEFAULT_SIMULATION_CONFIG",
]
