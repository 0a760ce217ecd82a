"""Каталог механизмов.

Неизменяемая конфигурация процесса: строится один раз при импорте, ищется
по MechanismType. Каждая запись связывает:
- схему параметров (kinemaviz.config.mechanisms);
- решатель (angle, params) -> MechanismState;
- извлекатель выходной метрики для графика.

Метрика лежит рядом с решателем, поэтому новый механизм нельзя добавить,
не определив его метрику.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Tuple, Union

from kinemaviz.config.mechanisms import (
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
from kinemaviz.core.types import MechanismState
from kinemaviz.mechanics.geometry import angle_of
from kinemaviz.mechanics.linkages import solve_four_bar, solve_peaucellier, solve_watts_linkage
from kinemaviz.mechanics.sliders import (
    solve_elliptical_trammel,
    solve_quick_return,
    solve_scotch_yoke,
    solve_slider_crank,
)


class MechanismType(str, Enum):
    FOUR_BAR = "FOUR_BAR"
    SLIDER_CRANK = "SLIDER_CRANK"
    SCOTCH_YOKE = "SCOTCH_YOKE"
    ELLIPTICAL_TRAMMEL = "ELLIPTICAL_TRAMMEL"
    QUICK_RETURN = "QUICK_RETURN"
    WATTS_LINKAGE = "WATTS_LINKAGE"
    PEAUCELLIER = "PEAUCELLIER"


MechanismId = Union[MechanismType, str]
SolveFn = Callable[[float, Mapping[str, float]], MechanismState]
MetricFn = Callable[[MechanismState], float]


@dataclass(frozen=True)
class MechanismDefinition:
    """Запись каталога."""

    id: MechanismType
    name: str
    category: str
    description: str
    params: Tuple[MechanismParam, ...]
    solve: SolveFn
    metric: MetricFn
    metric_label: str

    def __post_init__(self) -> None:
        ids = [p.id for p in self.params]
        if len(set(ids)) != len(ids):
            raise ValueError(f"{self.id.value}: duplicate parameter ids {ids}")

    def defaults(self) -> Dict[str, float]:
        return default_values(self.params)

    def param(self, param_id: str) -> MechanismParam:
        for p in self.params:
            if p.id == param_id:
                return p
        raise KeyError(f"{self.id.value}: unknown parameter {param_id!r}")

    def __repr__(self) -> str:
        return f"MechanismDefinition({self.id.value}, params={[p.id for p in self.params]})"


# Выходные метрики (индексы — фиксированный порядок шарниров каждого механизма).

def _rocker_angle(state: MechanismState) -> float:
    # B относительно опоры O4
    return angle_of(state.joints[3].position, state.joints[2].position)


def _piston_x(state: MechanismState) -> float:
    return state.joints[2].x


def _ram_x(state: MechanismState) -> float:
    return state.joints[4].x


def _last_joint_x(state: MechanismState) -> float:
    return state.joints[-1].x


def _last_joint_y(state: MechanismState) -> float:
    return state.joints[-1].y


_DEFINITIONS: Tuple[MechanismDefinition, ...] = (
    MechanismDefinition(
        id=MechanismType.FOUR_BAR,
        name="Four-Bar Linkage",
        category="Basic Linkages",
        description=(
            "The simplest closed-loop kinematic chain: four bars connected in a loop by four "
            "joints. Used in locking pliers, bicycles and oil pump jacks."
        ),
        params=FOUR_BAR_PARAMS,
        solve=solve_four_bar,
        metric=_rocker_angle,
        metric_label="Rocker angle, rad",
    ),
    MechanismDefinition(
        id=MechanismType.SLIDER_CRANK,
        name="Slider-Crank",
        category="Basic Linkages",
        description=(
            "Converts rotational motion into reciprocating linear motion. Found in internal "
            "combustion engines and piston pumps."
        ),
        params=SLIDER_CRANK_PARAMS,
        solve=solve_slider_crank,
        metric=_piston_x,
        metric_label="Piston x, mm",
    ),
    MechanismDefinition(
        id=MechanismType.SCOTCH_YOKE,
        name="Scotch Yoke",
        category="Intermittent / Special",
        description=(
            "Converts rotation into reciprocating motion with pure simple harmonic output. "
            "Used in control valve actuators."
        ),
        params=SCOTCH_YOKE_PARAMS,
        solve=solve_scotch_yoke,
        metric=_last_joint_y,
        metric_label="Pin y, mm",
    ),
    MechanismDefinition(
        id=MechanismType.QUICK_RETURN,
        name="Whitworth Quick Return",
        category="Industrial",
        description=(
            "Reciprocating motion whose return stroke is faster than the forward stroke. "
            "Commonly used in shaper machines."
        ),
        params=QUICK_RETURN_PARAMS,
        solve=solve_quick_return,
        metric=_ram_x,
        metric_label="Ram x, mm",
    ),
    MechanismDefinition(
        id=MechanismType.WATTS_LINKAGE,
        name="Watt's Linkage",
        category="Straight Line",
        description=(
            "Invented by James Watt to guide the piston rod of a steam engine. The midpoint "
            "of the coupler traces an approximate straight line."
        ),
        params=WATTS_LINKAGE_PARAMS,
        solve=solve_watts_linkage,
        metric=_last_joint_x,
        metric_label="Coupler midpoint x, mm",
    ),
    MechanismDefinition(
        id=MechanismType.PEAUCELLIER,
        name="Peaucellier-Lipkin",
        category="Straight Line",
        description=(
            "The first planar linkage to transform rotary motion into exact straight-line "
            "motion, by geometric inversion."
        ),
        params=PEAUCELLIER_PARAMS,
        solve=solve_peaucellier,
        metric=_last_joint_x,
        metric_label="Output x, mm",
    ),
    MechanismDefinition(
        id=MechanismType.ELLIPTICAL_TRAMMEL,
        name="Elliptical Trammel",
        category="Special",
        description=(
            "Instrument for drawing ellipses: two shuttles confined to perpendicular channels."
        ),
        params=ELLIPTICAL_TRAMMEL_PARAMS,
        solve=solve_elliptical_trammel,
        metric=_last_joint_y,
        metric_label="Tracer y, mm",
    ),
)

MECHANISMS: Mapping[MechanismType, MechanismDefinition] = MappingProxyType({d.id: d for d in _DEFINITIONS})


def mechanism_type(mechanism_id: MechanismId) -> MechanismType:
    if isinstance(mechanism_id, MechanismType):
        return mechanism_id
    try:
        return MechanismType(str(mechanism_id).upper())
    except ValueError:
        raise KeyError(f"unknown mechanism {mechanism_id!r}") from None


def get_mechanism(mechanism_id: MechanismId) -> MechanismDefinition:
    return MECHANISMS[mechanism_type(mechanism_id)]


def solve(mechanism_id: MechanismId, drive_angle: float, params: Mapping[str, float]) -> MechanismState:
    """Единая точка входа для рендера и извлечения метрики."""

    return get_mechanism(mechanism_id).solve(drive_angle, params)


def mechanisms_by_category() -> Dict[str, List[MechanismDefinition]]:
    """Группировка для бокового меню (порядок каталога сохраняется)."""

    groups: Dict[str, List[MechanismDefinition]] = {}
    for d in _DEFINITIONS:
        groups.setdefault(d.category, []).append(d)
    return groups
