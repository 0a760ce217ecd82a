"""Схемы параметров механизмов (data-only конфиг).

Каждый параметр — скалярная длина или смещение в мм с замкнутым диапазоном
[min, max]. Диапазон обслуживает вызывающая сторона (UI/драйвер): решатель
получает "сырые" значения и сам их не проверяет.

Значения по умолчанию подобраны так, чтобы механизм собирался при любом
угле привода.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from kinemaviz.core.units import format_value
from kinemaviz.core.validation import ensure_finite, ensure_in_range, ensure_positive


@dataclass(frozen=True)
class MechanismParam:
    """Описание одного входного параметра механизма."""

    id: str
    label: str
    default_value: float
    min: float
    max: float
    step: float = 1.0
    unit: str = "mm"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must be non-empty")
        for name in ("default_value", "min", "max", "step"):
            ensure_finite(getattr(self, name), f"{self.id}.{name}")
        if self.min > self.max:
            raise ValueError(f"{self.id}: min must be <= max")
        ensure_in_range(self.default_value, self.min, self.max, f"{self.id}.default_value")
        ensure_positive(self.step, f"{self.id}.step")

    def clamp(self, value: float) -> float:
        v = float(value)
        if v < self.min:
            return float(self.min)
        if v > self.max:
            return float(self.max)
        return v

    def contains(self, value: float) -> bool:
        return self.min <= float(value) <= self.max

    def format(self, value: float) -> str:
        return format_value(value, self.unit)

    def __repr__(self) -> str:
        return f"MechanismParam({self.id}={self.default_value}{self.unit} in [{self.min}, {self.max}])"


def default_values(params: Iterable[MechanismParam]) -> Dict[str, float]:
    return {p.id: float(p.default_value) for p in params}


FOUR_BAR_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("a", "Crank Length", 100.0, 20.0, 200.0),
    MechanismParam("b", "Coupler Length", 250.0, 50.0, 400.0),
    MechanismParam("c", "Rocker Length", 150.0, 50.0, 300.0),
    MechanismParam("d", "Ground Dist", 200.0, 50.0, 350.0),
)

SLIDER_CRANK_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("r", "Crank Radius", 80.0, 20.0, 150.0),
    MechanismParam("l", "Conrod Length", 250.0, 100.0, 400.0),
    MechanismParam("o", "Offset", 0.0, -50.0, 50.0),
)

SCOTCH_YOKE_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("r", "Crank Radius", 100.0, 20.0, 150.0),
)

# d > r: рычаг качается, не проворачиваясь, и ползун достаётся при любом угле кривошипа.
QUICK_RETURN_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("r", "Crank Radius", 70.0, 30.0, 100.0),
    MechanismParam("d", "Pivot Dist", 80.0, 10.0, 120.0),
    MechanismParam("l", "Lever Length", 250.0, 150.0, 400.0),
    MechanismParam("c", "Rod Length", 150.0, 100.0, 200.0),
)

WATTS_LINKAGE_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("l", "Arm Length", 150.0, 80.0, 200.0),
    MechanismParam("w", "Separation", 100.0, 60.0, 300.0),
    MechanismParam("c", "Coupler Len", 80.0, 40.0, 150.0),
)

PEAUCELLIER_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("a", "Crank Input", 60.0, 30.0, 100.0),
    MechanismParam("L", "Arm Length", 180.0, 100.0, 300.0),
    MechanismParam("l", "Cell Link", 70.0, 40.0, 150.0),
)

ELLIPTICAL_TRAMMEL_PARAMS: Tuple[MechanismParam, ...] = (
    MechanismParam("a", "Semi-Major A", 150.0, 50.0, 200.0),
    MechanismParam("b", "Semi-Minor B", 80.0, 20.0, 140.0),
)
