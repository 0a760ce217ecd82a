"""kinemaviz.core.types

Типы данных, которыми обмениваются решатель, драйвер симуляции и внешние
потребители (рендер, графики, экспорт).

Все типы — неизменяемые значения: решатель строит их заново на каждом тике.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

import math


LinkKind = Literal["primary", "auxiliary"]


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def scaled(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (float(self.x), float(self.y))


@dataclass(frozen=True, slots=True)
class Joint:
    """Шарнир: именованная точка, заземлённая (неподвижная) или вычисляемая."""

    position: Point
    label: Optional[str] = None
    is_ground: bool = False

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def __repr__(self) -> str:
        tag = "ground" if self.is_ground else "moving"
        return f"Joint({self.label or '-'}, ({self.x:.3f}, {self.y:.3f}), {tag})"


@dataclass(frozen=True, slots=True)
class Link:
    """Ребро между двумя шарнирами.

    kind="auxiliary" — вспомогательная геометрия (линия стойки, направляющая,
    ожидаемая прямая). В проверках корректности не участвует.
    """

    start: Joint
    end: Joint
    kind: LinkKind = "primary"

    @property
    def length(self) -> float:
        return (self.end.position - self.start.position).norm()

    @property
    def is_auxiliary(self) -> bool:
        return self.kind == "auxiliary"


@dataclass(frozen=True, slots=True)
class MechanismState:
    """Результат решателя для одного угла.

    Инвариант: при is_valid=False списки joints/links/trace_points пусты.
    """

    joints: Tuple[Joint, ...] = ()
    links: Tuple[Link, ...] = ()
    trace_points: Tuple[Point, ...] = ()
    is_valid: bool = True

    def __post_init__(self) -> None:
        if not self.is_valid and (self.joints or self.links or self.trace_points):
            raise ValueError("invalid MechanismState must not carry joints, links or trace points")

    @classmethod
    def invalid(cls) -> "MechanismState":
        return cls(joints=(), links=(), trace_points=(), is_valid=False)

    def joint(self, label: str) -> Joint:
        for j in self.joints:
            if j.label == label:
                return j
        raise KeyError(label)

    def primary_links(self) -> Tuple[Link, ...]:
        return tuple(link for link in self.links if not link.is_auxiliary)
