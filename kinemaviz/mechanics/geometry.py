"""Геометрическое ядро: точки/векторы и пересечения окружностей.

Весь позиционный анализ в проекте сводится к:
- одному или нескольким пересечениям двух окружностей;
- пересечению окружности с горизонтальной прямой (ползуны);
- линейной интерполяции между точками.

Ядро не выбирает ветку сборки: порядок возвращаемых точек фиксирован,
выбор делает решатель конкретного механизма.
"""

from __future__ import annotations

from typing import Optional, Tuple

import math

from kinemaviz.core.types import Point
from kinemaviz.core.units import TWO_PI


def distance(p0: Point, p1: Point) -> float:
    return math.hypot(p1.x - p0.x, p1.y - p0.y)


def wrap_2pi(angle: float) -> float:
    """Привести угол к [0, 2π)."""

    out = float(angle) % TWO_PI
    # -1e-17 % 2π даёт ровно 2π
    if out >= TWO_PI:
        return 0.0
    return out


def polar(origin: Point, length: float, angle: float) -> Point:
    return Point(origin.x + length * math.cos(angle), origin.y + length * math.sin(angle))


def angle_of(origin: Point, p: Point) -> float:
    """Угол вектора origin->p в (-π, π]."""

    return math.atan2(p.y - origin.y, p.x - origin.x)


def lerp(p0: Point, p1: Point, t: float) -> Point:
    return Point(p0.x + (p1.x - p0.x) * t, p0.y + (p1.y - p0.y) * t)


def midpoint(p0: Point, p1: Point) -> Point:
    return lerp(p0, p1, 0.5)


def intersect_two_circles(c0: Point, r0: float, c1: Point, r1: float) -> Optional[Tuple[Point, Point]]:
    """Точки пересечения окружностей (c0, r0) и (c1, r1).

    Returns:
        None — если окружности далеко друг от друга, одна внутри другой
        или центры совпадают; иначе пара точек в фиксированном порядке:
        сначала m + h·(dy, -dx)/d, затем m + h·(-dy, dx)/d,
        где m — середина хорды на линии центров.

    Примечание:
        При касании подкоренное выражение может стать чуть отрицательным
        из-за округления, поэтому берётся модуль (обе точки совпадают).
    """

    dx = c1.x - c0.x
    dy = c1.y - c0.y
    d = math.hypot(dx, dy)

    if d > r0 + r1 or d < abs(r0 - r1) or d == 0.0:
        return None

    a = (r0 * r0 - r1 * r1 + d * d) / (2.0 * d)
    h = math.sqrt(abs(r0 * r0 - a * a))

    ux = dx / d
    uy = dy / d
    mx = c0.x + a * ux
    my = c0.y + a * uy

    first = Point(mx + h * uy, my - h * ux)
    second = Point(mx - h * uy, my + h * ux)
    return first, second


def intersect_horizontal_line_circle(y: float, center: Point, r: float) -> Optional[Tuple[Point, Point]]:
    """Пересечение прямой y=const с окружностью; сначала точка с меньшим x."""

    dy = abs(y - center.y)
    if dy > r:
        return None

    dx = math.sqrt(max(0.0, r * r - dy * dy))
    return Point(center.x - dx, y), Point(center.x + dx, y)
