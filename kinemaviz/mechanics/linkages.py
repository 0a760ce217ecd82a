"""Шарнирные механизмы: четырёхзвенник, механизм Уатта, инверсор Поселье.

Все три решаются через `intersect_two_circles`. У каждого пересечения две
ветки сборки; выбор ветки — явная политика механизма (константы ниже и
keyword-аргументы решателей), применяемая одинаково при любом угле, чтобы
механизм не "перещёлкивался" между зеркальными решениями.

Решатели чистые: без состояния, угол можно подавать в любом порядке.
"""

from __future__ import annotations

from typing import Callable, Mapping, Sequence, Tuple

import math

from kinemaviz.core.types import Joint, Link, MechanismState, Point
from kinemaviz.mechanics.geometry import (
    distance,
    intersect_two_circles,
    midpoint,
    polar,
    wrap_2pi,
)


# Четырёхзвенник: берём вторую точку пересечения (шатун "над" стойкой при θ=π/2).
FOUR_BAR_BRANCH: int = 1

# Уатт: левое коромысло качается вокруг вертикали с амплитудой ±0.5 рад.
WATT_REST_ANGLE_RAD: float = 0.5 * math.pi
WATT_OSCILLATION_RAD: float = 0.5

# Поселье: кривошип качается вокруг дальней от O точки своей окружности.
# При P = O инверсная точка уходит в бесконечность, поэтому полный оборот невозможен.
PEAUCELLIER_REST_ANGLE_RAD: float = math.pi
PEAUCELLIER_OSCILLATION_RAD: float = 0.5
PEAUCELLIER_COINCIDENCE_EPS: float = 1.0

BranchPicker = Callable[[Sequence[Point], float], Point]


def pick_closest_y(candidates: Sequence[Point], ref_y: float) -> Point:
    """Ветка, у которой y ближе всего к ref_y (при равенстве — первая)."""

    best = candidates[0]
    for p in candidates[1:]:
        if abs(p.y - ref_y) < abs(best.y - ref_y):
            best = p
    return best


def pick_away_from(candidates: Tuple[Point, Point], p: Point, eps: float) -> Point:
    """Отбросить кандидата, совпадающего с p (в пределах eps)."""

    first, second = candidates
    return first if distance(first, p) > eps else second


def solve_four_bar(
    angle: float,
    params: Mapping[str, float],
    *,
    branch: int = FOUR_BAR_BRANCH,
) -> MechanismState:
    """Четырёхзвенник O2-A-B-O4.

    Параметры: a — кривошип, b — шатун, c — коромысло, d — стойка.
    """

    a = float(params["a"])
    b = float(params["b"])
    c = float(params["c"])
    d = float(params["d"])
    theta = wrap_2pi(angle)

    o2 = Joint(Point(0.0, 0.0), "O2", is_ground=True)
    o4 = Joint(Point(d, 0.0), "O4", is_ground=True)
    ja = Joint(polar(o2.position, a, theta), "A")

    hits = intersect_two_circles(ja.position, b, o4.position, c)
    if hits is None:
        return MechanismState.invalid()

    jb = Joint(hits[branch], "B")

    return MechanismState(
        joints=(o2, ja, jb, o4),
        links=(
            Link(o2, ja),
            Link(ja, jb),
            Link(jb, o4),
            Link(o4, o2, kind="auxiliary"),
        ),
        trace_points=(jb.position,),
    )


def watt_arm_angle(angle: float, *, oscillation: float = WATT_OSCILLATION_RAD) -> float:
    """Угол левого коромысла: ограниченное качание вместо полного оборота."""

    return WATT_REST_ANGLE_RAD + math.sin(wrap_2pi(angle)) * oscillation


def solve_watts_linkage(
    angle: float,
    params: Mapping[str, float],
    *,
    oscillation: float = WATT_OSCILLATION_RAD,
    branch_picker: BranchPicker | None = None,
) -> MechanismState:
    """Прямолинейный механизм Уатта.

    Параметры: l — длина коромысел, w — расстояние между опорами, c — шатун.
    Ветка B по умолчанию: та, у которой y ближе к A.y (шатун остаётся
    "горизонтальным"). Эвристика держится у значений по умолчанию, но на краях
    диапазонов (l=200, w=60, c=40) перещёлкивается; branch_picker(hits, A.y)
    позволяет задать другую политику, например фиксированный индекс.
    Отслеживаемая точка — середина шатуна.
    """

    l = float(params["l"])
    w = float(params["w"])
    c = float(params["c"])

    o1 = Joint(Point(-0.5 * w, 0.0), "O1", is_ground=True)
    o2 = Joint(Point(0.5 * w, 0.0), "O2", is_ground=True)
    ja = Joint(polar(o1.position, l, watt_arm_angle(angle, oscillation=oscillation)), "A")

    hits = intersect_two_circles(o2.position, l, ja.position, c)
    if hits is None:
        return MechanismState.invalid()

    picker = branch_picker or pick_closest_y
    jb = Joint(picker(hits, ja.y), "B")
    jp = Joint(midpoint(ja.position, jb.position), "P")

    return MechanismState(
        joints=(o1, o2, ja, jb, jp),
        links=(
            Link(o1, ja),
            Link(o2, jb),
            Link(ja, jb),
            Link(o1, o2, kind="auxiliary"),
        ),
        trace_points=(jp.position,),
    )


def peaucellier_input_angle(angle: float, *, oscillation: float = PEAUCELLIER_OSCILLATION_RAD) -> float:
    return PEAUCELLIER_REST_ANGLE_RAD + math.sin(wrap_2pi(angle)) * oscillation


def solve_peaucellier(
    angle: float,
    params: Mapping[str, float],
    *,
    oscillation: float = PEAUCELLIER_OSCILLATION_RAD,
    coincidence_eps: float = PEAUCELLIER_COINCIDENCE_EPS,
) -> MechanismState:
    """Инверсор Поселье-Липкина.

    Опора кривошипа C=(-a, 0), главная опора O=(0, 0); окружность точки P
    проходит через O, поэтому выход Q (инверсия P) идёт по прямой
    x = -(L² - l²) / (2a).

    Ромб P-A-Q-B со стороной l; A, B лежат на окружности (O, L).
    Q — вторая точка пересечения окружностей (A, l) и (B, l); первая — сама P.

    Кривошип качается (π ± oscillation), а не вращается: при полном обороте P
    проходит через O, окружности (O, L) и (P, l) становятся концентричными, и
    механизм не собирается ни при каких длинах.
    """

    a = float(params["a"])
    big_l = float(params["L"])
    l = float(params["l"])

    jc = Joint(Point(-a, 0.0), "C", is_ground=True)
    jo = Joint(Point(0.0, 0.0), "O", is_ground=True)
    jp = Joint(polar(jc.position, a, peaucellier_input_angle(angle, oscillation=oscillation)), "P")

    cell = intersect_two_circles(jo.position, big_l, jp.position, l)
    if cell is None:
        return MechanismState.invalid()

    ja = Joint(cell[0], "A")
    jb = Joint(cell[1], "B")

    hits = intersect_two_circles(ja.position, l, jb.position, l)
    if hits is None:
        return MechanismState.invalid()

    jq = Joint(pick_away_from(hits, jp.position, coincidence_eps), "Output")

    guide_top = Joint(Point(jq.x, 200.0))
    guide_bottom = Joint(Point(jq.x, -200.0))

    return MechanismState(
        joints=(jc, jo, jp, ja, jb, jq),
        links=(
            Link(jc, jp),
            Link(jo, ja),
            Link(jo, jb),
            Link(jp, ja),
            Link(jp, jb),
            Link(ja, jq),
            Link(jb, jq),
            Link(guide_bottom, guide_top, kind="auxiliary"),
        ),
        trace_points=(jq.position,),
    )
