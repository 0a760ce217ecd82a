"""Механизмы с ползунами: кривошипно-ползунный, кулисный (Scotch yoke),
поперечно-строгальный с быстрым обратным ходом, эллипсограф.

Ползун всегда движется по горизонтальной прямой, поэтому вместо второй
окружности используется пересечение окружности с прямой y=const.
Из двух корней берётся "передний" (больший x).
"""

from __future__ import annotations

from typing import Mapping

import math

from kinemaviz.core.types import Joint, Link, MechanismState, Point
from kinemaviz.mechanics.geometry import (
    angle_of,
    intersect_horizontal_line_circle,
    lerp,
    polar,
    wrap_2pi,
)


SLIDER_GUIDE_HALF_GAP: float = 10.0
SLIDER_GUIDE_X: tuple[float, float] = (-100.0, 400.0)

YOKE_HALF_HEIGHT: float = 120.0
YOKE_HALF_WIDTH: float = 40.0
YOKE_ROD_LENGTH: float = 100.0

QUICK_RETURN_RAM_Y: float = 150.0
QUICK_RETURN_GUIDE_X: tuple[float, float] = (-200.0, 300.0)

TRAMMEL_CHANNEL_HALF_LENGTH: float = 250.0


def _free(x: float, y: float) -> Joint:
    return Joint(Point(x, y))


def _guide(y: float, x_range: tuple[float, float]) -> Link:
    return Link(_free(x_range[0], y), _free(x_range[1], y), kind="auxiliary")


def solve_slider_crank(angle: float, params: Mapping[str, float]) -> MechanismState:
    """Кривошипно-ползунный механизм (r — кривошип, l — шатун, o — дезаксиал).

    Не собирается, если шатун не дотягивается до направляющей y=o:
    - в текущем положении (|o - A.y| > l);
    - из центра кривошипа (|o| > l): кривошип не проходит мёртвые точки θ=0, π,
      и конфигурация считается незамыкаемой при любом угле.
    """

    r = float(params["r"])
    l = float(params["l"])
    o = float(params["o"])
    theta = wrap_2pi(angle)

    if abs(o) > l:
        return MechanismState.invalid()

    center = Joint(Point(0.0, 0.0), "Center", is_ground=True)
    crank = Joint(polar(center.position, r, theta), "Crank")

    hits = intersect_horizontal_line_circle(o, crank.position, l)
    if hits is None:
        return MechanismState.invalid()

    piston = Joint(hits[1], "Piston")

    return MechanismState(
        joints=(center, crank, piston),
        links=(
            Link(center, crank),
            Link(crank, piston),
            _guide(o - SLIDER_GUIDE_HALF_GAP, SLIDER_GUIDE_X),
            _guide(o + SLIDER_GUIDE_HALF_GAP, SLIDER_GUIDE_X),
        ),
        trace_points=(crank.position,),
    )


def solve_scotch_yoke(angle: float, params: Mapping[str, float]) -> MechanismState:
    """Кулисный механизм: кулиса повторяет x пальца, движение — чистая гармоника.

    Пересечений нет, поэтому механизм собирается всегда.
    """

    r = float(params["r"])
    theta = wrap_2pi(angle)

    center = Joint(Point(0.0, 0.0), "O", is_ground=True)
    pin = Joint(polar(center.position, r, theta), "Pin")

    slot_x = pin.x
    h = YOKE_HALF_HEIGHT
    w = YOKE_HALF_WIDTH

    return MechanismState(
        joints=(center, pin),
        links=(
            Link(center, pin),
            Link(_free(slot_x, -h), _free(slot_x, h)),
            Link(_free(slot_x - w, -h), _free(slot_x + w, -h)),
            Link(_free(slot_x - w, h), _free(slot_x + w, h)),
            Link(_free(slot_x - w, 0.0), _free(slot_x - YOKE_ROD_LENGTH, 0.0)),
        ),
        trace_points=(Point(slot_x, 0.0),),
    )


def solve_quick_return(angle: float, params: Mapping[str, float]) -> MechanismState:
    """Механизм с быстрым обратным ходом (кривошип + качающаяся кулиса).

    Параметры: r — кривошип, d — расстояние до опоры кулисы (0, -d),
    l — длина кулисы, c — шатун ползуна. Ползун на прямой y=150.
    """

    r = float(params["r"])
    d = float(params["d"])
    l = float(params["l"])
    c = float(params["c"])
    theta = wrap_2pi(angle)

    o1 = Joint(Point(0.0, 0.0), "O1", is_ground=True)
    pivot = Joint(Point(0.0, -d), "Pivot", is_ground=True)
    ja = Joint(polar(o1.position, r, theta), "A")
    jb = Joint(polar(pivot.position, l, angle_of(pivot.position, ja.position)), "B")

    hits = intersect_horizontal_line_circle(QUICK_RETURN_RAM_Y, jb.position, c)
    if hits is None:
        return MechanismState.invalid()

    ram = Joint(hits[1], "Ram")

    return MechanismState(
        joints=(o1, pivot, ja, jb, ram),
        links=(
            Link(o1, ja),
            Link(pivot, jb),
            Link(jb, ram),
            _guide(QUICK_RETURN_RAM_Y - SLIDER_GUIDE_HALF_GAP, QUICK_RETURN_GUIDE_X),
        ),
        trace_points=(ram.position,),
    )


def solve_elliptical_trammel(angle: float, params: Mapping[str, float]) -> MechanismState:
    """Эллипсограф: стержень длины a+b, концы в перпендикулярных пазах.

    Точка P делит стержень в отношении b/L от ползуна на оси X и описывает
    эллипс (a·cos α, b·sin α).
    """

    a = float(params["a"])
    b = float(params["b"])
    alpha = wrap_2pi(angle)
    rod = a + b

    slider_x = Joint(Point(rod * math.cos(alpha), 0.0), "Slider X")
    slider_y = Joint(Point(0.0, rod * math.sin(alpha)), "Slider Y")

    tracer = Joint(lerp(slider_x.position, slider_y.position, b / rod), "P")

    half = TRAMMEL_CHANNEL_HALF_LENGTH
    return MechanismState(
        joints=(slider_y, slider_x, tracer),
        links=(
            Link(slider_y, slider_x),
            Link(_free(-half, 0.0), _free(half, 0.0), kind="auxiliary"),
            Link(_free(0.0, -half), _free(0.0, half), kind="auxiliary"),
        ),
        trace_points=(tracer.position,),
    )
