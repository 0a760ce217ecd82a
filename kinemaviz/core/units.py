"""kinemaviz.core.units

Единицы только для отображения: решатель работает в "условных мм" и радианах
и ничего не пересчитывает.
"""

from __future__ import annotations

import math

RAD_TO_DEG: float = 180.0 / math.pi

TWO_PI: float = 2.0 * math.pi


def rad_to_deg(angle_rad: float) -> float:
    return float(angle_rad) * RAD_TO_DEG


def format_value(value: float, unit: str = "", digits: int = 0) -> str:
    """Строка вида "120 mm" (как в панели параметров)."""

    text = f"{float(value):.{digits}f}"
    return f"{text} {unit}" if unit else text


def format_angle(angle_rad: float) -> str:
    """Подпись оси угла на графике: целые градусы."""

    return f"{round(rad_to_deg(angle_rad))}°"
