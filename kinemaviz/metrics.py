"""Выходная метрика механизма для графика "метрика vs угол".

Метрика берётся из записи каталога (см. MechanismDefinition.metric),
история — ограниченный буфер пар (angle, value): старые точки вытесняются.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

import numpy as np

from kinemaviz.core.types import MechanismState
from kinemaviz.mechanics.catalog import MechanismId, get_mechanism


def extract_metric(mechanism_id: MechanismId, state: MechanismState) -> Optional[float]:
    """Скалярная метрика состояния; None для несобираемого состояния."""

    if not state.is_valid:
        return None
    return float(get_mechanism(mechanism_id).metric(state))


class MetricHistory:
    """Кольцевая история (angle, value) фиксированной ёмкости."""

    def __init__(self, capacity: int = 200) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._points: Deque[Tuple[float, float]] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        return int(self._points.maxlen or 0)

    def append(self, angle: float, value: float) -> None:
        self._points.append((float(angle), float(value)))

    def clear(self) -> None:
        self._points.clear()

    def points(self) -> List[Tuple[float, float]]:
        return list(self._points)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(angles, values) как float64-массивы для построения графика."""

        if not self._points:
            empty = np.zeros((0,), dtype=np.float64)
            return empty, empty.copy()
        arr = np.asarray(self._points, dtype=np.float64)
        return arr[:, 0].copy(), arr[:, 1].copy()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"MetricHistory({len(self)}/{self.capacity})"
