"""Тиковый драйвер симуляции.

Два состояния: running / paused (переключаются только командой set_playing).

На каждом тике:
- в running угол привода растёт на speed * dt_ms * k (по модулю 2π);
- в paused угол заморожен, но решатель всё равно вызывается, так что правка
  параметров на паузе сразу видна;
- если состояние собрано и драйвер в running — точки трассировки уходят в
  кольцевой буфер траектории, а (angle, metric) — в историю метрики.

Смена механизма или любого параметра сбрасывает угол в 0 и очищает
траекторию: старые точки относятся к другой геометрии.

Драйвер не потокобезопасен: один экземпляр — один цикл отрисовки.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Literal, Optional, Tuple

import logging
import math

from kinemaviz.config.simulation import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from kinemaviz.core.types import MechanismState, Point
from kinemaviz.core.validation import ensure_finite, ensure_non_negative
from kinemaviz.mechanics.catalog import (
    MechanismDefinition,
    MechanismId,
    MechanismType,
    get_mechanism,
)
from kinemaviz.mechanics.geometry import wrap_2pi
from kinemaviz.metrics import MetricHistory, extract_metric

logger = logging.getLogger(__name__)

PlaybackState = Literal["running", "paused"]


class SimulationDriver:
    """Владелец угла привода, траектории и истории метрики одного механизма."""

    def __init__(
        self,
        mechanism_id: MechanismId = MechanismType.FOUR_BAR,
        cfg: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
        *,
        playing: bool = True,
    ) -> None:
        self._cfg = cfg
        self._playback: PlaybackState = "running" if playing else "paused"
        self._speed = cfg.clip_speed(cfg.default_speed)
        self._show_trace = True

        self._trace: Deque[Point] = deque(maxlen=cfg.trace_capacity)
        self._history = MetricHistory(cfg.history_capacity)

        self._mech: MechanismDefinition = get_mechanism(mechanism_id)
        self._params: Dict[str, float] = self._mech.defaults()
        self._angle = 0.0
        self._state: MechanismState = self._mech.solve(self._angle, self._params)

    # --- read-only view -------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        return self._cfg

    @property
    def mechanism(self) -> MechanismDefinition:
        return self._mech

    @property
    def angle(self) -> float:
        return self._angle

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def playback(self) -> PlaybackState:
        return self._playback

    @property
    def is_playing(self) -> bool:
        return self._playback == "running"

    @property
    def show_trace(self) -> bool:
        return self._show_trace

    @property
    def params(self) -> Dict[str, float]:
        return dict(self._params)

    @property
    def state(self) -> MechanismState:
        """Последнее решённое состояние."""

        return self._state

    @property
    def trace(self) -> Tuple[Point, ...]:
        """Траектория: самые свежие точки в порядке поступления."""

        return tuple(self._trace)

    @property
    def history(self) -> MetricHistory:
        return self._history

    def visible_trace(self) -> Tuple[Point, ...]:
        """Траектория для рендера с учётом флажка show_trace (запись идёт всегда)."""

        return self.trace if self._show_trace else ()

    # --- control surface ------------------------------------------------

    def set_playing(self, playing: bool) -> None:
        self._playback = "running" if playing else "paused"

    def set_speed(self, speed: float) -> None:
        ensure_finite(speed, "speed")
        self._speed = self._cfg.clip_speed(speed)

    def set_show_trace(self, show: bool) -> None:
        self._show_trace = bool(show)

    def on_param_change(self, param_id: str, value: float) -> None:
        """Изменить параметр (с клиппингом в [min, max]) и сбросить угол/траекторию."""

        param = self._mech.param(param_id)
        ensure_finite(value, param_id)

        clamped = param.clamp(value)
        if clamped != float(value):
            logger.warning(
                "%s.%s=%s out of [%s, %s], clamped to %s",
                self._mech.id.value,
                param_id,
                value,
                param.min,
                param.max,
                clamped,
            )

        self._params[param_id] = clamped
        self._reset()

    def on_mechanism_change(self, mechanism_id: MechanismId) -> None:
        """Сменить механизм: параметры по умолчанию, сброс угла, траектории и истории."""

        self._mech = get_mechanism(mechanism_id)
        self._params = self._mech.defaults()
        self._history.clear()
        self._reset()

    def advance(self, dt_ms: float) -> MechanismState:
        """Один тик: продвинуть угол (если running) и решить механизм.

        На паузе состояние пересчитывается, но траектория и история метрики не
        пополняются (в том числе после правки параметра): точки пишутся только
        при движении привода.
        """

        ensure_finite(dt_ms, "dt_ms")
        ensure_non_negative(dt_ms, "dt_ms")

        running = self.is_playing
        if running:
            self._angle = wrap_2pi(self._angle + self._speed * float(dt_ms) * self._cfg.angle_rate_rad_per_ms)

        state = self._mech.solve(self._angle, self._params)
        self._state = state

        if not state.is_valid:
            logger.debug("%s: no assembly at angle %.4f rad", self._mech.id.value, self._angle)
            return state

        if running:
            self._trace.extend(state.trace_points)
            metric = extract_metric(self._mech.id, state)
            if metric is not None and math.isfinite(metric):
                self._history.append(self._angle, metric)

        return state

    # --- internals ------------------------------------------------------

    def _reset(self) -> None:
        self._angle = 0.0
        self._trace.clear()
        self._state = self._mech.solve(self._angle, self._params)
        logger.debug("%s: reset (params=%s)", self._mech.id.value, self._params)

    def __repr__(self) -> str:
        return (
            f"SimulationDriver({self._mech.id.value}, angle={self._angle:.3f}, "
            f"{self._playback}, speed={self._speed}, trace={len(self._trace)})"
        )


def run_ticks(driver: SimulationDriver, n_ticks: int, dt_ms: float) -> Optional[MechanismState]:
    """Прогнать n тиков подряд; вернуть последнее состояние (None при n=0)."""

    state: Optional[MechanismState] = None
    for _ in range(int(n_ticks)):
        state = driver.advance(dt_ms)
    return state
