"""Параметры драйвера симуляции (data-only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Константы тикового драйвера.

    Атрибуты:
        trace_capacity: длина кольцевого буфера траектории (точек).
        history_capacity: длина истории метрики (точек).
        angle_rate_rad_per_ms: k в формуле angle += speed * dt_ms * k.
        default_speed: скорость воспроизведения после создания драйвера.
        speed_min/speed_max: допустимый диапазон скорости (set_speed клипует).
    """

    trace_capacity: int = 400
    history_capacity: int = 200
    angle_rate_rad_per_ms: float = 0.002
    default_speed: float = 1.0
    speed_min: float = 0.0
    speed_max: float = 5.0

    def __post_init__(self) -> None:
        if self.trace_capacity <= 0:
            raise ValueError("trace_capacity must be > 0")
        if self.history_capacity <= 0:
            raise ValueError("history_capacity must be > 0")
        if self.angle_rate_rad_per_ms <= 0.0:
            raise ValueError("angle_rate_rad_per_ms must be > 0")
        if self.speed_min > self.speed_max:
            raise ValueError("speed_min must be <= speed_max")
        if not (self.speed_min <= self.default_speed <= self.speed_max):
            raise ValueError("default_speed must be in [speed_min, speed_max]")

    def clip_speed(self, speed: float) -> float:
        return max(self.speed_min, min(self.speed_max, float(speed)))


DEFAULT_SIMULATION_CONFIG = SimulationConfig()
