"""Безголовые прогоны драйвера (sweep) с выгрузкой в HDF5.

Для каждого выбранного механизма создаётся свой SimulationDriver, который
прогоняется ticks тиков с шагом dt_ms. На каждом тике пишется:
time_ms, angle, valid, metric, trace_x, trace_y (NaN, если механизм не собран).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging
import numpy as np

from .config.simulation import SimulationConfig
from .logger import H5Logger, RunMeta
from .mechanics.catalog import MECHANISMS, MechanismId, MechanismType, get_mechanism
from .metrics import extract_metric
from .simulation import SimulationDriver

logger = logging.getLogger(__name__)


@dataclass
class SweepSettings:
    out_dir: str = "out_sweep"
    ticks: int = 2000
    dt_ms: float = 16.0
    speed: float = 1.0

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be >= 1")
        if self.dt_ms <= 0.0:
            raise ValueError("dt_ms must be > 0")


class SweepGenerator:
    def __init__(self, cfg: SimulationConfig, settings: SweepSettings):
        self.cfg = cfg
        self.settings = settings

    def _driver(self, mech: MechanismType, overrides: Dict[str, float]) -> SimulationDriver:
        drv = SimulationDriver(mech, self.cfg, playing=True)
        drv.set_speed(self.settings.speed)
        known = {p.id for p in drv.mechanism.params}
        for pid, value in overrides.items():
            if pid not in known:
                logger.debug("%s: no parameter %r, override skipped", mech.value, pid)
                continue
            drv.on_param_change(pid, value)
        return drv

    def sweep(self, mechanism_id: MechanismId, overrides: Optional[Dict[str, float]] = None) -> Dict[str, np.ndarray]:
        """Прогнать один механизм и вернуть временные ряды."""

        mech = get_mechanism(mechanism_id).id
        return self._record(self._driver(mech, dict(overrides or {})))

    def _record(self, drv: SimulationDriver) -> Dict[str, np.ndarray]:
        mech = drv.mechanism.id
        steps = self.settings.ticks
        dt = self.settings.dt_ms

        time_ms = np.zeros((steps,), dtype=np.float64)
        angle = np.zeros((steps,), dtype=np.float64)
        valid = np.zeros((steps,), dtype=np.float64)
        metric = np.full((steps,), np.nan, dtype=np.float64)
        trace_x = np.full((steps,), np.nan, dtype=np.float64)
        trace_y = np.full((steps,), np.nan, dtype=np.float64)

        for i in range(steps):
            state = drv.advance(dt)
            time_ms[i] = (i + 1) * dt
            angle[i] = drv.angle
            if not state.is_valid:
                continue

            valid[i] = 1.0
            value = extract_metric(mech, state)
            if value is not None:
                metric[i] = value
            if state.trace_points:
                trace_x[i] = state.trace_points[0].x
                trace_y[i] = state.trace_points[0].y

        return {
            "time_ms": time_ms,
            "angle": angle,
            "valid": valid,
            "metric": metric,
            "trace_x": trace_x,
            "trace_y": trace_y,
        }

    def run(
        self,
        mechanisms: Optional[Iterable[MechanismId]] = None,
        overrides: Optional[Dict[str, float]] = None,
    ) -> Path:
        selected: List[MechanismType] = (
            [get_mechanism(m).id for m in mechanisms] if mechanisms else list(MECHANISMS.keys())
        )

        out = H5Logger(self.settings.out_dir)
        try:
            out.write_catalog(MECHANISMS.values())

            for rid, mech in enumerate(selected):
                drv = self._driver(mech, dict(overrides or {}))
                timeline = self._record(drv)
                meta = RunMeta(
                    run_id=rid,
                    mechanism=mech.value,
                    name=MECHANISMS[mech].name,
                    params=drv.params,
                    ticks=self.settings.ticks,
                    dt_ms=self.settings.dt_ms,
                    speed=self.settings.speed,
                    valid_ratio=float(timeline["valid"].mean()),
                )
                out.log_run(meta, timeline)
                logger.info(
                    "[%d/%d] %s written (valid %.1f%%)",
                    rid + 1,
                    len(selected),
                    mech.value,
                    100.0 * meta.valid_ratio,
                )
        finally:
            out.close()

        path = Path(self.settings.out_dir).resolve()
        logger.info("Done. Output: %s", path)
        return path
