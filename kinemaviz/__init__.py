"""kinemaviz package.

Важно: пакет не должен иметь побочных эффектов при импорте.
Поэтому здесь нет eager-import'ов (генератор/h5py/pandas тянут тяжёлые зависимости).

Импортируй нужное напрямую:
- from kinemaviz.mechanics import solve, MECHANISMS
- from kinemaviz.simulation import SimulationDriver
"""

from __future__ import annotations

__all__: list[str] = []
