from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List
from pathlib import Path
import json
import h5py
import numpy as np
import pandas as pd

from .mechanics.catalog import MechanismDefinition


@dataclass
class RunMeta:
    run_id: int
    mechanism: str
    name: str
    params: Dict[str, float]
    ticks: int
    dt_ms: float
    speed: float
    valid_ratio: float


class H5Logger:
    def __init__(self, out_dir: str | Path):
        self.out_dir = Path(out_dir)
        self.out_dir.mkdir(parents=True, exist_ok=True)

        self.h5_path = self.out_dir / "sweep.h5"
        self.meta_path = self.out_dir / "runs_meta.jsonl"
        self.catalog_path = self.out_dir / "catalog.json"
        self.summary_path = self.out_dir / "summary.csv"

        self.h5 = h5py.File(self.h5_path, "w")
        self.grp = self.h5.create_group("runs")

        self._meta_f = open(self.meta_path, "w", encoding="utf-8")
        self._rows: List[dict] = []

    def write_catalog(self, definitions: Iterable[MechanismDefinition]):
        # Важно: id совпадает с attrs["mechanism"] у групп runs/*
        catalog = {
            "mechanisms": [
                {
                    "id": d.id.value,
                    "name": d.name,
                    "category": d.category,
                    "metric": d.metric_label,
                    "joints": [j.label for j in d.solve(0.0, d.defaults()).joints],
                    "params": [
                        {
                            "id": p.id,
                            "label": p.label,
                            "default": p.default_value,
                            "min": p.min,
                            "max": p.max,
                            "step": p.step,
                            "unit": p.unit,
                        }
                        for p in d.params
                    ],
                }
                for d in definitions
            ],
        }
        self.catalog_path.write_text(json.dumps(catalog, ensure_ascii=False, indent=2), encoding="utf-8")

    def log_run(self, meta: RunMeta, timeline: Dict[str, np.ndarray]):
        rid = f"run_{meta.run_id:04d}_{meta.mechanism.lower()}"
        g = self.grp.create_group(rid)

        for k, arr in timeline.items():
            g.create_dataset(k, data=np.asarray(arr, dtype=np.float32), compression="gzip", compression_opts=5)

        g.attrs["mechanism"] = meta.mechanism
        g.attrs["name"] = meta.name
        g.attrs["ticks"] = meta.ticks
        g.attrs["dt_ms"] = meta.dt_ms
        g.attrs["speed"] = meta.speed
        g.attrs["valid_ratio"] = meta.valid_ratio
        g.attrs["params_json"] = json.dumps(meta.params, ensure_ascii=False)

        self._meta_f.write(json.dumps(asdict(meta), ensure_ascii=False) + "\n")
        self._meta_f.flush()

        row = {k: v for k, v in asdict(meta).items() if k != "params"}
        row.update({f"param__{k}": v for k, v in meta.params.items()})
        self._rows.append(row)

    def close(self):
        pd.DataFrame(self._rows).to_csv(self.summary_path, index=False)
        self._meta_f.close()
        self.h5.close()
