from pathlib import Path
import json
import sys
import h5py
import numpy as np
import matplotlib.pyplot as plt

SWEEP_DIR = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("out_sweep")
OUT_DIR = Path("plots")
OUT_DIR.mkdir(parents=True, exist_ok=True)

h5_path = SWEEP_DIR / "sweep.h5"
if not h5_path.exists():
    raise FileNotFoundError(f"Не найдено {h5_path} (сначала python -m kinemaviz.generate_sweep)")
print("Using:", h5_path)

with h5py.File(h5_path, "r") as f:
    runs = f["runs"]
    run_keys = list(runs.keys())

    # 1) по одному PNG на прогон: траектория + метрика от угла
    for key in run_keys:
        g = runs[key]
        attrs = dict(g.attrs)
        params = json.loads(attrs.get("params_json", "{}"))

        x = g["trace_x"][:]
        y = g["trace_y"][:]
        angle = g["angle"][:]
        metric = g["metric"][:]

        fig, (ax_path, ax_metric) = plt.subplots(1, 2, figsize=(12, 5))

        ax_path.plot(x, y, linewidth=1)
        ax_path.set_aspect("equal", adjustable="datalim")
        ax_path.set_title(f"{attrs.get('name', key)} trace")
        ax_path.grid(True, alpha=0.3)

        ax_metric.plot(np.degrees(angle), metric, ".", markersize=1.5)
        ax_metric.set_xlim(0.0, 360.0)
        ax_metric.set_xlabel("angle, deg")
        ax_metric.set_title("output metric")
        ax_metric.grid(True, alpha=0.3)

        fig.suptitle(
            f"{key} | valid {100.0 * float(attrs.get('valid_ratio', 0.0)):.1f}% | "
            + ", ".join(f"{k}={v:g}" for k, v in params.items())
        )
        plt.tight_layout()
        fig.savefig(OUT_DIR / f"{key}.png", dpi=150)
        plt.close(fig)

    # 2) все траектории на одной странице
    n = len(run_keys)
    cols = 2
    rows = int(np.ceil(n / cols))
    fig, axes = plt.subplots(rows, cols, figsize=(12, 4 * rows))
    axes = np.array(axes).reshape(-1)

    for i, key in enumerate(run_keys):
        ax = axes[i]
        g = runs[key]
        ax.plot(g["trace_x"][:], g["trace_y"][:], linewidth=0.8)
        ax.set_aspect("equal", adjustable="datalim")
        ax.set_title(str(g.attrs.get("name", key)))
        ax.grid(True, alpha=0.3)

    for j in range(n, len(axes)):
        axes[j].axis("off")

    fig.suptitle("traces", y=1.002)
    plt.tight_layout()
    fig.savefig(OUT_DIR / "ALL_traces.png", dpi=150)
    plt.close(fig)

print("Saved to:", OUT_DIR)
