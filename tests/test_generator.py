import argparse
import json

import h5py
import numpy as np
import pandas as pd
import pytest

from kinemaviz.config import DEFAULT_SIMULATION_CONFIG
from kinemaviz.generate_sweep import main, parse_param
from kinemaviz.generator import SweepGenerator, SweepSettings
from kinemaviz.mechanics.catalog import MechanismType


@pytest.fixture
def settings(tmp_path) -> SweepSettings:
    return SweepSettings(out_dir=str(tmp_path / "sweep"), ticks=50, dt_ms=16.0, speed=1.0)


class TestSweepSettings:
    @pytest.mark.parametrize("kwargs", [dict(ticks=0), dict(dt_ms=0.0), dict(dt_ms=-16.0)])
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            SweepSettings(**kwargs)


class TestSweep:
    def test_timeline_shapes_and_values(self, settings: SweepSettings) -> None:
        gen = SweepGenerator(DEFAULT_SIMULATION_CONFIG, settings)
        tl = gen.sweep(MechanismType.SCOTCH_YOKE)

        assert set(tl) == {"time_ms", "angle", "valid", "metric", "trace_x", "trace_y"}
        for arr in tl.values():
            assert arr.shape == (50,)
        np.testing.assert_allclose(tl["time_ms"][:3], [16.0, 32.0, 48.0])
        assert tl["valid"].min() == 1.0
        np.testing.assert_allclose(tl["trace_x"], 100.0 * np.cos(tl["angle"]), atol=1e-9)
        np.testing.assert_allclose(tl["metric"], 100.0 * np.sin(tl["angle"]), atol=1e-9)

    def test_invalid_ticks_are_nan(self, settings: SweepSettings) -> None:
        # |o| > l недостижимо через диапазоны драйвера; берём четырёхзвенник,
        # который собирается только на части оборота.
        s = SweepSettings(out_dir=settings.out_dir, ticks=200, dt_ms=16.0, speed=5.0)
        gen = SweepGenerator(DEFAULT_SIMULATION_CONFIG, s)
        tl = gen.sweep("FOUR_BAR", {"a": 200.0, "b": 50.0, "c": 50.0, "d": 200.0})

        invalid = tl["valid"] == 0.0
        assert invalid.any()
        assert np.isnan(tl["metric"][invalid]).all()
        assert np.isnan(tl["trace_x"][invalid]).all()
        assert not np.isnan(tl["angle"]).any()

    def test_unknown_override_is_skipped(self, settings: SweepSettings) -> None:
        gen = SweepGenerator(DEFAULT_SIMULATION_CONFIG, settings)
        tl = gen.sweep(MechanismType.SCOTCH_YOKE, {"r": 50.0, "zzz": 1.0})
        np.testing.assert_allclose(tl["trace_x"], 50.0 * np.cos(tl["angle"]), atol=1e-9)


class TestRun:
    def test_writes_all_outputs(self, settings: SweepSettings) -> None:
        gen = SweepGenerator(DEFAULT_SIMULATION_CONFIG, settings)
        out = gen.run(
            mechanisms=[MechanismType.FOUR_BAR, "SLIDER_CRANK"],
            overrides={"r": 100.0},
        )

        assert (out / "sweep.h5").exists()
        assert (out / "runs_meta.jsonl").exists()
        assert (out / "catalog.json").exists()
        assert (out / "summary.csv").exists()

        with h5py.File(out / "sweep.h5", "r") as f:
            keys = sorted(f["runs"].keys())
            assert keys == ["run_0000_four_bar", "run_0001_slider_crank"]

            g = f["runs/run_0001_slider_crank"]
            assert g["angle"].shape == (50,)
            assert g["trace_x"].dtype == np.float32
            assert g.attrs["mechanism"] == "SLIDER_CRANK"
            assert float(g.attrs["valid_ratio"]) == pytest.approx(1.0)
            assert json.loads(g.attrs["params_json"]) == {"r": 100.0, "l": 250.0, "o": 0.0}

        lines = (out / "runs_meta.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["mechanism"] == "FOUR_BAR"

        catalog = json.loads((out / "catalog.json").read_text(encoding="utf-8"))
        assert len(catalog["mechanisms"]) == 7
        fb = next(m for m in catalog["mechanisms"] if m["id"] == "FOUR_BAR")
        assert fb["joints"] == ["O2", "A", "B", "O4"]
        assert [p["id"] for p in fb["params"]] == ["a", "b", "c", "d"]

        df = pd.read_csv(out / "summary.csv")
        assert len(df) == 2
        assert list(df["mechanism"]) == ["FOUR_BAR", "SLIDER_CRANK"]
        assert df.loc[1, "param__r"] == pytest.approx(100.0)
        assert (df["valid_ratio"] == 1.0).all()


class TestCli:
    def test_parse_param(self) -> None:
        assert parse_param("a=120") == ("a", 120.0)
        assert parse_param(" L = 200.5") == ("L", 200.5)

    @pytest.mark.parametrize("text", ["a", "=5", "a=x"])
    def test_parse_param_errors(self, text: str) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_param(text)

    def test_main(self, tmp_path) -> None:
        out = tmp_path / "cli"
        main(["--out", str(out), "--ticks", "20", "--mechanism", "SCOTCH_YOKE", "--param", "r=60"])

        with h5py.File(out / "sweep.h5", "r") as f:
            assert list(f["runs"].keys()) == ["run_0000_scotch_yoke"]
            assert json.loads(f["runs/run_0000_scotch_yoke"].attrs["params_json"]) == {"r": 60.0}

    def test_main_rejects_unknown_mechanism(self, tmp_path) -> None:
        with pytest.raises(SystemExit):
            main(["--out", str(tmp_path), "--mechanism", "JANSEN"])
