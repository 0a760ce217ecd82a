import pytest

from kinemaviz.config import DEFAULT_SIMULATION_CONFIG, MechanismParam, SimulationConfig, default_values
from kinemaviz.config.mechanisms import WATTS_LINKAGE_PARAMS
from kinemaviz.core.units import format_angle, format_value, rad_to_deg


class TestMechanismParam:
    def test_valid(self) -> None:
        p = MechanismParam("a", "Crank Length", 100.0, 20.0, 200.0)
        assert p.step == 1.0
        assert p.unit == "mm"
        assert p.contains(20.0) and p.contains(200.0)
        assert not p.contains(200.5)

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(id="", label="x", default_value=1.0, min=0.0, max=2.0),
            dict(id="a", label="x", default_value=1.0, min=3.0, max=2.0),
            dict(id="a", label="x", default_value=5.0, min=0.0, max=2.0),
            dict(id="a", label="x", default_value=1.0, min=0.0, max=2.0, step=0.0),
            dict(id="a", label="x", default_value=float("nan"), min=0.0, max=2.0),
            dict(id="a", label="x", default_value=1.0, min=0.0, max=float("inf")),
        ],
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            MechanismParam(**kwargs)

    def test_clamp(self) -> None:
        p = MechanismParam("o", "Offset", 0.0, -50.0, 50.0)
        assert p.clamp(-80.0) == -50.0
        assert p.clamp(80.0) == 50.0
        assert p.clamp(12.5) == 12.5

    def test_format(self) -> None:
        p = MechanismParam("a", "Crank Length", 120.0, 20.0, 200.0)
        assert p.format(120.0) == "120 mm"

    def test_frozen(self) -> None:
        p = MechanismParam("a", "Crank Length", 120.0, 20.0, 200.0)
        with pytest.raises(AttributeError):
            p.min = 0.0  # type: ignore[misc]

    def test_default_values(self) -> None:
        assert default_values(WATTS_LINKAGE_PARAMS) == {"l": 150.0, "w": 100.0, "c": 80.0}


class TestSimulationConfig:
    def test_defaults(self) -> None:
        cfg = DEFAULT_SIMULATION_CONFIG
        assert cfg.trace_capacity == 400
        assert cfg.history_capacity == 200
        assert cfg.angle_rate_rad_per_ms == pytest.approx(0.002)
        assert (cfg.speed_min, cfg.default_speed, cfg.speed_max) == (0.0, 1.0, 5.0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(trace_capacity=0),
            dict(history_capacity=-1),
            dict(angle_rate_rad_per_ms=0.0),
            dict(speed_min=2.0, speed_max=1.0, default_speed=1.5),
            dict(default_speed=6.0),
        ],
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)

    def test_clip_speed(self) -> None:
        assert DEFAULT_SIMULATION_CONFIG.clip_speed(7.0) == 5.0
        assert DEFAULT_SIMULATION_CONFIG.clip_speed(-3.0) == 0.0


def test_units_formatting() -> None:
    assert format_value(80.4, "mm") == "80 mm"
    assert format_value(1.2345, digits=2) == "1.23"
    assert rad_to_deg(3.141592653589793) == pytest.approx(180.0)
    assert format_angle(1.0) == "57°"
