import numpy as np
import pytest

from kinemaviz.core.types import MechanismState
from kinemaviz.mechanics.catalog import MechanismType, get_mechanism
from kinemaviz.metrics import MetricHistory, extract_metric


def test_invalid_state_has_no_metric() -> None:
    assert extract_metric(MechanismType.FOUR_BAR, MechanismState.invalid()) is None


def test_metric_from_catalog_entry() -> None:
    tr = get_mechanism(MechanismType.ELLIPTICAL_TRAMMEL)
    state = tr.solve(0.0, tr.defaults())
    # α=0: трассирующая точка на большой полуоси
    assert extract_metric("ELLIPTICAL_TRAMMEL", state) == pytest.approx(0.0)
    assert state.joints[-1].x == pytest.approx(150.0)


class TestMetricHistory:
    def test_capacity_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            MetricHistory(0)

    def test_keeps_latest_points(self) -> None:
        h = MetricHistory(3)
        for i in range(5):
            h.append(0.1 * i, float(i))
        assert len(h) == 3
        assert h.capacity == 3
        assert [v for _, v in h] == [2.0, 3.0, 4.0]

    def test_as_arrays(self) -> None:
        h = MetricHistory()
        h.append(0.5, 10.0)
        h.append(0.6, 11.0)
        angles, values = h.as_arrays()
        assert angles.dtype == np.float64
        np.testing.assert_allclose(angles, [0.5, 0.6])
        np.testing.assert_allclose(values, [10.0, 11.0])

    def test_as_arrays_empty(self) -> None:
        angles, values = MetricHistory().as_arrays()
        assert angles.shape == (0,)
        assert values.shape == (0,)

    def test_clear(self) -> None:
        h = MetricHistory(5)
        h.append(1.0, 2.0)
        h.clear()
        assert len(h) == 0
        assert h.points() == []
        assert repr(h) == "MetricHistory(0/5)"
