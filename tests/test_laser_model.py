import pytest

from projcalc.errors import InvalidArgument
from projcalc.laser import (
    FloorClampedLaserModel,
    LinearLaserModel,
    available_laser_models,
    get_laser_model,
)


def test_registry():
    assert available_laser_models() == ["floor", "linear"]
    assert isinstance(get_laser_model("floor"), FloorClampedLaserModel)
    assert isinstance(get_laser_model("LINEAR"), LinearLaserModel)
    with pytest.raises(InvalidArgument):
        get_laser_model("quadratic")


@pytest.mark.parametrize("requested", [0.0, 10.0, 28.3, 69.999])
def test_floor_below_threshold_clamps_to_floor(requested):
    m = FloorClampedLaserModel().map_percent(requested, 70.0)
    assert m.setting_value == 0.0
    assert m.delivered_percent == 70.0


def test_floor_rescales_upper_range():
    model = FloorClampedLaserModel()
    assert model.map_percent(70.0, 70.0).setting_value == 0.0
    assert model.map_percent(100.0, 70.0).setting_value == pytest.approx(100.0)
    assert model.map_percent(85.0, 70.0).setting_value == pytest.approx(50.0)
    m = model.map_percent(77.1, 70.0)
    assert m.setting_value == pytest.approx(23.667, abs=1e-3)
    assert m.delivered_percent == 77.1


def test_floor_is_not_clamped_above_full_output():
    m = FloorClampedLaserModel().map_percent(130.0, 70.0)
    assert m.setting_value == pytest.approx(200.0)
    assert m.delivered_percent == 130.0


def test_zero_floor_matches_linear():
    floor, linear = FloorClampedLaserModel(), LinearLaserModel()
    for p in (0.0, 12.5, 50.0, 99.0):
        assert floor.map_percent(p, 0.0).setting_value == pytest.approx(linear.map_percent(p, 0.0).setting_value)


def test_floor_at_full_output():
    model = FloorClampedLaserModel()
    assert model.map_percent(50.0, 100.0).delivered_percent == 100.0
    assert model.map_percent(100.0, 100.0).setting_value == 100.0


def test_inverse_mapping():
    model = FloorClampedLaserModel()
    assert model.laser_percent_for_setting(0.0, 70.0) == 70.0
    assert model.laser_percent_for_setting(100.0, 70.0) == 100.0
    assert model.laser_percent_for_setting(50.0, 70.0) == pytest.approx(85.0)
    for s in (0.0, 12.0, 64.5, 100.0):
        p = model.laser_percent_for_setting(s, 60.0)
        assert model.map_percent(p, 60.0).setting_value == pytest.approx(s)
    with pytest.raises(InvalidArgument):
        model.laser_percent_for_setting(101.0, 70.0)


def test_linear_model_passes_percent_through():
    m = LinearLaserModel().map_percent(28.3, 70.0)
    assert m.setting_value == 28.3
    assert m.delivered_percent == 28.3
    assert LinearLaserModel().laser_percent_for_setting(40.0, 70.0) == 40.0
