"""Tests for laser power planning against a 1680 lm projector on a 100" 16:9 screen."""

import math

import numpy as np
import pytest

from projcalc.calculator import ProjectorCalculator
from projcalc.errors import InvalidArgument
from projcalc.models import CalculatorConfig, ProjectorConfig, ScreenConfig


AREA = 10000.0 / 337.0  # 100" 16:9 in sq ft


@pytest.fixture
def calc() -> ProjectorCalculator:
    return ProjectorCalculator.from_values(
        max_lumens=1680,
        diagonal_inches=100.0,
        gain=1.0,
        aspect_ratio=16.0 / 9.0,
        min_laser_output_percent=70.0,
    )


# Expected values chain the unrounded screen area (10000/337 sq ft). Working from a
# rounded 29.6 sq ft gives the slightly lower ~475 lm / 77.1% / setting 23.6 figures.


def test_sdr_target_below_floor(calc):
    r = calc.laser_power_for_nits(55.0)
    assert r.lumens_needed == pytest.approx(55.0 * 0.292 * AREA)
    assert abs(r.lumens_needed - 476.6) < 0.1
    assert abs(r.requested_laser_percent - 28.37) < 0.01
    assert r.setting_value == 0.0
    assert r.actual_laser_percent == 70.0
    assert r.achievable is True
    assert r.over_delivered
    assert r.actual_lumens == pytest.approx(1176.0)
    assert r.actual_nits == pytest.approx(1176.0 / AREA / 0.292)
    assert r.actual_lux == pytest.approx(r.actual_nits * math.pi)


def test_hdr_target_above_floor(calc):
    r = calc.laser_power_for_nits(150.0)
    assert abs(r.lumens_needed - 1299.7) < 0.1
    assert abs(r.requested_laser_percent - 77.36) < 0.01
    assert r.actual_laser_percent == r.requested_laser_percent
    assert r.setting_value == pytest.approx((r.requested_laser_percent - 70.0) / 30.0 * 100.0)
    assert abs(r.setting_value - 24.54) < 0.01
    assert r.achievable is True
    assert not r.over_delivered
    # above the floor, the delivered brightness matches the request
    assert r.actual_nits == pytest.approx(150.0)


def test_display_rounding(calc):
    d = calc.laser_power_for_nits(150.0).to_dict()
    assert d["lumens_needed"] == 1300
    assert d["requested_laser_percent"] == 77.4
    assert d["setting_value"] == 24.5
    assert d["actual_lumens"] == 1300
    assert d["actual_nits"] == 150.0
    assert isinstance(d["lumens_needed"], int)


def test_unachievable_target(calc):
    ceiling = calc.max_achievable_nits()
    assert ceiling == pytest.approx(1680.0 / AREA / 0.292)
    assert round(ceiling, 1) == 193.9

    r = calc.laser_power_for_nits(250.0)
    assert r.lumens_needed > 1680
    assert r.achievable is False
    assert calc.max_achievable_nits() == ceiling


def test_achievable_iff_lumens_within_capability(calc):
    ceiling = calc.max_achievable_nits()
    for nits in np.linspace(5.0, 2.0 * ceiling, 37):
        r = calc.laser_power_for_nits(float(nits))
        assert r.achievable == (not r.lumens_needed > 1680)
    assert calc.laser_power_for_nits(ceiling * 0.999999).achievable
    assert not calc.laser_power_for_nits(ceiling * 1.000001).achievable


def test_laser_percent_is_monotonic(calc):
    results = calc.calculate_multiple_targets(np.linspace(1.0, 400.0, 120).tolist())
    requested = [r.requested_laser_percent for r in results]
    delivered = [r.actual_laser_percent for r in results]
    assert requested == sorted(requested)
    assert delivered == sorted(delivered)


def test_floor_and_ceiling_settings(calc):
    at_floor = calc.laser_power_for_nits(calc.nits_for_setting(0.0))
    assert at_floor.setting_value == pytest.approx(0.0, abs=1e-9)
    at_full = calc.laser_power_for_nits(calc.max_achievable_nits())
    assert at_full.requested_laser_percent == pytest.approx(100.0)
    assert at_full.setting_value == pytest.approx(100.0)
    assert calc.min_deliverable_nits() == pytest.approx(0.7 * calc.max_achievable_nits())


def test_batch_preserves_order(calc):
    targets = [150.0, 55.0, 300.0, 100.0]
    results = calc.calculate_multiple_targets(targets)
    assert [r.target_nits for r in results] == targets
    assert results[1] == calc.laser_power_for_nits(55.0)


def test_non_positive_targets_are_rejected(calc):
    # strict policy: zero and negative brightness are configuration errors
    for bad in (0.0, -55.0, float("inf")):
        with pytest.raises(InvalidArgument):
            calc.laser_power_for_nits(bad)


def test_linear_model_reports_requested_percent():
    calc = ProjectorCalculator.from_values(1680, 100.0, laser_model="linear")
    r = calc.laser_power_for_nits(55.0)
    assert r.setting_value == r.requested_laser_percent
    assert r.actual_laser_percent == r.requested_laser_percent
    assert r.actual_nits == pytest.approx(55.0)


def test_gain_scales_ceiling():
    low = ProjectorCalculator.from_values(1680, 100.0, gain=1.0)
    high = ProjectorCalculator.from_values(1680, 100.0, gain=1.3)
    assert high.max_achievable_nits() == pytest.approx(1.3 * low.max_achievable_nits())
    assert high.laser_power_for_nits(100.0).lumens_needed == pytest.approx(
        low.laser_power_for_nits(100.0).lumens_needed / 1.3
    )


def test_screen_info(calc):
    info = calc.screen_info().to_dict()
    assert info == {
        "diagonal": 100.0,
        "aspect_ratio": 1.78,
        "width": 87.2,
        "height": 49.0,
        "area_sq_feet": 29.67,
        "gain": 1.0,
        "projector_max_lumens": 1680,
        "min_laser_output_percent": 70.0,
        "laser_model": "floor",
        "max_achievable_nits": 193.9,
        "min_deliverable_nits": 135.7,
    }


def test_setting_curve(calc):
    nits, requested, setting = calc.setting_curve(1.0, 200.0, samples=50)
    assert nits.shape == requested.shape == setting.shape == (50,)
    assert nits[0] == 1.0 and nits[-1] == 200.0
    assert np.all(np.diff(requested) > 0)
    assert np.all(setting[requested < 70.0] == 0.0)
    assert np.all(np.diff(setting) >= 0)


def test_setting_curve_rejects_bad_range(calc):
    with pytest.raises(InvalidArgument):
        calc.setting_curve(100.0, 50.0)
    with pytest.raises(InvalidArgument):
        calc.setting_curve(1.0, 50.0, samples=1)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_lumens": 0},
        {"max_lumens": -100},
        {"max_lumens": 1680.5},
        {"min_laser_output_percent": -1.0},
        {"min_laser_output_percent": 100.5},
    ],
)
def test_projector_config_validation(kwargs):
    values = {"max_lumens": 1680, "min_laser_output_percent": 70.0, **kwargs}
    with pytest.raises(InvalidArgument):
        ProjectorConfig(**values)


def test_config_is_immutable():
    cfg = CalculatorConfig(projector=ProjectorConfig(1680), screen=ScreenConfig(100.0))
    with pytest.raises(AttributeError):
        cfg.projector.max_lumens = 2000
    assert cfg.laser_model == "floor"
    with pytest.raises(InvalidArgument):
        CalculatorConfig(projector=ProjectorConfig(1680), screen=ScreenConfig(100.0), laser_model="log")


def test_screen_info_reports_floor_brightness(calc):
    info = calc.screen_info()
    assert info.min_deliverable_nits == pytest.approx(calc.nits_for_setting(0.0))
    assert info.min_deliverable_nits == pytest.approx(0.7 * info.max_achievable_nits)
    linear = ProjectorCalculator.from_values(1680, 100.0, laser_model="linear")
    assert linear.screen_info().min_deliverable_nits == 0.0
