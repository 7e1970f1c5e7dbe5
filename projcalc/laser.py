"""
Laser output models.

A projector's laser setting is a 0-100 control value. On many units the
laser cannot actually be driven below some floor (70% by default), so the
control range only spans [floor, 100] of physical output:

    setting = (percent - floor) / (100 - floor) × 100      percent >= floor
    setting = 0, delivered = floor                          percent <  floor

The earlier planning model assumed the setting equals the physical percent;
it is kept as LinearLaserModel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Protocol

from projcalc.errors import InvalidArgument, require_percent


@dataclass(frozen=True)
class LaserMapping:
    setting_value: float
    delivered_percent: float


class LaserModel(Protocol):
    name: str

    def map_percent(self, requested_percent: float, min_laser_output: float) -> LaserMapping: ...

    def laser_percent_for_setting(self, setting_value: float, min_laser_output: float) -> float: ...


class LinearLaserModel:
    name = "linear"

    def map_percent(self, requested_percent: float, min_laser_output: float) -> LaserMapping:
        return LaserMapping(setting_value=requested_percent, delivered_percent=requested_percent)

    def laser_percent_for_setting(self, setting_value: float, min_laser_output: float) -> float:
        return require_percent("setting_value", setting_value)


class FloorClampedLaserModel:
    name = "floor"

    def map_percent(self, requested_percent: float, min_laser_output: float) -> LaserMapping:
        if requested_percent < min_laser_output:
            return LaserMapping(setting_value=0.0, delivered_percent=min_laser_output)
        span = 100.0 - min_laser_output
        if span <= 0.0:
            # floor at 100%: the only reachable output is full power
            return LaserMapping(setting_value=100.0, delivered_percent=requested_percent)
        setting = (requested_percent - min_laser_output) / span * 100.0
        return LaserMapping(setting_value=setting, delivered_percent=requested_percent)

    def laser_percent_for_setting(self, setting_value: float, min_laser_output: float) -> float:
        s = require_percent("setting_value", setting_value)
        return min_laser_output + s / 100.0 * (100.0 - min_laser_output)


_MODELS: Dict[str, LaserModel] = {
    LinearLaserModel.name: LinearLaserModel(),
    FloorClampedLaserModel.name: FloorClampedLaserModel(),
}


def get_laser_model(name: str) -> LaserModel:
    try:
        return _MODELS[str(name).lower()]
    except KeyError:
        raise InvalidArgument(f"Unknown laser model: {name!r} (expected one of {', '.join(sorted(_MODELS))})") from None


def available_laser_models() -> list[str]:
    return sorted(_MODELS)
