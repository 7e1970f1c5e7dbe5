"""Projector laser power planning: screen geometry, brightness units and laser setting maps."""

__version__ = "1.1.0"

from projcalc.errors import InvalidArgument, ParseError
from projcalc.models import (
    BrightnessTarget,
    CalculatorConfig,
    LaserPowerResult,
    ProjectorConfig,
    ScreenConfig,
    ScreenInfo,
)
from projcalc.laser import FloorClampedLaserModel, LinearLaserModel, get_laser_model
from projcalc.calculator import ProjectorCalculator

__all__ = [
    "__version__",
    "InvalidArgument",
    "ParseError",
    "BrightnessTarget",
    "CalculatorConfig",
    "LaserPowerResult",
    "ProjectorConfig",
    "ScreenConfig",
    "ScreenInfo",
    "FloorClampedLaserModel",
    "LinearLaserModel",
    "get_laser_model",
    "ProjectorCalculator",
]
