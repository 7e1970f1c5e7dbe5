from __future__ import annotations

from projcalc.models import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_MIN_LASER_OUTPUT_PERCENT,
    CalculatorConfig,
    ProjectorConfig,
    ScreenConfig,
)


SDR_DEFAULT_NITS = 55.0
HDR_DEFAULT_NITS = 150.0

DEFAULT_MAX_LUMENS = 1680
DEFAULT_DIAGONAL_INCHES = 92.0
DEFAULT_GAIN = 1.0
DEFAULT_LASER_MODEL = "floor"


def default_config() -> CalculatorConfig:
    return CalculatorConfig(
        projector=ProjectorConfig(
            max_lumens=DEFAULT_MAX_LUMENS,
            min_laser_output_percent=DEFAULT_MIN_LASER_OUTPUT_PERCENT,
        ),
        screen=ScreenConfig(
            diagonal_inches=DEFAULT_DIAGONAL_INCHES,
            aspect_ratio=DEFAULT_ASPECT_RATIO,
            gain=DEFAULT_GAIN,
        ),
        laser_model=DEFAULT_LASER_MODEL,
    )


def default_targets() -> list[float]:
    return [SDR_DEFAULT_NITS, HDR_DEFAULT_NITS]
