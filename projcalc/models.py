from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from projcalc import geometry
from projcalc.errors import InvalidArgument, ParseError, require_percent, require_positive
from projcalc.laser import get_laser_model


DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_MIN_LASER_OUTPUT_PERCENT = 70.0


@dataclass(frozen=True)
class ScreenConfig:
    diagonal_inches: float
    aspect_ratio: float = DEFAULT_ASPECT_RATIO
    gain: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "diagonal_inches", require_positive("diagonal", self.diagonal_inches))
        object.__setattr__(self, "aspect_ratio", require_positive("aspect_ratio", self.aspect_ratio))
        object.__setattr__(self, "gain", require_positive("gain", self.gain))

    @property
    def width_inches(self) -> float:
        return geometry.compute(self.diagonal_inches, self.aspect_ratio)[0]

    @property
    def height_inches(self) -> float:
        return geometry.compute(self.diagonal_inches, self.aspect_ratio)[1]

    @property
    def area_sq_feet(self) -> float:
        return geometry.compute(self.diagonal_inches, self.aspect_ratio)[2]

    def to_dict(self) -> Dict[str, float]:
        return {
            "diagonal_inches": self.diagonal_inches,
            "aspect_ratio": self.aspect_ratio,
            "gain": self.gain,
        }


@dataclass(frozen=True)
class ProjectorConfig:
    max_lumens: int
    min_laser_output_percent: float = DEFAULT_MIN_LASER_OUTPUT_PERCENT

    def __post_init__(self) -> None:
        lumens = require_positive("max_lumens", self.max_lumens)
        if lumens != int(lumens):
            raise InvalidArgument(f"max_lumens must be an integer, got {self.max_lumens!r}")
        object.__setattr__(self, "max_lumens", int(lumens))
        object.__setattr__(
            self,
            "min_laser_output_percent",
            require_percent("min_laser_output_percent", self.min_laser_output_percent),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "max_lumens": self.max_lumens,
            "min_laser_output_percent": self.min_laser_output_percent,
        }


@dataclass(frozen=True)
class CalculatorConfig:
    """Everything a ProjectorCalculator needs, fixed at construction."""

    projector: ProjectorConfig
    screen: ScreenConfig
    laser_model: str = "floor"

    def __post_init__(self) -> None:
        object.__setattr__(self, "laser_model", get_laser_model(self.laser_model).name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projector": self.projector.to_dict(),
            "screen": self.screen.to_dict(),
            "laser_model": self.laser_model,
        }


@dataclass(frozen=True)
class BrightnessTarget:
    target_nits: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "target_nits", require_positive("target_nits", self.target_nits))

    @classmethod
    def parse(cls, token: str) -> "BrightnessTarget":
        try:
            value = float(str(token).strip())
        except ValueError:
            raise ParseError(str(token)) from None
        return cls(value)


@dataclass(frozen=True)
class LaserPowerResult:
    target_nits: float
    lumens_needed: float
    requested_laser_percent: float  # unclamped
    actual_laser_percent: float     # delivered, after the floor
    setting_value: float
    actual_lumens: float
    actual_nits: float
    actual_lux: float
    achievable: bool

    @property
    def over_delivered(self) -> bool:
        return self.actual_laser_percent > self.requested_laser_percent

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_nits": self.target_nits,
            "lumens_needed": int(round(self.lumens_needed)),
            "requested_laser_percent": round(self.requested_laser_percent, 1),
            "actual_laser_percent": round(self.actual_laser_percent, 1),
            "setting_value": round(self.setting_value, 1),
            "actual_lumens": int(round(self.actual_lumens)),
            "actual_nits": round(self.actual_nits, 1),
            "actual_lux": round(self.actual_lux, 1),
            "achievable": self.achievable,
        }


@dataclass(frozen=True)
class ScreenInfo:
    diagonal: float
    aspect_ratio: float
    width: float
    height: float
    area_sq_feet: float
    gain: float
    projector_max_lumens: int
    min_laser_output_percent: float
    laser_model: str
    max_achievable_nits: float
    min_deliverable_nits: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "diagonal": self.diagonal,
            "aspect_ratio": round(self.aspect_ratio, 2),
            "width": round(self.width, 1),
            "height": round(self.height, 1),
            "area_sq_feet": round(self.area_sq_feet, 2),
            "gain": self.gain,
            "projector_max_lumens": self.projector_max_lumens,
            "min_laser_output_percent": self.min_laser_output_percent,
            "laser_model": self.laser_model,
            "max_achievable_nits": round(self.max_achievable_nits, 1),
            "min_deliverable_nits": round(self.min_deliverable_nits, 1),
        }
