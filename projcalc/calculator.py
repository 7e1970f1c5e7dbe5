"""
Laser power planning for a projector / screen pair.

For each target brightness the calculator works out the lumens the screen
needs, the laser percentage that delivers them, the control setting that
produces that percentage, and the brightness actually delivered once the
laser floor is taken into account.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import numpy as np

from projcalc import units
from projcalc.errors import InvalidArgument, require_positive
from projcalc.laser import LaserModel, get_laser_model
from projcalc.models import (
    CalculatorConfig,
    LaserPowerResult,
    ProjectorConfig,
    ScreenConfig,
    ScreenInfo,
)

logger = logging.getLogger(__name__)


class ProjectorCalculator:
    def __init__(self, config: CalculatorConfig):
        self.config = config
        self.projector: ProjectorConfig = config.projector
        self.screen: ScreenConfig = config.screen
        self.model: LaserModel = get_laser_model(config.laser_model)

    @classmethod
    def from_values(
        cls,
        max_lumens: int,
        diagonal_inches: float,
        gain: float = 1.0,
        aspect_ratio: float = 16.0 / 9.0,
        min_laser_output_percent: float = 70.0,
        laser_model: str = "floor",
    ) -> "ProjectorCalculator":
        return cls(
            CalculatorConfig(
                projector=ProjectorConfig(max_lumens=max_lumens, min_laser_output_percent=min_laser_output_percent),
                screen=ScreenConfig(diagonal_inches=diagonal_inches, aspect_ratio=aspect_ratio, gain=gain),
                laser_model=laser_model,
            )
        )

    @property
    def area_sq_feet(self) -> float:
        return self.screen.area_sq_feet

    def lumens_needed_for_nits(self, target_nits: float) -> float:
        return units.nits_to_lumens(target_nits, self.area_sq_feet, self.screen.gain)

    def laser_power_for_nits(self, target_nits: float) -> LaserPowerResult:
        nits = require_positive("target_nits", target_nits)
        area = self.area_sq_feet
        gain = self.screen.gain
        max_lumens = float(self.projector.max_lumens)
        floor = self.projector.min_laser_output_percent

        lumens_needed = self.lumens_needed_for_nits(nits)
        requested = lumens_needed / max_lumens * 100.0
        mapping = self.model.map_percent(requested, floor)

        actual_lumens = mapping.delivered_percent / 100.0 * max_lumens
        actual_nits = units.lumens_to_nits(actual_lumens, area, gain)
        achievable = requested <= 100.0
        if not achievable:
            logger.info("%g nits needs %.1f%% laser output, above projector capability", nits, requested)

        return LaserPowerResult(
            target_nits=nits,
            lumens_needed=lumens_needed,
            requested_laser_percent=requested,
            actual_laser_percent=mapping.delivered_percent,
            setting_value=mapping.setting_value,
            actual_lumens=actual_lumens,
            actual_nits=actual_nits,
            actual_lux=units.nits_to_lux(actual_nits),
            achievable=achievable,
        )

    def calculate_multiple_targets(self, targets: Iterable[float]) -> List[LaserPowerResult]:
        return [self.laser_power_for_nits(t) for t in targets]

    def nits_for_setting(self, setting_value: float) -> float:
        """Screen brightness produced by a given control setting."""
        percent = self.model.laser_percent_for_setting(setting_value, self.projector.min_laser_output_percent)
        lumens = percent / 100.0 * self.projector.max_lumens
        return units.lumens_to_nits(lumens, self.area_sq_feet, self.screen.gain)

    def max_achievable_nits(self) -> float:
        max_foot_lamberts = (self.projector.max_lumens * self.screen.gain) / self.area_sq_feet
        return units.foot_lamberts_to_nits(max_foot_lamberts)

    def min_deliverable_nits(self) -> float:
        """Brightness at the laser floor (setting 0)."""
        return self.nits_for_setting(0.0)

    def screen_info(self) -> ScreenInfo:
        return ScreenInfo(
            diagonal=self.screen.diagonal_inches,
            aspect_ratio=self.screen.aspect_ratio,
            width=self.screen.width_inches,
            height=self.screen.height_inches,
            area_sq_feet=self.area_sq_feet,
            gain=self.screen.gain,
            projector_max_lumens=self.projector.max_lumens,
            min_laser_output_percent=self.projector.min_laser_output_percent,
            laser_model=self.model.name,
            max_achievable_nits=self.max_achievable_nits(),
            min_deliverable_nits=self.min_deliverable_nits(),
        )

    def setting_curve(
        self,
        start_nits: float | None = None,
        stop_nits: float | None = None,
        samples: int = 200,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Sample (nits, requested laser %, setting value) over a brightness range.
        Defaults to 1 nit up to the projector ceiling.
        """
        lo = require_positive("start_nits", 1.0 if start_nits is None else start_nits)
        hi = require_positive("stop_nits", self.max_achievable_nits() if stop_nits is None else stop_nits)
        if hi <= lo:
            raise InvalidArgument(f"stop_nits must be greater than start_nits ({hi:g} <= {lo:g})")
        if int(samples) < 2:
            raise InvalidArgument(f"samples must be >= 2, got {samples!r}")

        nits = np.linspace(lo, hi, int(samples))
        results = self.calculate_multiple_targets(nits.tolist())
        requested = np.asarray([r.requested_laser_percent for r in results], dtype=float)
        setting = np.asarray([r.setting_value for r in results], dtype=float)
        return nits, requested, setting
