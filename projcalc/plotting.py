from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # headless-safe for servers/CI
import matplotlib.pyplot as plt  # noqa: E402

from projcalc.calculator import ProjectorCalculator  # noqa: E402
from projcalc.models import LaserPowerResult  # noqa: E402

logger = logging.getLogger(__name__)


def plot_setting_curve(
    calculator: ProjectorCalculator,
    outpath: Path,
    results: Optional[Sequence[LaserPowerResult]] = None,
    samples: int = 200,
) -> Path:
    """
    Save a line plot of laser output and setting value against target nits.
    Requested targets, if given, are marked on the setting curve.
    """
    outpath = Path(outpath).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)

    ceiling = calculator.max_achievable_nits()
    stop = ceiling
    if results:
        stop = max(stop, max(r.target_nits for r in results))
    start = min(1.0, stop / 2.0)
    nits, requested, setting = calculator.setting_curve(start, stop, samples=samples)
    floor = calculator.projector.min_laser_output_percent

    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.plot(nits, requested, label="Laser output required (%)")
    ax.plot(nits, setting, label="Setting value")
    if calculator.model.name == "floor":
        ax.axhline(floor, color="grey", linestyle=":", linewidth=1, label=f"Laser floor ({floor:g}%)")
    ax.axvline(ceiling, color="red", linestyle="--", linewidth=1, label=f"Ceiling ({ceiling:.1f} nits)")
    if results:
        ax.scatter(
            [r.target_nits for r in results],
            [r.setting_value for r in results],
            zorder=3,
            label="Targets",
        )

    ax.set_xlabel("Target brightness (nits)")
    ax.set_ylabel("Percent")
    ax.set_title("Laser setting vs target brightness")
    ax.legend(loc="best")
    fig.tight_layout()
    fig.savefig(outpath, dpi=200)
    plt.close(fig)
    logger.info("Saved plot to %s", outpath)
    return outpath
