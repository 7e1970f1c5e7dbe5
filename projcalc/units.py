"""
Brightness unit conversions.

Projection uses foot-lamberts, displays are specified in nits (cd/m²).
The factor below is the fixed planning value used throughout projcalc:

    fL = nits × 0.292

Lumens on screen follow from the screen area (sq ft) and gain:

    lumens = fL × area / gain

Lux is reported as a flat multiple of nits (nits × π). This is a display
convention, not a photometric conversion.
"""

from __future__ import annotations

import math


NITS_TO_FOOT_LAMBERTS = 0.292


def nits_to_foot_lamberts(nits: float) -> float:
    return float(nits) * NITS_TO_FOOT_LAMBERTS


def foot_lamberts_to_nits(foot_lamberts: float) -> float:
    return float(foot_lamberts) / NITS_TO_FOOT_LAMBERTS


def nits_to_lumens(nits: float, area_sq_feet: float, gain: float) -> float:
    """Projector lumens needed to show `nits` on a screen of the given area and gain."""
    return nits_to_foot_lamberts(nits) * float(area_sq_feet) / float(gain)


def lumens_to_nits(lumens: float, area_sq_feet: float, gain: float) -> float:
    """Screen luminance produced by `lumens` on a screen of the given area and gain."""
    foot_lamberts = float(lumens) * float(gain) / float(area_sq_feet)
    return foot_lamberts_to_nits(foot_lamberts)


def nits_to_lux(nits: float) -> float:
    return float(nits) * math.pi
