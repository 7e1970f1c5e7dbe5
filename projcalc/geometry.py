from __future__ import annotations

import math
import re
from typing import Tuple

from projcalc.errors import InvalidArgument, require_positive


SQ_INCHES_PER_SQ_FOOT = 144.0

_RATIO_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*[:/xX]\s*([0-9]*\.?[0-9]+)\s*$")


def compute(diagonal: float, aspect_ratio: float) -> Tuple[float, float, float]:
    """
    Screen width, height (inches) and area (sq ft) from the diagonal.

    Width and height form a right triangle with the diagonal as hypotenuse:
        width = diagonal / sqrt(1 + (1/aspect_ratio)^2)
        height = width / aspect_ratio
    """
    d = require_positive("diagonal", diagonal)
    ar = require_positive("aspect_ratio", aspect_ratio)
    width = d / math.sqrt(1.0 + (1.0 / ar) ** 2)
    height = width / ar
    area_sq_feet = (width * height) / SQ_INCHES_PER_SQ_FOOT
    return width, height, area_sq_feet


def parse_aspect_ratio(text: str) -> float:
    """Accept '1.78', '16:9', '2.35:1' or '16/9'."""
    s = str(text).strip()
    m = _RATIO_RE.match(s)
    if m:
        w, h = float(m.group(1)), float(m.group(2))
        if h <= 0.0:
            raise InvalidArgument(f"Invalid aspect ratio: {text!r}")
        return require_positive("aspect_ratio", w / h)
    try:
        value = float(s)
    except ValueError:
        raise InvalidArgument(f"Invalid aspect ratio: {text!r}") from None
    return require_positive("aspect_ratio", value)
