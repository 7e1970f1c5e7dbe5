from __future__ import annotations

import math


class InvalidArgument(ValueError):
    """A configuration or target value is malformed or out of range."""


class ParseError(ValueError):
    """A free-form brightness token could not be read as a number."""

    def __init__(self, token: str):
        super().__init__(f"Invalid target brightness '{token}'")
        self.token = token


def require_positive(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(v) or v <= 0.0:
        raise InvalidArgument(f"{name} must be > 0, got {value!r}")
    return v


def require_percent(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(v) or v < 0.0 or v > 100.0:
        raise InvalidArgument(f"{name} must be within [0, 100], got {value!r}")
    return v
