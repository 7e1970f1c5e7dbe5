from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from projcalc.errors import InvalidArgument
from projcalc.models import CalculatorConfig, ProjectorConfig, ScreenConfig
from projcalc.presets import default_config

logger = logging.getLogger(__name__)

_PROJECTOR_KEYS = {"max_lumens", "min_laser_output_percent"}
_SCREEN_KEYS = {"diagonal_inches", "aspect_ratio", "gain"}
_TOP_KEYS = {"projector", "screen", "laser_model"}


def _check_keys(section: str, payload: Mapping[str, Any], allowed: set) -> None:
    unknown = sorted(set(payload) - allowed)
    if unknown:
        raise InvalidArgument(f"Unknown {section} setting(s): {', '.join(unknown)}")


def config_from_dict(d: Mapping[str, Any], base: Optional[CalculatorConfig] = None) -> CalculatorConfig:
    """Build a config from a (possibly partial) mapping layered over `base`."""
    base = base or default_config()
    if not isinstance(d, Mapping):
        raise InvalidArgument("Configuration must be a JSON object")
    _check_keys("top-level", d, _TOP_KEYS)
    projector = d.get("projector", {}) or {}
    screen = d.get("screen", {}) or {}
    _check_keys("projector", projector, _PROJECTOR_KEYS)
    _check_keys("screen", screen, _SCREEN_KEYS)
    return CalculatorConfig(
        projector=ProjectorConfig(**{**base.projector.to_dict(), **projector}),
        screen=ScreenConfig(**{**base.screen.to_dict(), **screen}),
        laser_model=d.get("laser_model", base.laser_model),
    )


def apply_overrides(
    config: CalculatorConfig,
    max_lumens: Optional[int] = None,
    diagonal_inches: Optional[float] = None,
    gain: Optional[float] = None,
    aspect_ratio: Optional[float] = None,
    min_laser_output_percent: Optional[float] = None,
    laser_model: Optional[str] = None,
) -> CalculatorConfig:
    """Return a copy of `config` with every non-None override applied."""
    projector: Dict[str, Any] = {}
    if max_lumens is not None:
        projector["max_lumens"] = max_lumens
    if min_laser_output_percent is not None:
        projector["min_laser_output_percent"] = min_laser_output_percent
    screen: Dict[str, Any] = {}
    if diagonal_inches is not None:
        screen["diagonal_inches"] = diagonal_inches
    if gain is not None:
        screen["gain"] = gain
    if aspect_ratio is not None:
        screen["aspect_ratio"] = aspect_ratio
    return replace(
        config,
        projector=replace(config.projector, **projector),
        screen=replace(config.screen, **screen),
        laser_model=laser_model if laser_model is not None else config.laser_model,
    )


def load_config(path: Path, base: Optional[CalculatorConfig] = None) -> CalculatorConfig:
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise InvalidArgument(f"Config file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidArgument(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise InvalidArgument(f"Cannot read config file {path}: {e}") from e
    try:
        config = config_from_dict(data, base=base)
    except TypeError as e:
        raise InvalidArgument(f"Invalid configuration in {path}: {e}") from e
    logger.debug("Loaded configuration from %s", path)
    return config


def save_config(config: CalculatorConfig, path: Path) -> Path:
    path = Path(path).expanduser().resolve()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
    except OSError as e:
        raise InvalidArgument(f"Cannot write config file {path}: {e}") from e
    logger.info("Saved configuration to %s", path)
    return path
