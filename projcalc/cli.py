from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from projcalc import __version__
from projcalc.calculator import ProjectorCalculator
from projcalc.config import apply_overrides, load_config, save_config
from projcalc.errors import InvalidArgument, ParseError
from projcalc.formatting import FORMATS, render_results, render_screen_info
from projcalc.geometry import parse_aspect_ratio
from projcalc.interactive import run_interactive
from projcalc.laser import available_laser_models
from projcalc.models import BrightnessTarget, CalculatorConfig
from projcalc.presets import (
    DEFAULT_DIAGONAL_INCHES,
    DEFAULT_GAIN,
    DEFAULT_MAX_LUMENS,
    DEFAULT_MIN_LASER_OUTPUT_PERCENT,
    HDR_DEFAULT_NITS,
    SDR_DEFAULT_NITS,
    default_config,
    default_targets,
)

logger = logging.getLogger(__name__)

_EPILOG = f"""Examples:
  projcalc 55 150                          # Calculate for 55 and 150 nits
  projcalc --sdr --hdr                     # Use default SDR ({SDR_DEFAULT_NITS:g}) and HDR ({HDR_DEFAULT_NITS:g}) values
  projcalc --lumens 2000 --diagonal 100 120 200
  projcalc --min-laser 60 --model floor 100
  projcalc --interactive                   # Interactive mode
  projcalc --info                          # Show screen info only
  projcalc --format json 55 150            # Output as JSON
"""


def _aspect_arg(s: str) -> float:
    try:
        return parse_aspect_ratio(s)
    except InvalidArgument as e:
        raise argparse.ArgumentTypeError(str(e))


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)
    logging.getLogger("projcalc").setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="projcalc",
        description="Calculate projector laser power settings for target brightness levels",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("targets", nargs="*", metavar="target_nits", help="Target brightness values in nits")
    p.add_argument("-l", "--lumens", type=int, default=None,
                   help=f"Projector max lumens (default: {DEFAULT_MAX_LUMENS})")
    p.add_argument("-d", "--diagonal", type=float, default=None,
                   help=f"Screen diagonal in inches (default: {DEFAULT_DIAGONAL_INCHES:g})")
    p.add_argument("-g", "--gain", type=float, default=None,
                   help=f"Screen gain factor (default: {DEFAULT_GAIN:g})")
    p.add_argument("-a", "--aspect-ratio", type=_aspect_arg, default=None,
                   help="Aspect ratio as decimal or W:H (default: 16:9)")
    p.add_argument("-m", "--min-laser", type=float, default=None,
                   help=f"Minimum laser output percent (default: {DEFAULT_MIN_LASER_OUTPUT_PERCENT:g})")
    p.add_argument("--model", choices=available_laser_models(), default=None,
                   help="Laser output model (default: floor)")
    p.add_argument("--config", default=None, help="Load projector/screen settings from a JSON file")
    p.add_argument("--save-config", default=None, help="Write the effective settings to a JSON file")
    p.add_argument("-f", "--format", choices=FORMATS, default="table",
                   help="Output format: table, json, csv (default: table)")
    p.add_argument("-i", "--interactive", action="store_true", help="Run in interactive mode")
    p.add_argument("--info", action="store_true", help="Show screen information only")
    p.add_argument("--sdr", nargs="?", const=str(SDR_DEFAULT_NITS), default=None, metavar="NITS",
                   help=f"Add SDR target (default: {SDR_DEFAULT_NITS:g} nits)")
    p.add_argument("--hdr", nargs="?", const=str(HDR_DEFAULT_NITS), default=None, metavar="NITS",
                   help=f"Add HDR target (default: {HDR_DEFAULT_NITS:g} nits)")
    p.add_argument("--plot", default=None, help="Save a setting curve plot (PNG) to this path")
    p.add_argument("--pdf", default=None, help="Save a PDF report to this path")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    p.add_argument("--version", action="version", version=f"Projector Calculator v{__version__}")
    return p


def _resolve_config(args: argparse.Namespace) -> CalculatorConfig:
    base = load_config(Path(args.config)) if args.config else default_config()
    return apply_overrides(
        base,
        max_lumens=args.lumens,
        diagonal_inches=args.diagonal,
        gain=args.gain,
        aspect_ratio=args.aspect_ratio,
        min_laser_output_percent=args.min_laser,
        laser_model=args.model,
    )


def collect_targets(args: argparse.Namespace) -> List[float]:
    targets: List[float] = []
    for flag, value in (("--sdr", args.sdr), ("--hdr", args.hdr)):
        if value is None:
            continue
        try:
            targets.append(BrightnessTarget.parse(value).target_nits)
        except ParseError as e:
            logger.warning("%s: %s - skipping", flag, e)
        except InvalidArgument as e:
            logger.warning("%s: invalid target brightness '%s' (%s) - skipping", flag, value, e)

    for token in args.targets:
        try:
            targets.append(BrightnessTarget.parse(token).target_nits)
        except ParseError as e:
            logger.warning("%s - skipping", e)
        except InvalidArgument as e:
            logger.warning("Invalid target brightness '%s' (%s) - skipping", token, e)

    if not targets and not args.interactive and not args.info:
        targets = default_targets()
        logger.info("No targets given, using SDR/HDR defaults: %s", ", ".join(f"{t:g}" for t in targets))
    return targets


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_intermixed_args(argv)
    _configure_logging(args.verbose)

    try:
        config = _resolve_config(args)
        calculator = ProjectorCalculator(config)
        if args.save_config:
            save_config(config, Path(args.save_config))
    except InvalidArgument as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if args.info:
        print(render_screen_info(calculator.screen_info(), args.format))
        return 0

    if args.interactive:
        return run_interactive(calculator)

    targets = collect_targets(args)
    results = calculator.calculate_multiple_targets(targets)
    print(render_results(calculator.screen_info(), results, args.format))

    plot_path = None
    try:
        if args.plot:
            from projcalc.plotting import plot_setting_curve
            plot_path = plot_setting_curve(calculator, Path(args.plot), results=results)
            print(f"Saved: {plot_path}", file=sys.stderr)
        if args.pdf:
            from projcalc.report import build_pdf_report
            pdf_path = build_pdf_report(calculator.screen_info(), results, Path(args.pdf), plot_png=plot_path)
            print(f"Saved: {pdf_path}", file=sys.stderr)
    except InvalidArgument as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
