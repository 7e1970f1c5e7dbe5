from __future__ import annotations

import csv
import io
import json
from dataclasses import fields
from typing import List, Sequence

from projcalc.errors import InvalidArgument
from projcalc.models import LaserPowerResult, ScreenInfo


FORMATS = ("table", "json", "csv")

RESULT_FIELDS: List[str] = [f.name for f in fields(LaserPowerResult)]


def _check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise InvalidArgument(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    return fmt


def _csv_text(header: Sequence[str], rows: Sequence[dict]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=list(header), lineterminator="\n")
    w.writeheader()
    for r in rows:
        w.writerow({k: r.get(k) for k in header})
    return buf.getvalue()


def screen_info_table(info: ScreenInfo) -> str:
    d = info.to_dict()
    lines = [
        "Screen Information:",
        "===================",
        f"Diagonal: {d['diagonal']:g}\" ({d['aspect_ratio']:g}:1 aspect ratio)",
        f"Dimensions: {d['width']:g}\" x {d['height']:g}\"",
        f"Area: {d['area_sq_feet']:g} sq ft",
        f"Gain: {d['gain']:g}x",
        f"Projector max lumens: {d['projector_max_lumens']}",
        f"Minimum laser output: {d['min_laser_output_percent']:g}% ({d['laser_model']} model)",
        f"Maximum achievable brightness: {d['max_achievable_nits']:g} nits",
        f"Brightness at setting 0: {d['min_deliverable_nits']:g} nits",
    ]
    return "\n".join(lines)


def render_screen_info(info: ScreenInfo, fmt: str = "table") -> str:
    fmt = _check_format(fmt)
    d = info.to_dict()
    if fmt == "json":
        return json.dumps(d, indent=2)
    if fmt == "csv":
        return _csv_text(list(d.keys()), [d])
    return screen_info_table(info)


def result_block(result: LaserPowerResult) -> str:
    """Human readable lines for one target."""
    d = result.to_dict()
    status = "✓" if result.achievable else "⚠ NOT ACHIEVABLE"
    lines = [
        f"{result.target_nits:g} nits:",
        f"  Lumens needed: {d['lumens_needed']}",
        f"  Laser power: {d['requested_laser_percent']:g}% {status}",
        f"  Setting value: {d['setting_value']:g}",
        (
            f"  Delivered: {d['actual_laser_percent']:g}% laser, {d['actual_lumens']} lm, "
            f"{d['actual_nits']:g} nits ({d['actual_lux']:g} lux)"
        ),
    ]
    if result.over_delivered:
        lines.append(f"  Note: below the laser floor, screen will be brighter than {result.target_nits:g} nits")
    return "\n".join(lines)


def results_table(info: ScreenInfo, results: Sequence[LaserPowerResult]) -> str:
    out = [screen_info_table(info), "", "Laser Power Calculations:", "========================="]
    for r in results:
        out.append(result_block(r))
        out.append("")

    unachievable = [r for r in results if not r.achievable]
    if unachievable:
        out.append("Warnings:")
        out.append("=========")
        for r in unachievable:
            out.append(f"{r.target_nits:g} nits exceeds projector capability.")
            out.append(f"  Maximum achievable: {info.max_achievable_nits:.1f} nits at 100% laser power")
    return "\n".join(out).rstrip("\n")


def render_results(info: ScreenInfo, results: Sequence[LaserPowerResult], fmt: str = "table") -> str:
    fmt = _check_format(fmt)
    if fmt == "json":
        payload = {
            "screen_info": info.to_dict(),
            "calculations": [r.to_dict() for r in results],
        }
        return json.dumps(payload, indent=2)
    if fmt == "csv":
        return _csv_text(RESULT_FIELDS, [r.to_dict() for r in results])
    return results_table(info, results)
