from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    Image,
)

from projcalc.models import LaserPowerResult, ScreenInfo

logger = logging.getLogger(__name__)


def _kv_table(rows):
    t = Table(rows, colWidths=[6.0 * cm, 11.7 * cm])
    t.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ROWBACKGROUNDS", (0, 0), (-1, -1), [colors.whitesmoke, colors.white]),
                ("BOX", (0, 0), (-1, -1), 0.5, colors.lightgrey),
                ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("LEFTPADDING", (0, 0), (-1, -1), 6),
                ("RIGHTPADDING", (0, 0), (-1, -1), 6),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return t


def _results_table(results: Sequence[LaserPowerResult]):
    rows = [["Target (nits)", "Lumens", "Laser %", "Setting", "Delivered %", "Actual nits", "Achievable"]]
    for r in results:
        d = r.to_dict()
        rows.append(
            [
                f"{r.target_nits:g}",
                str(d["lumens_needed"]),
                f"{d['requested_laser_percent']:g}",
                f"{d['setting_value']:g}",
                f"{d['actual_laser_percent']:g}",
                f"{d['actual_nits']:g}",
                "Yes" if r.achievable else "No",
            ]
        )

    t = Table(rows, colWidths=[2.5 * cm, 2.2 * cm, 2.3 * cm, 2.3 * cm, 2.7 * cm, 2.7 * cm, 2.5 * cm])
    style = [
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("ALIGN", (0, 1), (-2, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOX", (0, 0), (-1, -1), 0.5, colors.lightgrey),
        ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    for i, r in enumerate(results, start=1):
        if not r.achievable:
            style.append(("TEXTCOLOR", (0, i), (-1, i), colors.red))
    t.setStyle(TableStyle(style))
    return t


def build_pdf_report(
    info: ScreenInfo,
    results: Sequence[LaserPowerResult],
    out_pdf_path: Path,
    plot_png: Optional[Path] = None,
) -> Path:
    """
    Create a one-page laser planning report:
      - Screen and projector configuration
      - Per-target laser settings
      - Setting curve plot (if provided)
    """
    out_pdf_path = Path(out_pdf_path).expanduser().resolve()
    out_pdf_path.parent.mkdir(parents=True, exist_ok=True)

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    h2 = styles["Heading2"]
    body = styles["BodyText"]

    pdf = SimpleDocTemplate(
        str(out_pdf_path),
        pagesize=A4,
        leftMargin=1.6 * cm,
        rightMargin=1.6 * cm,
        topMargin=1.6 * cm,
        bottomMargin=1.6 * cm,
        title="Projector Laser Power Report",
        author="projcalc",
    )

    d = info.to_dict()
    story = []
    story.append(Paragraph("Projector Laser Power Report", title_style))
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Configuration", h2))
    story.append(
        _kv_table(
            [
                ["Screen diagonal", f"{d['diagonal']:g} in ({d['aspect_ratio']:g}:1)"],
                ["Screen size", f"{d['width']:g} x {d['height']:g} in"],
                ["Screen area", f"{d['area_sq_feet']:g} sq ft"],
                ["Screen gain", f"{d['gain']:g}"],
                ["Projector max lumens", str(d["projector_max_lumens"])],
                ["Minimum laser output", f"{d['min_laser_output_percent']:g}%"],
                ["Laser model", d["laser_model"]],
                ["Maximum achievable brightness", f"{d['max_achievable_nits']:g} nits"],
                ["Brightness at setting 0", f"{d['min_deliverable_nits']:g} nits"],
            ]
        )
    )
    story.append(Spacer(1, 0.35 * cm))

    story.append(Paragraph("Laser settings", h2))
    if results:
        story.append(_results_table(results))
    else:
        story.append(Paragraph("No brightness targets were requested.", body))

    unachievable = [r for r in results if not r.achievable]
    if unachievable:
        story.append(Spacer(1, 0.25 * cm))
        names = ", ".join(f"{r.target_nits:g}" for r in unachievable)
        story.append(
            Paragraph(
                f"<b>Not achievable</b>: {names} nits. "
                f"Maximum is {info.max_achievable_nits:.1f} nits at 100% laser power.",
                body,
            )
        )

    if plot_png is not None and Path(plot_png).exists():
        story.append(Spacer(1, 0.35 * cm))
        story.append(Paragraph("Setting curve", h2))
        story.append(Image(str(plot_png), width=16.0 * cm, height=12.0 * cm))

    pdf.build(story)
    logger.info("Saved PDF report to %s", out_pdf_path)
    return out_pdf_path
