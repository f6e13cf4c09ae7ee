"""Render route statistics as a plain-text console report."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Final, List, Tuple

from route_tools.route_statistics.route_aggregator import (
    ElevationSummary,
    FrequencyTable,
    RouteStatistics,
)

# =============================================================================
# CONFIGURATION
# =============================================================================

LABEL_WIDTH: Final[int] = 28
RULE_WIDTH: Final[int] = 47
WIDE_LABEL_WIDTH: Final[int] = 38
WIDE_RULE_WIDTH: Final[int] = 57
TOTAL_LABEL: Final[str] = "total"

# (title, RouteStatistics attribute, label width, rule width); the altitude
# section is inserted after the first entry.
TABLE_SECTIONS: Final[List[Tuple[str, str, int, int]]] = [
    ("Highway types", "highways", LABEL_WIDTH, RULE_WIDTH),
    ("Highway surface types", "surfaces", LABEL_WIDTH, RULE_WIDTH),
    ("Paved and unpaved surfaces", "paved", LABEL_WIDTH, RULE_WIDTH),
    ("Smoothness types", "smoothness", LABEL_WIDTH, RULE_WIDTH),
    ("Mountain bike difficulties (mtb:scale)", "mtb_scales", LABEL_WIDTH, RULE_WIDTH),
    ("Hiking difficulties (sac_scale)", "sac_scales", WIDE_LABEL_WIDTH, WIDE_RULE_WIDTH),
]
ALTITUDE_TITLE: Final[str] = "Altitude meters (approximately)"

# =============================================================================
# FUNCTIONS
# =============================================================================


def percentage_rows(table: FrequencyTable) -> List[Tuple[str, float, int]]:
    """Return ``(label, percent, meters)`` rows sorted by label.

    A zero total (no segments, or only zero-length ones) yields 0.0 percent
    for every row instead of dividing by zero.
    """
    total = sum(table.values())
    rows = []
    for label in sorted(table):
        meters = table[label]
        percent = meters / total * 100.0 if total else 0.0
        rows.append((label, percent, meters))
    return rows


def format_table_line(label: str, percent: float, meters: int, width: int = LABEL_WIDTH) -> str:
    return f"{label:<{width}}  {percent:5.1f} %  {meters:6d} m"


def format_frequency_section(
    title: str,
    table: FrequencyTable,
    label_width: int = LABEL_WIDTH,
    rule_width: int = RULE_WIDTH,
) -> str:
    """Render one titled distance table closed by a total line."""
    rule = "-" * rule_width
    total = sum(table.values())
    lines = ["", f"{title}:", rule]
    lines.extend(
        format_table_line(label, percent, meters, label_width)
        for label, percent, meters in percentage_rows(table)
    )
    lines.append(rule)
    lines.append(format_table_line(TOTAL_LABEL, 100.0 if total else 0.0, total, label_width))
    return "\n".join(lines)


def format_elevation_section(summary: ElevationSummary) -> str:
    """Render ascent, descent and elevation range."""
    rule = "-" * RULE_WIDTH
    minimum = summary.minimum if summary.minimum is not None else 0
    maximum = summary.maximum if summary.maximum is not None else 0
    lines = [
        "",
        f"{ALTITUDE_TITLE}:",
        rule,
        f"{'downhill':<{WIDE_LABEL_WIDTH}} {summary.descent:+6d} m",
        f"{'uphill':<{WIDE_LABEL_WIDTH}} {summary.ascent:+6d} m",
        f"{'height min':<{WIDE_LABEL_WIDTH}} {minimum:6d} m",
        f"{'height max':<{WIDE_LABEL_WIDTH}} {maximum:6d} m",
        f"{'height difference':<{WIDE_LABEL_WIDTH}} {summary.height_difference:6d} m",
        rule,
    ]
    return "\n".join(lines)


def format_program_banner(name: str, release: str, date: str, purpose: str, info: str) -> str:
    return "\n".join(
        [
            "",
            "Program:",
            f"  Name    : {name}",
            f"  Release : {release} - {date}",
            f"  Purpose : {purpose}",
            f"  Info    : {info}",
            "",
        ]
    )


def format_rfc3339(moment: datetime) -> str:
    """Second-precision RFC 3339 timestamp; a zero UTC offset is written as ``Z``."""
    text = moment.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def format_file_info(path: str | Path) -> str:
    """Render name, size and modification time (RFC 3339) of the input file.

    Raises:
    ------
    OSError
        If the file cannot be stat'ed.
    """
    fp = Path(path)
    stat = fp.stat()
    modified = datetime.fromtimestamp(stat.st_mtime).astimezone()
    rule = "-" * RULE_WIDTH
    return "\n".join(
        [
            "Input file:",
            rule,
            f"name = {path}",
            f"size = {stat.st_size} byte",
            f"time = {format_rfc3339(modified)}",
            rule,
        ]
    )


def format_route_report(stats: RouteStatistics) -> str:
    """Render all seven report sections in their fixed order."""
    sections = []
    for index, (title, attribute, label_width, rule_width) in enumerate(TABLE_SECTIONS):
        sections.append(
            format_frequency_section(title, getattr(stats, attribute), label_width, rule_width)
        )
        if index == 0:
            sections.append(format_elevation_section(stats.elevation))
    return "\n".join(sections)
