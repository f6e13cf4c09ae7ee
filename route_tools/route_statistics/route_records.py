"""Load BRouter TSV route exports and expose typed field accessors.

A BRouter "data" export holds one row per route segment. The first row is a
header; every following row carries the thirteen fields listed in
``ROUTE_COLUMNS``. All fields are kept as strings when loaded; numeric
fields are parsed on access, and a field that is not a plain integer reads
as zero instead of rejecting the row.
"""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from pathlib import Path
from typing import Final, Sequence

import pandas as pd

# =============================================================================
# CONFIGURATION
# =============================================================================


class RouteField(IntEnum):
    """Position of each logical field in a route row."""

    LONGITUDE = 0
    LATITUDE = 1
    ELEVATION = 2
    DISTANCE = 3
    COST_PER_KM = 4
    ELEV_COST = 5
    TURN_COST = 6
    NODE_COST = 7
    INITIAL_COST = 8
    WAY_TAGS = 9
    NODE_TAGS = 10
    TIME = 11
    ENERGY = 12


ROUTE_COLUMNS: Final[list[str]] = [
    "Longitude",
    "Latitude",
    "Elevation",
    "Distance",
    "CostPerKm",
    "ElevCost",
    "TurnCost",
    "NodeCost",
    "InitialCost",
    "WayTags",
    "NodeTags",
    "Time",
    "Energy",
]

INTEGER_FIELDS: Final[frozenset[RouteField]] = frozenset(
    {RouteField.ELEVATION, RouteField.DISTANCE}
)

# Optional sign followed by ASCII digits, nothing else.
INTEGER_PATTERN: Final[str] = r"[+-]?[0-9]+"
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
WAY_TAG_SEPARATOR: Final[str] = " "

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(INTEGER_PATTERN)

# =============================================================================
# FUNCTIONS
# =============================================================================


class RouteFileError(Exception):
    """Raised when a route file cannot be read or does not have the expected layout."""


def _is_int64_text(value: str) -> bool:
    """True if ``value`` is a plain integer that fits in 64 bits."""
    if not value or not _INTEGER_RE.fullmatch(value):
        return False
    return INT64_MIN <= int(value) <= INT64_MAX


def parse_int(value: str) -> int:
    """Return ``value`` as an integer, or 0 if it is not a plain 64-bit integer."""
    return int(value) if _is_int64_text(value) else 0


def split_way_tags(value: str) -> list[str]:
    """Split a way-tags field into tokens.

    An empty field yields ``[""]``; callers treat the empty token as a tag
    that matches nothing.
    """
    return value.split(WAY_TAG_SEPARATOR)


def parse_field(row: Sequence[str], field: RouteField) -> int | list[str] | str:
    """Return one field of a raw row converted to its natural type.

    Elevation and distance come back as ``int``, the way tags as a token
    list, and every other field as the raw string.
    """
    raw = row[field]
    if field in INTEGER_FIELDS:
        return parse_int(raw)
    if field is RouteField.WAY_TAGS:
        return split_way_tags(raw)
    return raw


def empty_route_table() -> pd.DataFrame:
    """Return a route table with the canonical columns and no rows."""
    return pd.DataFrame({name: pd.Series(dtype=object) for name in ROUTE_COLUMNS})


def read_route_table(path: str | Path) -> pd.DataFrame:
    """Read a tab-delimited BRouter export into a string-typed DataFrame.

    The header row is consumed by pandas and the first thirteen columns are
    renamed positionally to ``ROUTE_COLUMNS``; extra trailing columns are
    dropped.

    Raises:
    ------
    RouteFileError
        If the file cannot be opened or parsed, has fewer than thirteen
        columns, or holds a row with fewer fields than the header.
    """
    fp = Path(path)
    try:
        df = pd.read_csv(
            fp,
            sep="\t",
            dtype=str,
            keep_default_na=False,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        logger.warning("Route file %s is empty.", fp)
        return empty_route_table()
    except pd.errors.ParserError as exc:
        raise RouteFileError(f"malformed TSV in {fp}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise RouteFileError(f"cannot read {fp}: {exc}") from exc

    if df.shape[1] < len(ROUTE_COLUMNS):
        raise RouteFileError(
            f"{fp} has {df.shape[1]} columns, expected at least {len(ROUTE_COLUMNS)}"
        )

    # Empty fields stay "", only fields missing from short rows are NaN.
    short_rows = df.index[df.isna().any(axis=1)]
    if len(short_rows):
        line = int(short_rows[0]) + 2
        raise RouteFileError(
            f"malformed TSV in {fp}: line {line} has fewer fields than the header"
        )

    df = df.iloc[:, : len(ROUTE_COLUMNS)].copy()
    df.columns = ROUTE_COLUMNS
    logger.info("Loaded %d route segments from %s", len(df), fp)
    return df


def parse_int_column(values: pd.Series) -> pd.Series:
    """Vectorised :func:`parse_int` for a column of strings."""
    values = values.fillna("").astype(str)
    valid = values.map(_is_int64_text).astype(bool)
    coerced = int((~valid).sum())
    if coerced:
        logger.debug("Column %s: %d non-integer values read as 0", values.name, coerced)
    return values.where(valid, "0").astype("int64")


def distances(route_table: pd.DataFrame) -> pd.Series:
    """Segment distances in meters."""
    return parse_int_column(route_table[ROUTE_COLUMNS[RouteField.DISTANCE]])


def elevations(route_table: pd.DataFrame) -> pd.Series:
    """Segment elevations in meters."""
    return parse_int_column(route_table[ROUTE_COLUMNS[RouteField.ELEVATION]])


def way_tag_lists(route_table: pd.DataFrame) -> pd.Series:
    """Way tags of each segment as token lists."""
    return route_table[ROUTE_COLUMNS[RouteField.WAY_TAGS]].astype(str).map(split_way_tags)
