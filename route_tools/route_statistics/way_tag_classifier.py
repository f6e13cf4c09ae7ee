"""Classify OSM-style way tags into the labels used by the route report.

Every function takes the token list of one route segment (see
``route_records.split_way_tags``). When a tag occurs more than once the last
occurrence wins, except for ``tracktype=`` and a resolved ``surface=`` value,
where the first occurrence wins.
"""

from __future__ import annotations

from typing import Final, Sequence

# =============================================================================
# CONFIGURATION
# =============================================================================

HIGHWAY_PREFIX: Final[str] = "highway"
TRACK_IDENTIFIER: Final[str] = "highway=track"
TRACKTYPE_PREFIX: Final[str] = "tracktype="
SURFACE_PREFIX: Final[str] = "surface"
SURFACE_VALUE_PREFIX: Final[str] = "surface="
SMOOTHNESS_PREFIX: Final[str] = "smoothness"
MTB_SCALE_PREFIX: Final[str] = "mtb:scale"
SAC_SCALE_PREFIX: Final[str] = "sac_scale"

UNKNOWN_LABEL: Final[str] = "default=unknown"
DEFAULT_PAVED_LABEL: Final[str] = "default=paved"
DEFAULT_UNPAVED_LABEL: Final[str] = "default=unpaved"
PAVED_LABEL: Final[str] = "paved"
UNPAVED_LABEL: Final[str] = "unpaved"

# https://wiki.openstreetmap.org/wiki/Key:surface (as of 09/2023)
PAVED_SURFACES: Final[frozenset[str]] = frozenset(
    {
        "paved",
        "asphalt",
        "chipseal",
        "concrete",
        "concrete:lanessurface",
        "concrete:plates",
        "paving_stonessurface",
        "sett",
        "unhewn_cobblestone",
        "cobblestone",
        "cobblestone:flattened",
        "brick",
        "metal",
        "wood",
        "stepping_stones",
        "rubber",
    }
)

UNPAVED_SURFACES: Final[frozenset[str]] = frozenset(
    {
        "unpaved",
        "compacted",
        "fine_gravel",
        "gravel",
        "shells",
        "rock",
        "pebblestone",
        "ground",
        "dirt",
        "earth",
        "grass",
        "grass_paver",
        "metal_grid",
        "mud",
        "sand",
        "woodchips",
        "snow",
        "ice",
        "salt",
    }
)

# Highway identifiers assumed unpaved when no surface tag resolves.
UNPAVED_HIGHWAY_DEFAULTS: Final[frozenset[str]] = frozenset(
    {
        "highway=track",
        "highway=track (grade2)",
        "highway=track (grade3)",
        "highway=track (grade4)",
        "highway=track (grade5)",
        "highway=service (grade2)",
        "highway=service (grade3)",
        "highway=service (grade4)",
        "highway=service (grade5)",
        "highway=path",
    }
)

# =============================================================================
# FUNCTIONS
# =============================================================================


def last_tag_with_prefix(tokens: Sequence[str], prefix: str) -> str | None:
    """Return the last token starting with ``prefix``, or None."""
    found = None
    for token in tokens:
        if token.startswith(prefix):
            found = token
    return found


def first_value_with_prefix(tokens: Sequence[str], prefix: str) -> str | None:
    """Return the text after ``prefix`` of the first matching token, or None."""
    for token in tokens:
        if token.startswith(prefix):
            return token[len(prefix) :]
    return None


def highway_identifier(tokens: Sequence[str]) -> str:
    """Derive the highway label of a segment, e.g. ``highway=track (grade3)``.

    The last ``highway`` token wins. A plain ``highway=track`` is refined with
    the first ``tracktype=`` value found anywhere in the tokens. Segments
    without a highway tag map to the empty string.
    """
    identifier = last_tag_with_prefix(tokens, HIGHWAY_PREFIX)
    if identifier is None:
        return ""
    if identifier == TRACK_IDENTIFIER:
        grade = first_value_with_prefix(tokens, TRACKTYPE_PREFIX)
        if grade is not None:
            identifier = f"{identifier} ({grade})"
    return identifier


def is_paved(tokens: Sequence[str], highway: str) -> bool:
    """Return True if the segment is paved.

    The first ``surface=`` value found in either vocabulary decides. Unknown
    values are skipped. Without a usable surface tag the highway identifier
    decides: tracks, graded service roads and paths count as unpaved,
    everything else as paved.
    """
    for token in tokens:
        if not token.startswith(SURFACE_VALUE_PREFIX):
            continue
        surface = token[len(SURFACE_VALUE_PREFIX) :]
        if surface in PAVED_SURFACES:
            return True
        if surface in UNPAVED_SURFACES:
            return False
    return highway not in UNPAVED_HIGHWAY_DEFAULTS


def paved_label(tokens: Sequence[str], highway: str | None = None) -> str:
    """``"paved"`` or ``"unpaved"``."""
    if highway is None:
        highway = highway_identifier(tokens)
    return PAVED_LABEL if is_paved(tokens, highway) else UNPAVED_LABEL


def surface_label(tokens: Sequence[str], highway: str | None = None) -> str:
    """Last ``surface`` token verbatim, or a paved/unpaved default.

    The prefix is the bare word ``surface`` so that non-standard keys such as
    ``surface:note=...`` are reported as they appear in the data.
    """
    surface = last_tag_with_prefix(tokens, SURFACE_PREFIX)
    if surface is not None:
        return surface
    if highway is None:
        highway = highway_identifier(tokens)
    return DEFAULT_PAVED_LABEL if is_paved(tokens, highway) else DEFAULT_UNPAVED_LABEL


def smoothness_label(tokens: Sequence[str]) -> str:
    return last_tag_with_prefix(tokens, SMOOTHNESS_PREFIX) or UNKNOWN_LABEL


def mtb_scale_label(tokens: Sequence[str]) -> str:
    return last_tag_with_prefix(tokens, MTB_SCALE_PREFIX) or UNKNOWN_LABEL


def sac_scale_label(tokens: Sequence[str]) -> str:
    return last_tag_with_prefix(tokens, SAC_SCALE_PREFIX) or UNKNOWN_LABEL
