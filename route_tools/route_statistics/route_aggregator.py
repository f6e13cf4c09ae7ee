"""Aggregate route segments into distance tables and an elevation summary.

Each frequency table maps a classification label to the summed distance (in
meters) of the segments carrying that label. All tables are built by
:func:`build_frequency_table` with a different classifier; the elevation
summary is a separate, order-sensitive pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Final, Iterable, Optional, Sequence

import pandas as pd

from route_tools.route_statistics import way_tag_classifier as wtc
from route_tools.route_statistics.route_records import (
    distances,
    elevations,
    way_tag_lists,
)

# =============================================================================
# CONFIGURATION
# =============================================================================

# Dead Sea shore, approx. -430 m. Anything lower is treated as a bad reading.
DEEPEST_POINT_ON_LAND: Final[int] = -430

FrequencyTable = Dict[str, int]
Classifier = Callable[[Sequence[str]], str]

logger = logging.getLogger(__name__)

# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class ElevationSummary:
    """Running ascent/descent totals and elevation range of a route.

    ``descent`` accumulates signed deltas and is therefore zero or negative.
    ``last_valid``, ``minimum`` and ``maximum`` stay None until the first
    valid elevation is seen.
    """

    ascent: int = 0
    descent: int = 0
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    last_valid: Optional[int] = None

    def add(self, elevation: int) -> None:
        """Fold one elevation reading into the summary."""
        if elevation < DEEPEST_POINT_ON_LAND:
            return
        if self.last_valid is None:
            self.last_valid = self.minimum = self.maximum = elevation
            return
        delta = elevation - self.last_valid
        if elevation > self.last_valid:
            self.ascent += delta
        else:
            self.descent += delta
        self.minimum = min(self.minimum, elevation)
        self.maximum = max(self.maximum, elevation)
        self.last_valid = elevation

    @property
    def height_difference(self) -> int:
        if self.minimum is None or self.maximum is None:
            return 0
        return self.maximum - self.minimum


@dataclass
class RouteStatistics:
    """All tables of one route report."""

    highways: FrequencyTable = field(default_factory=dict)
    surfaces: FrequencyTable = field(default_factory=dict)
    paved: FrequencyTable = field(default_factory=dict)
    smoothness: FrequencyTable = field(default_factory=dict)
    mtb_scales: FrequencyTable = field(default_factory=dict)
    sac_scales: FrequencyTable = field(default_factory=dict)
    elevation: ElevationSummary = field(default_factory=ElevationSummary)


# =============================================================================
# FUNCTIONS
# =============================================================================


def build_frequency_table(route_table: pd.DataFrame, classify: Classifier) -> FrequencyTable:
    """Sum segment distances per label returned by ``classify``.

    Parameters
    ----------
    route_table
        Route segments as returned by ``route_records.read_route_table``.
    classify
        Maps the way-tag tokens of one segment to its label.

    Returns:
    -------
    dict[str, int]
        Label to summed meters. Labels appear only if at least one segment
        carries them.
    """
    if route_table.empty:
        return {}
    labels = way_tag_lists(route_table).map(classify)
    sums = distances(route_table).groupby(labels, sort=True).sum()
    return {str(label): int(meters) for label, meters in sums.items()}


def build_paved_table(route_table: pd.DataFrame) -> FrequencyTable:
    """Paved/unpaved split; both labels are always present."""
    table = {wtc.PAVED_LABEL: 0, wtc.UNPAVED_LABEL: 0}
    table.update(build_frequency_table(route_table, wtc.paved_label))
    return table


def accumulate_elevation(values: Iterable[int]) -> ElevationSummary:
    """Run the elevation pass over readings in route order."""
    summary = ElevationSummary()
    for elevation in values:
        summary.add(int(elevation))
    if summary.last_valid is None:
        logger.warning("No valid elevation values found; altitude summary is empty.")
    return summary


def build_route_statistics(route_table: pd.DataFrame) -> RouteStatistics:
    """Run every pass over ``route_table``."""
    stats = RouteStatistics(
        highways=build_frequency_table(route_table, wtc.highway_identifier),
        surfaces=build_frequency_table(route_table, wtc.surface_label),
        paved=build_paved_table(route_table),
        smoothness=build_frequency_table(route_table, wtc.smoothness_label),
        mtb_scales=build_frequency_table(route_table, wtc.mtb_scale_label),
        sac_scales=build_frequency_table(route_table, wtc.sac_scale_label),
        elevation=accumulate_elevation(elevations(route_table)),
    )
    logger.debug(
        "Classified %d segments into %d highway types and %d surface types",
        len(route_table),
        len(stats.highways),
        len(stats.surfaces),
    )
    return stats
