from __future__ import annotations

from dataclasses import dataclass
import logging

from isoband_plot.engine import BandGeometry, ContourEngine, LineGeometry
from isoband_plot.errors import PlotDataError
from isoband_plot.grid import ValueGrid
from isoband_plot.levels import LevelTable


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeometryBatches:
    bands: tuple[BandGeometry, ...]
    lines: tuple[LineGeometry, ...]


def compute_geometry(grid: ValueGrid, table: LevelTable, engine: ContourEngine) -> GeometryBatches:
    """Run the contour engine for every band and every interior break.

    Batches keep their positions even when empty; dropping happens after the
    panel transform, where emptiness is actually decided.
    """
    bands = list(engine.compute_bands(grid.x, grid.y, grid.z, table.min_breaks, table.max_breaks))
    if len(bands) != len(table):
        raise PlotDataError(f"contour engine returned {len(bands)} band batches for {len(table)} bands")

    breaks = table.interior_breaks
    lines = list(engine.compute_lines(grid.x, grid.y, grid.z, breaks)) if breaks.size else []
    if len(lines) != table.line_count:
        raise PlotDataError(f"contour engine returned {len(lines)} line batches for {table.line_count} breaks")

    LOGGER.debug("computed %d band and %d line batches", len(bands), len(lines))
    return GeometryBatches(bands=tuple(bands), lines=tuple(lines))
