from __future__ import annotations

import logging

from isoband_plot.geometry import GeometryBatches
from isoband_plot.levels import LevelTable
from isoband_plot.primitives import FilledPath, Primitive, StrokedPath
from isoband_plot.scales import CoordTransform
from isoband_plot.style import resolve_band_style, resolve_line_style


LOGGER = logging.getLogger(__name__)


def assemble_primitives(
    batches: GeometryBatches,
    table: LevelTable,
    transform: CoordTransform,
    *,
    polygon_outline: bool = True,
) -> list[Primitive]:
    """Build fills for every visible band, then strokes for every visible line.

    Strokes always come after fills so level lines paint on top. Batches that
    transform to nothing are skipped without shifting the style of later ones.
    """
    fills: list[Primitive] = []
    for i, band in enumerate(batches.bands):
        coords = transform.transform(band)
        if coords.is_empty:
            LOGGER.debug("band %d is empty after transform; skipped", i)
            continue
        style = resolve_band_style(table.band(i), polygon_outline=polygon_outline)
        fills.append(FilledPath(coords=coords, fill=style.fill, stroke=style.stroke, width=style.width, level=i))

    strokes: list[Primitive] = []
    for i, line in enumerate(batches.lines):
        coords = transform.transform(line)
        if coords.is_empty:
            LOGGER.debug("line %d is empty after transform; skipped", i)
            continue
        style = resolve_line_style(table, i)
        strokes.append(StrokedPath(coords=coords, stroke=style.stroke, width=style.width, dash=style.dash, level=i))

    return fills + strokes
