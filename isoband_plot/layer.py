from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

import numpy as np

from isoband_plot.adapters import normalize_rows
from isoband_plot.assemble import assemble_primitives
from isoband_plot.defaults import DEFAULT_POLYGON_OUTLINE, DEFAULT_POSITION, STAT_ISOLEVELS, STROKE_PT
from isoband_plot.engine import ContourEngine, ContourpyEngine, PathCoords
from isoband_plot.geometry import compute_geometry
from isoband_plot.grid import build_grid
from isoband_plot.levels import build_level_table
from isoband_plot.primitives import FilledPath, Primitive
from isoband_plot.rows import AestheticRow
from isoband_plot.scales import CoordTransform
from isoband_plot.style import to_rgba


LOGGER = logging.getLogger(__name__)

_KEY_SQUARE = np.asarray([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]], dtype=np.float64)


@dataclass(frozen=True)
class LayerParams:
    """Layer settings handed through to the host; only ``polygon_outline`` and ``na_rm`` are read here."""

    stat: str = STAT_ISOLEVELS
    position: str = DEFAULT_POSITION
    bins: int | None = None
    binwidth: float | None = None
    breaks: Any = None
    polygon_outline: bool = DEFAULT_POLYGON_OUTLINE
    na_rm: bool = False
    show_legend: bool | None = None
    inherit_aes: bool = True
    mapping: dict[str, Any] | None = None
    data: Any = None
    style_overrides: dict[str, Any] = field(default_factory=dict)


class IsobandsLayer:
    """Draws filled isobands with isolines on the interior level breaks."""

    def __init__(self, params: LayerParams | None = None, *, engine: ContourEngine | None = None) -> None:
        self.params = params or LayerParams()
        self._engine: ContourEngine = engine or ContourpyEngine()

    @property
    def engine(self) -> ContourEngine:
        return self._engine

    def draw_group(self, data: Any, transform: CoordTransform) -> list[Primitive]:
        rows = normalize_rows(data, overrides=self.params.style_overrides, na_rm=self.params.na_rm)
        grid = build_grid(rows)
        table = build_level_table(rows)
        batches = compute_geometry(grid, table, self._engine)
        primitives = assemble_primitives(
            batches,
            table,
            transform,
            polygon_outline=self.params.polygon_outline,
        )
        LOGGER.debug(
            "drew %d primitives for %d bands on a %dx%d grid",
            len(primitives),
            len(table),
            grid.shape[0],
            grid.shape[1],
        )
        return primitives

    def draw_key(self, aesthetic: AestheticRow) -> FilledPath:
        """Legend swatch: a unit square filled with ``fill`` at ``alpha``, outlined in opaque ``colour``.

        The key ignores ``fill_alpha``.
        """
        return FilledPath(
            coords=PathCoords.from_paths([_KEY_SQUARE]),
            fill=to_rgba(aesthetic.fill, aesthetic.alpha),
            stroke=to_rgba(aesthetic.colour),
            width=float(aesthetic.size) * STROKE_PT,
            level=0,
        )
