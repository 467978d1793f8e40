from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from isoband_plot.errors import LevelMismatchError, PlotDataError
from isoband_plot.rows import AestheticRow, RowSet


@dataclass(frozen=True)
class LevelEntry:
    min_break: float
    max_break: float
    aesthetic: AestheticRow


@dataclass(frozen=True)
class LevelTable:
    """Bands in ascending order, each bound to the style row that draws it.

    Contour lines only exist between bands, so line ``i`` sits on the lower
    break of band ``i + 1`` and takes that band's style.
    """

    entries: tuple[LevelEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> LevelEntry:
        return self.entries[index]

    @property
    def min_breaks(self) -> np.ndarray:
        return np.asarray([e.min_break for e in self.entries], dtype=np.float64)

    @property
    def max_breaks(self) -> np.ndarray:
        return np.asarray([e.max_break for e in self.entries], dtype=np.float64)

    @property
    def interior_breaks(self) -> np.ndarray:
        return self.min_breaks[1:]

    @property
    def line_count(self) -> int:
        return max(0, len(self.entries) - 1)

    def band(self, index: int) -> AestheticRow:
        return self.entries[index].aesthetic

    def interior_line(self, index: int) -> AestheticRow:
        if index < 0 or index >= self.line_count:
            raise IndexError(f"interior line index out of range: {index}")
        return self.entries[index + 1].aesthetic


def build_level_table(rows: RowSet) -> LevelTable:
    if len(rows) == 0:
        raise PlotDataError("cannot index levels of an empty row set")

    zmin = np.unique(rows.zmin[np.isfinite(rows.zmin)])
    zmax = np.unique(rows.zmax[np.isfinite(rows.zmax)])
    if zmin.size == 0:
        raise PlotDataError("row set carries no finite zmin/zmax breaks")
    if zmin.size != zmax.size:
        raise LevelMismatchError(
            f"unique zmin and zmax breaks must pair up: got {zmin.size} zmin and {zmax.size} zmax values"
        )

    first_row: dict[float, int] = {}
    for i, value in enumerate(rows.zmin.tolist()):
        first_row.setdefault(value, i)

    entries = tuple(
        LevelEntry(min_break=float(lo), max_break=float(hi), aesthetic=rows.aesthetic(first_row[float(lo)]))
        for lo, hi in zip(zmin.tolist(), zmax.tolist(), strict=True)
    )
    return LevelTable(entries=entries)
