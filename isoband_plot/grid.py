from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from isoband_plot.errors import NonFunctionalGridError
from isoband_plot.rows import RowSet


LOGGER = logging.getLogger(__name__)

# Two distinct values are enough to prove a conflict.
_MAX_DISTINCT = 2


@dataclass(frozen=True)
class ValueGrid:
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self.y.size), int(self.x.size))

    def value_at(self, x: float, y: float) -> float:
        xi = int(np.searchsorted(self.x, x))
        yi = int(np.searchsorted(self.y, y))
        if xi >= self.x.size or self.x[xi] != x or yi >= self.y.size or self.y[yi] != y:
            raise KeyError((x, y))
        return float(self.z[yi, xi])


def build_grid(rows: RowSet) -> ValueGrid:
    """Rebuild the dense ``z[y, x]`` matrix from scattered samples.

    Rows are grouped on ``(y, x)``; each group must reduce to a single ``z``.
    Repeated identical samples are fine (the upstream level organizer copies
    every grid cell once per band), a second distinct value is an error.
    Grid cells without any sample are left as NaN.
    """
    placed = np.isfinite(rows.x) & np.isfinite(rows.y)
    xs = rows.x[placed]
    ys = rows.y[placed]
    zs = rows.z[placed]
    x_axis = np.unique(xs)
    y_axis = np.unique(ys)

    cells: dict[tuple[float, float], set[float]] = {}
    for xv, yv, zv in zip(xs.tolist(), ys.tolist(), zs.tolist(), strict=True):
        seen = cells.setdefault((yv, xv), set())
        if len(seen) < _MAX_DISTINCT:
            seen.add(_key(zv))

    z = np.full((y_axis.size, x_axis.size), np.nan, dtype=np.float64)
    for (yv, xv), values in cells.items():
        if len(values) > 1:
            raise NonFunctionalGridError(
                f"contour requires single `z` at each combination of `x` and `y`; "
                f"found {sorted(values)} at x={xv!r}, y={yv!r}"
            )
        xi = int(np.searchsorted(x_axis, xv))
        yi = int(np.searchsorted(y_axis, yv))
        z[yi, xi] = next(iter(values))

    LOGGER.debug("built %dx%d grid from %d rows", y_axis.size, x_axis.size, len(rows))
    return ValueGrid(x=x_axis, y=y_axis, z=z)


def _key(value: float) -> float:
    # every NaN maps onto one shared object so a set sees them as a single value
    if np.isnan(value):
        return _NAN
    return value


_NAN = float("nan")
