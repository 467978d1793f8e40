from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from isoband_plot.engine import PathCoords
from isoband_plot.errors import TransformError


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def contains(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        return (x >= self.xmin) & (x <= self.xmax) & (y >= self.ymin) & (y <= self.ymax)


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float


class CoordTransform(Protocol):
    def transform(self, coords: PathCoords) -> PathCoords: ...


def compute_limits(x: np.ndarray, y: np.ndarray) -> DataLimits:
    finite = np.isfinite(x) & np.isfinite(y)
    if not np.any(finite):
        raise TransformError("cannot derive panel limits without finite points")
    vx = x[finite]
    vy = y[finite]
    return DataLimits(
        xmin=float(np.min(vx)),
        xmax=float(np.max(vx)),
        ymin=float(np.min(vy)),
        ymax=float(np.max(vy)),
    )


def build_transform(limits: DataLimits, width: int, height: int) -> PlotTransform:
    if width <= 1 or height <= 1:
        raise TransformError("panel viewport width/height must be > 1")
    if not limits.xmax > limits.xmin or not limits.ymax > limits.ymin:
        raise TransformError(f"panel limits have zero span: {limits}")
    sx = (width - 1) / (limits.xmax - limits.xmin)
    tx = -limits.xmin * sx
    sy = (height - 1) / (limits.ymax - limits.ymin)
    ty = -limits.ymin * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def map_to_panel(x: np.ndarray, y: np.ndarray, transform: PlotTransform, height: int) -> tuple[np.ndarray, np.ndarray]:
    px = x * transform.sx + transform.tx
    py = y * transform.sy + transform.ty
    py = (height - 1) - py
    return px, py


class PanelTransform:
    """Maps data coordinates onto a pixel panel with the y axis pointing down.

    With ``clip=True`` points outside the data limits are dropped, so geometry
    lying wholly off-panel comes back empty.
    """

    def __init__(self, limits: DataLimits, width: int, height: int, *, clip: bool = False) -> None:
        self._limits = limits
        self._height = height
        self._clip = clip
        self._transform = build_transform(limits, width, height)

    @classmethod
    def fit(cls, x: np.ndarray, y: np.ndarray, width: int, height: int, *, clip: bool = False) -> "PanelTransform":
        return cls(compute_limits(np.asarray(x), np.asarray(y)), width, height, clip=clip)

    def transform(self, coords: PathCoords) -> PathCoords:
        x = coords.x
        y = coords.y
        ids = coords.id
        if self._clip and not coords.is_empty:
            keep = self._limits.contains(x, y)
            x = x[keep]
            y = y[keep]
            ids = ids[keep]
        px, py = map_to_panel(x, y, self._transform, self._height)
        return PathCoords(x=px, y=py, id=ids)
