from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol, Sequence

import contourpy
import numpy as np


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathCoords:
    """Flat point list where consecutive points sharing an ``id`` form one path."""

    x: np.ndarray
    y: np.ndarray
    id: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0

    def paths(self) -> list[np.ndarray]:
        if self.is_empty:
            return []
        breaks = np.flatnonzero(np.diff(self.id) != 0) + 1
        starts = np.concatenate(([0], breaks))
        stops = np.concatenate((breaks, [self.x.size]))
        xy = np.column_stack((self.x, self.y))
        return [xy[a:b] for a, b in zip(starts.tolist(), stops.tolist(), strict=True)]

    @classmethod
    def empty(cls) -> "PathCoords":
        return cls(
            x=np.zeros(0, dtype=np.float64),
            y=np.zeros(0, dtype=np.float64),
            id=np.zeros(0, dtype=np.int64),
        )

    @classmethod
    def from_paths(cls, paths: Sequence[np.ndarray]) -> "PathCoords":
        kept = [np.asarray(p, dtype=np.float64).reshape(-1, 2) for p in paths]
        kept = [p for p in kept if p.shape[0] > 0]
        if not kept:
            return cls.empty()
        xy = np.concatenate(kept, axis=0)
        ids = np.concatenate([np.full(p.shape[0], i + 1, dtype=np.int64) for i, p in enumerate(kept)])
        return cls(x=xy[:, 0].copy(), y=xy[:, 1].copy(), id=ids)


# A band batch is a set of closed rings filled together; a line batch is a set of polylines.
BandGeometry = PathCoords
LineGeometry = PathCoords


class ContourEngine(Protocol):
    def compute_bands(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        mins: np.ndarray,
        maxs: np.ndarray,
    ) -> list[BandGeometry]: ...

    def compute_lines(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        breaks: np.ndarray,
    ) -> list[LineGeometry]: ...


class ContourpyEngine:
    """Marching-squares bands and isolines backed by contourpy."""

    def __init__(self, algorithm: str = "serial") -> None:
        self._algorithm = algorithm

    def compute_bands(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        mins: np.ndarray,
        maxs: np.ndarray,
    ) -> list[BandGeometry]:
        generator = self._generator(x, y, z)
        out: list[BandGeometry] = []
        for lo, hi in zip(np.asarray(mins).tolist(), np.asarray(maxs).tolist(), strict=True):
            if generator is None or not hi > lo:
                out.append(PathCoords.empty())
                continue
            # contourpy fills lo < z <= hi; nudge both breaks down one ulp to get lo <= z < hi
            points, offsets = generator.filled(np.nextafter(lo, -np.inf), np.nextafter(hi, -np.inf))
            rings: list[np.ndarray] = []
            for pts, offs in zip(points, offsets, strict=True):
                for a, b in zip(offs[:-1].tolist(), offs[1:].tolist(), strict=True):
                    rings.append(pts[a:b])
            out.append(PathCoords.from_paths(rings))
        return out

    def compute_lines(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray,
        breaks: np.ndarray,
    ) -> list[LineGeometry]:
        generator = self._generator(x, y, z)
        out: list[LineGeometry] = []
        for level in np.asarray(breaks).tolist():
            if generator is None:
                out.append(PathCoords.empty())
                continue
            out.append(PathCoords.from_paths(generator.lines(level)))
        return out

    def _generator(self, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> contourpy.ContourGenerator | None:
        if z.ndim != 2 or z.shape[0] < 2 or z.shape[1] < 2:
            LOGGER.debug("grid %s too small to contour", z.shape)
            return None
        return contourpy.contour_generator(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.ma.masked_invalid(z),
            name=self._algorithm,
            fill_type=contourpy.FillType.OuterOffset,
            line_type=contourpy.LineType.Separate,
        )
