from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from isoband_plot.engine import PathCoords
from isoband_plot.style import RGBA, Dash


@dataclass(frozen=True)
class FilledPath:
    """One band: every ring is filled together with an even-odd rule."""

    coords: PathCoords
    fill: RGBA
    stroke: RGBA | None
    width: float
    level: int

    @property
    def rings(self) -> list[np.ndarray]:
        return self.coords.paths()


@dataclass(frozen=True)
class StrokedPath:
    coords: PathCoords
    stroke: RGBA
    width: float
    dash: Dash | None
    level: int

    @property
    def polylines(self) -> list[np.ndarray]:
        return self.coords.paths()


Primitive = Union[FilledPath, StrokedPath]
