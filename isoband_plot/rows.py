from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


Color = Any


@dataclass(frozen=True)
class AestheticRow:
    colour: Color
    fill: Color
    alpha: float | None = None
    fill_alpha: float | None = None
    size: float = 0.5
    linetype: Any = 1

    @property
    def resolved_fill_alpha(self) -> float | None:
        """fill_alpha wins over alpha whenever it is set."""
        if self.fill_alpha is not None:
            return self.fill_alpha
        return self.alpha


@dataclass(frozen=True)
class RowSet:
    """Sample rows for one rendering group, stored column-wise."""

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    zmin: np.ndarray
    zmax: np.ndarray
    colour: tuple[Color, ...]
    fill: tuple[Color, ...]
    alpha: tuple[float | None, ...]
    fill_alpha: tuple[float | None, ...]
    size: tuple[float, ...]
    linetype: tuple[Any, ...]

    def __len__(self) -> int:
        return int(self.x.size)

    def aesthetic(self, index: int) -> AestheticRow:
        return AestheticRow(
            colour=self.colour[index],
            fill=self.fill[index],
            alpha=self.alpha[index],
            fill_alpha=self.fill_alpha[index],
            size=self.size[index],
            linetype=self.linetype[index],
        )
