from __future__ import annotations

from typing import Any


# Points per millimetre; stroke sizes are given in mm like the rest of the layer aesthetics.
STROKE_PT = 72.27 / 25.4

DEFAULT_COLOUR = "black"
DEFAULT_SIZE = 0.5
DEFAULT_LINETYPE = 1
DEFAULT_ALPHA = None
DEFAULT_FILL = "gray70"
DEFAULT_FILL_ALPHA = None

DEFAULT_POLYGON_OUTLINE = True

STAT_ISOLEVELS = "isolevels"
STAT_DENSITYGRID = "densitygrid"
DEFAULT_POSITION = "identity"

REQUIRED_COLUMNS = ("x", "y", "z")
LEVEL_COLUMNS = ("zmin", "zmax")
AESTHETIC_COLUMNS = ("colour", "fill", "alpha", "fill_alpha", "size", "linetype")


def default_aesthetics() -> dict[str, Any]:
    return {
        "colour": DEFAULT_COLOUR,
        "fill": DEFAULT_FILL,
        "alpha": DEFAULT_ALPHA,
        "fill_alpha": DEFAULT_FILL_ALPHA,
        "size": DEFAULT_SIZE,
        "linetype": DEFAULT_LINETYPE,
    }
