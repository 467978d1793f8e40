from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import re

from PIL import ImageColor

from isoband_plot.defaults import STROKE_PT
from isoband_plot.errors import PlotDataError
from isoband_plot.levels import LevelTable
from isoband_plot.rows import AestheticRow


RGBA = tuple[int, int, int, int]
Dash = tuple[int, ...]

TRANSPARENT: RGBA = (0, 0, 0, 0)

SOLID: Dash = ()

_NAMED_LINETYPES: dict[str, Dash | None] = {
    "blank": None,
    "solid": SOLID,
    "dashed": (4, 4),
    "dotted": (1, 3),
    "dotdash": (1, 3, 4, 3),
    "longdash": (7, 3),
    "twodash": (2, 2, 6, 2),
}
_NUMBERED_LINETYPES = ("blank", "solid", "dashed", "dotted", "dotdash", "longdash", "twodash")
_GRAY_RE = re.compile(r"^gr[ae]y(\d{1,3})$")
_HEX_DASH_RE = re.compile(r"^[0-9a-fA-F]{2,8}$")
_MISSING_COLOURS = ("", "na", "none", "transparent")


@dataclass(frozen=True)
class BandStyle:
    fill: RGBA
    stroke: RGBA | None
    width: float


@dataclass(frozen=True)
class LineStyle:
    stroke: RGBA
    width: float
    dash: Dash | None


def to_rgba(color: Any, alpha: float | None = None) -> RGBA:
    """Resolve a colour spec to 0-255 RGBA; a set ``alpha`` replaces the colour's own."""
    if color is None:
        return TRANSPARENT
    if isinstance(color, str):
        if color.strip().lower() in _MISSING_COLOURS:
            return TRANSPARENT
        rgba = _parse_color_string(color)
    elif isinstance(color, (tuple, list)) and len(color) in (3, 4):
        channels = tuple(int(c) for c in color)
        if any(c < 0 or c > 255 for c in channels):
            raise PlotDataError(f"colour channels must be within 0..255: {color!r}")
        rgba = channels if len(channels) == 4 else (*channels, 255)
    else:
        raise PlotDataError(f"unsupported colour value: {color!r}")

    if alpha is None:
        return rgba  # type: ignore[return-value]
    a = int(round(max(0.0, min(1.0, float(alpha))) * 255))
    return (rgba[0], rgba[1], rgba[2], a)


def resolve_dash(linetype: Any) -> Dash | None:
    """Map a linetype to on/off segment lengths in line-width units.

    ``()`` is a solid line and ``None`` draws nothing.
    """
    if isinstance(linetype, bool):
        raise PlotDataError(f"unsupported linetype: {linetype!r}")
    if isinstance(linetype, (int, float)):
        if linetype != int(linetype):
            raise PlotDataError(f"unsupported linetype: {linetype!r}")
        index = int(linetype)
        if index < 0 or index >= len(_NUMBERED_LINETYPES):
            raise PlotDataError(f"unsupported linetype: {linetype!r}")
        return _NAMED_LINETYPES[_NUMBERED_LINETYPES[index]]
    if isinstance(linetype, str):
        key = linetype.strip().lower()
        if key in _NAMED_LINETYPES:
            return _NAMED_LINETYPES[key]
        if _HEX_DASH_RE.match(key) and len(key) % 2 == 0:
            return tuple(int(ch, 16) for ch in key)
    raise PlotDataError(f"unsupported linetype: {linetype!r}")


def resolve_band_style(aesthetic: AestheticRow, *, polygon_outline: bool) -> BandStyle:
    fill = to_rgba(aesthetic.fill, aesthetic.resolved_fill_alpha)
    stroke = fill if polygon_outline else None
    return BandStyle(fill=fill, stroke=stroke, width=float(aesthetic.size) * STROKE_PT)


def resolve_line_style(table: LevelTable, index: int) -> LineStyle:
    aesthetic = table.interior_line(index)
    return LineStyle(
        stroke=to_rgba(aesthetic.colour, aesthetic.alpha),
        width=float(aesthetic.size) * STROKE_PT,
        dash=resolve_dash(aesthetic.linetype),
    )


def _parse_color_string(color: str) -> RGBA:
    text = color.strip().lower()
    gray = _GRAY_RE.match(text)
    if gray is not None:
        level = int(gray.group(1))
        if level > 100:
            raise PlotDataError(f"unknown colour: {color!r}")
        v = int(level * 255 / 100 + 0.5)
        return (v, v, v, 255)
    try:
        rgb = ImageColor.getcolor(text, "RGBA")
    except ValueError as exc:
        raise PlotDataError(f"unknown colour: {color!r}") from exc
    return (int(rgb[0]), int(rgb[1]), int(rgb[2]), int(rgb[3]))
