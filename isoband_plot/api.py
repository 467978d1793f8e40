from __future__ import annotations

from typing import Any

from isoband_plot.defaults import DEFAULT_POLYGON_OUTLINE, DEFAULT_POSITION, STAT_DENSITYGRID, STAT_ISOLEVELS
from isoband_plot.engine import ContourEngine
from isoband_plot.layer import IsobandsLayer, LayerParams


def isobands(
    mapping: dict[str, Any] | None = None,
    data: Any = None,
    *,
    stat: str = STAT_ISOLEVELS,
    position: str = DEFAULT_POSITION,
    bins: int | None = None,
    binwidth: float | None = None,
    breaks: Any = None,
    polygon_outline: bool = DEFAULT_POLYGON_OUTLINE,
    na_rm: bool = False,
    show_legend: bool | None = None,
    inherit_aes: bool = True,
    engine: ContourEngine | None = None,
    **style: Any,
) -> IsobandsLayer:
    """Isoband and isoline layer over pre-binned ``(x, y, z, zmin, zmax)`` rows.

    Set ``polygon_outline=False`` when filling with alpha transparency; the
    same-colour outlines otherwise darken the seams between bands.
    """
    params = LayerParams(
        stat=stat,
        position=position,
        bins=bins,
        binwidth=binwidth,
        breaks=breaks,
        polygon_outline=polygon_outline,
        na_rm=na_rm,
        show_legend=show_legend,
        inherit_aes=inherit_aes,
        mapping=mapping,
        data=data,
        style_overrides=dict(style),
    )
    return IsobandsLayer(params, engine=engine)


def density_bands(
    mapping: dict[str, Any] | None = None,
    data: Any = None,
    *,
    stat: str = STAT_DENSITYGRID,
    position: str = DEFAULT_POSITION,
    bins: int | None = None,
    binwidth: float | None = None,
    breaks: Any = None,
    polygon_outline: bool = DEFAULT_POLYGON_OUTLINE,
    na_rm: bool = False,
    show_legend: bool | None = None,
    inherit_aes: bool = True,
    engine: ContourEngine | None = None,
    **style: Any,
) -> IsobandsLayer:
    return isobands(
        mapping,
        data,
        stat=stat,
        position=position,
        bins=bins,
        binwidth=binwidth,
        breaks=breaks,
        polygon_outline=polygon_outline,
        na_rm=na_rm,
        show_legend=show_legend,
        inherit_aes=inherit_aes,
        engine=engine,
        **style,
    )
