from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when layer input cannot be turned into drawable contours."""


class NonFunctionalGridError(PlotDataError):
    """Raised when some (x, y) pair carries more than one distinct z value."""


class LevelMismatchError(PlotDataError):
    """Raised when the unique zmin and zmax breaks do not pair up into bands."""


class TransformError(PlotDataError):
    """Raised when a panel transform cannot map geometry into device space."""
