from isoband_plot.api import density_bands, isobands
from isoband_plot.assemble import assemble_primitives
from isoband_plot.engine import BandGeometry, ContourEngine, ContourpyEngine, LineGeometry, PathCoords
from isoband_plot.errors import LevelMismatchError, NonFunctionalGridError, PlotDataError, TransformError
from isoband_plot.geometry import GeometryBatches, compute_geometry
from isoband_plot.grid import ValueGrid, build_grid
from isoband_plot.layer import IsobandsLayer, LayerParams
from isoband_plot.levels import LevelEntry, LevelTable, build_level_table
from isoband_plot.primitives import FilledPath, Primitive, StrokedPath
from isoband_plot.scales import CoordTransform, DataLimits, PanelTransform

__all__ = [
    "BandGeometry",
    "ContourEngine",
    "ContourpyEngine",
    "CoordTransform",
    "DataLimits",
    "FilledPath",
    "GeometryBatches",
    "IsobandsLayer",
    "LayerParams",
    "LevelEntry",
    "LevelMismatchError",
    "LevelTable",
    "LineGeometry",
    "NonFunctionalGridError",
    "PanelTransform",
    "PathCoords",
    "PlotDataError",
    "Primitive",
    "StrokedPath",
    "TransformError",
    "ValueGrid",
    "assemble_primitives",
    "build_grid",
    "build_level_table",
    "compute_geometry",
    "density_bands",
    "isobands",
]
