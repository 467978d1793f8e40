from __future__ import annotations

import unittest

import numpy as np

from isoband_plot.assemble import assemble_primitives
from isoband_plot.engine import PathCoords
from isoband_plot.errors import PlotDataError
from isoband_plot.geometry import GeometryBatches, compute_geometry
from isoband_plot.grid import ValueGrid
from isoband_plot.levels import LevelEntry, LevelTable
from isoband_plot.primitives import FilledPath, StrokedPath
from isoband_plot.rows import AestheticRow
from isoband_plot.style import to_rgba


def _square(x0: float, y0: float, size: float = 1.0) -> np.ndarray:
    return np.asarray(
        [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]],
        dtype=np.float64,
    )


class StubEngine:
    """Returns fixed geometry and records the levels it was asked for."""

    def __init__(self, bands: list[PathCoords], lines: list[PathCoords]) -> None:
        self._bands = bands
        self._lines = lines
        self.band_calls: list[tuple[list[float], list[float]]] = []
        self.line_calls: list[list[float]] = []

    def compute_bands(self, x, y, z, mins, maxs) -> list[PathCoords]:
        self.band_calls.append((list(mins), list(maxs)))
        return list(self._bands)

    def compute_lines(self, x, y, z, breaks) -> list[PathCoords]:
        self.line_calls.append(list(breaks))
        return list(self._lines)


class IdentityTransform:
    def __init__(self) -> None:
        self.calls = 0

    def transform(self, coords: PathCoords) -> PathCoords:
        self.calls += 1
        return coords


class FailingTransform:
    def transform(self, coords: PathCoords) -> PathCoords:
        raise RuntimeError("panel has no extent")


def _table(n: int) -> LevelTable:
    colours = ["red", "green", "blue", "orange"]
    fills = ["gray10", "gray20", "gray30", "gray40"]
    alphas = [0.2, 0.4, 0.6, 0.8]
    return LevelTable(
        entries=tuple(
            LevelEntry(
                min_break=float(i),
                max_break=float(i + 1),
                aesthetic=AestheticRow(
                    colour=colours[i],
                    fill=fills[i],
                    alpha=alphas[i],
                    size=float(i + 1),
                    linetype=i + 1,
                ),
            )
            for i in range(n)
        )
    )


def _grid() -> ValueGrid:
    return ValueGrid(x=np.asarray([0.0, 1.0]), y=np.asarray([0.0, 1.0]), z=np.zeros((2, 2)))


class AssemblePrimitivesTests(unittest.TestCase):
    def test_fills_precede_strokes(self) -> None:
        table = _table(3)
        batches = GeometryBatches(
            bands=tuple(PathCoords.from_paths([_square(i, 0)]) for i in range(3)),
            lines=tuple(PathCoords.from_paths([_square(i, 0)[:2]]) for i in range(2)),
        )
        out = assemble_primitives(batches, table, IdentityTransform())
        kinds = [type(p) for p in out]
        self.assertEqual(kinds, [FilledPath, FilledPath, FilledPath, StrokedPath, StrokedPath])
        self.assertEqual([p.level for p in out], [0, 1, 2, 0, 1])

    def test_lines_are_styled_from_the_next_band(self) -> None:
        table = _table(3)
        batches = GeometryBatches(
            bands=(),
            lines=tuple(PathCoords.from_paths([_square(i, 0)[:2]]) for i in range(2)),
        )
        out = assemble_primitives(batches, table, IdentityTransform())
        self.assertEqual(out[0].stroke, to_rgba("green", 0.4))
        self.assertEqual(out[0].dash, (4, 4))
        self.assertEqual(out[1].stroke, to_rgba("blue", 0.6))
        self.assertEqual(out[1].dash, (1, 3))
        self.assertGreater(out[1].width, out[0].width)

    def test_empty_batches_are_skipped_without_shifting_styles(self) -> None:
        table = _table(3)
        batches = GeometryBatches(
            bands=(PathCoords.empty(), PathCoords.from_paths([_square(1, 0)]), PathCoords.from_paths([_square(2, 0)])),
            lines=(PathCoords.empty(), PathCoords.from_paths([_square(2, 0)[:2]])),
        )
        out = assemble_primitives(batches, table, IdentityTransform())
        fills = [p for p in out if isinstance(p, FilledPath)]
        strokes = [p for p in out if isinstance(p, StrokedPath)]
        self.assertEqual([p.fill for p in fills], [to_rgba("gray20", 0.4), to_rgba("gray30", 0.6)])
        self.assertEqual(len(strokes), 1)
        self.assertEqual(strokes[0].stroke, to_rgba("blue", 0.6))

    def test_outline_toggle_applies_to_every_fill(self) -> None:
        table = _table(2)
        batches = GeometryBatches(
            bands=tuple(PathCoords.from_paths([_square(i, 0)]) for i in range(2)),
            lines=(),
        )
        outlined = assemble_primitives(batches, table, IdentityTransform(), polygon_outline=True)
        bare = assemble_primitives(batches, table, IdentityTransform(), polygon_outline=False)
        self.assertTrue(all(p.stroke == p.fill for p in outlined))
        self.assertTrue(all(p.stroke is None for p in bare))

    def test_transform_runs_once_per_batch(self) -> None:
        table = _table(2)
        batches = GeometryBatches(
            bands=tuple(PathCoords.from_paths([_square(i, 0)]) for i in range(2)),
            lines=(PathCoords.from_paths([_square(0, 0)[:2]]),),
        )
        transform = IdentityTransform()
        assemble_primitives(batches, table, transform)
        self.assertEqual(transform.calls, 3)

    def test_transform_failure_propagates(self) -> None:
        batches = GeometryBatches(bands=(PathCoords.from_paths([_square(0, 0)]),), lines=())
        with self.assertRaises(RuntimeError):
            assemble_primitives(batches, _table(1), FailingTransform())

    def test_rings_keep_their_grouping(self) -> None:
        table = _table(1)
        batches = GeometryBatches(bands=(PathCoords.from_paths([_square(0, 0, 4.0), _square(1, 1)]),), lines=())
        (band,) = assemble_primitives(batches, table, IdentityTransform())
        self.assertEqual(len(band.rings), 2)
        self.assertEqual(band.rings[1].shape, (5, 2))


class ComputeGeometryTests(unittest.TestCase):
    def test_engine_receives_band_and_interior_breaks(self) -> None:
        engine = StubEngine(bands=[PathCoords.empty()] * 3, lines=[PathCoords.empty()] * 2)
        batches = compute_geometry(_grid(), _table(3), engine)
        self.assertEqual(engine.band_calls, [([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])])
        self.assertEqual(engine.line_calls, [[1.0, 2.0]])
        self.assertEqual((len(batches.bands), len(batches.lines)), (3, 2))

    def test_single_band_skips_line_computation(self) -> None:
        engine = StubEngine(bands=[PathCoords.empty()], lines=[])
        batches = compute_geometry(_grid(), _table(1), engine)
        self.assertEqual(engine.line_calls, [])
        self.assertEqual(batches.lines, ())

    def test_misaligned_engine_output_raises(self) -> None:
        engine = StubEngine(bands=[PathCoords.empty()] * 2, lines=[PathCoords.empty()] * 2)
        with self.assertRaises(PlotDataError):
            compute_geometry(_grid(), _table(3), engine)
        engine = StubEngine(bands=[PathCoords.empty()] * 3, lines=[PathCoords.empty()])
        with self.assertRaises(PlotDataError):
            compute_geometry(_grid(), _table(3), engine)


if __name__ == "__main__":
    unittest.main()
