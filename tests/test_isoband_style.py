from __future__ import annotations

import unittest

from isoband_plot.defaults import STROKE_PT
from isoband_plot.errors import PlotDataError
from isoband_plot.levels import LevelEntry, LevelTable
from isoband_plot.rows import AestheticRow
from isoband_plot.style import TRANSPARENT, resolve_band_style, resolve_dash, resolve_line_style, to_rgba


def _table(*aesthetics: AestheticRow) -> LevelTable:
    return LevelTable(
        entries=tuple(
            LevelEntry(min_break=float(i), max_break=float(i + 1), aesthetic=a) for i, a in enumerate(aesthetics)
        )
    )


class ColourTests(unittest.TestCase):
    def test_named_and_hex_colours(self) -> None:
        self.assertEqual(to_rgba("black"), (0, 0, 0, 255))
        self.assertEqual(to_rgba("#ff8000"), (255, 128, 0, 255))
        self.assertEqual(to_rgba("#ff800080"), (255, 128, 0, 128))

    def test_numbered_grays(self) -> None:
        self.assertEqual(to_rgba("gray70"), (179, 179, 179, 255))
        self.assertEqual(to_rgba("grey0"), (0, 0, 0, 255))
        self.assertEqual(to_rgba("gray100"), (255, 255, 255, 255))

    def test_alpha_replaces_colour_alpha(self) -> None:
        self.assertEqual(to_rgba((10, 20, 30, 200), 0.5), (10, 20, 30, 128))
        self.assertEqual(to_rgba((10, 20, 30, 200), None), (10, 20, 30, 200))
        self.assertEqual(to_rgba((10, 20, 30), 2.0), (10, 20, 30, 255))

    def test_missing_colour_is_transparent(self) -> None:
        self.assertEqual(to_rgba(None, 0.5), TRANSPARENT)
        self.assertEqual(to_rgba("NA"), TRANSPARENT)

    def test_explicit_clear_colour_still_takes_alpha(self) -> None:
        self.assertEqual(to_rgba((0, 0, 0, 0), 0.5), (0, 0, 0, 128))
        self.assertEqual(to_rgba("#00000000", 0.5), (0, 0, 0, 128))
        self.assertEqual(to_rgba("transparent", 0.5), TRANSPARENT)

    def test_unknown_colour_raises(self) -> None:
        with self.assertRaises(PlotDataError):
            to_rgba("not-a-colour")
        with self.assertRaises(PlotDataError):
            to_rgba((300, 0, 0))


class DashTests(unittest.TestCase):
    def test_numbered_and_named_linetypes(self) -> None:
        self.assertEqual(resolve_dash(1), ())
        self.assertEqual(resolve_dash("solid"), ())
        self.assertEqual(resolve_dash(2), (4, 4))
        self.assertEqual(resolve_dash("dotdash"), (1, 3, 4, 3))
        self.assertIsNone(resolve_dash(0))
        self.assertIsNone(resolve_dash("blank"))

    def test_hex_string_linetype(self) -> None:
        self.assertEqual(resolve_dash("1F"), (1, 15))

    def test_bad_linetypes_raise(self) -> None:
        for bad in (7, -1, 1.5, "abc", "zz", True):
            with self.subTest(linetype=bad), self.assertRaises(PlotDataError):
                resolve_dash(bad)


class BandStyleTests(unittest.TestCase):
    def test_fill_alpha_wins_over_alpha(self) -> None:
        row = AestheticRow(colour="black", fill="red", alpha=0.2, fill_alpha=0.6)
        style = resolve_band_style(row, polygon_outline=True)
        self.assertEqual(style.fill, (255, 0, 0, 153))

    def test_alpha_used_when_fill_alpha_unset(self) -> None:
        row = AestheticRow(colour="black", fill="red", alpha=0.2)
        style = resolve_band_style(row, polygon_outline=True)
        self.assertEqual(style.fill, (255, 0, 0, 51))

    def test_outline_toggle(self) -> None:
        row = AestheticRow(colour="black", fill="blue", size=1.0)
        outlined = resolve_band_style(row, polygon_outline=True)
        bare = resolve_band_style(row, polygon_outline=False)
        self.assertEqual(outlined.stroke, outlined.fill)
        self.assertIsNone(bare.stroke)
        self.assertAlmostEqual(outlined.width, STROKE_PT)


class LineStyleTests(unittest.TestCase):
    def test_line_takes_style_from_next_band(self) -> None:
        table = _table(
            AestheticRow(colour="red", fill="gray70", alpha=0.1, size=0.5, linetype=1),
            AestheticRow(colour="blue", fill="gray70", alpha=0.8, size=2.0, linetype="dashed"),
        )
        style = resolve_line_style(table, 0)
        self.assertEqual(style.stroke, (0, 0, 255, 204))
        self.assertAlmostEqual(style.width, 2.0 * STROKE_PT)
        self.assertEqual(style.dash, (4, 4))

    def test_line_ignores_fill_alpha(self) -> None:
        table = _table(
            AestheticRow(colour="red", fill="gray70"),
            AestheticRow(colour="red", fill="gray70", alpha=None, fill_alpha=0.1),
        )
        self.assertEqual(resolve_line_style(table, 0).stroke, (255, 0, 0, 255))


if __name__ == "__main__":
    unittest.main()
