"""Tests for measurement conversions and alignment keyword mapping."""

import unittest

from docx_builder.model.style_model import word_justification, word_vertical_alignment
from docx_builder.utils.units import line_spacing_to_units, pixels_to_emu, points_to_half_points


class UnitConversionTest(unittest.TestCase):
    def test_pixels_to_emu(self):
        self.assertEqual(pixels_to_emu(1), 9525)
        self.assertEqual(pixels_to_emu(100), 952500)
        self.assertEqual(pixels_to_emu(0.5), 4763)

    def test_points_to_half_points(self):
        self.assertEqual(points_to_half_points(12), 24)
        self.assertEqual(points_to_half_points(10.5), 21)
        self.assertEqual(points_to_half_points(10.25), 21)

    def test_line_spacing(self):
        self.assertEqual(line_spacing_to_units(1), 240)
        self.assertEqual(line_spacing_to_units(1.5), 360)
        self.assertEqual(line_spacing_to_units(1.15), 276)


class AlignmentMappingTest(unittest.TestCase):
    def test_horizontal(self):
        self.assertEqual(word_justification("justify"), "both")
        for align in ("left", "right", "center"):
            self.assertEqual(word_justification(align), align)

    def test_vertical(self):
        self.assertEqual(word_vertical_alignment("middle"), "center")
        self.assertEqual(word_vertical_alignment("top"), "top")
        self.assertEqual(word_vertical_alignment("bottom"), "bottom")


if __name__ == "__main__":
    unittest.main()
