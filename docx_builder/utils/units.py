"""Unit conversion helpers for WordprocessingML and DrawingML measurements."""
from __future__ import annotations

import math

EMU_PER_PIXEL = 9525
HALF_POINTS_PER_POINT = 2
LINE_UNITS_PER_LINE = 240


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pixels_to_emu(value: float) -> int:
    """Convert screen pixels (96 dpi) to English Metric Units."""
    return _round_half_up(value * EMU_PER_PIXEL)


def points_to_half_points(value: float) -> int:
    """Convert a font size in points to the half-point unit used by ``w:sz``."""
    return _round_half_up(value * HALF_POINTS_PER_POINT)


def line_spacing_to_units(multiplier: float) -> int:
    """Convert a line spacing multiplier (1.0, 1.5, 2.0) to 240ths of a line."""
    return _round_half_up(multiplier * LINE_UNITS_PER_LINE)
