"""Style model captures the formatting options a definition may carry."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

HORIZONTAL_ALIGNMENTS = ("left", "right", "center", "justify")
VERTICAL_ALIGNMENTS = ("top", "middle", "bottom")
IMAGE_ALIGNMENTS = ("left", "center", "right")

# WordprocessingML spells a few alignment keywords differently.
_WORD_JUSTIFICATION = {"justify": "both"}
_WORD_VERTICAL_ALIGNMENT = {"middle": "center"}


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Run and paragraph formatting shared by text, links and paragraphs."""

    color: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    align: Optional[str] = None
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None


@dataclass(frozen=True, slots=True)
class CellStyle(TextStyle):
    """Text formatting plus the cell-only width, shading and vertical alignment."""

    width: Optional[int] = None
    background_color: Optional[str] = None
    vertical_align: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TableStyle:
    """Table-wide layout; shading and vertical alignment apply to every cell."""

    width: Optional[int] = None
    column_widths: Optional[Tuple[int, ...]] = None
    align: Optional[str] = None
    vertical_align: Optional[str] = None
    background_color: Optional[str] = None


def word_justification(align: str) -> str:
    """Return the ``w:jc`` value for a horizontal alignment."""
    return _WORD_JUSTIFICATION.get(align, align)


def word_vertical_alignment(align: str) -> str:
    """Return the ``w:vAlign`` value for a vertical alignment."""
    return _WORD_VERTICAL_ALIGNMENT.get(align, align)
