"""Content nodes of a document definition.

The node set is closed: plain strings, :class:`StyledText`, :class:`Link`,
:class:`Image`, :class:`Paragraph` and :class:`Table`. Every node is frozen,
so resolving assets always builds a new tree instead of touching the
caller's definition.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from docx_builder.model.style_model import CellStyle, TableStyle, TextStyle


@dataclass(frozen=True, slots=True)
class StyledText:
    """A run of text with optional formatting."""

    text: str
    style: Optional[TextStyle] = None


@dataclass(frozen=True, slots=True)
class Link:
    """External hyperlink rendered as a single underlined run."""

    text: str
    url: str
    style: Optional[TextStyle] = None


@dataclass(frozen=True, slots=True)
class ImagePath:
    """Filesystem reference that must be loaded before emission."""

    path: str


ImageSource = Union[bytes, bytearray, memoryview, str, ImagePath]


@dataclass(frozen=True, slots=True)
class Image:
    """Inline picture; ``width``/``height`` are pixels."""

    source: ImageSource
    width: Optional[float] = None
    height: Optional[float] = None
    alt: Optional[str] = None
    align: Optional[str] = None

    @property
    def needs_loading(self) -> bool:
        return isinstance(self.source, ImagePath)


InlineNode = Union[str, StyledText, Link, Image]
CellNode = Union[str, StyledText, Link]


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Block of inline nodes sharing paragraph-level formatting."""

    content: Tuple[InlineNode, ...] = field(default_factory=tuple)
    style: Optional[TextStyle] = None


@dataclass(frozen=True, slots=True)
class TableCell:
    """Single table cell container."""

    content: Tuple[CellNode, ...] = field(default_factory=tuple)
    style: Optional[CellStyle] = None


@dataclass(frozen=True, slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: Tuple[TableCell, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class Table:
    """Bordered grid of cells."""

    rows: Tuple[TableRow, ...] = field(default_factory=tuple)
    style: Optional[TableStyle] = None


DocumentNode = Union[str, StyledText, Link, Image, Paragraph, Table]
