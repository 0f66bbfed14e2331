"""Aggregate definition combining body content with header and footer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from docx_builder.model.elements import DocumentNode, Image, Paragraph, Table


@dataclass(frozen=True, slots=True)
class HeaderFooterDefinition:
    """Content repeated at the top or bottom of every page."""

    content: Tuple[DocumentNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class DocumentDefinition:
    """Complete structure used to build a DOCX package."""

    content: Tuple[DocumentNode, ...] = field(default_factory=tuple)
    header: Optional[HeaderFooterDefinition] = None
    footer: Optional[HeaderFooterDefinition] = None

    def iter_images(self) -> Iterator[Image]:
        """Yield every image node, header first, then body, then footer."""
        if self.header is not None:
            yield from _images_in(self.header.content)
        yield from _images_in(self.content)
        if self.footer is not None:
            yield from _images_in(self.footer.content)


def _images_in(nodes: Tuple[DocumentNode, ...]) -> Iterator[Image]:
    for node in nodes:
        if isinstance(node, Image):
            yield node
        elif isinstance(node, Paragraph):
            yield from (child for child in node.content if isinstance(child, Image))
        elif isinstance(node, Table):
            for row in node.rows:
                for cell in row.cells:
                    yield from (child for child in cell.content if isinstance(child, Image))
