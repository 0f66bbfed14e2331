"""Emit paragraphs with mixed inline content."""
from __future__ import annotations

from xml.etree import ElementTree as ET

from docx_builder.model.elements import Image, Link, Paragraph, StyledText
from docx_builder.model.style_model import TextStyle, word_justification
from docx_builder.utils.logger import get_logger
from docx_builder.utils.units import line_spacing_to_units
from docx_builder.utils.xml_utils import sub_element
from docx_builder.writer.context import PartContext
from docx_builder.writer.image import emit_image_run
from docx_builder.writer.runs import append_run_properties, emit_link, emit_text

LOGGER = get_logger(__name__)


def append_paragraph_properties(
    paragraph: ET.Element,
    style: TextStyle,
    *,
    include_run_properties: bool = True,
) -> ET.Element:
    """Add ``w:pPr`` with spacing, justification and the paragraph-mark ``w:rPr``."""
    ppr = sub_element(paragraph, "w:pPr")
    if style.line_spacing:
        sub_element(ppr, "w:spacing", {"w:line": line_spacing_to_units(style.line_spacing), "w:lineRule": "auto"})
    if style.align:
        sub_element(ppr, "w:jc", {"w:val": word_justification(style.align)})
    if include_run_properties:
        append_run_properties(sub_element(ppr, "w:rPr"), style)
    return ppr


def emit_paragraph(parent: ET.Element, paragraph: Paragraph, ctx: PartContext) -> ET.Element:
    """Append a ``w:p``; the paragraph style is the default for unstyled text."""
    p = sub_element(parent, "w:p")
    if paragraph.style is not None:
        append_paragraph_properties(p, paragraph.style)

    for part in paragraph.content:
        if isinstance(part, (str, StyledText)):
            emit_text(p, part, paragraph.style)
        elif isinstance(part, Link):
            emit_link(p, part, ctx)
        elif isinstance(part, Image):
            if part.align:
                LOGGER.warning("Ignoring align=%r on an image inside a paragraph", part.align)
            emit_image_run(p, part, ctx)
        else:
            raise TypeError(f"Unsupported paragraph content: {type(part).__name__}")
    return p


def emit_text_paragraph(parent: ET.Element, node: StyledText) -> ET.Element:
    """Wrap a standalone text node in its own paragraph."""
    p = sub_element(parent, "w:p")
    style = node.style
    if style is not None and (style.align or style.line_spacing):
        append_paragraph_properties(p, style, include_run_properties=False)
    emit_text(p, node)
    return p
