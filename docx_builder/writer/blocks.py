"""Dispatch top-level content nodes to their emitters."""
from __future__ import annotations

from typing import Iterable
from xml.etree import ElementTree as ET

from docx_builder.model.elements import DocumentNode, Image, Link, Paragraph, StyledText, Table
from docx_builder.utils.xml_utils import sub_element
from docx_builder.writer.context import PartContext
from docx_builder.writer.image import emit_image
from docx_builder.writer.paragraph import emit_paragraph, emit_text_paragraph
from docx_builder.writer.runs import emit_link, emit_text
from docx_builder.writer.table import emit_table


def emit_block(parent: ET.Element, node: DocumentNode, ctx: PartContext) -> ET.Element:
    """Append the XML for one top-level node and return its outer element."""
    if isinstance(node, str):
        p = sub_element(parent, "w:p")
        emit_text(p, node)
        return p
    if isinstance(node, StyledText):
        return emit_text_paragraph(parent, node)
    if isinstance(node, Link):
        p = sub_element(parent, "w:p")
        emit_link(p, node, ctx)
        return p
    if isinstance(node, Paragraph):
        return emit_paragraph(parent, node, ctx)
    if isinstance(node, Table):
        return emit_table(parent, node, ctx)
    if isinstance(node, Image):
        return emit_image(parent, node, ctx)
    raise TypeError(f"Unsupported content node: {type(node).__name__}")


def emit_blocks(parent: ET.Element, nodes: Iterable[DocumentNode], ctx: PartContext) -> None:
    for node in nodes:
        emit_block(parent, node, ctx)
