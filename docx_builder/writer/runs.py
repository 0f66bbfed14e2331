"""Emit text runs and hyperlinks."""
from __future__ import annotations

from typing import Optional, Union
from xml.etree import ElementTree as ET

from docx_builder.model.elements import Link, StyledText
from docx_builder.model.style_model import TextStyle
from docx_builder.utils.units import points_to_half_points
from docx_builder.utils.xml_utils import sub_element, xml_safe
from docx_builder.writer.context import PartContext


def append_run_properties(
    rpr: ET.Element,
    style: Optional[TextStyle],
    *,
    color: Optional[str] = None,
    underline: bool = False,
) -> ET.Element:
    """Fill a ``w:rPr`` block in schema order: b, i, color, sz, u.

    ``color`` and ``underline`` act as fallbacks when the style leaves them unset.
    """
    style = style or TextStyle()
    if style.bold:
        sub_element(rpr, "w:b")
    if style.italic:
        sub_element(rpr, "w:i")
    run_color = style.color or color
    if run_color:
        sub_element(rpr, "w:color", {"w:val": run_color})
    if style.font_size:
        sub_element(rpr, "w:sz", {"w:val": points_to_half_points(style.font_size)})
    if style.underline or underline:
        sub_element(rpr, "w:u", {"w:val": "single"})
    return rpr


def append_text(run: ET.Element, text: str) -> ET.Element:
    text_el = sub_element(run, "w:t", {"xml:space": "preserve"})
    text_el.text = xml_safe(text)
    return text_el


def emit_text(parent: ET.Element, node: Union[str, StyledText], default_style: Optional[TextStyle] = None) -> ET.Element:
    """Append one ``w:r``; unstyled input falls back to ``default_style`` as a whole."""
    if isinstance(node, str):
        text, style = node, default_style
    else:
        text, style = node.text, node.style or default_style

    run = sub_element(parent, "w:r")
    if style is not None:
        append_run_properties(sub_element(run, "w:rPr"), style)
    append_text(run, text)
    return run


def emit_link(parent: ET.Element, link: Link, ctx: PartContext) -> ET.Element:
    """Append a ``w:hyperlink`` backed by a new external relationship."""
    r_id = ctx.add_hyperlink(link.url)
    hyperlink = sub_element(parent, "w:hyperlink", {"r:id": r_id, "w:history": "1"})
    run = sub_element(hyperlink, "w:r")
    append_run_properties(
        sub_element(run, "w:rPr"),
        link.style,
        color=ctx.options.default_link_color,
        underline=True,
    )
    append_text(run, link.text)
    return hyperlink
