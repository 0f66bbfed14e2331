"""Emit bordered tables."""
from __future__ import annotations

from xml.etree import ElementTree as ET

from docx_builder.model.elements import Link, StyledText, Table, TableCell
from docx_builder.model.style_model import TableStyle, word_justification, word_vertical_alignment
from docx_builder.utils.xml_utils import sub_element
from docx_builder.writer.context import PartContext
from docx_builder.writer.runs import emit_link, emit_text

BORDER_SIDES = ("w:top", "w:left", "w:bottom", "w:right", "w:insideH", "w:insideV")
DEFAULT_BORDER = {"w:val": "single", "w:sz": "4", "w:space": "0", "w:color": "auto"}


def emit_table(parent: ET.Element, table: Table, ctx: PartContext) -> ET.Element:
    """Append a ``w:tbl``.

    Widths are twips and are written unchanged. Cell shading and vertical
    alignment fall back to the table style when the cell leaves them unset.
    """
    table_style = table.style or TableStyle()
    tbl = sub_element(parent, "w:tbl")

    tbl_pr = sub_element(tbl, "w:tblPr")
    if table_style.width:
        sub_element(tbl_pr, "w:tblW", {"w:w": table_style.width, "w:type": "dxa"})
    if table_style.align:
        sub_element(tbl_pr, "w:jc", {"w:val": word_justification(table_style.align)})
    borders = sub_element(tbl_pr, "w:tblBorders")
    for side in BORDER_SIDES:
        sub_element(borders, side, DEFAULT_BORDER)

    if table_style.column_widths:
        grid = sub_element(tbl, "w:tblGrid")
        for width in table_style.column_widths:
            sub_element(grid, "w:gridCol", {"w:w": width})

    for row in table.rows:
        tr = sub_element(tbl, "w:tr")
        for cell in row.cells:
            _emit_cell(tr, cell, table_style, ctx)
    return tbl


def _emit_cell(tr: ET.Element, cell: TableCell, table_style: TableStyle, ctx: PartContext) -> ET.Element:
    cell_style = cell.style
    tc = sub_element(tr, "w:tc")
    tc_pr = sub_element(tc, "w:tcPr")

    if cell_style is not None and cell_style.width:
        sub_element(tc_pr, "w:tcW", {"w:w": cell_style.width, "w:type": "dxa"})

    background = (cell_style.background_color if cell_style else None) or table_style.background_color
    if background:
        sub_element(tc_pr, "w:shd", {"w:val": "clear", "w:color": "auto", "w:fill": background})

    vertical_align = (cell_style.vertical_align if cell_style else None) or table_style.vertical_align
    if vertical_align:
        sub_element(tc_pr, "w:vAlign", {"w:val": word_vertical_alignment(vertical_align)})

    # Word requires at least one paragraph per cell.
    p = sub_element(tc, "w:p")
    if cell_style is not None and cell_style.align:
        ppr = sub_element(p, "w:pPr")
        sub_element(ppr, "w:jc", {"w:val": word_justification(cell_style.align)})

    for content in cell.content:
        if isinstance(content, (str, StyledText)):
            emit_text(p, content, cell_style)
        elif isinstance(content, Link):
            emit_link(p, content, ctx)
        else:
            raise TypeError(f"Unsupported table cell content: {type(content).__name__}")
    return tc
