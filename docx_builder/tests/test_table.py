import unittest
from xml.etree import ElementTree as ET

from docx_builder.model.elements import Image, Link, StyledText, Table, TableCell, TableRow
from docx_builder.model.style_model import CellStyle, TableStyle, TextStyle
from docx_builder.utils.xml_utils import WORD_MAIN_NS, Namespaces, make_root, serialize
from docx_builder.writer.context import PartContext
from docx_builder.writer.media_registry import MediaRegistry
from docx_builder.writer.relationships import RelationshipRegistry
from docx_builder.writer.table import BORDER_SIDES, emit_table

NS = Namespaces.WORD


def w(name: str) -> str:
    return f"{{{WORD_MAIN_NS}}}{name}"


class EmitTableTest(unittest.TestCase):
    def setUp(self):
        self.ctx = PartContext(part_name="word/document.xml", media=MediaRegistry(), relationships=RelationshipRegistry())

    def _emit(self, table: Table) -> ET.Element:
        root = make_root("w:body", Namespaces.WORD_PART)
        emit_table(root, table, self.ctx)
        return ET.fromstring(serialize(root)).find("w:tbl", NS)

    def test_table_properties_and_grid(self):
        table = Table(
            rows=(TableRow(cells=(TableCell(("a",)), TableCell(("b",)))),),
            style=TableStyle(width=7000, column_widths=(3000, 4000), align="justify"),
        )
        tbl = self._emit(table)

        tbl_pr = tbl.find("w:tblPr", NS)
        tbl_w = tbl_pr.find("w:tblW", NS)
        self.assertEqual((tbl_w.get(w("w")), tbl_w.get(w("type"))), ("7000", "dxa"))
        self.assertEqual(tbl_pr.find("w:jc", NS).get(w("val")), "both")

        borders = tbl_pr.find("w:tblBorders", NS)
        self.assertEqual(len(borders), len(BORDER_SIDES))
        for border in borders:
            self.assertEqual(border.get(w("val")), "single")
            self.assertEqual(border.get(w("sz")), "4")

        self.assertEqual([col.get(w("w")) for col in tbl.findall("w:tblGrid/w:gridCol", NS)], ["3000", "4000"])
        self.assertEqual(len(tbl.findall("w:tr/w:tc", NS)), 2)

    def test_minimal_table_has_borders_only(self):
        tbl = self._emit(Table(rows=(TableRow(cells=(TableCell(),)),)))

        tbl_pr = tbl.find("w:tblPr", NS)
        self.assertEqual([child.tag for child in tbl_pr], [w("tblBorders")])
        self.assertIsNone(tbl.find("w:tblGrid", NS))
        # Empty cells still carry one paragraph.
        self.assertEqual(len(tbl.findall("w:tr/w:tc/w:p", NS)), 1)

    def test_cell_style_overrides_table_style(self):
        table = Table(
            rows=(
                TableRow(
                    cells=(
                        TableCell(("inherits",)),
                        TableCell(("own",), CellStyle(background_color="FFFF00", vertical_align="bottom")),
                    )
                ),
            ),
            style=TableStyle(background_color="EEEEEE", vertical_align="middle"),
        )
        first, second = self._emit(table).findall("w:tr/w:tc", NS)

        self.assertEqual(first.find("w:tcPr/w:shd", NS).get(w("fill")), "EEEEEE")
        self.assertEqual(first.find("w:tcPr/w:vAlign", NS).get(w("val")), "center")
        self.assertEqual(second.find("w:tcPr/w:shd", NS).get(w("fill")), "FFFF00")
        self.assertEqual(second.find("w:tcPr/w:vAlign", NS).get(w("val")), "bottom")

    def test_cell_width_alignment_and_text_style(self):
        cell = TableCell(
            ("Total", StyledText("42", TextStyle(italic=True))),
            CellStyle(width=2500, align="right", bold=True, font_size=11),
        )
        tc = self._emit(Table(rows=(TableRow(cells=(cell,)),))).find("w:tr/w:tc", NS)

        tc_w = tc.find("w:tcPr/w:tcW", NS)
        self.assertEqual((tc_w.get(w("w")), tc_w.get(w("type"))), ("2500", "dxa"))
        self.assertEqual(tc.find("w:p/w:pPr/w:jc", NS).get(w("val")), "right")

        plain_run, styled_run = tc.findall("w:p/w:r", NS)
        self.assertIsNotNone(plain_run.find("w:rPr/w:b", NS))
        self.assertEqual(plain_run.find("w:rPr/w:sz", NS).get(w("val")), "22")
        self.assertIsNone(styled_run.find("w:rPr/w:b", NS))
        self.assertIsNotNone(styled_run.find("w:rPr/w:i", NS))

    def test_cell_link_registers_relationship(self):
        cell = TableCell((Link("site", "https://example.com"),))
        tc = self._emit(Table(rows=(TableRow(cells=(cell,)),))).find("w:tr/w:tc", NS)

        self.assertIsNotNone(tc.find("w:p/w:hyperlink", NS))
        self.assertEqual(self.ctx.relationships.find("rId1").target, "https://example.com")

    def test_image_in_cell_is_rejected(self):
        cell = TableCell((Image(b"\x89PNG"),))
        with self.assertRaises(TypeError):
            self._emit(Table(rows=(TableRow(cells=(cell,)),)))


if __name__ == "__main__":
    unittest.main()
