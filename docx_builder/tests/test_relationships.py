"""Tests for relationship registration and rendering."""
import unittest
from xml.etree import ElementTree as ET

from docx_builder.utils.xml_utils import Namespaces
from docx_builder.writer.relationships import (
    RELTYPE_FOOTER,
    RELTYPE_HEADER,
    RELTYPE_HYPERLINK,
    RELTYPE_IMAGE,
    RELTYPE_OFFICE_DOCUMENT,
    RelationshipRegistry,
    rels_part_name,
)


def _relationship_elements(xml: bytes):
    return ET.fromstring(xml).findall("rel:Relationship", Namespaces.RELS)


class RelationshipRegistryTest(unittest.TestCase):
    """Validate id minting and the rendered relationship parts."""

    def setUp(self) -> None:
        self.registry = RelationshipRegistry()

    def test_ids_increase_from_one(self) -> None:
        ids = [
            self.registry.add_header_part("header1.xml"),
            self.registry.add_footer_part("footer1.xml"),
            self.registry.add_hyperlink("https://example.com"),
            self.registry.add_image("image1.png"),
        ]
        self.assertEqual(ids, ["rId1", "rId2", "rId3", "rId4"])

    def test_render_lists_relationships_in_insertion_order(self) -> None:
        self.registry.add_hyperlink("https://example.com")
        self.registry.add_image("image1.png")
        self.registry.add_header_part("header1.xml")
        self.registry.add_footer_part("footer1.xml")

        elements = _relationship_elements(self.registry.render_part_relationships())

        self.assertEqual([el.get("Id") for el in elements], ["rId1", "rId2", "rId3", "rId4"])
        self.assertEqual(
            [el.get("Type") for el in elements],
            [RELTYPE_HYPERLINK, RELTYPE_IMAGE, RELTYPE_HEADER, RELTYPE_FOOTER],
        )
        self.assertEqual(
            [el.get("Target") for el in elements],
            ["https://example.com", "media/image1.png", "header1.xml", "footer1.xml"],
        )

    def test_only_hyperlinks_are_external(self) -> None:
        self.registry.add_hyperlink("https://example.com")
        self.registry.add_image("image1.png")

        link_el, image_el = _relationship_elements(self.registry.render_part_relationships())

        self.assertEqual(link_el.get("TargetMode"), "External")
        self.assertIsNone(image_el.get("TargetMode"))

    def test_repeated_urls_get_distinct_ids_by_default(self) -> None:
        first = self.registry.add_hyperlink("https://example.com")
        second = self.registry.add_hyperlink("https://example.com")

        self.assertNotEqual(first, second)
        self.assertEqual(len(_relationship_elements(self.registry.render_part_relationships())), 2)

    def test_dedupe_policy_reuses_hyperlink_ids(self) -> None:
        registry = RelationshipRegistry(dedupe_hyperlinks=True)
        first = registry.add_hyperlink("https://example.com")
        other = registry.add_hyperlink("https://example.org")
        again = registry.add_hyperlink("https://example.com")

        self.assertEqual(first, again)
        self.assertEqual(other, "rId2")
        self.assertEqual(len(registry.relationships), 2)

    def test_reset_restarts_numbering(self) -> None:
        self.registry.add_hyperlink("https://example.com")
        self.registry.add_image("image1.png")
        self.assertTrue(self.registry.has_any())

        self.registry.reset()

        self.assertFalse(self.registry.has_any())
        self.assertEqual(self.registry.add_image("image1.png"), "rId1")

    def test_find_returns_registered_relationship(self) -> None:
        r_id = self.registry.add_hyperlink("https://example.com")

        rel = self.registry.find(r_id)
        assert rel is not None
        self.assertTrue(rel.is_external)
        self.assertIsNone(self.registry.find("rId99"))

    def test_package_relationships_point_at_main_document(self) -> None:
        self.registry.add_hyperlink("https://example.com")

        elements = _relationship_elements(RelationshipRegistry.render_package_relationships())

        self.assertEqual(len(elements), 1)
        self.assertEqual(elements[0].get("Id"), "rId1")
        self.assertEqual(elements[0].get("Type"), RELTYPE_OFFICE_DOCUMENT)
        self.assertEqual(elements[0].get("Target"), "word/document.xml")

    def test_rels_part_name(self) -> None:
        self.assertEqual(rels_part_name("word/document.xml"), "word/_rels/document.xml.rels")
        self.assertEqual(rels_part_name("word/header1.xml"), "word/_rels/header1.xml.rels")
        self.assertEqual(rels_part_name(""), "_rels/.rels")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
