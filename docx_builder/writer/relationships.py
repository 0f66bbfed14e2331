"""Build Open Packaging Convention relationship parts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from docx_builder.utils.logger import get_logger
from docx_builder.utils.xml_utils import PACKAGE_REL_NS, make_root, serialize, sub_element

LOGGER = get_logger(__name__)

WORD_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_OFFICE_DOCUMENT = f"{WORD_REL_NS}/officeDocument"
RELTYPE_IMAGE = f"{WORD_REL_NS}/image"
RELTYPE_HYPERLINK = f"{WORD_REL_NS}/hyperlink"
RELTYPE_HEADER = f"{WORD_REL_NS}/header"
RELTYPE_FOOTER = f"{WORD_REL_NS}/footer"

MAIN_DOCUMENT_PART = "word/document.xml"
PACKAGE_RELS_PART = "_rels/.rels"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    rel_type: str
    target: str
    is_external: bool = False


def rels_part_name(part_name: str) -> str:
    """Return the relationship part that belongs to ``part_name``.

    ``word/document.xml`` -> ``word/_rels/document.xml.rels``
    """
    folder, _, base = part_name.rpartition("/")
    if not folder:
        return f"_rels/{base}.rels"
    return f"{folder}/_rels/{base}.rels"


class RelationshipRegistry:
    """Mints ``rId<N>`` identifiers for one source part.

    Hyperlinks are external targets; images, headers and footers are parts
    inside the package addressed relative to the ``word`` folder.
    """

    def __init__(self, dedupe_hyperlinks: bool = False) -> None:
        self._dedupe_hyperlinks = dedupe_hyperlinks
        self._relationships: List[Relationship] = []
        self._hyperlink_ids: Dict[str, str] = {}
        self._next_rel_id = 1

    def add_hyperlink(self, url: str) -> str:
        if self._dedupe_hyperlinks and url in self._hyperlink_ids:
            return self._hyperlink_ids[url]
        r_id = self._add(RELTYPE_HYPERLINK, url, is_external=True)
        self._hyperlink_ids.setdefault(url, r_id)
        return r_id

    def add_image(self, filename: str) -> str:
        return self._add(RELTYPE_IMAGE, f"media/{filename}")

    def add_header_part(self, part_name: str) -> str:
        return self._add(RELTYPE_HEADER, part_name)

    def add_footer_part(self, part_name: str) -> str:
        return self._add(RELTYPE_FOOTER, part_name)

    def has_any(self) -> bool:
        return bool(self._relationships)

    @property
    def relationships(self) -> List[Relationship]:
        return list(self._relationships)

    def find(self, r_id: str) -> Optional[Relationship]:
        """Return a relationship by id if present."""
        for rel in self._relationships:
            if rel.r_id == r_id:
                return rel
        return None

    def reset(self) -> None:
        """Drop every relationship and restart numbering at ``rId1``."""
        self._relationships = []
        self._hyperlink_ids = {}
        self._next_rel_id = 1

    def render_part_relationships(self) -> bytes:
        """Serialize the registered relationships in insertion order."""
        root = make_root("Relationships", default_ns=PACKAGE_REL_NS)
        for rel in self._relationships:
            attrs = {"Id": rel.r_id, "Type": rel.rel_type, "Target": rel.target}
            if rel.is_external:
                attrs["TargetMode"] = "External"
            sub_element(root, "Relationship", attrs)
        return serialize(root)

    @staticmethod
    def render_package_relationships() -> bytes:
        """Serialize ``_rels/.rels``, which only points at the main document."""
        root = make_root("Relationships", default_ns=PACKAGE_REL_NS)
        sub_element(
            root,
            "Relationship",
            {"Id": "rId1", "Type": RELTYPE_OFFICE_DOCUMENT, "Target": MAIN_DOCUMENT_PART},
        )
        return serialize(root)

    def _add(self, rel_type: str, target: str, is_external: bool = False) -> str:
        r_id = f"rId{self._next_rel_id}"
        self._next_rel_id += 1
        self._relationships.append(Relationship(r_id=r_id, rel_type=rel_type, target=target, is_external=is_external))
        LOGGER.debug("Added relationship %s -> %s", r_id, target)
        return r_id
