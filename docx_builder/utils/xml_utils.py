"""Helper functions to build and serialize OpenXML parts."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from xml.etree import ElementTree as ET

WORD_MAIN_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
WP_NS = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
DRAWING_MAIN_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
PICTURE_NS = "http://schemas.openxmlformats.org/drawingml/2006/picture"

_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across writers and tests."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    DRAWING: Dict[str, str] = None  # type: ignore[assignment]
    CONTENT_TYPES: Dict[str, str] = None  # type: ignore[assignment]
    WORD_PART: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": WORD_MAIN_NS,
    "r": OFFICE_REL_NS,
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": PACKAGE_REL_NS,
}
Namespaces.DRAWING = {  # type: ignore[attr-defined]
    "wp": WP_NS,
    "a": DRAWING_MAIN_NS,
    "pic": PICTURE_NS,
}
Namespaces.CONTENT_TYPES = {  # type: ignore[attr-defined]
    "ct": CONTENT_TYPES_NS,
}
# Every body-like part (document, header, footer) declares this full set on its root.
Namespaces.WORD_PART = {  # type: ignore[attr-defined]
    "w": WORD_MAIN_NS,
    "r": OFFICE_REL_NS,
    "wp": WP_NS,
    "a": DRAWING_MAIN_NS,
    "pic": PICTURE_NS,
}


def make_root(tag: str, namespaces: Optional[Mapping[str, str]] = None, default_ns: Optional[str] = None) -> ET.Element:
    """Create a part root element carrying explicit namespace declarations.

    Element and attribute names are written with their literal prefixes
    (``w:p``, ``r:id``) so that every declared prefix appears on the root
    even when the part never uses it.
    """
    root = ET.Element(tag)
    if default_ns:
        root.set("xmlns", default_ns)
    for prefix, uri in (namespaces or {}).items():
        root.set(f"xmlns:{prefix}", uri)
    return root


def xml_safe(text: str) -> str:
    """Drop characters outside the XML 1.0 ``Char`` production (e.g. ``\\x01``)."""
    return _INVALID_XML_CHARS.sub("", text)


def sub_element(parent: ET.Element, tag: str, attrib: Optional[Mapping[str, object]] = None) -> ET.Element:
    """Append a child element, stringifying attribute values."""
    attributes = {key: xml_safe(str(value)) for key, value in (attrib or {}).items()}
    return ET.SubElement(parent, tag, attributes)


def serialize(root: ET.Element) -> bytes:
    """Serialize a part root to UTF-8 bytes with an XML declaration."""
    return ET.tostring(root, encoding="UTF-8", xml_declaration=True)
