"""Assemble complete XML parts of the package."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from docx_builder.model.elements import DocumentNode
from docx_builder.utils.logger import get_logger
from docx_builder.utils.xml_utils import CONTENT_TYPES_NS, Namespaces, make_root, serialize, sub_element
from docx_builder.writer.blocks import emit_blocks
from docx_builder.writer.context import PartContext
from docx_builder.writer.media_registry import media_type_for
from docx_builder.writer.relationships import MAIN_DOCUMENT_PART

LOGGER = get_logger(__name__)

CONTENT_TYPES_PART = "[Content_Types].xml"
DOCUMENT_PART = MAIN_DOCUMENT_PART
HEADER_PART = "word/header1.xml"
FOOTER_PART = "word/footer1.xml"

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOCUMENT_CONTENT_TYPE = f"{DOCX_MIME_TYPE}.main+xml"
HEADER_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"
FOOTER_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml"

DEFAULT_CONTENT_TYPES: Tuple[Tuple[str, str], ...] = (
    ("rels", "application/vnd.openxmlformats-package.relationships+xml"),
    ("xml", "application/xml"),
    ("png", "image/png"),
    ("jpg", "image/jpeg"),
    ("jpeg", "image/jpeg"),
    ("gif", "image/gif"),
    ("bmp", "image/bmp"),
)


def build_document_part(
    content: Iterable[DocumentNode],
    ctx: PartContext,
    header_rel_id: Optional[str] = None,
    footer_rel_id: Optional[str] = None,
) -> bytes:
    """Build ``word/document.xml`` ending with the mandatory ``w:sectPr``."""
    root = make_root("w:document", Namespaces.WORD_PART)
    body = sub_element(root, "w:body")
    emit_blocks(body, content, ctx)

    sect_pr = sub_element(body, "w:sectPr")
    if header_rel_id:
        sub_element(sect_pr, "w:headerReference", {"w:type": "default", "r:id": header_rel_id})
    if footer_rel_id:
        sub_element(sect_pr, "w:footerReference", {"w:type": "default", "r:id": footer_rel_id})

    LOGGER.debug("Built %s with %d body elements", ctx.part_name, len(body) - 1)
    return serialize(root)


def build_header_part(content: Iterable[DocumentNode], ctx: PartContext) -> bytes:
    """Build ``word/header1.xml``."""
    return _build_header_footer("w:hdr", content, ctx)


def build_footer_part(content: Iterable[DocumentNode], ctx: PartContext) -> bytes:
    """Build ``word/footer1.xml``."""
    return _build_header_footer("w:ftr", content, ctx)


def _build_header_footer(tag: str, content: Iterable[DocumentNode], ctx: PartContext) -> bytes:
    root = make_root(tag, Namespaces.WORD_PART)
    emit_blocks(root, content, ctx)
    LOGGER.debug("Built %s with %d elements", ctx.part_name, len(root))
    return serialize(root)


def build_content_types(
    media_extensions: Iterable[str] = (),
    has_header: bool = False,
    has_footer: bool = False,
) -> bytes:
    """Build ``[Content_Types].xml``.

    Extensions outside the fixed defaults (e.g. ``webp`` from a data URI)
    get a guessed MIME type so every media part stays addressable.
    """
    root = make_root("Types", default_ns=CONTENT_TYPES_NS)
    declared = set()
    for extension, content_type in DEFAULT_CONTENT_TYPES:
        sub_element(root, "Default", {"Extension": extension, "ContentType": content_type})
        declared.add(extension)
    for extension in media_extensions:
        if extension not in declared:
            sub_element(root, "Default", {"Extension": extension, "ContentType": media_type_for(extension)})
            declared.add(extension)

    sub_element(root, "Override", {"PartName": f"/{DOCUMENT_PART}", "ContentType": DOCUMENT_CONTENT_TYPE})
    if has_header:
        sub_element(root, "Override", {"PartName": f"/{HEADER_PART}", "ContentType": HEADER_CONTENT_TYPE})
    if has_footer:
        sub_element(root, "Override", {"PartName": f"/{FOOTER_PART}", "ContentType": FOOTER_CONTENT_TYPE})
    return serialize(root)
