"""Build DOCX packages from document definitions.

Example::

    generator = DocxGenerator({
        "content": [
            "Hello World!",
            {"type": "paragraph", "content": ["Visit ", {"type": "link", "text": "us", "url": "https://example.com"}]},
            {"type": "image", "image": {"path": "logo.png"}, "width": 120, "align": "center"},
        ],
        "footer": {"content": ["Page footer"]},
    })
    await generator.save("report.docx")
    payload = await generator.buffer()
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from docx_builder.errors import DocxGenerationError
from docx_builder.model.document_model import DocumentDefinition
from docx_builder.model.options import GenerationOptions
from docx_builder.parser.asset_resolver import AssetResolver, ByteLoader
from docx_builder.parser.definition_parser import DefinitionParser, RawDefinition
from docx_builder.utils.logger import get_logger
from docx_builder.writer.context import PartContext
from docx_builder.writer.media_registry import MediaRegistry
from docx_builder.writer.package_writer import PackagePart, PackageWriter, normalize_output_path
from docx_builder.writer.parts import (
    CONTENT_TYPES_PART,
    DOCUMENT_PART,
    FOOTER_PART,
    HEADER_PART,
    build_content_types,
    build_document_part,
    build_footer_part,
    build_header_part,
)
from docx_builder.writer.relationships import PACKAGE_RELS_PART, RelationshipRegistry, rels_part_name

LOGGER = get_logger(__name__)


@dataclass
class GenerationSession:
    """Registries owned by a single ``save``/``buffer`` call."""

    options: GenerationOptions = field(default_factory=GenerationOptions)
    media: MediaRegistry = field(default_factory=MediaRegistry)
    part_relationships: Dict[str, RelationshipRegistry] = field(default_factory=dict)

    @property
    def document_relationships(self) -> RelationshipRegistry:
        return self.relationships_for(DOCUMENT_PART)

    def relationships_for(self, part_name: str) -> RelationshipRegistry:
        if part_name not in self.part_relationships:
            self.part_relationships[part_name] = RelationshipRegistry(self.options.dedupe_hyperlinks)
        return self.part_relationships[part_name]

    def context_for(self, part_name: str) -> PartContext:
        return PartContext(
            part_name=part_name,
            media=self.media,
            relationships=self.relationships_for(part_name),
            options=self.options,
        )


class DocxGenerator:
    """Generates DOCX documents from structured definitions.

    The definition is validated once, here; each ``save``/``buffer`` call
    then resolves image paths, emits every part and hands the parts to the
    package writer. Every call starts from a fresh :class:`GenerationSession`.
    """

    def __init__(
        self,
        definition: RawDefinition,
        *,
        loader: Optional[ByteLoader] = None,
        options: Optional[GenerationOptions] = None,
        package_writer: Optional[PackageWriter] = None,
    ) -> None:
        self._definition: DocumentDefinition = DefinitionParser(definition).parse()
        self._options = options or GenerationOptions()
        self._resolver = AssetResolver(loader)
        self._package_writer = package_writer or PackageWriter(
            compression=self._options.compression,
            compression_level=self._options.compression_level,
        )
        self._session = GenerationSession(options=self._options)

    @property
    def definition(self) -> DocumentDefinition:
        return self._definition

    @property
    def session(self) -> GenerationSession:
        """Registries of the most recent generation call."""
        return self._session

    async def save(self, output_path: Union[str, os.PathLike]) -> Path:
        """Write the package to ``output_path`` and return the final path."""
        target = normalize_output_path(output_path)
        try:
            parts = await self._generate_parts()
            return self._package_writer.write(parts, target)
        except DocxGenerationError:
            raise
        except Exception as exc:
            raise DocxGenerationError("Failed to save DOCX file.", exc) from exc

    async def buffer(self) -> bytes:
        """Return the package as bytes."""
        try:
            parts = await self._generate_parts()
            return self._package_writer.to_bytes(parts)
        except DocxGenerationError:
            raise
        except Exception as exc:
            raise DocxGenerationError("Failed to generate DOCX buffer.", exc) from exc

    @staticmethod
    async def to_buffer(definition: RawDefinition, **kwargs) -> bytes:
        """One-shot helper: ``await DocxGenerator(definition).buffer()``."""
        return await DocxGenerator(definition, **kwargs).buffer()

    # ------------------------------------------------------------------
    async def _generate_parts(self) -> List[PackagePart]:
        session = self._reset_state()
        resolved = await self._resolver.resolve(self._definition)

        # Header and footer come first so the body's sectPr can reference them.
        extra_parts: List[PackagePart] = []
        header_rel_id = footer_rel_id = None
        if resolved.header is not None:
            extra_parts.append((HEADER_PART, build_header_part(resolved.header.content, session.context_for(HEADER_PART))))
            header_rel_id = session.document_relationships.add_header_part(_relative_to_word(HEADER_PART))
        if resolved.footer is not None:
            extra_parts.append((FOOTER_PART, build_footer_part(resolved.footer.content, session.context_for(FOOTER_PART))))
            footer_rel_id = session.document_relationships.add_footer_part(_relative_to_word(FOOTER_PART))

        document_xml = build_document_part(
            resolved.content,
            session.context_for(DOCUMENT_PART),
            header_rel_id=header_rel_id,
            footer_rel_id=footer_rel_id,
        )

        parts: List[PackagePart] = [
            (
                CONTENT_TYPES_PART,
                build_content_types(
                    session.media.extensions(),
                    has_header=resolved.header is not None,
                    has_footer=resolved.footer is not None,
                ),
            ),
            (PACKAGE_RELS_PART, RelationshipRegistry.render_package_relationships()),
            (DOCUMENT_PART, document_xml),
        ]
        parts.extend(extra_parts)
        for part_name, registry in session.part_relationships.items():
            if registry.has_any():
                parts.append((rels_part_name(part_name), registry.render_part_relationships()))
        parts.extend(session.media.export_all())

        LOGGER.info("Generated %d package parts (%d image(s))", len(parts), len(session.media))
        return parts

    def _reset_state(self) -> GenerationSession:
        self._session = GenerationSession(options=self._options)
        return self._session


def _relative_to_word(part_name: str) -> str:
    return part_name.split("/", 1)[1]
