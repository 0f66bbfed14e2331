"""Load path-based images before any part is emitted."""
from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from docx_builder.errors import AssetResolutionError
from docx_builder.model.document_model import DocumentDefinition, HeaderFooterDefinition
from docx_builder.model.elements import DocumentNode, Image, ImagePath, Paragraph, Table, TableCell, TableRow
from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

ByteLoader = Callable[[str], Awaitable[bytes]]


async def read_file_bytes(path: str) -> bytes:
    """Default loader: read a file in a worker thread."""
    return await asyncio.to_thread(Path(path).read_bytes)


class AssetResolver:
    """Replace :class:`ImagePath` sources with the bytes they point to.

    The result is a new definition tree; the input is never modified. Every
    distinct path is loaded once and all loads run concurrently.
    """

    def __init__(self, loader: Optional[ByteLoader] = None) -> None:
        self._loader = loader or read_file_bytes

    async def resolve(self, definition: DocumentDefinition) -> DocumentDefinition:
        """Return a resolved copy of ``definition``."""
        paths = self._collect_paths(definition)
        if paths:
            LOGGER.debug("Loading %d image file(s)", len(paths))
        loaded = dict(zip(paths, await self._load_all(paths)))

        return DocumentDefinition(
            content=self._resolve_nodes(definition.content, loaded),
            header=self._resolve_header_footer(definition.header, loaded),
            footer=self._resolve_header_footer(definition.footer, loaded),
        )

    @staticmethod
    def _collect_paths(definition: DocumentDefinition) -> List[str]:
        paths: List[str] = []
        for image in definition.iter_images():
            if image.needs_loading and image.source.path not in paths:
                paths.append(image.source.path)
        return paths

    async def _load_all(self, paths: List[str]) -> List[bytes]:
        """Load every path concurrently; the first failure cancels the rest."""
        tasks = [asyncio.ensure_future(self._load(path)) for path in paths]
        try:
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect the cancelled tasks so no failure goes unretrieved.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _load(self, path: str) -> bytes:
        try:
            data = await self._loader(path)
        except Exception as exc:
            raise AssetResolutionError(f"Failed to load image from {path!r}", path, exc) from exc
        return bytes(data)

    # ------------------------------------------------------------------
    # Structural copy
    def _resolve_header_footer(
        self, part: Optional[HeaderFooterDefinition], loaded: Dict[str, bytes]
    ) -> Optional[HeaderFooterDefinition]:
        if part is None:
            return None
        return HeaderFooterDefinition(content=self._resolve_nodes(part.content, loaded))

    def _resolve_nodes(self, nodes: Tuple[DocumentNode, ...], loaded: Dict[str, bytes]) -> Tuple[DocumentNode, ...]:
        return tuple(self._resolve_node(node, loaded) for node in nodes)

    def _resolve_node(self, node: DocumentNode, loaded: Dict[str, bytes]) -> DocumentNode:
        if isinstance(node, Image):
            return self._resolve_image(node, loaded)
        if isinstance(node, Paragraph):
            return replace(node, content=self._resolve_nodes(node.content, loaded))
        if isinstance(node, Table):
            rows = tuple(
                TableRow(
                    cells=tuple(
                        TableCell(content=self._resolve_nodes(cell.content, loaded), style=cell.style)
                        for cell in row.cells
                    )
                )
                for row in node.rows
            )
            return replace(node, rows=rows)
        return node

    @staticmethod
    def _resolve_image(image: Image, loaded: Dict[str, bytes]) -> Image:
        source = image.source
        if isinstance(source, ImagePath):
            return replace(image, source=loaded[source.path])
        if isinstance(source, (bytearray, memoryview)):
            return replace(image, source=bytes(source))
        return image


async def resolve_assets(definition: DocumentDefinition, loader: Optional[ByteLoader] = None) -> DocumentDefinition:
    """Shortcut for ``AssetResolver(loader).resolve(definition)``."""
    return await AssetResolver(loader).resolve(definition)
