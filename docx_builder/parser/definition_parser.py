"""Parse JSON-like document definitions into the typed node model."""
from __future__ import annotations

import dataclasses
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union

from docx_builder.errors import InvalidDefinitionError
from docx_builder.model.document_model import DocumentDefinition, HeaderFooterDefinition
from docx_builder.model.elements import (
    CellNode,
    DocumentNode,
    Image,
    ImagePath,
    InlineNode,
    Link,
    Paragraph,
    StyledText,
    Table,
    TableCell,
    TableRow,
)
from docx_builder.model.style_model import (
    HORIZONTAL_ALIGNMENTS,
    IMAGE_ALIGNMENTS,
    VERTICAL_ALIGNMENTS,
    CellStyle,
    TableStyle,
    TextStyle,
)
from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

RawDefinition = Union[Mapping[str, Any], DocumentDefinition]
StyleT = TypeVar("StyleT", TextStyle, CellStyle, TableStyle)

# JSON definitions use camelCase keys; snake_case is accepted as well.
_STYLE_KEY_ALIASES = {
    "fontSize": "font_size",
    "lineSpacing": "line_spacing",
    "backgroundColor": "background_color",
    "verticalAlign": "vertical_align",
    "columnWidths": "column_widths",
}
_COLOR_FIELDS = ("color", "background_color")
_NUMBER_FIELDS = ("font_size", "line_spacing", "width")
_FLAG_FIELDS = ("bold", "italic", "underline")


class DefinitionParser:
    """Validate a raw definition and convert it into frozen model objects.

    Raw definitions are plain mappings as produced by ``json.load``; nodes
    are strings or mappings tagged with ``"type"``. Model objects may be
    mixed in and are validated the same way.
    """

    def __init__(self, definition: RawDefinition) -> None:
        self._definition = definition

    def parse(self) -> DocumentDefinition:
        """Return the typed definition or raise :class:`InvalidDefinitionError`."""
        raw = self._definition
        if isinstance(raw, DocumentDefinition):
            content, header, footer = raw.content, raw.header, raw.footer
        elif isinstance(raw, Mapping):
            content, header, footer = raw.get("content"), raw.get("header"), raw.get("footer")
        else:
            raise InvalidDefinitionError('Invalid document definition. Expected a mapping with a "content" list.')

        if not isinstance(content, (list, tuple)):
            raise InvalidDefinitionError('Invalid document definition. "content" must be an array.')

        definition = DocumentDefinition(
            content=self._parse_blocks(content, "content"),
            header=self._parse_header_footer(header, "header"),
            footer=self._parse_header_footer(footer, "footer"),
        )
        LOGGER.debug(
            "Parsed definition with %d top-level nodes (header=%s, footer=%s)",
            len(definition.content),
            definition.header is not None,
            definition.footer is not None,
        )
        return definition

    # ------------------------------------------------------------------
    # Containers
    def _parse_header_footer(self, raw: Any, location: str) -> Optional[HeaderFooterDefinition]:
        if raw is None:
            return None
        if isinstance(raw, HeaderFooterDefinition):
            content = raw.content
        elif isinstance(raw, Mapping):
            content = raw.get("content", [])
        else:
            raise InvalidDefinitionError(f'Invalid {location} definition at "{location}". Expected a mapping.')
        if not isinstance(content, (list, tuple)):
            raise InvalidDefinitionError(f'Invalid {location} definition. "{location}.content" must be an array.')
        return HeaderFooterDefinition(content=self._parse_blocks(content, f"{location}.content"))

    def _parse_blocks(self, nodes: Any, location: str) -> Tuple[DocumentNode, ...]:
        return tuple(self._parse_block(node, f"{location}[{index}]") for index, node in enumerate(nodes))

    def _parse_block(self, node: Any, location: str) -> DocumentNode:
        if isinstance(node, Paragraph):
            return Paragraph(content=self._parse_inlines(node.content, f"{location}.content"), style=node.style)
        if isinstance(node, Table):
            return self._parse_table_rows(node.rows, node.style, location)
        if isinstance(node, Mapping) and node.get("type") == "paragraph":
            content = node.get("content", [])
            if not isinstance(content, (list, tuple)):
                raise InvalidDefinitionError(f'Paragraph "content" must be an array at {location}')
            return Paragraph(
                content=self._parse_inlines(content, f"{location}.content"),
                style=self._parse_style(node.get("style"), TextStyle, location),
            )
        if isinstance(node, Mapping) and node.get("type") == "table":
            rows = node.get("rows", [])
            if not isinstance(rows, (list, tuple)):
                raise InvalidDefinitionError(f'Table "rows" must be an array at {location}')
            return self._parse_table_rows(rows, self._parse_style(node.get("style"), TableStyle, location), location)
        return self._parse_inline(node, location)

    def _parse_inlines(self, nodes: Any, location: str) -> Tuple[InlineNode, ...]:
        return tuple(self._parse_inline(node, f"{location}[{index}]") for index, node in enumerate(nodes))

    # ------------------------------------------------------------------
    # Tables
    def _parse_table_rows(self, rows: Any, style: Optional[TableStyle], location: str) -> Table:
        parsed_rows = []
        for row_index, row in enumerate(rows):
            row_location = f"{location}.rows[{row_index}]"
            cells = row.cells if isinstance(row, TableRow) else self._require_list(row, "cells", row_location)
            parsed_cells = tuple(
                self._parse_cell(cell, f"{row_location}.cells[{cell_index}]")
                for cell_index, cell in enumerate(cells)
            )
            parsed_rows.append(TableRow(cells=parsed_cells))
        return Table(rows=tuple(parsed_rows), style=style)

    def _parse_cell(self, cell: Any, location: str) -> TableCell:
        if isinstance(cell, TableCell):
            content, style = cell.content, cell.style
        else:
            content = self._require_list(cell, "content", location)
            style = self._parse_style(cell.get("style"), CellStyle, location)
        parsed = []
        for index, node in enumerate(content):
            child = self._parse_inline(node, f"{location}.content[{index}]")
            if isinstance(child, Image):
                raise InvalidDefinitionError(
                    f"Images are not supported inside table cells (found at {location}.content[{index}])"
                )
            parsed.append(child)
        return TableCell(content=tuple(parsed), style=style)

    # ------------------------------------------------------------------
    # Inline nodes
    def _parse_inline(self, node: Any, location: str) -> Union[InlineNode, CellNode]:
        if isinstance(node, str):
            return node
        if isinstance(node, StyledText):
            return node
        if isinstance(node, Link):
            return node
        if isinstance(node, Image):
            self._check_choice(node.align, IMAGE_ALIGNMENTS, "align", location)
            return node
        if not isinstance(node, Mapping):
            raise InvalidDefinitionError(f"Unsupported content node of type {type(node).__name__} at {location}")

        node_type = node.get("type")
        if node_type == "text":
            return StyledText(
                text=self._require_str(node, "text", location),
                style=self._parse_style(node.get("style"), TextStyle, location),
            )
        if node_type == "link":
            return Link(
                text=self._require_str(node, "text", location),
                url=self._require_str(node, "url", location),
                style=self._parse_style(node.get("style"), TextStyle, location),
            )
        if node_type == "image":
            return self._parse_image(node, location)
        if node_type in ("paragraph", "table"):
            raise InvalidDefinitionError(f'A "{node_type}" node cannot be nested at {location}')
        raise InvalidDefinitionError(f'Unknown content node type "{node_type}" at {location}')

    def _parse_image(self, node: Mapping[str, Any], location: str) -> Image:
        raw_source = node.get("image")
        if isinstance(raw_source, Mapping) and "path" in raw_source:
            source: Any = ImagePath(str(raw_source["path"]))
        elif isinstance(raw_source, (bytes, bytearray, memoryview, str, ImagePath)):
            source = raw_source
        else:
            raise InvalidDefinitionError(
                f'Image "image" must be bytes, a base64 string or {{"path": ...}} at {location}'
            )
        align = node.get("align")
        self._check_choice(align, IMAGE_ALIGNMENTS, "align", location)
        return Image(
            source=source,
            width=self._optional_number(node, "width", location),
            height=self._optional_number(node, "height", location),
            alt=node.get("alt"),
            align=align,
        )

    # ------------------------------------------------------------------
    # Styles
    def _parse_style(self, raw: Any, style_cls: Type[StyleT], location: str) -> Optional[StyleT]:
        if raw is None:
            return None
        known = {f.name for f in dataclasses.fields(style_cls)}
        if isinstance(raw, (TextStyle, TableStyle)):
            values: Dict[str, Any] = {name: getattr(raw, name) for name in known if hasattr(raw, name)}
        elif isinstance(raw, Mapping):
            values = {}
            for key, value in raw.items():
                name = _STYLE_KEY_ALIASES.get(key, key)
                if name not in known:
                    LOGGER.debug("Ignoring unknown %s key %r at %s", style_cls.__name__, key, location)
                    continue
                values[name] = value
        else:
            raise InvalidDefinitionError(f'"style" must be a mapping at {location}')

        self._check_choice(values.get("align"), HORIZONTAL_ALIGNMENTS, "align", location)
        self._check_choice(values.get("vertical_align"), VERTICAL_ALIGNMENTS, "verticalAlign", location)
        for number_field in _NUMBER_FIELDS:
            self._optional_number(values, number_field, location)
        for flag_field in _FLAG_FIELDS:
            if not isinstance(values.get(flag_field, False), bool):
                raise InvalidDefinitionError(f'"{flag_field}" must be true or false at {location}')
        for color_field in _COLOR_FIELDS:
            color = values.get(color_field)
            if color is None:
                continue
            if not isinstance(color, str):
                raise InvalidDefinitionError(f'"{color_field}" must be a hex string at {location}')
            values[color_field] = color.lstrip("#")
        if values.get("column_widths") is not None:
            widths = values["column_widths"]
            if not isinstance(widths, (list, tuple)):
                raise InvalidDefinitionError(f'"columnWidths" must be an array at {location}')
            for index, width in enumerate(widths):
                self._require_number(width, f"columnWidths[{index}]", location)
            values["column_widths"] = tuple(widths)
        return style_cls(**values)

    # ------------------------------------------------------------------
    # Field helpers
    @staticmethod
    def _check_choice(value: Any, choices: Tuple[str, ...], key: str, location: str) -> None:
        if value is not None and value not in choices:
            raise InvalidDefinitionError(
                f'Invalid "{key}" value {value!r} at {location}; expected one of {", ".join(choices)}'
            )

    @staticmethod
    def _require_str(node: Mapping[str, Any], key: str, location: str) -> str:
        value = node.get(key)
        if not isinstance(value, str):
            raise InvalidDefinitionError(f'"{key}" must be a string at {location}')
        return value

    @staticmethod
    def _require_list(node: Any, key: str, location: str) -> Any:
        if not isinstance(node, Mapping) or not isinstance(node.get(key), (list, tuple)):
            raise InvalidDefinitionError(f'"{key}" must be an array at {location}')
        return node[key]

    @staticmethod
    def _optional_number(node: Mapping[str, Any], key: str, location: str) -> Optional[float]:
        value = node.get(key)
        if value is None:
            return None
        return DefinitionParser._require_number(value, key, location)

    @staticmethod
    def _require_number(value: Any, key: str, location: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidDefinitionError(f'"{key}" must be a number at {location}')
        return value


def parse_definition(definition: RawDefinition) -> DocumentDefinition:
    """Shortcut for ``DefinitionParser(definition).parse()``."""
    return DefinitionParser(definition).parse()
