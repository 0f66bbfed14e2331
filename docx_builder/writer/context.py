"""Per-part state handed to the content emitters."""
from __future__ import annotations

from dataclasses import dataclass, field

from docx_builder.model.options import GenerationOptions
from docx_builder.writer.media_registry import MediaRegistry
from docx_builder.writer.relationships import RelationshipRegistry


@dataclass
class PartContext:
    """Registries an emitter may consult while writing one part.

    ``media`` is shared by every part of the package; ``relationships``
    belongs to the part being written.
    """

    part_name: str
    media: MediaRegistry
    relationships: RelationshipRegistry
    options: GenerationOptions = field(default_factory=GenerationOptions)

    def add_hyperlink(self, url: str) -> str:
        return self.relationships.add_hyperlink(url)

    def add_image(self, data: bytes, extension: str) -> str:
        """Store the image and return the relationship id that embeds it."""
        filename = self.media.register(data, extension)
        return self.relationships.add_image(filename)

    @property
    def drawing_id(self) -> int:
        """Id for the most recent drawing; unique across the package."""
        return len(self.media)
