"""In-memory store for images embedded into the package."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from typing import List, Tuple

from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

MEDIA_DIR = "word/media"


@dataclass(frozen=True, slots=True)
class RegisteredImage:
    """An image waiting to be written under ``word/media``."""

    filename: str
    data: bytes

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[-1].lower()

    @property
    def part_name(self) -> str:
        return f"{MEDIA_DIR}/{self.filename}"


class MediaRegistry:
    """Assigns sequential ``image<N>.<ext>`` names to raw image bytes."""

    def __init__(self) -> None:
        self._images: List[RegisteredImage] = []
        self._next_image_id = 1

    def register(self, data: bytes, extension: str) -> str:
        """Store ``data`` and return the generated filename."""
        filename = f"image{self._next_image_id}.{extension}"
        self._next_image_id += 1
        self._images.append(RegisteredImage(filename=filename, data=bytes(data)))
        LOGGER.debug("Registered %s (%d bytes)", filename, len(data))
        return filename

    def reset(self) -> None:
        """Forget every image and restart numbering at 1."""
        self._images = []
        self._next_image_id = 1

    def export_all(self) -> List[Tuple[str, bytes]]:
        """Return ``(part name, bytes)`` pairs for the packaging step."""
        return [(image.part_name, image.data) for image in self._images]

    def extensions(self) -> List[str]:
        """Distinct extensions in registration order."""
        seen: List[str] = []
        for image in self._images:
            if image.extension not in seen:
                seen.append(image.extension)
        return seen

    def __len__(self) -> int:
        return len(self._images)


def media_type_for(extension: str) -> str:
    """Guess the MIME type of a media extension, defaulting to octet-stream."""
    media_type, _ = mimetypes.guess_type(f"media.{extension}")
    return media_type or "application/octet-stream"
