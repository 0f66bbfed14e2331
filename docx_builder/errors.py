"""Exceptions raised while building DOCX packages."""
from __future__ import annotations

from typing import Optional


class DocxGenerationError(Exception):
    """Uniform failure raised by the generator, carrying the original cause."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is None:
            return self.message
        return f"{self.message} ({type(self.original_error).__name__}: {self.original_error})"


class InvalidDefinitionError(DocxGenerationError):
    """The document definition is structurally invalid."""


class InvalidOutputPathError(DocxGenerationError):
    """The requested output path does not name a .docx file."""


class AssetResolutionError(DocxGenerationError):
    """An image referenced by path could not be loaded."""

    def __init__(self, message: str, path: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message, original_error)
        self.path = path


class PackagingError(DocxGenerationError):
    """The ZIP container could not be produced or persisted."""


class UnsupportedImageError(ValueError):
    """An image source reached the emitter in a form it cannot encode."""
