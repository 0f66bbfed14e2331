"""Pack named parts into a DOCX (ZIP) container."""
from __future__ import annotations

import io
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, Tuple, Union

from docx_builder.errors import InvalidOutputPathError, PackagingError
from docx_builder.model.options import MAX_COMPRESSION_LEVEL
from docx_builder.utils.logger import get_logger

LOGGER = get_logger(__name__)

DOCX_SUFFIX = ".docx"

PackagePart = Tuple[str, bytes]


def normalize_output_path(output_path: Union[str, os.PathLike]) -> Path:
    """Append ``.docx`` to a bare path; reject any other explicit suffix."""
    path = Path(output_path)
    # pathlib reads ".docx" as a stem with no suffix.
    if path.name.lower() == DOCX_SUFFIX:
        return path
    if not path.suffix:
        return path.with_name(path.name + DOCX_SUFFIX)
    if path.suffix.lower() != DOCX_SUFFIX:
        raise InvalidOutputPathError(
            f"Invalid output path {str(output_path)!r}: expected a {DOCX_SUFFIX} file, got {path.suffix!r}"
        )
    return path


class PackageWriter:
    """Writes package parts with DEFLATE compression."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED, compression_level: int = MAX_COMPRESSION_LEVEL) -> None:
        self._compression = compression
        self._compression_level = compression_level

    def to_bytes(self, parts: Iterable[PackagePart]) -> bytes:
        """Return the archive as an in-memory buffer."""
        buffer = io.BytesIO()
        try:
            self._write_archive(buffer, parts)
        except (OSError, zipfile.BadZipFile, ValueError) as exc:
            raise PackagingError("Failed to build DOCX archive.", exc) from exc
        return buffer.getvalue()

    def write(self, parts: Iterable[PackagePart], output_path: Path) -> Path:
        """Write the archive to ``output_path`` atomically.

        The archive is written to a temporary file in the target directory
        and renamed into place, so a failure never leaves a partial file.
        """
        tmp_name = None
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=output_path.parent, prefix=f".{output_path.stem}-", suffix=".tmp", delete=False
            ) as handle:
                tmp_name = handle.name
                self._write_archive(handle, parts)
            os.replace(tmp_name, output_path)
        except (OSError, zipfile.BadZipFile, ValueError) as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PackagingError(f"Failed to write DOCX file to {output_path}.", exc) from exc
        LOGGER.info("Saved DOCX package to %s", output_path)
        return output_path

    def _write_archive(self, target, parts: Iterable[PackagePart]) -> None:
        with zipfile.ZipFile(target, "w", compression=self._compression, compresslevel=self._compression_level) as archive:
            for name, data in parts:
                archive.writestr(name, data)
