"""Tunable knobs for a generation run."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass

MAX_COMPRESSION_LEVEL = 9


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    """Options shared by every part written during one generation call.

    ``dedupe_hyperlinks`` reuses one relationship per distinct URL within a
    part instead of minting a new id for every link node.
    """

    compression: int = zipfile.ZIP_DEFLATED
    compression_level: int = MAX_COMPRESSION_LEVEL
    dedupe_hyperlinks: bool = False
    default_image_width: float = 100
    default_image_height: float = 100
    default_link_color: str = "306A7C"
