"""Command-line entry point: JSON definition -> DOCX package."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, Optional

from docx_builder.generator import DocxGenerator
from docx_builder.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)


def load_definition(definition_file: Path) -> Dict[str, Any]:
    """Read a JSON document definition from disk."""
    with definition_file.open(encoding="utf-8") as handle:
        return json.load(handle)


def main(definition_file: str, output: Optional[str] = None) -> Path:
    """Build a DOCX next to the definition file unless ``output`` is given."""
    definition_path = Path(definition_file).resolve()
    if not definition_path.exists():
        raise FileNotFoundError(f"Definition file not found: {definition_path}")

    LOGGER.info("Building DOCX from %s", definition_path.name)
    generator = DocxGenerator(load_definition(definition_path))

    target = Path(output) if output else definition_path.with_suffix(".docx")
    return asyncio.run(generator.save(target))


if __name__ == "__main__":  # pragma: no cover
    import argparse

    parser = argparse.ArgumentParser(description="Build a DOCX file from a JSON document definition")
    parser.add_argument("definition_file", help="Path to the JSON definition")
    parser.add_argument("--output", help="Path of the .docx file to write")
    parser.add_argument("--verbose", action="store_true", help="Log every generated part")

    args = parser.parse_args()
    set_verbosity(args.verbose)
    main(args.definition_file, args.output)
