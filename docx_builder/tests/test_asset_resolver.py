"""Tests for loading path-based images ahead of emission."""
import asyncio
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock

from docx_builder.errors import AssetResolutionError, DocxGenerationError
from docx_builder.model.elements import Image, ImagePath, Paragraph
from docx_builder.parser.asset_resolver import AssetResolver, read_file_bytes, resolve_assets
from docx_builder.parser.definition_parser import parse_definition

PNG = b"\x89PNG\r\n\x1a\nbody"


def _image(path: str) -> dict:
    return {"type": "image", "image": {"path": path}}


class AssetResolverTest(unittest.IsolatedAsyncioTestCase):
    async def test_paths_are_replaced_and_input_is_untouched(self) -> None:
        definition = parse_definition(
            {
                "content": [_image("body.png"), {"type": "paragraph", "content": ["x", _image("inline.png")]}],
                "header": {"content": [_image("header.png")]},
                "footer": {"content": [_image("footer.png")]},
            }
        )
        loader = AsyncMock(side_effect=lambda path: path.encode())

        resolved = await AssetResolver(loader).resolve(definition)

        self.assertEqual(resolved.content[0].source, b"body.png")
        self.assertEqual(resolved.content[1].content[1].source, b"inline.png")
        self.assertEqual(resolved.header.content[0].source, b"header.png")
        self.assertEqual(resolved.footer.content[0].source, b"footer.png")
        self.assertEqual(resolved.content[1].content[0], "x")

        self.assertIsInstance(definition.content[0].source, ImagePath)
        self.assertTrue(all(image.needs_loading for image in definition.iter_images()))
        self.assertFalse(any(image.needs_loading for image in resolved.iter_images()))

    async def test_each_distinct_path_is_loaded_once(self) -> None:
        definition = parse_definition({"content": [_image("a.png"), _image("b.png"), _image("a.png")]})
        loader = AsyncMock(return_value=PNG)

        resolved = await resolve_assets(definition, loader)

        self.assertEqual(sorted(call.args[0] for call in loader.await_args_list), ["a.png", "b.png"])
        self.assertEqual([image.source for image in resolved.iter_images()], [PNG, PNG, PNG])

    async def test_loads_run_concurrently(self) -> None:
        started = []
        both_started = asyncio.Event()

        async def loader(path: str) -> bytes:
            started.append(path)
            if len(started) == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)
            return path.encode()

        definition = parse_definition({"content": [_image("slow.png"), _image("fast.png")]})

        resolved = await AssetResolver(loader).resolve(definition)

        self.assertEqual([image.source for image in resolved.iter_images()], [b"slow.png", b"fast.png"])

    async def test_loader_failure_is_wrapped(self) -> None:
        definition = parse_definition({"content": [_image("missing.png")]})
        loader = AsyncMock(side_effect=FileNotFoundError("missing.png"))

        with self.assertRaises(AssetResolutionError) as ctx:
            await AssetResolver(loader).resolve(definition)

        self.assertIsInstance(ctx.exception, DocxGenerationError)
        self.assertEqual(ctx.exception.path, "missing.png")
        self.assertIsInstance(ctx.exception.original_error, FileNotFoundError)
        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)

    async def test_failure_cancels_pending_loads(self) -> None:
        cancelled = []

        async def loader(path: str) -> bytes:
            if path == "broken.png":
                raise PermissionError(path)
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(path)
                raise
            return b""

        definition = parse_definition({"content": [_image("slow.png"), _image("broken.png"), _image("slower.png")]})

        with self.assertRaises(AssetResolutionError) as ctx:
            await asyncio.wait_for(AssetResolver(loader).resolve(definition), timeout=5)

        self.assertEqual(ctx.exception.path, "broken.png")
        self.assertEqual(sorted(cancelled), ["slow.png", "slower.png"])

    async def test_inline_sources_are_left_alone(self) -> None:
        definition = parse_definition({"content": [{"type": "image", "image": "QQ=="}]})
        definition = definition.__class__(content=definition.content + (Paragraph((Image(bytearray(PNG)),)),))
        loader = AsyncMock()

        resolved = await AssetResolver(loader).resolve(definition)

        loader.assert_not_awaited()
        self.assertEqual(resolved.content[0].source, "QQ==")
        self.assertEqual(resolved.content[1].content[0].source, PNG)
        self.assertIsInstance(resolved.content[1].content[0].source, bytes)

    async def test_default_loader_reads_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "logo.png"
            path.write_bytes(PNG)

            self.assertEqual(await read_file_bytes(str(path)), PNG)

            resolved = await AssetResolver().resolve(parse_definition({"content": [_image(str(path))]}))
            self.assertEqual(resolved.content[0].source, PNG)


if __name__ == "__main__":
    unittest.main()
