"""Emit inline DrawingML pictures."""
from __future__ import annotations

import base64
import binascii
import re
from typing import Tuple
from xml.etree import ElementTree as ET

from docx_builder.errors import UnsupportedImageError
from docx_builder.model.elements import Image, ImagePath
from docx_builder.utils.units import pixels_to_emu
from docx_builder.utils.xml_utils import PICTURE_NS, sub_element
from docx_builder.writer.context import PartContext

DEFAULT_EXTENSION = "png"
DEFAULT_IMAGE_NAME = "Image"

# Hex signatures checked against the start of the payload.
_MAGIC_NUMBERS = (
    ("89504E47", "png"),
    ("FFD8FF", "jpg"),
    ("47494638", "gif"),
    ("424D", "bmp"),
)
_DATA_URI = re.compile(r"^data:image/(\w+);base64,(.+)$", re.DOTALL)


def detect_extension(data: bytes) -> str:
    """Guess the file extension from the magic number, falling back to png."""
    header = bytes(data[:4]).hex().upper()
    for signature, extension in _MAGIC_NUMBERS:
        if header.startswith(signature):
            return extension
    return DEFAULT_EXTENSION


def decode_image_source(source: object) -> Tuple[bytes, str]:
    """Normalize an image source into ``(bytes, extension)``.

    Strings are either ``data:image/<fmt>;base64,`` URIs or bare base64.
    Path references must have been resolved beforehand.
    """
    if isinstance(source, ImagePath):
        raise UnsupportedImageError(f"Image path {source.path!r} must be resolved to bytes before emission")
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        return data, detect_extension(data)
    if isinstance(source, str):
        match = _DATA_URI.match(source)
        if match:
            fmt, payload = match.groups()
            return _b64decode(payload), "jpg" if fmt.lower() == "jpeg" else fmt.lower()
        data = _b64decode(source)
        return data, detect_extension(data)
    raise UnsupportedImageError(f"Unsupported image input of type {type(source).__name__}")


def _b64decode(payload: str) -> bytes:
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedImageError("Image string is not valid base64") from exc


def emit_image(parent: ET.Element, image: Image, ctx: PartContext) -> ET.Element:
    """Append a paragraph holding only ``image``, justified by ``image.align``."""
    paragraph = sub_element(parent, "w:p")
    if image.align:
        ppr = sub_element(paragraph, "w:pPr")
        sub_element(ppr, "w:jc", {"w:val": image.align})
    emit_image_run(paragraph, image, ctx)
    return paragraph


def emit_image_run(paragraph: ET.Element, image: Image, ctx: PartContext) -> ET.Element:
    """Register the image and append a ``w:r`` carrying its inline drawing."""
    data, extension = decode_image_source(image.source)
    r_id = ctx.add_image(data, extension)
    drawing_id = ctx.drawing_id

    width = image.width or ctx.options.default_image_width
    height = image.height or ctx.options.default_image_height
    cx = str(pixels_to_emu(width))
    cy = str(pixels_to_emu(height))
    name = image.alt or DEFAULT_IMAGE_NAME
    descr = image.alt or ""

    run = sub_element(paragraph, "w:r")
    drawing = sub_element(run, "w:drawing")
    inline = sub_element(drawing, "wp:inline", {"distT": 0, "distB": 0, "distL": 0, "distR": 0})
    sub_element(inline, "wp:extent", {"cx": cx, "cy": cy})
    sub_element(inline, "wp:docPr", {"id": drawing_id, "name": name, "descr": descr})

    graphic = sub_element(inline, "a:graphic")
    graphic_data = sub_element(graphic, "a:graphicData", {"uri": PICTURE_NS})
    pic = sub_element(graphic_data, "pic:pic")

    nv_pic_pr = sub_element(pic, "pic:nvPicPr")
    sub_element(nv_pic_pr, "pic:cNvPr", {"id": 0, "name": name, "descr": descr})
    sub_element(nv_pic_pr, "pic:cNvPicPr")

    blip_fill = sub_element(pic, "pic:blipFill")
    sub_element(blip_fill, "a:blip", {"r:embed": r_id})
    stretch = sub_element(blip_fill, "a:stretch")
    sub_element(stretch, "a:fillRect")

    sp_pr = sub_element(pic, "pic:spPr")
    xfrm = sub_element(sp_pr, "a:xfrm")
    sub_element(xfrm, "a:off", {"x": 0, "y": 0})
    sub_element(xfrm, "a:ext", {"cx": cx, "cy": cy})
    geometry = sub_element(sp_pr, "a:prstGeom", {"prst": "rect"})
    sub_element(geometry, "a:avLst")
    return run
