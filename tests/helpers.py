"""Test helpers: a scriptable OCR engine and synthetic document builders."""

from __future__ import annotations

import io
from pathlib import Path

import pymupdf
from PIL import Image, ImageDraw, ImageFont

from docextract.ocr.profiles import RecognitionProfile


class FakeEngine:
    """Recognition engine returning canned text (or raising) per profile.

    ``responses`` maps profile name to a string or an exception instance.
    Profiles missing from the map return ``default``. Every call is recorded
    along with whether the image file existed at the time.
    """

    def __init__(self, responses: dict | None = None, default: str = ""):
        self.responses = responses or {}
        self.default = default
        self.calls: list[tuple[str, Path, bool]] = []

    def recognize(self, image_path: Path, profile: RecognitionProfile) -> str:
        self.calls.append((profile.name, image_path, image_path.exists()))
        response = self.responses.get(profile.name, self.default)
        if isinstance(response, BaseException):
            raise response
        return response


def make_pdf(*pages: str) -> bytes:
    """Build a PDF with one line of text per page."""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=14)
    data = doc.tobytes()
    doc.close()
    return data


def make_image(
    text: str = "",
    size: tuple[int, int] = (500, 120),
    fmt: str = "PNG",
    font_size: int = 40,
) -> bytes:
    """Render black text on a white canvas and return encoded bytes."""
    img = Image.new("RGB", size, "white")
    if text:
        draw = ImageDraw.Draw(img)
        font = ImageFont.load_default(size=font_size)
        draw.text((20, 30), text, fill="black", font=font)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()
