"""Image preprocessing ahead of OCR.

Pillow pipeline, applied in order:

1. Grayscale conversion.
2. Contrast normalization (stretch the histogram to the full range).
3. Edge sharpening with Pillow's fixed 3x3 SHARPEN kernel.
4. Linear contrast boost (slope 1.2, intercept keeps mid-grey at 128).
5. Median filter to drop salt-and-pepper scan noise.
6. Upscale small images (width < 1000px) by ``max(2, ceil(1000 / width))``
   with Lanczos resampling.

Preprocessing is best effort: any failure returns the original bytes so
recognition can still run on the untouched image.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass

from PIL import Image, ImageFilter, ImageOps

from docextract.config.settings import ExtractionSettings

logger = logging.getLogger(__name__)

_MIDTONE = 128


@dataclass(frozen=True)
class PreprocessedImage:
    """Image bytes handed to the recognition engine.

    Attributes:
        data: PNG bytes after preprocessing, or the original bytes.
        original_width: Source width in pixels (0 if it could not be read).
        original_height: Source height in pixels (0 if it could not be read).
        scale_factor: Upscale factor applied (1 = none).
        applied: Whether the preprocessing pipeline actually ran.
    """

    data: bytes
    original_width: int = 0
    original_height: int = 0
    scale_factor: int = 1
    applied: bool = False


def upscale_factor(width: int, min_width: int = 1000, min_factor: int = 2) -> int:
    """Integer factor needed to bring ``width`` up to ``min_width``.

    Returns 1 when the image is already wide enough.
    """
    if width <= 0 or width >= min_width:
        return 1
    return max(min_factor, math.ceil(min_width / width))


def contrast_table(slope: float) -> list[int]:
    """Lookup table for ``v * slope + intercept`` that keeps midtones centred."""
    intercept = -(_MIDTONE * (slope - 1))
    return [max(0, min(255, round(v * slope + intercept))) for v in range(256)]


class ImagePreprocessor:
    """Pillow-backed preprocessor; never raises to the caller."""

    def __init__(self, settings: ExtractionSettings):
        self.min_width = settings.min_upscale_width
        self.min_factor = settings.min_upscale_factor
        self.lut = contrast_table(settings.contrast_slope)
        # MedianFilter only accepts odd sizes
        self.median_size = settings.median_filter_size | 1

    def preprocess(self, data: bytes) -> PreprocessedImage:
        """Run the preprocessing pipeline over encoded image bytes."""
        width = height = 0
        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
                processed, factor = self._transform(img)

            buffer = io.BytesIO()
            processed.save(buffer, format="PNG")
        except Exception as e:
            logger.warning("Image preprocessing failed, using original: %s", e)
            return PreprocessedImage(
                data=data, original_width=width, original_height=height
            )

        logger.debug(
            "Preprocessed %dx%d image (upscale x%d)", width, height, factor
        )
        return PreprocessedImage(
            data=buffer.getvalue(),
            original_width=width,
            original_height=height,
            scale_factor=factor,
            applied=True,
        )

    def _transform(self, img: Image.Image) -> tuple[Image.Image, int]:
        out = ImageOps.grayscale(img)
        out = ImageOps.autocontrast(out)
        out = out.filter(ImageFilter.SHARPEN)
        out = out.point(self.lut)
        out = out.filter(ImageFilter.MedianFilter(self.median_size))

        factor = upscale_factor(out.width, self.min_width, self.min_factor)
        if factor > 1:
            out = out.resize(
                (out.width * factor, out.height * factor),
                Image.Resampling.LANCZOS,
            )
        return out, factor


class PassthroughPreprocessor:
    """Identity preprocessor used when preprocessing is disabled."""

    def preprocess(self, data: bytes) -> PreprocessedImage:
        try:
            with Image.open(io.BytesIO(data)) as img:
                width, height = img.size
        except Exception:
            width = height = 0
        return PreprocessedImage(data=data, original_width=width, original_height=height)


def build_preprocessor(
    settings: ExtractionSettings,
) -> ImagePreprocessor | PassthroughPreprocessor:
    """Pick the preprocessor once, at pipeline construction time."""
    if settings.preprocess_enabled:
        return ImagePreprocessor(settings)
    logger.info("Image preprocessing disabled; OCR will run on original images")
    return PassthroughPreprocessor()
