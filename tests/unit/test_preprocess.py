"""Tests for image preprocessing."""

import io

import pytest
from PIL import Image

from docextract.config.settings import ExtractionSettings
from docextract.ocr.preprocess import (
    ImagePreprocessor,
    PassthroughPreprocessor,
    build_preprocessor,
    contrast_table,
    upscale_factor,
)
from tests.helpers import make_image


@pytest.mark.parametrize(
    "width, expected",
    [(500, 2), (300, 4), (999, 2), (100, 10), (1000, 1), (2400, 1), (0, 1)],
)
def test_upscale_factor(width, expected):
    assert upscale_factor(width) == expected


def test_contrast_table_keeps_midtones_centred():
    lut = contrast_table(1.2)
    assert len(lut) == 256
    assert lut[128] == 128
    assert lut[0] == 0
    assert lut[255] == 255
    assert lut[200] == 214
    assert lut == sorted(lut)


def test_small_image_is_upscaled_and_grayscale(settings):
    result = ImagePreprocessor(settings).preprocess(make_image("Hello World", size=(500, 120)))

    assert result.applied is True
    assert result.scale_factor == 2
    assert (result.original_width, result.original_height) == (500, 120)
    with Image.open(io.BytesIO(result.data)) as img:
        assert img.format == "PNG"
        assert img.mode == "L"
        assert img.size == (1000, 240)


def test_wide_image_is_not_resized(settings):
    result = ImagePreprocessor(settings).preprocess(make_image(size=(1200, 300), fmt="JPEG"))

    assert result.applied is True
    assert result.scale_factor == 1
    with Image.open(io.BytesIO(result.data)) as img:
        assert img.size == (1200, 300)


def test_corrupt_image_returns_original(settings):
    data = b"\x89PNG\r\n\x1a\nnot really an image"
    result = ImagePreprocessor(settings).preprocess(data)

    assert result.applied is False
    assert result.data == data
    assert result.scale_factor == 1


def test_empty_payload_returns_original(settings):
    result = ImagePreprocessor(settings).preprocess(b"")
    assert result.applied is False
    assert result.data == b""


def test_preprocessing_is_deterministic(settings):
    data = make_image("Invoice 42")
    preprocessor = ImagePreprocessor(settings)
    assert preprocessor.preprocess(data).data == preprocessor.preprocess(data).data


def test_passthrough_returns_original_bytes():
    data = make_image("Hello", size=(320, 80))
    result = PassthroughPreprocessor().preprocess(data)

    assert result.data == data
    assert result.applied is False
    assert (result.original_width, result.original_height) == (320, 80)


def test_build_preprocessor_respects_settings():
    assert isinstance(build_preprocessor(ExtractionSettings()), ImagePreprocessor)
    assert isinstance(
        build_preprocessor(ExtractionSettings(preprocess_enabled=False)),
        PassthroughPreprocessor,
    )


def test_even_median_size_is_rounded_up():
    preprocessor = ImagePreprocessor(ExtractionSettings(median_filter_size=2))
    assert preprocessor.median_size == 3
