"""Tests for payload typing and failure construction."""

import pytest

from docextract.extractor.types import (
    REMEDIATION,
    DocumentKind,
    ExtractionInput,
    ExtractionResult,
    FailureKind,
    detect_kind,
)


@pytest.mark.parametrize(
    "filename, content_type, expected",
    [
        ("report.pdf", None, DocumentKind.PDF),
        ("REPORT.PDF", None, DocumentKind.PDF),
        ("shot.png", None, DocumentKind.IMAGE),
        ("shot.jpg", None, DocumentKind.IMAGE),
        ("shot.jpeg", None, DocumentKind.IMAGE),
        ("shot.gif", None, None),
        ("notes.txt", "application/pdf", None),
        ("upload", "application/pdf", DocumentKind.PDF),
        ("upload", "image/jpeg; charset=binary", DocumentKind.IMAGE),
        ("upload", "text/plain", None),
        (None, "image/png", DocumentKind.IMAGE),
        (None, None, None),
    ],
)
def test_detect_kind(filename, content_type, expected):
    assert detect_kind(filename, content_type) is expected


def test_input_is_immutable():
    payload = ExtractionInput(data=b"x", kind=DocumentKind.PDF)
    with pytest.raises(AttributeError):
        payload.data = b"y"


def test_from_path(tmp_path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"\x89PNG")

    payload = ExtractionInput.from_path(path)

    assert payload == ExtractionInput(data=b"\x89PNG", kind=DocumentKind.IMAGE, filename="scan.png")


def test_from_upload_unsupported():
    assert ExtractionInput.from_upload("clip.mp4", b"") is None


def test_every_failure_kind_has_a_suggestion():
    assert set(REMEDIATION) == set(FailureKind)
    assert all(REMEDIATION.values())


def test_failed_defaults_suggestion():
    result = ExtractionResult.failed(FailureKind.ENCRYPTED_DOCUMENT, "locked")

    assert result.success is False
    assert result.text == ""
    assert result.failure.message == "locked"
    assert result.failure.suggestion == REMEDIATION[FailureKind.ENCRYPTED_DOCUMENT]


def test_failed_accepts_custom_suggestion():
    result = ExtractionResult.failed(FailureKind.NO_EXTRACTABLE_TEXT, "blank", "Try a sharper photo.")
    assert result.failure.suggestion == "Try a sharper photo."
