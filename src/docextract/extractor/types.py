"""Shared types for the extraction pipeline.

Defines the input payload, the failure taxonomy, and ExtractionResult used
by the PDF extractor, the OCR pipeline, and the extraction service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PDF_EXTENSIONS = frozenset({".pdf"})
IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg"})

_CONTENT_TYPES = {
    "application/pdf": "pdf",
    "image/png": "image",
    "image/jpeg": "image",
    "image/jpg": "image",
}


class DocumentKind(Enum):
    """Which extraction path a payload is routed to."""

    PDF = "pdf"
    IMAGE = "image"


class ExtractionMethod(Enum):
    """Method that produced (or failed to produce) the final text."""

    PDFPLUMBER = "pdfplumber"
    PYMUPDF = "pymupdf"
    TESSERACT = "tesseract"
    FAILED = "failed"


class FailureKind(Enum):
    """Typed reason an extraction request failed."""

    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    STRUCTURAL_CORRUPTION = "structural_corruption"
    ENCRYPTED_DOCUMENT = "encrypted_document"
    NO_EXTRACTABLE_TEXT = "no_extractable_text"
    EXTRACTION_ENGINE_FAILURE = "extraction_engine_failure"


def detect_kind(filename: str | None, content_type: str | None = None) -> DocumentKind | None:
    """Resolve the document kind from a filename extension or MIME hint.

    The extension wins when present; the content type is only consulted for
    files uploaded without one. Returns None for anything unsupported.
    """
    if filename:
        suffix = Path(filename).suffix.lower()
        if suffix in PDF_EXTENSIONS:
            return DocumentKind.PDF
        if suffix in IMAGE_EXTENSIONS:
            return DocumentKind.IMAGE
        if suffix:
            return None

    if content_type:
        mapped = _CONTENT_TYPES.get(content_type.split(";")[0].strip().lower())
        if mapped is not None:
            return DocumentKind(mapped)

    return None


@dataclass(frozen=True)
class ExtractionInput:
    """An uploaded payload plus the path it should be routed to.

    Attributes:
        data: Raw file bytes.
        kind: PDF or IMAGE.
        filename: Original filename, used only for logging and output naming.
    """

    data: bytes
    kind: DocumentKind
    filename: str = ""

    @classmethod
    def from_path(cls, path: Path) -> ExtractionInput | None:
        """Read a file from disk; None if its extension is unsupported."""
        kind = detect_kind(path.name)
        if kind is None:
            return None
        return cls(data=path.read_bytes(), kind=kind, filename=path.name)

    @classmethod
    def from_upload(
        cls,
        filename: str,
        data: bytes,
        content_type: str | None = None,
    ) -> ExtractionInput | None:
        """Wrap an uploaded payload; None if its type is unsupported."""
        kind = detect_kind(filename, content_type)
        if kind is None:
            return None
        return cls(data=data, kind=kind, filename=filename)


@dataclass(frozen=True)
class ExtractionFailure:
    """Why extraction failed and what the user can do about it.

    Attributes:
        kind: Typed failure category.
        message: Human-readable description of what went wrong.
        suggestion: Actionable remediation shown to the user.
    """

    kind: FailureKind
    message: str
    suggestion: str = ""


@dataclass
class ExtractionResult:
    """Result of extracting text from one document.

    Attributes:
        success: Whether extraction produced usable text.
        text: Extracted text; non-empty after stripping when success is True.
        method: Which extractor produced this result.
        failure: Failure details when success is False.
        profile_name: OCR profile that won selection (image path only).
        quality_score: Score of the winning OCR candidate (image path only).
        page_count: Number of pages in the source PDF (PDF path only).
        char_count: Non-whitespace character count of ``text``.
        retried: Whether the PDF path needed the relaxed re-parse.
    """

    success: bool
    text: str = ""
    method: ExtractionMethod = field(default=ExtractionMethod.FAILED)
    failure: ExtractionFailure | None = None
    profile_name: str | None = None
    quality_score: float | None = None
    page_count: int = 0
    char_count: int = 0
    retried: bool = False

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        message: str,
        suggestion: str | None = None,
        **extra,
    ) -> ExtractionResult:
        """Build a failed result, defaulting the suggestion for ``kind``."""
        if suggestion is None:
            suggestion = REMEDIATION[kind]
        return cls(
            success=False,
            failure=ExtractionFailure(kind=kind, message=message, suggestion=suggestion),
            **extra,
        )


REMEDIATION: dict[FailureKind, str] = {
    FailureKind.UNSUPPORTED_FILE_TYPE: (
        "Upload a PDF (.pdf) or an image (.png, .jpg, .jpeg)."
    ),
    FailureKind.STRUCTURAL_CORRUPTION: (
        "This PDF has structural issues. Try re-saving it with a different "
        "PDF creator, or convert it to an image (PNG/JPEG) and upload that instead."
    ),
    FailureKind.ENCRYPTED_DOCUMENT: (
        "The PDF is password-protected or encrypted. Remove the password and try again."
    ),
    FailureKind.NO_EXTRACTABLE_TEXT: (
        "No readable text was found. If this is a scanned or image-only PDF, "
        "convert it to an image and upload that instead; for images, make sure "
        "the text is large and sharp enough to read."
    ),
    FailureKind.EXTRACTION_ENGINE_FAILURE: (
        "The text recognition engine could not process this file. "
        "Try again, or upload the document in a different format."
    ),
}
