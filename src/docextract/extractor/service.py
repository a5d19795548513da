"""Single entry point for extracting text from an uploaded document.

Routes each payload by kind:

- **PDF** (``.pdf``) -- structured extraction with the strict/relaxed
  parse state machine (``pdf_extractor``).
- **Image** (``.png``, ``.jpg``, ``.jpeg``) -- multi-profile OCR
  (``docextract.ocr.pipeline``).
- Anything else -- ``UNSUPPORTED_FILE_TYPE`` without reading further.

Every outcome is an ExtractionResult. Failures carry a typed kind and a
remediation suggestion; nothing here raises for a bad document.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from docextract.config.settings import ExtractionSettings
from docextract.extractor.pdf_extractor import extract_structured
from docextract.extractor.types import (
    DocumentKind,
    ExtractionInput,
    ExtractionResult,
    FailureKind,
)
from docextract.ocr.pipeline import OcrPipeline

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentExtractor",
    "extract_file",
    "extract_upload",
]

PdfExtractor = Callable[..., ExtractionResult]


class DocumentExtractor:
    """Dispatches payloads to the PDF extractor or the OCR pipeline.

    Both collaborators can be injected, which is how the tests run the
    dispatch logic without Tesseract or real PDFs.
    """

    def __init__(
        self,
        settings: ExtractionSettings,
        ocr_pipeline: OcrPipeline | None = None,
        pdf_extractor: PdfExtractor = extract_structured,
    ):
        self.settings = settings
        self.ocr_pipeline = ocr_pipeline if ocr_pipeline is not None else OcrPipeline(settings)
        self.pdf_extractor = pdf_extractor

    def extract(self, payload: ExtractionInput | None) -> ExtractionResult:
        """Extract text from a payload; None means an unsupported type."""
        if payload is None:
            return _unsupported("<unknown>")

        name = payload.filename or "<upload>"
        logger.info(
            "Extracting %s (%s, %d bytes)", name, payload.kind.value, len(payload.data)
        )

        try:
            if payload.kind is DocumentKind.PDF:
                result = self.pdf_extractor(payload.data, source_name=name)
            else:
                result = self.ocr_pipeline.extract(payload.data, source_name=name)
        except Exception as e:
            logger.exception("Unexpected error extracting %s", name)
            return ExtractionResult.failed(
                FailureKind.EXTRACTION_ENGINE_FAILURE,
                f"Failed to extract text: {e}",
            )

        if result.success and not result.text.strip():
            # Success must carry non-blank text
            return ExtractionResult.failed(
                FailureKind.NO_EXTRACTABLE_TEXT,
                "No text could be extracted from the file.",
            )

        if result.success:
            logger.info(
                "Extraction succeeded for %s via %s (%d chars)",
                name,
                result.method.value,
                result.char_count,
            )
        else:
            logger.warning(
                "Extraction failed for %s: %s -- %s",
                name,
                result.failure.kind.value,
                result.failure.message,
            )
        return result

    def extract_file(self, path: Path) -> ExtractionResult:
        """Read and extract a file from disk.

        Raises:
            OSError: If a supported file cannot be read.
        """
        payload = ExtractionInput.from_path(path)
        if payload is None:
            return _unsupported(path.name)
        return self.extract(payload)

    def extract_upload(
        self,
        filename: str,
        data: bytes,
        content_type: str | None = None,
    ) -> ExtractionResult:
        """Extract an in-memory upload, typed by filename or MIME hint."""
        payload = ExtractionInput.from_upload(filename, data, content_type)
        if payload is None:
            return _unsupported(filename)
        return self.extract(payload)


def _unsupported(name: str) -> ExtractionResult:
    logger.warning("Unsupported file type: %s", name)
    return ExtractionResult.failed(
        FailureKind.UNSUPPORTED_FILE_TYPE,
        f"Unsupported file type: {name}",
    )


def extract_file(path: Path, settings: ExtractionSettings | None = None) -> ExtractionResult:
    """Extract text from a file on disk with a one-off extractor."""
    return DocumentExtractor(settings or ExtractionSettings()).extract_file(path)


def extract_upload(
    filename: str,
    data: bytes,
    content_type: str | None = None,
    settings: ExtractionSettings | None = None,
) -> ExtractionResult:
    """Extract text from an uploaded payload with a one-off extractor."""
    return DocumentExtractor(settings or ExtractionSettings()).extract_upload(
        filename, data, content_type
    )
