"""Document extraction: shared types, the PDF extractor, and the service.

The dispatching service lives in ``docextract.extractor.service`` and is
re-exported from the top-level package; it is not imported here because
the OCR pipeline depends on this package's types.
"""

from .pdf_extractor import extract_structured, normalize_whitespace
from .types import (
    REMEDIATION,
    DocumentKind,
    ExtractionFailure,
    ExtractionInput,
    ExtractionMethod,
    ExtractionResult,
    FailureKind,
)

__all__ = [
    "REMEDIATION",
    "DocumentKind",
    "ExtractionFailure",
    "ExtractionInput",
    "ExtractionMethod",
    "ExtractionResult",
    "FailureKind",
    "extract_structured",
    "normalize_whitespace",
]
