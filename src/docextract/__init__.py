"""docextract -- recover usable text from uploaded PDFs and images."""

from docextract.extractor.service import DocumentExtractor, extract_file, extract_upload
from docextract.extractor.types import (
    DocumentKind,
    ExtractionFailure,
    ExtractionInput,
    ExtractionMethod,
    ExtractionResult,
    FailureKind,
)

__all__ = [
    "DocumentExtractor",
    "DocumentKind",
    "ExtractionFailure",
    "ExtractionInput",
    "ExtractionMethod",
    "ExtractionResult",
    "FailureKind",
    "extract_file",
    "extract_upload",
]

__version__ = "0.1.0"
