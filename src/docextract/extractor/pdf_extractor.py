"""PDF text extraction with a two-tier parse and an explicit state machine.

Extraction walks a small state machine:

    PARSE ----ok----> NORMALIZE ----text----> DONE
      |                  ^    \\---empty---> FAILED (no extractable text)
      | xref damage      |
      v                  |
    RETRY ---ok----------/
      \\---error/no pages---> FAILED (structural corruption)

1. **PARSE** -- strict parse: pdfminer validates the cross-reference table
   without its fallback scanner, then pdfplumber extracts page text.
2. **RETRY** -- entered only on structural damage. PyMuPDF re-opens the
   document, rebuilding the cross-reference table by scanning the file.
3. **NORMALIZE** -- collapse runs of blank lines left at page boundaries.

Transitions live in ``next_state`` and the failure mapping in
``failure_kind``, so both can be tested without parsing anything.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import pdfplumber
import pymupdf
from pdfminer.pdfdocument import (
    PDFDocument,
    PDFEncryptionError,
    PDFNoValidXRef,
    PDFPasswordIncorrect,
)
from pdfminer.pdfparser import PDFParser, PDFSyntaxError
from pdfminer.psparser import PSException

from docextract.extractor.types import ExtractionMethod, ExtractionResult, FailureKind

logger = logging.getLogger(__name__)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_WHITESPACE = re.compile(r"\s")


class PdfState(Enum):
    """States of the PDF extraction state machine."""

    PARSE = "parse"
    RETRY = "retry"
    NORMALIZE = "normalize"
    DONE = "done"
    FAILED = "failed"


class Outcome(Enum):
    """Result of the work done in a single state."""

    OK = "ok"
    STRUCTURAL = "structural"
    ENCRYPTED = "encrypted"
    ERROR = "error"
    EMPTY = "empty"


_TRANSITIONS: dict[tuple[PdfState, Outcome], PdfState] = {
    (PdfState.PARSE, Outcome.OK): PdfState.NORMALIZE,
    (PdfState.PARSE, Outcome.STRUCTURAL): PdfState.RETRY,
    (PdfState.PARSE, Outcome.ENCRYPTED): PdfState.FAILED,
    (PdfState.PARSE, Outcome.ERROR): PdfState.FAILED,
    (PdfState.RETRY, Outcome.OK): PdfState.NORMALIZE,
    (PdfState.RETRY, Outcome.STRUCTURAL): PdfState.FAILED,
    (PdfState.RETRY, Outcome.ENCRYPTED): PdfState.FAILED,
    (PdfState.RETRY, Outcome.ERROR): PdfState.FAILED,
    (PdfState.RETRY, Outcome.EMPTY): PdfState.FAILED,
    (PdfState.NORMALIZE, Outcome.OK): PdfState.DONE,
    (PdfState.NORMALIZE, Outcome.EMPTY): PdfState.FAILED,
}


def next_state(state: PdfState, outcome: Outcome) -> PdfState:
    """Return the state that follows ``state`` given ``outcome``.

    Raises:
        ValueError: If the pair is not a legal transition (e.g. leaving a
            terminal state).
    """
    try:
        return _TRANSITIONS[(state, outcome)]
    except KeyError:
        raise ValueError(f"No transition from {state.name} on {outcome.name}") from None


def failure_kind(state: PdfState, outcome: Outcome) -> FailureKind:
    """Map the (state, outcome) pair that led to FAILED onto a failure kind."""
    if outcome is Outcome.ENCRYPTED:
        return FailureKind.ENCRYPTED_DOCUMENT
    if state is PdfState.RETRY:
        return FailureKind.STRUCTURAL_CORRUPTION
    if state is PdfState.NORMALIZE:
        return FailureKind.NO_EXTRACTABLE_TEXT
    return FailureKind.EXTRACTION_ENGINE_FAILURE


def normalize_whitespace(text: str) -> str:
    """Collapse 3+ consecutive newlines to a paragraph break and trim.

    Idempotent: normalizing already-normalized text returns it unchanged.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _EXCESS_NEWLINES.sub("\n\n", text).strip()


@dataclass
class ParsedPdf:
    """Raw text pulled out of a PDF by one parser."""

    text: str
    page_count: int


PdfParser = Callable[[bytes], ParsedPdf]


def classify_parse_error(exc: BaseException) -> Outcome:
    """Decide whether a parser exception is structural, encryption, or other.

    Walks the exception chain because pdfplumber wraps pdfminer errors.
    Messages are checked as well as types so that wrapped or re-raised
    errors from either library are still recognised.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))

        if isinstance(current, (PDFPasswordIncorrect, PDFEncryptionError)):
            return Outcome.ENCRYPTED
        if isinstance(current, (PDFNoValidXRef, PDFSyntaxError, PSException)):
            return Outcome.STRUCTURAL

        message = str(current).lower()
        if "password" in message or "encrypt" in message:
            return Outcome.ENCRYPTED
        if "xref" in message or "cross-reference" in message:
            return Outcome.STRUCTURAL

        # pdfplumber.utils.exceptions.PdfminerException stores the cause in args
        nested = [arg for arg in getattr(current, "args", ()) if isinstance(arg, BaseException)]
        current = current.__cause__ or current.__context__ or (nested[0] if nested else None)

    return Outcome.ERROR


def parse_strict(data: bytes) -> ParsedPdf:
    """Parse with cross-reference validation, then extract text per page.

    pdfminer normally falls back to scanning the whole file when the xref
    table is unusable; ``fallback=False`` turns that off so damage surfaces
    as PDFNoValidXRef and the caller can take the retry path.
    """
    parser = PDFParser(io.BytesIO(data))
    PDFDocument(parser, password="", fallback=False)

    with pdfplumber.open(io.BytesIO(data)) as pdf:
        page_count = len(pdf.pages)
        pages_text = [page.extract_text() or "" for page in pdf.pages]

    return ParsedPdf(text="\n\n".join(pages_text), page_count=page_count)


def parse_relaxed(data: bytes) -> ParsedPdf:
    """Re-open with PyMuPDF, which repairs the xref table by full scan."""
    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        if doc.needs_pass:
            raise PDFPasswordIncorrect("document requires a password")
        page_count = len(doc)
        pages_text = [doc[page_num].get_text() for page_num in range(page_count)]
    finally:
        doc.close()

    return ParsedPdf(text="\n\n".join(pages_text), page_count=page_count)


def extract_structured(
    data: bytes,
    strict_parser: PdfParser = parse_strict,
    relaxed_parser: PdfParser = parse_relaxed,
    source_name: str = "<bytes>",
) -> ExtractionResult:
    """Extract text from PDF bytes by running the parse state machine.

    Args:
        data: Raw PDF bytes.
        strict_parser: First-tier parser (default: pdfminer + pdfplumber).
        relaxed_parser: Retry-tier parser (default: PyMuPDF with repair).
        source_name: Filename used in log messages.

    Returns:
        ExtractionResult with normalized text on success, or with a typed
        failure and remediation suggestion.
    """
    state = PdfState.PARSE
    parsed: ParsedPdf | None = None
    text = ""
    method = ExtractionMethod.PDFPLUMBER
    retried = False
    cause = ""

    while state not in (PdfState.DONE, PdfState.FAILED):
        if state is PdfState.PARSE:
            try:
                parsed = strict_parser(data)
                outcome = Outcome.OK
            except Exception as e:
                outcome = classify_parse_error(e)
                cause = str(e) or type(e).__name__
                logger.warning(
                    "Strict PDF parse failed for %s (%s): %s",
                    source_name,
                    outcome.value,
                    cause,
                )

        elif state is PdfState.RETRY:
            retried = True
            method = ExtractionMethod.PYMUPDF
            logger.info("Retrying %s with relaxed full-scan parse", source_name)
            try:
                parsed = relaxed_parser(data)
                # A repair that yields pages is a readable document, text or not
                outcome = Outcome.OK if parsed.page_count > 0 else Outcome.EMPTY
                if outcome is Outcome.EMPTY:
                    cause = "no pages could be recovered from the damaged document"
            except Exception as e:
                outcome = classify_parse_error(e)
                if outcome is not Outcome.ENCRYPTED:
                    outcome = Outcome.ERROR
                logger.warning(
                    "Relaxed PDF parse failed for %s: %s", source_name, e
                )
                cause = f"{cause}; retry failed: {e}" if cause else str(e)

        else:  # NORMALIZE
            if parsed is not None:
                text = normalize_whitespace(parsed.text)
            outcome = Outcome.OK if text else Outcome.EMPTY

        new_state = next_state(state, outcome)
        logger.debug(
            "PDF state %s -> %s (%s) for %s",
            state.name,
            new_state.name,
            outcome.value,
            source_name,
        )

        if new_state is PdfState.FAILED:
            kind = failure_kind(state, outcome)
            page_count = parsed.page_count if parsed else 0
            logger.warning("PDF extraction failed for %s: %s", source_name, kind.value)
            return ExtractionResult.failed(
                kind,
                _failure_message(kind, cause),
                method=ExtractionMethod.FAILED,
                page_count=page_count,
                retried=retried,
            )

        state = new_state

    page_count = parsed.page_count if parsed else 0
    char_count = len(_WHITESPACE.sub("", text))
    logger.info(
        "Extracted %d chars from %d-page PDF via %s: %s",
        char_count,
        page_count,
        method.value,
        source_name,
    )
    return ExtractionResult(
        success=True,
        text=text,
        method=method,
        page_count=page_count,
        char_count=char_count,
        retried=retried,
    )


def _failure_message(kind: FailureKind, cause: str) -> str:
    if kind is FailureKind.STRUCTURAL_CORRUPTION:
        return (
            "The PDF file appears to have structural issues"
            + (f" ({cause})" if cause else "")
            + ". This can happen with corrupted PDFs or PDFs created with certain software."
        )
    if kind is FailureKind.ENCRYPTED_DOCUMENT:
        return "PDF is password-protected or encrypted."
    if kind is FailureKind.NO_EXTRACTABLE_TEXT:
        return "PDF appears to contain no extractable text. It may be an image-based PDF."
    return f"Failed to extract text from PDF: {cause or 'unknown error'}"
