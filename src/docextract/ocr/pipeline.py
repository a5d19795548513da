"""OCR pipeline: preprocess -> recognize -> clean -> score -> select.

One ``OcrPipeline`` can serve many requests; everything it creates while
extracting (preprocessed image, scratch file, candidates) is local to the
``extract`` call.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from docextract.config.settings import ExtractionSettings
from docextract.extractor.types import ExtractionMethod, ExtractionResult, FailureKind
from docextract.ocr.preprocess import (
    ImagePreprocessor,
    PassthroughPreprocessor,
    build_preprocessor,
)
from docextract.ocr.profiles import DEFAULT_PROFILES, RecognitionProfile
from docextract.ocr.runner import (
    RecognitionAttempt,
    RecognitionEngine,
    TesseractEngine,
    recognize,
)
from docextract.ocr.sanitizer import clean_text
from docextract.ocr.scoring import score_text
from docextract.ocr.selector import Candidate, select_best

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")

IMAGE_NO_TEXT_SUGGESTION = (
    "The image may not contain readable text, or the text may be too small or unclear."
)


@contextlib.contextmanager
def scratch_image(data: bytes, temp_dir: str | None = None) -> Iterator[Path]:
    """Write image bytes to a temporary file and remove it on exit.

    Removal failures are logged and never raised, so they cannot mask the
    extraction outcome.
    """
    fd, name = tempfile.mkstemp(suffix=".png", prefix="docextract_", dir=temp_dir)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove temporary image %s: %s", path, e)


def build_candidates(
    attempts: Iterable[RecognitionAttempt],
    settings: ExtractionSettings,
) -> list[Candidate]:
    """Clean and score every successful attempt, keeping profile order."""
    candidates = []
    for attempt in attempts:
        if not attempt.succeeded:
            continue
        raw = attempt.text or ""
        cleaned = clean_text(
            raw,
            min_line_length=settings.sanitizer_min_line_length,
            min_density=settings.sanitizer_line_density,
        )
        candidates.append(
            Candidate(
                raw_text=raw,
                cleaned_text=cleaned,
                quality_score=score_text(cleaned, settings),
                profile_name=attempt.profile_name,
            )
        )
    return candidates


class OcrPipeline:
    """Multi-profile OCR over a single image.

    Args:
        settings: Extraction configuration.
        engine: Recognition engine (default: Tesseract).
        preprocessor: Image preprocessor (default chosen from settings).
        profiles: Profiles to try, in tie-break order.
    """

    def __init__(
        self,
        settings: ExtractionSettings,
        engine: RecognitionEngine | None = None,
        preprocessor: ImagePreprocessor | PassthroughPreprocessor | None = None,
        profiles: Sequence[RecognitionProfile] = DEFAULT_PROFILES,
    ):
        self.settings = settings
        self.engine = engine if engine is not None else TesseractEngine(settings)
        self.preprocessor = (
            preprocessor if preprocessor is not None else build_preprocessor(settings)
        )
        self.profiles = tuple(profiles)

    def extract(self, data: bytes, source_name: str = "<bytes>") -> ExtractionResult:
        """Recover text from encoded image bytes."""
        if not data:
            logger.warning("Empty image payload: %s", source_name)
            return ExtractionResult.failed(
                FailureKind.NO_EXTRACTABLE_TEXT,
                "No text could be extracted from the image: the file is empty.",
                IMAGE_NO_TEXT_SUGGESTION,
            )

        image = self.preprocessor.preprocess(data)
        logger.info(
            "OCR on %s (%dx%d, preprocessed=%s, upscale x%d)",
            source_name,
            image.original_width,
            image.original_height,
            image.applied,
            image.scale_factor,
        )

        with scratch_image(image.data, self.settings.temp_dir) as path:
            attempts = recognize(self.engine, path, self.profiles)

        candidates = build_candidates(attempts, self.settings)
        if not candidates:
            errors = "; ".join(f"{a.profile_name}: {a.error}" for a in attempts)
            logger.error("All OCR profiles failed for %s: %s", source_name, errors)
            return ExtractionResult.failed(
                FailureKind.EXTRACTION_ENGINE_FAILURE,
                f"Failed to extract text from image: all recognition profiles failed ({errors or 'no profiles configured'}).",
                method=ExtractionMethod.FAILED,
            )

        best = select_best(candidates)
        if best is None:
            logger.warning("No usable OCR text for %s", source_name)
            return ExtractionResult.failed(
                FailureKind.NO_EXTRACTABLE_TEXT,
                "No text could be extracted from the image.",
                IMAGE_NO_TEXT_SUGGESTION,
            )

        logger.info(
            "OCR selected profile %s for %s (score %.3f, %d chars)",
            best.profile_name,
            source_name,
            best.quality_score,
            len(best.cleaned_text),
        )
        return ExtractionResult(
            success=True,
            text=best.cleaned_text,
            method=ExtractionMethod.TESSERACT,
            profile_name=best.profile_name,
            quality_score=best.quality_score,
            page_count=1,
            char_count=len(_WHITESPACE.sub("", best.cleaned_text)),
        )
