"""Comparative quality score for cleaned OCR candidates.

The score ranks candidates produced from the same image; it is not an
absolute acceptance threshold. Three sub-signals, each in [0, 1]:

- word length: average word length / 10, capped at 1. Garbled output is
  dominated by one- and two-character fragments.
- word range: fraction of words between ``word_length_min`` and
  ``word_length_max`` characters.
- line density: fraction of non-blank lines that are at least
  ``score_line_density`` alphanumeric. This is stricter than the
  sanitizer's own cutoff, so lines that only just survived cleaning still
  count against the candidate.
"""

from __future__ import annotations

import logging

from docextract.config.settings import ExtractionSettings
from docextract.ocr.sanitizer import alnum_density

logger = logging.getLogger(__name__)


def score_text(text: str, settings: ExtractionSettings) -> float:
    """Score cleaned text in [0, 1]; empty text scores 0."""
    if not text:
        return 0.0

    words = text.split()
    if not words:
        return 0.0

    avg_length = sum(len(w) for w in words) / len(words)
    length_signal = min(1.0, avg_length / 10)

    in_range = sum(
        1
        for w in words
        if settings.word_length_min <= len(w) <= settings.word_length_max
    )
    range_signal = in_range / len(words)

    lines = [line.strip() for line in text.splitlines() if line.strip()]
    dense = sum(1 for line in lines if alnum_density(line) >= settings.score_line_density)
    density_signal = dense / len(lines) if lines else 0.0

    score = (
        settings.score_weight_word_length * length_signal
        + settings.score_weight_word_range * range_signal
        + settings.score_weight_line_density * density_signal
    )
    return max(0.0, min(1.0, score))
