"""Pick the best OCR candidate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """One profile's recognized text after cleaning and scoring."""

    raw_text: str
    cleaned_text: str
    quality_score: float
    profile_name: str


def select_best(candidates: Sequence[Candidate]) -> Candidate | None:
    """Return the highest-scoring candidate with usable text.

    ``sorted`` is stable, so among equal scores the candidate from the
    earliest-declared profile wins. Returns None when there are no
    candidates or the winner's cleaned text is empty.
    """
    if not candidates:
        return None

    ranked = sorted(candidates, key=lambda c: c.quality_score, reverse=True)
    best = ranked[0]

    for candidate in ranked:
        logger.debug(
            "Candidate %s scored %.3f (%d chars)",
            candidate.profile_name,
            candidate.quality_score,
            len(candidate.cleaned_text),
        )

    if not best.cleaned_text.strip():
        return None
    return best
