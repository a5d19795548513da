"""Run every recognition profile against one preprocessed image.

Profiles run sequentially. Each run produces a ``RecognitionAttempt`` --
either text or an error string -- so one failing profile (e.g. the legacy
engine without its trained data installed) never stops the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

import pytesseract

from docextract.config.settings import ExtractionSettings
from docextract.ocr.profiles import DEFAULT_PROFILES, RecognitionProfile

logger = logging.getLogger(__name__)


class RecognitionEngine(Protocol):
    """Anything that can turn an image file into text under a profile."""

    def recognize(self, image_path: Path, profile: RecognitionProfile) -> str: ...


class TesseractEngine:
    """Tesseract OCR through pytesseract.

    pytesseract starts a fresh ``tesseract`` process per call, so an engine
    holds no per-image state and parameters cannot leak between requests.
    """

    def __init__(self, settings: ExtractionSettings):
        self.language = settings.ocr_language
        self.timeout = settings.ocr_timeout_seconds
        self.tesseract_cmd = settings.tesseract_cmd

    def _configure_command(self) -> None:
        # Configure tesseract executable path if non-default
        if self.tesseract_cmd != "tesseract":
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

    def recognize(self, image_path: Path, profile: RecognitionProfile) -> str:
        self._configure_command()
        return pytesseract.image_to_string(
            str(image_path),
            lang=self.language,
            config=profile.tesseract_config,
            timeout=self.timeout,
        )

    def is_available(self) -> bool:
        """Return True if the tesseract binary can be found and run."""
        self._configure_command()
        try:
            pytesseract.get_tesseract_version()
        except Exception as e:
            logger.debug("Tesseract unavailable: %s", e)
            return False
        return True


@dataclass(frozen=True)
class RecognitionAttempt:
    """Outcome of running one profile.

    Exactly one of ``text`` and ``error`` is set.
    """

    profile_name: str
    text: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


def run_profile(
    engine: RecognitionEngine,
    image_path: Path,
    profile: RecognitionProfile,
) -> RecognitionAttempt:
    """Run a single profile, converting any engine error into a failed attempt."""
    try:
        text = engine.recognize(image_path, profile)
    except Exception as e:
        logger.warning("OCR failed with profile %s: %s", profile.name, e)
        return RecognitionAttempt(profile_name=profile.name, error=str(e) or type(e).__name__)

    logger.debug("Profile %s recognized %d chars", profile.name, len(text))
    return RecognitionAttempt(profile_name=profile.name, text=text)


def recognize(
    engine: RecognitionEngine,
    image_path: Path,
    profiles: Iterable[RecognitionProfile] = DEFAULT_PROFILES,
) -> list[RecognitionAttempt]:
    """Run ``profiles`` in order and return one attempt per profile.

    Attempts are returned in profile order, failures included; callers
    filter on ``succeeded``.
    """
    attempts = [run_profile(engine, image_path, profile) for profile in profiles]

    succeeded = sum(1 for a in attempts if a.succeeded)
    logger.info(
        "OCR ran %d profiles: %d succeeded, %d failed",
        len(attempts),
        succeeded,
        len(attempts) - succeeded,
    )
    return attempts
