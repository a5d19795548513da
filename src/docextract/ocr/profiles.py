"""Recognition profiles tried against every image.

Each profile pins Tesseract's page segmentation mode (PSM) and OCR engine
mode (OEM). Profiles run in declaration order; selection is score based,
but ties go to the earlier profile, so the most conservative assumption
is declared first.
"""

from dataclasses import dataclass
from enum import IntEnum


class PageSegmentation(IntEnum):
    """Subset of Tesseract ``--psm`` values used by the profiles."""

    AUTO = 3
    SINGLE_BLOCK = 6
    SPARSE_TEXT = 11


class EngineMode(IntEnum):
    """Tesseract ``--oem`` values."""

    LEGACY = 0
    LSTM = 1


@dataclass(frozen=True)
class RecognitionProfile:
    """A named segmentation/engine configuration for one recognition pass."""

    name: str
    page_segmentation: PageSegmentation
    engine_mode: EngineMode

    @property
    def tesseract_config(self) -> str:
        """Command-line flags passed through pytesseract's ``config``."""
        return f"--psm {int(self.page_segmentation)} --oem {int(self.engine_mode)}"


DEFAULT_PROFILES: tuple[RecognitionProfile, ...] = (
    # Clean single-column documents
    RecognitionProfile("single_block", PageSegmentation.SINGLE_BLOCK, EngineMode.LSTM),
    # Layout unknown
    RecognitionProfile("auto", PageSegmentation.AUTO, EngineMode.LSTM),
    # Screenshots and UI with scattered short text
    RecognitionProfile("sparse", PageSegmentation.SPARSE_TEXT, EngineMode.LSTM),
    # Legacy recognizer tends to fail differently from the LSTM one
    RecognitionProfile("single_block_legacy", PageSegmentation.SINGLE_BLOCK, EngineMode.LEGACY),
)
