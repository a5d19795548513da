"""OCR pipeline for raster images."""

from .pipeline import OcrPipeline
from .profiles import DEFAULT_PROFILES, RecognitionProfile
from .selector import Candidate

__all__ = [
    "DEFAULT_PROFILES",
    "Candidate",
    "OcrPipeline",
    "RecognitionProfile",
]
