"""Pydantic settings models for docextract configuration.

Two settings classes load from separate YAML config files with environment
variable override support. Source priority (highest to lowest):

    1. Environment variables (with prefix, e.g., EXTRACTION_OCR_LANGUAGE)
    2. .env file
    3. YAML config file (e.g., config/extraction.yaml)
    4. Default values defined here

Config paths are resolved relative to PROJECT_ROOT so the application works
regardless of the current working directory.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Resolve project root: settings.py -> config/ -> docextract/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"


class ExtractionSettings(BaseSettings):
    """Text recovery: image preprocessing, OCR engine, and scoring heuristics.

    The scoring weights and thresholds were tuned empirically against
    screenshots and scans; they are exposed here so they can be adjusted
    without touching the scorer.
    """

    # Preprocessing
    preprocess_enabled: bool = True
    min_upscale_width: int = 1000
    min_upscale_factor: int = 2
    contrast_slope: float = 1.2
    median_filter_size: int = 3  # Must be odd (Pillow MedianFilter)
    temp_dir: Optional[str] = None  # None = system temp directory

    # Recognition engine
    ocr_language: str = "eng"
    tesseract_cmd: str = "tesseract"
    ocr_timeout_seconds: int = 0  # 0 = no timeout

    # Quality scoring
    score_weight_word_length: float = 0.3
    score_weight_word_range: float = 0.4
    score_weight_line_density: float = 0.3
    word_length_min: int = 3
    word_length_max: int = 20
    score_line_density: float = 0.4

    # Sanitizer
    sanitizer_min_line_length: int = 3
    sanitizer_line_density: float = 0.3

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "extraction.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="EXTRACTION_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class PipelineSettings(BaseSettings):
    """Process-level operations: logging and output paths."""

    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5
    output_dir: str = "data/extracted"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="PIPELINE_",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
