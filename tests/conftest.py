"""Shared pytest fixtures."""

import pytest

from docextract.config.settings import ExtractionSettings


@pytest.fixture
def settings() -> ExtractionSettings:
    """Default extraction settings (YAML + defaults, no overrides)."""
    return ExtractionSettings()
