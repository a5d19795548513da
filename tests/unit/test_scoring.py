"""Tests for candidate quality scoring."""

import pytest

from docextract.config.settings import ExtractionSettings
from docextract.ocr.scoring import score_text


def test_empty_text_scores_zero(settings):
    assert score_text("", settings) == 0.0
    assert score_text("   \n  ", settings) == 0.0


def test_known_value(settings):
    # avg length 5 -> 0.5, all words in range, one fully dense line
    assert score_text("Hello World", settings) == pytest.approx(0.3 * 0.5 + 0.4 + 0.3)


def test_score_is_bounded(settings):
    long_words = " ".join(["a" * 40] * 5)
    score = score_text(long_words, settings)
    assert 0.0 <= score <= 1.0
    # length signal capped at 1, no words in range, line fully dense
    assert score == pytest.approx(0.3 + 0.0 + 0.3)


def test_monotonic_on_line_density(settings):
    # Same word count and lengths; only line density differs
    dense = "alpha gamma kappa\ndelta omega sigma"
    half_dense = "alpha gamma kappa\nde%%% om%%% si%%%"
    assert score_text(dense, settings) >= score_text(half_dense, settings)
    assert score_text(dense, settings) == pytest.approx(0.85)
    assert score_text(half_dense, settings) == pytest.approx(0.70)


def test_garbled_text_scores_below_prose(settings):
    prose = "The quarterly results exceeded expectations across every region"
    garbled = "Th e q ua rt ly re su lt s ex c"
    assert score_text(prose, settings) > score_text(garbled, settings)


def test_weights_are_configurable():
    length_only = ExtractionSettings(
        score_weight_word_length=1.0,
        score_weight_word_range=0.0,
        score_weight_line_density=0.0,
    )
    assert score_text("Hello World", length_only) == pytest.approx(0.5)


def test_word_range_is_configurable():
    strict = ExtractionSettings(word_length_min=6)
    # Neither five-letter word is in range any more
    assert score_text("Hello World", strict) == pytest.approx(0.15 + 0.0 + 0.3)


def test_deterministic(settings):
    text = "Repeated scoring gives the same answer"
    assert score_text(text, settings) == score_text(text, settings)
