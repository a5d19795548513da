"""Tests for best-candidate selection."""

from docextract.ocr.selector import Candidate, select_best


def _candidate(name: str, score: float, text: str = "Some usable text") -> Candidate:
    return Candidate(raw_text=text, cleaned_text=text, quality_score=score, profile_name=name)


def test_empty_set_returns_none():
    assert select_best([]) is None


def test_highest_score_wins():
    candidates = [_candidate("a", 0.4), _candidate("b", 0.9), _candidate("c", 0.6)]
    assert select_best(candidates).profile_name == "b"


def test_ties_go_to_first_declared_profile():
    candidates = [_candidate("a", 0.7), _candidate("b", 0.7), _candidate("c", 0.2)]
    assert select_best(candidates).profile_name == "a"


def test_tie_break_is_stable_across_calls():
    candidates = [_candidate("b", 0.5), _candidate("a", 0.5), _candidate("c", 0.5)]
    winners = {select_best(candidates).profile_name for _ in range(20)}
    assert winners == {"b"}


def test_empty_top_candidate_fails():
    candidates = [_candidate("a", 0.0, text="   "), _candidate("b", 0.0, text="")]
    assert select_best(candidates) is None


def test_input_order_is_not_mutated():
    candidates = [_candidate("a", 0.1), _candidate("b", 0.9)]
    select_best(candidates)
    assert [c.profile_name for c in candidates] == ["a", "b"]
