"""Tests for OCR text cleaning."""

import pytest

from docextract.ocr.sanitizer import alnum_density, clean_text, is_engagement_line


class TestEngagementChrome:
    @pytest.mark.parametrize(
        "line",
        [
            "Jane Doe and 54 others 5 comments",
            "Jane Doe and 54 others",
            "Baani Kaur Ahuja and 54 others 5 comments",
            "JANE DOE and 54 others · 5 comments",
            "jane doe and 54 others",
            "54 others",
            "5 comments",
            "1 comment",
            "12 likes",
            "3 reposts",
            "Like",
            "comment",
            "SHARE",
            "Repost",
            "Send",
        ],
    )
    def test_engagement_lines_are_dropped(self, line):
        raw = f"We are hiring engineers this spring\n{line}\nApply through the careers page"
        cleaned = clean_text(raw)
        assert line not in cleaned.splitlines()
        assert "We are hiring engineers this spring" in cleaned
        assert "Apply through the careers page" in cleaned

    @pytest.mark.parametrize(
        "line",
        [
            "JANE DOE and 54 others · 5 comments",
            "jane doe and 54 others",
            "JANE MARY DOE AND 3 OTHERS 2 COMMENTS",
        ],
    )
    def test_name_patterns_ignore_case(self, line):
        assert is_engagement_line(line)

    def test_ordinary_sentences_survive(self):
        assert not is_engagement_line("Share your thoughts on the new release")
        assert not is_engagement_line("Our team and 3 partners shipped it")


class TestNoiseLines:
    def test_symbol_only_line_is_removed(self):
        assert clean_text("●●●") == ""

    def test_short_symbol_lines_are_removed(self):
        assert clean_text("•\n»»\nReal content here") == "Real content here"

    def test_short_lines_are_removed(self):
        assert clean_text("ok\nA proper line of text") == "A proper line of text"

    def test_low_density_line_is_removed(self):
        # 1 alphanumeric out of 8 characters
        assert clean_text("--a--//|\nKeep this line") == "Keep this line"

    def test_line_at_density_threshold_is_kept(self):
        assert alnum_density("abc-------") == pytest.approx(0.3)
        assert clean_text("abc-------") == "abc-------"


class TestGlyphsAndQuotes:
    def test_icon_glyphs_are_stripped(self):
        assert clean_text("Price © 2024 ™ [beta]") == "Price 2024 beta"

    def test_curly_quotes_are_straightened(self):
        assert clean_text("“Hello” it’s fine") == "\"Hello\" it's fine"


class TestWhitespace:
    def test_horizontal_whitespace_collapses(self):
        assert clean_text("Hello \t   World") == "Hello World"

    def test_blank_lines_do_not_survive(self):
        assert clean_text("First line\n\n\n\n\nSecond line") == "First line\nSecond line"

    def test_surrounding_whitespace_trimmed(self):
        assert clean_text("\n\n   Hello World   \n\n") == "Hello World"


class TestInvariants:
    RAW = (
        "  Posted by Jane Doe  \n"
        "●●●\n"
        "We launched a “new” product today!\n"
        "Jane Doe and 54 others 5 comments\n"
        "Like\n"
        "|\n"
        "Thanks to everyone involved @team\n"
    )

    def test_output_not_longer_than_input(self):
        assert len(clean_text(self.RAW)) <= len(self.RAW)

    def test_output_lines_come_from_input(self):
        normalized_input = self.RAW.replace("“", '"').replace("”", '"').replace("@", "")
        for line in clean_text(self.RAW).splitlines():
            assert line in normalized_input

    def test_deterministic(self):
        assert clean_text(self.RAW) == clean_text(self.RAW)

    def test_expected_lines(self):
        assert clean_text(self.RAW).splitlines() == [
            "Posted by Jane Doe",
            'We launched a "new" product today!',
            "Thanks to everyone involved team",
        ]

    def test_empty_input(self):
        assert clean_text("") == ""
