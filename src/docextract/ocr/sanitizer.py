"""Clean raw OCR output before scoring.

Screenshots of social-media posts come back from Tesseract with the
post body buried in interface chrome: reaction counts, "Jane Doe and 54
others", button labels, and stray glyphs recognised from icons. The
sanitizer removes that noise line by line, in this order:

1. Lines of 1-2 symbols (isolated noise glyphs).
2. Lines of 3+ symbols with no word characters (borders, separators).
3. Icon-like glyphs inside lines (``€ @ ® © ™ [ ] { }``).
4. Curly quotes normalized to straight quotes.
5. Engagement-metric lines and bare action-button labels.
6. Density filter: lines shorter than 3 chars, or with fewer than 30%
   alphanumeric characters.
7. Whitespace: blank-line runs collapsed, spaces/tabs collapsed, trimmed.

The sanitizer never adds text: every output line is an input line with
characters removed.
"""

from __future__ import annotations

import re

_SHORT_SYMBOL_LINE = re.compile(r"^[^\w\s]{1,2}$")
_SYMBOL_ONLY_LINE = re.compile(r"^[^\w\s]{3,}$")
_ICON_GLYPHS = re.compile(r"[€@®©™\[\]{}]")
_ALNUM = re.compile(r"[a-zA-Z0-9]")
_BLANK_RUNS = re.compile(r"\n{3,}")
_HORIZONTAL_WS = re.compile(r"[ \t]+")

_QUOTES = str.maketrans({
    "“": '"',
    "”": '"',
    "„": '"',
    "‘": "'",
    "’": "'",
    "‚": "'",
})

ENGAGEMENT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "54 others", "5 comments"
    re.compile(r"^\d+\s+(others?|comments?)$", re.IGNORECASE),
    # "... and 54 others 5 comments"
    re.compile(r"and\s+\d+\s+others?\s+\d+\s+comments?", re.IGNORECASE),
    # "Jane Mary Doe reacted ... and 54 others ... 5 comments"
    re.compile(
        r"^[A-Z][a-z]+\s+[A-Z][a-z]+\s+[A-Z][a-z]+.*and\s+\d+\s+others.*\d+\s+comments?",
        re.IGNORECASE,
    ),
    # "Jane Doe and 54 others"
    re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+\s+and\s+\d+\s+others?", re.IGNORECASE),
    # "12 likes", "3 reposts"
    re.compile(r"^\d+\s*(like|comment|share|repost)", re.IGNORECASE),
    # Bare action buttons
    re.compile(r"^(like|comment|share|repost|send)$", re.IGNORECASE),
)


def is_engagement_line(line: str) -> bool:
    """Return True if ``line`` looks like a reaction count or UI button."""
    return any(pattern.search(line) for pattern in ENGAGEMENT_PATTERNS)


def alnum_density(line: str) -> float:
    """Fraction of ``line`` made of ASCII letters and digits (0 for empty)."""
    if not line:
        return 0.0
    return len(_ALNUM.findall(line)) / len(line)


def clean_text(
    raw_text: str,
    min_line_length: int = 3,
    min_density: float = 0.3,
) -> str:
    """Strip OCR artifacts and social-media chrome from recognized text.

    Args:
        raw_text: Text as returned by the recognition engine.
        min_line_length: Lines shorter than this (after trimming) are dropped.
        min_density: Minimum alphanumeric fraction for a line to survive.

    Returns:
        Cleaned text; may be empty.
    """
    kept: list[str] = []
    for line in raw_text.splitlines():
        line = line.strip()

        if _SHORT_SYMBOL_LINE.match(line) or _SYMBOL_ONLY_LINE.match(line):
            continue

        line = _ICON_GLYPHS.sub("", line).translate(_QUOTES).strip()

        if is_engagement_line(line):
            continue

        if len(line) < min_line_length or alnum_density(line) < min_density:
            continue

        kept.append(line)

    cleaned = _BLANK_RUNS.sub("\n\n", "\n".join(kept))
    cleaned = _HORIZONTAL_WS.sub(" ", cleaned)
    return cleaned.strip()
