"""
Text normalization — cleanup for pasted text and the comparison key used by the diff engine.
"""

from __future__ import annotations

import re
import unicodedata

# Curly quotes / dashes → ASCII. Applied after NFKC, which leaves these untouched.
_TYPOGRAPHIC = str.maketrans({
    "\u2018": "'",   # left single quote
    "\u2019": "'",   # right single quote
    "\u201c": '"',   # left double quote
    "\u201d": '"',   # right double quote
    "\u2013": "-",   # en-dash
    "\u2014": "-",   # em-dash
})

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_for_comparison(text: str | None) -> str:
    """
    Comparison key for two strings that should be treated as equal when only
    cosmetics differ: NFKC, ASCII quotes/dashes, single spaces, trimmed.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)
    text = text.translate(_TYPOGRAPHIC)
    return _WHITESPACE_RUN.sub(" ", text).strip()


def strings_equivalent(a: str | None, b: str | None) -> bool:
    """True when two strings differ only by formatting."""
    return normalize_for_comparison(a) == normalize_for_comparison(b)


def normalize_text(text: str) -> str:
    """Normalize whitespace and strip bad unicode from pasted job / resume text, keeping line breaks."""
    text = unicodedata.normalize("NFKC", text)
    text = text.translate(_TYPOGRAPHIC)

    replacements = {
        "\u2026": "...",  # ellipsis
        "\u00a0": " ",    # non-breaking space
        "\u200b": "",     # zero-width space
        "\ufeff": "",     # BOM
    }
    for old, new in replacements.items():
        text = text.replace(old, new)

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)

    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(lines).strip()


def keyword_pattern(keyword: str) -> re.Pattern[str] | None:
    """
    Case-insensitive whole-token pattern for a keyword.
    Token edges are alphanumerics, so "C++", "Node.js" and "CI/CD" match literally
    while "Go" does not match inside "Google".
    """
    key = normalize_for_comparison(keyword).lower()
    if not key:
        return None
    return re.compile(r"(?<![a-z0-9])" + re.escape(key) + r"(?![a-z0-9])")


def count_keyword(keyword: str, text: str) -> int:
    """Occurrences of `keyword` in already-normalized, lowercased `text`."""
    pattern = keyword_pattern(keyword)
    if pattern is None:
        return 0
    return len(pattern.findall(text))
