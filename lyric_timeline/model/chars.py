from __future__ import annotations

import regex

from .types import CharCategory

_GRAPHEME_RE = regex.compile(r"\X")

# Checked in order; the first full match wins.
_CATEGORY_PATTERNS: tuple[tuple[CharCategory, regex.Pattern], ...] = (
    (CharCategory.WHITESPACE, regex.compile(r"\s+")),
    (CharCategory.ALPHABET, regex.compile(r"[a-zA-Z]+")),
    (CharCategory.NUMBER, regex.compile(r"[0-9]+")),
    (CharCategory.KANJI, regex.compile(r"[\u4E00-\u9FFF]+")),
    (CharCategory.HIRAGANA, regex.compile(r"[\u3040-\u309F]+")),
    (CharCategory.KATAKANA, regex.compile(r"[\u30A0-\u30FF]+")),
)


def classify_char(text: str) -> CharCategory:
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.fullmatch(text):
            return category
    return CharCategory.OTHER


def split_graphemes(text: str) -> list[str]:
    # "e" + combining accent, flags and ZWJ emoji sequences stay one unit
    return _GRAPHEME_RE.findall(text)


def is_blank(text: str) -> bool:
    return bool(text) and not text.strip()
