from __future__ import annotations

from lyric_timeline.model.types import Char, Line, Lyric, Paragraph, Word

from .helpers import (
    get_line_begin,
    get_line_end,
    get_paragraph_begin,
    get_paragraph_end,
    get_paragraphs,
    is_current_time,
)


def _offset(lyric: Lyric, offset: float | None) -> float:
    return lyric.offset_sec if offset is None else offset


def get_current_paragraph(
    lyric: Lyric, now: float, offset: float | None = None, equal: bool = True
) -> Paragraph | None:
    off = _offset(lyric, offset)
    for paragraph in get_paragraphs(lyric):
        if is_current_time(get_paragraph_begin(paragraph), get_paragraph_end(paragraph), now, off, equal):
            return paragraph
    return None


def get_current_line(lyric: Lyric, now: float, offset: float | None = None, equal: bool = True) -> Line | None:
    off = _offset(lyric, offset)
    paragraph = get_current_paragraph(lyric, now, off, equal)
    if paragraph is None:
        return None
    for line in paragraph.lines:
        if is_current_time(get_line_begin(line), get_line_end(line), now, off, equal):
            return line
    return None


def get_current_word(lyric: Lyric, now: float, offset: float | None = None, equal: bool = True) -> Word | None:
    """
    Word under the playhead. When two words both match (one ends exactly
    where the next begins) the later-starting one wins.
    """
    off = _offset(lyric, offset)
    line = get_current_line(lyric, now, off, equal)
    if line is None:
        return None
    for word in sorted(line.words, key=lambda w: w.begin, reverse=True):
        if is_current_time(word.begin, word.end, now, off, equal):
            return word
    return None


def get_current_char(lyric: Lyric, now: float, offset: float | None = None, equal: bool = True) -> Char | None:
    off = _offset(lyric, offset)
    word = get_current_word(lyric, now, off, equal)
    if word is None:
        return None
    for char in sorted(word.chars, key=lambda c: c.begin, reverse=True):
        if is_current_time(char.begin, char.end, now, off, equal):
            return char
    return None


# parent lookups, O(1) through the index


def get_paragraph_of_line(lyric: Lyric, line: Line) -> Paragraph | None:
    return lyric.index.paragraph_by_line_id.get(line.id)


def get_line_of_word(lyric: Lyric, word: Word) -> Line | None:
    return lyric.index.line_by_word_id.get(word.id)


def get_word_of_char(lyric: Lyric, char: Char) -> Word | None:
    return lyric.index.word_by_char_id.get(char.id)
