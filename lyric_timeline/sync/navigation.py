from __future__ import annotations

from lyric_timeline.model.types import Line, Lyric, Paragraph, Word

from .current import get_current_line
from .helpers import (
    get_line_begin,
    get_line_end,
    get_lines,
    get_paragraph_begin,
    get_paragraph_end,
    get_paragraphs,
)


def _offset(lyric: Lyric, offset: float | None) -> float:
    return lyric.offset_sec if offset is None else offset


def get_next_paragraph(lyric: Lyric, now: float, offset: float | None = None) -> Paragraph | None:
    t = now + _offset(lyric, offset)
    return next((p for p in get_paragraphs(lyric) if get_paragraph_begin(p) > t), None)


def get_next_line(lyric: Lyric, now: float, offset: float | None = None) -> Line | None:
    t = now + _offset(lyric, offset)
    return next((line for line in get_lines(lyric) if get_line_begin(line) > t), None)


def get_next_word(lyric: Lyric, now: float, offset: float | None = None) -> Word | None:
    """Next word in the current line, else the first word of the next line."""
    off = _offset(lyric, offset)
    t = now + off
    line = get_current_line(lyric, now, off)
    if line is not None:
        for word in sorted(line.words, key=lambda w: w.begin):
            if word.begin > t:
                return word

    nxt = get_next_line(lyric, now, off)
    return get_first_word(nxt) if nxt is not None else None


def get_prev_paragraph(lyric: Lyric, now: float, offset: float | None = None) -> Paragraph | None:
    t = now + _offset(lyric, offset)
    return next((p for p in reversed(get_paragraphs(lyric)) if get_paragraph_end(p) < t), None)


def get_prev_line(lyric: Lyric, now: float, offset: float | None = None) -> Line | None:
    t = now + _offset(lyric, offset)
    return next((line for line in reversed(get_lines(lyric)) if get_line_end(line) < t), None)


def get_prev_word(lyric: Lyric, now: float, offset: float | None = None) -> Word | None:
    """Previous finished word in the current line, else the last word of the previous line."""
    off = _offset(lyric, offset)
    t = now + off
    line = get_current_line(lyric, now, off)
    if line is not None:
        for word in sorted(line.words, key=lambda w: w.begin, reverse=True):
            if word.end < t:
                return word

    prev = get_prev_line(lyric, now, off)
    return get_last_word(prev) if prev is not None else None


def get_first_word(line: Line) -> Word | None:
    return line.words[0] if line.words else None


def get_last_word(line: Line) -> Word | None:
    return line.words[-1] if line.words else None


def get_line_position_in_lyric(lyric: Lyric, line: Line) -> int:
    """1-based position among all lines by time; 0 when the line is not in the lyric."""
    for n, candidate in enumerate(get_lines(lyric), start=1):
        if candidate.id == line.id:
            return n
    return 0


def get_line_position_in_paragraph(lyric: Lyric, line: Line) -> int | None:
    paragraph = lyric.index.paragraph_by_line_id.get(line.id)
    if paragraph is None:
        return None
    for n, candidate in enumerate(paragraph.lines, start=1):
        if candidate.id == line.id:
            return n
    return None
