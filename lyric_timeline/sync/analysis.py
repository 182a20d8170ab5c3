from __future__ import annotations

import statistics
from dataclasses import dataclass
from typing import Iterable, Sequence

from lyric_timeline.model.types import Char, CharCategory, Line, Lyric, LyricSummary, Paragraph, VoidPeriod, Word

from .current import get_current_char, get_current_line, get_current_paragraph, get_current_word
from .helpers import (
    get_line_begin,
    get_line_chars,
    get_line_duration,
    get_line_end,
    get_lines,
    get_paragraph_chars,
    get_paragraph_duration,
    get_paragraph_end,
    get_paragraphs,
    get_word_duration,
    get_words,
)
from .navigation import (
    get_next_line,
    get_next_paragraph,
    get_next_word,
    get_prev_line,
    get_prev_paragraph,
    get_prev_word,
)

# latin letters and digits are read roughly twice as fast as one kana/kanji
_HALF_WEIGHT = frozenset({CharCategory.ALPHABET, CharCategory.NUMBER})

CONNECTED_AVG_LINE_SEC = 1.5
CONNECTED_GAP_SEC = 0.1


@dataclass(frozen=True, slots=True)
class SpeedUnit:
    duration: float
    chars: Sequence[Char]


def char_weight(char: Char) -> float:
    if char.category is CharCategory.WHITESPACE:
        return 0.0
    return 0.5 if char.category in _HALF_WEIGHT else 1.0


def _weighted_rate(chars: Iterable[Char], duration: float) -> float:
    return sum(char_weight(c) for c in chars) / duration


def calculate_speed(units: Sequence[SpeedUnit]) -> float:
    """Median weighted chars/sec across sibling units, 2 decimals; 0.0 when empty."""
    if not units:
        return 0.0
    return round(statistics.median(_weighted_rate(u.chars, u.duration) for u in units), 2)


def get_word_speed(word: Word) -> float:
    return _weighted_rate(word.chars, get_word_duration(word))


def get_line_speed(line: Line) -> float:
    return calculate_speed([SpeedUnit(get_word_duration(w), w.chars) for w in line.words])


def get_paragraph_speed(paragraph: Paragraph) -> float:
    return calculate_speed([SpeedUnit(get_line_duration(line), get_line_chars(line)) for line in paragraph.lines])


def get_lyric_speed(lyric: Lyric) -> float:
    return calculate_speed(
        [SpeedUnit(get_paragraph_duration(p), get_paragraph_chars(p)) for p in get_paragraphs(lyric)]
    )


def get_void_periods(lyric: Lyric) -> list[VoidPeriod]:
    """
    Intervals in [0, duration] where no word is active, in time order.

    Gaps are measured from the furthest end seen so far, so a long word
    that covers several shorter ones never yields a bogus gap.
    """
    words = get_words(lyric)
    if not words:
        return []

    periods: list[VoidPeriod] = []
    first = words[0]
    if first.begin > 0:
        periods.append(VoidPeriod(begin=0.0, end=first.begin, duration=round(first.begin, 2)))

    reach = first.end
    for word in words[1:]:
        if word.begin > reach:
            periods.append(VoidPeriod(begin=reach, end=word.begin, duration=round(word.begin - reach, 2)))
        reach = max(reach, word.end)

    if lyric.duration > reach:
        periods.append(VoidPeriod(begin=reach, end=lyric.duration, duration=round(lyric.duration - reach, 2)))
    return periods


def is_void_time(lyric: Lyric, now: float) -> bool:
    return any(p.begin <= now <= p.end for p in get_void_periods(lyric))


def get_paragraph_average_line_duration(paragraph: Paragraph) -> float:
    if not paragraph.lines:
        return 0.0
    return statistics.fmean(get_line_duration(line) for line in paragraph.lines)


def get_current_summary(lyric: Lyric, now: float, offset: float | None = None) -> LyricSummary:
    """Everything a karaoke view needs for one frame at `now`."""
    off = lyric.offset_sec if offset is None else offset

    paragraph = get_current_paragraph(lyric, now, off)
    line = get_current_line(lyric, now, off)
    prev_line = get_prev_line(lyric, now, off)
    next_line = get_next_line(lyric, now, off)

    gap_before = get_line_begin(line) - get_line_end(prev_line) if line and prev_line else None
    is_connected = (
        paragraph is not None
        and get_paragraph_average_line_duration(paragraph) < CONNECTED_AVG_LINE_SEC
        and gap_before is not None
        and gap_before < CONNECTED_GAP_SEC
    )

    return LyricSummary(
        is_connected=is_connected,
        is_paragraph_finish_motion=get_paragraph_end(paragraph) < now if paragraph else True,
        current_char=get_current_char(lyric, now, off),
        current_word=get_current_word(lyric, now, off),
        current_line=line,
        current_paragraph=paragraph,
        next_word=get_next_word(lyric, now, off),
        next_line=next_line,
        next_paragraph=get_next_paragraph(lyric, now, off),
        prev_word=get_prev_word(lyric, now, off),
        prev_line=prev_line,
        prev_paragraph=get_prev_paragraph(lyric, now, off),
        next_waiting_time=get_line_begin(next_line) - now if next_line else None,
        last_line_index=len(get_lines(lyric)) - 1,
        last_line_index_in_paragraph=len(paragraph.lines) - 1 if paragraph else None,
        lyric_text_per_second=get_lyric_speed(lyric),
        paragraph_text_per_second=get_paragraph_speed(paragraph) if paragraph else None,
        line_text_per_second=get_line_speed(line) if line else None,
    )
