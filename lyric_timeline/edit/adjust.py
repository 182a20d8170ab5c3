from __future__ import annotations

import math
from dataclasses import replace

from lyric_timeline.model.result import ErrorCode, Result, failure
from lyric_timeline.model.types import Char, Lyric, Word

from .helpers import commit, replace_line


def _rescale(chars: tuple[Char, ...], old_begin: float, old_end: float, begin: float, end: float) -> tuple[Char, ...]:
    scale = (end - begin) / (old_end - old_begin)

    def move(t: float) -> float:
        return begin + (t - old_begin) * scale

    out = []
    for n, c in enumerate(chars, start=1):
        c_begin = begin if n == 1 else move(c.begin)
        c_end = end if n == len(chars) else move(c.end)
        out.append(replace(c, begin=c_begin, end=c_end))
    return tuple(out)


def adjust_word_timing(lyric: Lyric, word_id: str, begin: float, end: float) -> Result[Lyric]:
    """
    Move both boundaries of one word. Chars keep their relative share of
    the word; boundaries are rounded to 2 decimals.
    """
    word = lyric.index.word_by_id.get(word_id)
    if word is None:
        return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {word_id}", word_id=word_id)

    if not (math.isfinite(begin) and math.isfinite(end)):
        return failure(ErrorCode.INVALID_TIME, "Times must be finite", begin=begin, end=end)
    begin, end = round(begin, 2), round(end, 2)
    if begin < 0:
        return failure(ErrorCode.INVALID_TIME, f"Begin must not be negative: {begin}", begin=begin, end=end)
    if begin >= end:
        return failure(ErrorCode.INVALID_TIME, f"Begin must be less than end: {begin} >= {end}", begin=begin, end=end)

    adjusted: Word = replace(
        word,
        timing=replace(word.timing, begin=begin, end=end),
        chars=_rescale(word.chars, word.begin, word.end, begin, end),
    )

    line = lyric.index.line_by_word_id[word.id]
    paragraph = lyric.index.paragraph_by_line_id[line.id]
    new_line = replace(line, words=tuple(adjusted if w.id == word.id else w for w in line.words))
    return commit(lyric, replace_line(lyric.paragraphs, paragraph.id, new_line))


def adjust_word_begin(lyric: Lyric, word_id: str, begin: float) -> Result[Lyric]:
    word = lyric.index.word_by_id.get(word_id)
    if word is None:
        return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {word_id}", word_id=word_id)
    return adjust_word_timing(lyric, word_id, begin, word.end)


def adjust_word_end(lyric: Lyric, word_id: str, end: float) -> Result[Lyric]:
    word = lyric.index.word_by_id.get(word_id)
    if word is None:
        return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {word_id}", word_id=word_id)
    return adjust_word_timing(lyric, word_id, word.begin, end)
