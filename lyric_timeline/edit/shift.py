from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, Sequence

from lyric_timeline.model.result import ErrorCode, Result, failure, success
from lyric_timeline.model.types import Lyric, Paragraph, Word

from .helpers import commit


def _shift_word(word: Word, offset_sec: float) -> Word:
    # only the word bounds are rounded; chars follow the word by the same delta
    begin = round(word.begin + offset_sec, 2)
    end = round(word.end + offset_sec, 2)
    delta = begin - word.begin
    last = len(word.chars)
    chars = tuple(
        replace(
            c,
            begin=begin if n == 1 else c.begin + delta,
            end=end if n == last else c.end + delta,
        )
        for n, c in enumerate(word.chars, start=1)
    )
    return replace(word, timing=replace(word.timing, begin=begin, end=end), chars=chars)


def shift_words(lyric: Lyric, word_ids: Iterable[str], offset_sec: float) -> Result[Lyric]:
    """
    Move the named words (and their chars) by offset_sec.

    Fails with INVALID_TIME if a word would start before 0 and with
    OVERLAP_DETECTED if any two words in the lyric end up overlapping.
    """
    wanted = set(word_ids)
    for wid in wanted:
        if wid not in lyric.index.word_by_id:
            return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {wid}", word_id=wid)
    if not math.isfinite(offset_sec):
        return failure(ErrorCode.INVALID_TIME, f"Offset must be finite: {offset_sec}", offset_sec=offset_sec)
    if not wanted:
        return success(lyric)

    for wid in wanted:
        word = lyric.index.word_by_id[wid]
        if round(word.begin + offset_sec, 2) < 0:
            return failure(
                ErrorCode.INVALID_TIME,
                f"Word {wid} would start before 0",
                word_id=wid,
                begin=word.begin,
                offset_sec=offset_sec,
            )

    paragraphs: list[Paragraph] = []
    for paragraph in lyric.paragraphs:
        lines = []
        for line in paragraph.lines:
            if any(w.id in wanted for w in line.words):
                line = replace(
                    line, words=tuple(_shift_word(w, offset_sec) if w.id in wanted else w for w in line.words)
                )
            lines.append(line)
        if any(new is not old for new, old in zip(lines, paragraph.lines)):
            paragraph = replace(paragraph, lines=tuple(lines))
        paragraphs.append(paragraph)

    return commit(lyric, paragraphs)


def shift_lines(lyric: Lyric, line_ids: Sequence[str], offset_sec: float) -> Result[Lyric]:
    word_ids: list[str] = []
    for lid in line_ids:
        line = lyric.index.line_by_id.get(lid)
        if line is None:
            return failure(ErrorCode.LINE_NOT_FOUND, f"Line not found: {lid}", line_id=lid)
        word_ids.extend(w.id for w in line.words)
    return shift_words(lyric, word_ids, offset_sec)


def shift_paragraphs(lyric: Lyric, paragraph_ids: Sequence[str], offset_sec: float) -> Result[Lyric]:
    word_ids: list[str] = []
    for pid in paragraph_ids:
        paragraph = lyric.index.paragraph_by_id.get(pid)
        if paragraph is None:
            return failure(ErrorCode.PARAGRAPH_NOT_FOUND, f"Paragraph not found: {pid}", paragraph_id=pid)
        word_ids.extend(w.id for line in paragraph.lines for w in line.words)
    return shift_words(lyric, word_ids, offset_sec)


def shift_range(lyric: Lyric, begin_time: float, end_time: float, offset_sec: float) -> Result[Lyric]:
    """Shift every word whose begin falls in [begin_time, end_time)."""
    word_ids = [w.id for w in lyric.index.word_by_id.values() if begin_time <= w.begin < end_time]
    return shift_words(lyric, word_ids, offset_sec)
