from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from lyric_timeline.config import DEFAULT_BUILD_CONFIG, BuildConfig
from lyric_timeline.model.chars import classify_char, is_blank, split_graphemes
from lyric_timeline.model.ids import IdGenerator, uuid_ids
from lyric_timeline.model.types import Char, Line, TimingInput, TimingLike, Word, WordTiming

logger = logging.getLogger(__name__)


def create_char(
    word_id: str,
    position: int,
    text: str,
    begin: float,
    end: float,
    *,
    ids: IdGenerator = uuid_ids,
) -> Char:
    return Char(
        id=ids("char"),
        word_id=word_id,
        text=text,
        category=classify_char(text),
        position=position,
        begin=begin,
        end=end,
    )


def resolve_timing(timing: TimingLike, *, ids: IdGenerator = uuid_ids) -> WordTiming:
    if isinstance(timing, WordTiming):
        return timing
    return WordTiming(
        word_id=ids("word"),
        text=timing.text,
        begin=timing.begin,
        end=timing.end,
        has_whitespace=bool(timing.has_whitespace),
        has_new_line=bool(timing.has_new_line),
    )


def build_chars(timing: WordTiming, *, ids: IdGenerator = uuid_ids) -> tuple[Char, ...]:
    units = split_graphemes(timing.text)
    if not units:
        return ()
    step = (timing.end - timing.begin) / len(units)
    chars = []
    for i, unit in enumerate(units):
        position = i + 1
        begin = timing.begin + i * step
        # last unit ends exactly on the word boundary, no float drift
        end = timing.end if position == len(units) else timing.begin + position * step
        chars.append(create_char(timing.word_id, position, unit, begin, end, ids=ids))
    return tuple(chars)


def create_word(
    line_id: str,
    position: int,
    timing: TimingLike,
    *,
    ids: IdGenerator = uuid_ids,
) -> Word:
    """
    Build a Word and its chars.

    A WordTiming keeps its word_id (edits rely on this to preserve identity);
    a raw TimingInput gets a fresh one. The word's duration is divided
    evenly between its grapheme clusters.
    """
    resolved = resolve_timing(timing, ids=ids)
    return Word(
        id=resolved.word_id,
        line_id=line_id,
        position=position,
        timing=resolved,
        chars=build_chars(resolved, ids=ids),
    )


def _should_join(prev: WordTiming | None, fragment: TimingLike, gap_sec: float) -> bool:
    if prev is None:
        return False
    if prev.has_new_line or prev.has_whitespace:
        return False
    return fragment.begin - prev.end <= gap_sec


def create_line(
    position: int,
    timings: Sequence[TimingLike],
    join_near_words: bool | None = None,
    *,
    line_id: str | None = None,
    ids: IdGenerator = uuid_ids,
    config: BuildConfig = DEFAULT_BUILD_CONFIG,
) -> Line:
    """
    Normalize raw fragments into the words of one line.

    - fragments are ordered by begin
    - whitespace-only fragments are dropped; they only mark that the
      preceding word is followed by a space
    - with joining enabled, a fragment starting within join_gap_sec of the
      previous word's end is glued onto that word, unless the previous word
      ends with a space or a line break
    """
    if join_near_words is None:
        join_near_words = config.join_near_words
    lid = line_id or ids("line")
    ordered = sorted(timings, key=lambda t: t.begin)

    emitted: list[WordTiming] = []
    for i, fragment in enumerate(ordered):
        if is_blank(fragment.text):
            continue
        nxt = ordered[i + 1] if i + 1 < len(ordered) else None
        has_whitespace = bool(fragment.has_whitespace) or (nxt is not None and is_blank(nxt.text))

        prev = emitted[-1] if emitted else None
        if join_near_words and _should_join(prev, fragment, config.join_gap_sec):
            assert prev is not None
            logger.debug("joining %r onto %r (gap %.3fs)", fragment.text, prev.text, fragment.begin - prev.end)
            emitted[-1] = replace(
                prev,
                text=prev.text + fragment.text,
                end=fragment.end,
                has_new_line=bool(fragment.has_new_line),
                has_whitespace=has_whitespace,
            )
            continue

        resolved = resolve_timing(fragment, ids=ids)
        emitted.append(replace(resolved, has_whitespace=has_whitespace))

    words = tuple(create_word(lid, n, t, ids=ids) for n, t in enumerate(emitted, start=1))
    return Line(id=lid, position=position, words=words)


def fuse_fragments(head: TimingLike, tail: TimingLike) -> TimingLike:
    """Glue the first fragment of a following line group onto the last one of the previous group."""
    text = f"{head.text} {tail.text}"
    end = max(head.end, tail.end)
    if isinstance(head, WordTiming):
        return replace(
            head,
            text=text,
            end=end,
            has_whitespace=bool(tail.has_whitespace),
            has_new_line=bool(tail.has_new_line),
        )
    return TimingInput(
        text=text,
        begin=head.begin,
        end=end,
        has_whitespace=tail.has_whitespace,
        has_new_line=tail.has_new_line,
    )
