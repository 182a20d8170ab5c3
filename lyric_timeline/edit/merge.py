from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from lyric_timeline.build.factories import create_word
from lyric_timeline.model.ids import IdGenerator, uuid_ids
from lyric_timeline.model.result import ErrorCode, Result, failure
from lyric_timeline.model.types import Line, Lyric, Word, WordTiming
from lyric_timeline.sync.helpers import get_line_begin

from .helpers import commit, reindex_positions, replace_line, replace_lines


def merge_words(
    lyric: Lyric,
    word_ids: Sequence[str],
    *,
    ids: IdGenerator = uuid_ids,
) -> Result[Lyric]:
    """
    Merge two or more words of one line into a single word.

    The merged word keeps the earliest word's id, spans earliest begin to
    latest end and inherits has_new_line from the last word. Selecting
    words that are not adjacent swallows the words between them, which the
    overlap check then rejects.
    """
    word_ids = list(dict.fromkeys(word_ids))
    if len(word_ids) < 2:
        return failure(
            ErrorCode.INSUFFICIENT_WORDS, "At least 2 words are required for merging", count=len(word_ids)
        )

    words: list[Word] = []
    for wid in word_ids:
        word = lyric.index.word_by_id.get(wid)
        if word is None:
            return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {wid}", word_id=wid)
        words.append(word)

    line_ids = {lyric.index.line_by_word_id[w.id].id for w in words}
    if len(line_ids) > 1:
        return failure(
            ErrorCode.WORDS_NOT_IN_SAME_LINE,
            "All words must belong to the same line",
            word_ids=tuple(word_ids),
            line_ids=tuple(sorted(line_ids)),
        )

    line = lyric.index.line_by_word_id[words[0].id]
    paragraph = lyric.index.paragraph_by_line_id[line.id]
    ordered = sorted(words, key=lambda w: w.begin)
    first, last = ordered[0], ordered[-1]

    merged = create_word(
        line.id,
        first.position,
        WordTiming(
            word_id=first.id,
            text="".join(w.text for w in ordered),
            begin=first.begin,
            end=max(w.end for w in ordered),
            has_whitespace=any(w.timing.has_whitespace for w in ordered),
            has_new_line=last.timing.has_new_line,
        ),
        ids=ids,
    )

    selected = set(word_ids)
    kept: list[Word] = []
    for word in line.words:
        if word.id == first.id:
            kept.append(merged)
        elif word.id not in selected:
            kept.append(word)

    new_line = replace(line, words=reindex_positions(kept))
    return commit(lyric, replace_line(lyric.paragraphs, paragraph.id, new_line))


def merge_lines(lyric: Lyric, line_ids: Sequence[str]) -> Result[Lyric]:
    """
    Merge two or more lines of one paragraph into the earliest of them.

    Words are concatenated in line order (by first-word begin) and
    re-parented to the surviving line.
    """
    line_ids = list(dict.fromkeys(line_ids))
    if len(line_ids) < 2:
        return failure(
            ErrorCode.INSUFFICIENT_LINES, "At least 2 lines are required for merging", count=len(line_ids)
        )

    lines: list[Line] = []
    for lid in line_ids:
        line = lyric.index.line_by_id.get(lid)
        if line is None:
            return failure(ErrorCode.LINE_NOT_FOUND, f"Line not found: {lid}", line_id=lid)
        lines.append(line)

    paragraph_ids = {lyric.index.paragraph_by_line_id[line.id].id for line in lines}
    if len(paragraph_ids) > 1:
        return failure(
            ErrorCode.LINES_NOT_IN_SAME_PARAGRAPH,
            "All lines must belong to the same paragraph",
            line_ids=tuple(line_ids),
        )

    paragraph = lyric.index.paragraph_by_line_id[lines[0].id]
    ordered = sorted(lines, key=get_line_begin)
    target = ordered[0]

    words = [w if w.line_id == target.id else replace(w, line_id=target.id) for line in ordered for w in line.words]
    merged = replace(target, words=reindex_positions(words))

    return commit(lyric, replace_lines(lyric.paragraphs, paragraph.id, line_ids, [merged]))
