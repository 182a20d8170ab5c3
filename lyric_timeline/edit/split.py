from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from lyric_timeline.build.factories import create_word
from lyric_timeline.model.ids import IdGenerator, uuid_ids
from lyric_timeline.model.result import ErrorCode, Result, failure
from lyric_timeline.model.types import Line, Lyric, WordTiming

from .helpers import commit, reindex_positions, replace_line, replace_lines


@dataclass(frozen=True, slots=True)
class SplitAtChar:
    """Split before the char at this 0-based index."""

    char_index: int


@dataclass(frozen=True, slots=True)
class SplitAtWord:
    """The named word becomes the first word of the new line."""

    split_word_id: str


@dataclass(frozen=True, slots=True)
class SplitAtTime:
    split_time: float


SplitWordOptions = Union[SplitAtChar, SplitAtTime]
SplitLineOptions = Union[SplitAtWord, SplitAtTime]


def split_word(
    lyric: Lyric,
    word_id: str,
    options: SplitWordOptions,
    *,
    ids: IdGenerator = uuid_ids,
) -> Result[Lyric]:
    """
    Split one word in two.

    The first half keeps the word id and drops the trailing flags; the
    second half gets a new id and inherits has_whitespace/has_new_line.
    """
    word = lyric.index.word_by_id.get(word_id)
    if word is None:
        return failure(ErrorCode.WORD_NOT_FOUND, f"Word not found: {word_id}", word_id=word_id)

    count = len(word.chars)
    if isinstance(options, SplitAtChar):
        at = options.char_index
        if at <= 0 or at >= count:
            return failure(
                ErrorCode.INVALID_SPLIT_POSITION,
                f"Invalid character position: {at}",
                char_index=at,
                word_length=count,
            )
    else:
        t = options.split_time
        at = next((i for i, c in enumerate(word.chars) if c.begin <= t < c.end), -1)
        if at <= 0:
            return failure(
                ErrorCode.INVALID_SPLIT_TIME,
                f"Split time {t} is outside word boundaries",
                split_time=t,
                word_id=word_id,
            )

    head, tail = word.chars[:at], word.chars[at:]
    line = lyric.index.line_by_word_id[word.id]
    paragraph = lyric.index.paragraph_by_line_id[line.id]

    first = create_word(
        line.id,
        word.position,
        WordTiming(
            word_id=word.id,
            text="".join(c.text for c in head),
            begin=word.begin,
            end=head[-1].end,
        ),
        ids=ids,
    )
    second = create_word(
        line.id,
        word.position + 1,
        WordTiming(
            word_id=ids("word"),
            text="".join(c.text for c in tail),
            begin=tail[0].begin,
            end=word.end,
            has_whitespace=word.timing.has_whitespace,
            has_new_line=word.timing.has_new_line,
        ),
        ids=ids,
    )

    words = []
    for w in line.words:
        if w.id == word.id:
            words.extend((first, second))
        else:
            words.append(w)

    new_line = replace(line, words=reindex_positions(words))
    return commit(lyric, replace_line(lyric.paragraphs, paragraph.id, new_line))


def split_line(
    lyric: Lyric,
    line_id: str,
    options: SplitLineOptions,
    *,
    ids: IdGenerator = uuid_ids,
) -> Result[Lyric]:
    """
    Split one line in two before a word.

    The first line keeps the line id; the second gets a new id and its
    words are re-parented to it.
    """
    line = lyric.index.line_by_id.get(line_id)
    if line is None:
        return failure(ErrorCode.LINE_NOT_FOUND, f"Line not found: {line_id}", line_id=line_id)

    if isinstance(options, SplitAtWord):
        at = next((i for i, w in enumerate(line.words) if w.id == options.split_word_id), -1)
        if at <= 0:
            return failure(
                ErrorCode.INVALID_SPLIT_WORD,
                f"Invalid split word: {options.split_word_id}",
                split_word_id=options.split_word_id,
            )
    else:
        t = options.split_time
        at = next((i for i, w in enumerate(line.words) if w.begin <= t < w.end), -1)
        if at <= 0:
            return failure(
                ErrorCode.INVALID_SPLIT_TIME,
                f"Split time {t} is outside line boundaries",
                split_time=t,
                line_id=line_id,
            )

    paragraph = lyric.index.paragraph_by_line_id[line.id]
    new_id = ids("line")

    first = replace(line, words=reindex_positions(line.words[:at]))
    second = Line(
        id=new_id,
        position=line.position + 1,
        words=reindex_positions(replace(w, line_id=new_id) for w in line.words[at:]),
    )
    return commit(lyric, replace_lines(lyric.paragraphs, paragraph.id, [line.id], [first, second]))
