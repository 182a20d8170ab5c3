from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, Sequence, TypeVar

from lyric_timeline.build.index import rebuild_index
from lyric_timeline.model.result import ErrorCode, Result, failure, success
from lyric_timeline.model.types import Char, Line, Lyric, Paragraph, Word

logger = logging.getLogger(__name__)

P = TypeVar("P", Char, Word, Line, Paragraph)


def all_words(paragraphs: Iterable[Paragraph]) -> list[Word]:
    return [w for p in paragraphs for line in p.lines for w in line.words]


def check_overlaps(words: Sequence[Word]) -> Result[Sequence[Word]]:
    """Words sorted by begin must not overlap; touching (end == next begin) is fine."""
    ordered = sorted(words, key=lambda w: w.begin)
    for cur, nxt in zip(ordered, ordered[1:]):
        if cur.end > nxt.begin:
            return failure(
                ErrorCode.OVERLAP_DETECTED,
                f"Timeline overlap between words: {cur.id} and {nxt.id}",
                word1=cur.id,
                word2=nxt.id,
            )
    return success(words)


def reindex_positions(items: Iterable[P]) -> tuple[P, ...]:
    """1-based positions in sequence order; items already in place are reused as-is."""
    return tuple(item if item.position == n else replace(item, position=n) for n, item in enumerate(items, start=1))


def replace_lines(
    paragraphs: Sequence[Paragraph],
    paragraph_id: str,
    old_ids: Sequence[str],
    new_lines: Sequence[Line],
) -> tuple[Paragraph, ...]:
    """
    Swap the lines named by old_ids for new_lines inside one paragraph.

    new_lines go where the first old line was. Every other paragraph is
    returned by reference.
    """
    drop = set(old_ids)
    out: list[Paragraph] = []
    for paragraph in paragraphs:
        if paragraph.id != paragraph_id:
            out.append(paragraph)
            continue
        lines: list[Line] = []
        inserted = False
        for line in paragraph.lines:
            if line.id not in drop:
                lines.append(line)
            elif not inserted:
                lines.extend(new_lines)
                inserted = True
        out.append(replace(paragraph, lines=reindex_positions(lines)))
    return tuple(out)


def replace_line(paragraphs: Sequence[Paragraph], paragraph_id: str, line: Line) -> tuple[Paragraph, ...]:
    return replace_lines(paragraphs, paragraph_id, [line.id], [line])


def _first_begin(words: Sequence[Word]) -> float:
    return words[0].begin if words else math.inf


def _sorted_by_begin(items: Sequence[P], key) -> tuple[P, ...]:
    ordered = sorted(items, key=key)
    if all(a is b for a, b in zip(ordered, items)):
        return tuple(items)
    return reindex_positions(ordered)


def order_line(line: Line) -> Line:
    words = _sorted_by_begin(line.words, lambda w: w.begin)
    if all(a is b for a, b in zip(words, line.words)):
        return line
    return replace(line, words=words)


def order_paragraph(paragraph: Paragraph) -> Paragraph:
    lines = [order_line(line) for line in paragraph.lines]
    lines = _sorted_by_begin(lines, lambda line: _first_begin(line.words))
    if all(a is b for a, b in zip(lines, paragraph.lines)):
        return paragraph
    return replace(paragraph, lines=lines)


def order_paragraphs(paragraphs: Sequence[Paragraph]) -> tuple[Paragraph, ...]:
    """
    Put words, lines and paragraphs back in time order after their times
    moved, renumbering positions. Already ordered subtrees are returned as-is.
    """
    ordered = [order_paragraph(p) for p in paragraphs]
    return _sorted_by_begin(
        ordered, lambda p: min((_first_begin(line.words) for line in p.lines), default=math.inf)
    )


def commit(lyric: Lyric, paragraphs: Sequence[Paragraph]) -> Result[Lyric]:
    """Validate the whole new word set, restore time order, then rebuild the index into a new Lyric."""
    paragraphs = tuple(paragraphs)
    checked = check_overlaps(all_words(paragraphs))
    if not checked.success:
        logger.debug("edit rejected: %s", checked.error.message)
        return checked
    paragraphs = order_paragraphs(paragraphs)
    return success(replace(lyric, paragraphs=paragraphs, index=rebuild_index(paragraphs)))
