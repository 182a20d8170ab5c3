from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence

from lyric_timeline.errors import LyricStructureError
from lyric_timeline.model.types import Lyric, TimingLike, WordTiming
from lyric_timeline.sync.helpers import get_line_text

from .lyric import create_lyric


async def update_lyric(
    lyric: Lyric,
    *,
    resource_id: str | None = None,
    duration: float | None = None,
    timings: Sequence[Sequence[Sequence[TimingLike]]] | None = None,
    offset_sec: float | None = None,
    **build_kwargs: Any,
) -> Lyric:
    """
    Metadata-only changes copy the Lyric; new timings rebuild the tree
    under the same lyric id.
    """
    resource_id = lyric.resource_id if resource_id is None else resource_id
    duration = lyric.duration if duration is None else round(duration, 2)
    offset_sec = lyric.offset_sec if offset_sec is None else offset_sec

    if timings is None:
        return replace(lyric, resource_id=resource_id, duration=duration, offset_sec=offset_sec)

    return await create_lyric(
        timings,
        id=lyric.id,
        resource_id=resource_id,
        duration=duration,
        offset_sec=offset_sec,
        **build_kwargs,
    )


def get_timings(lyric: Lyric) -> tuple[tuple[tuple[WordTiming, ...], ...], ...]:
    return tuple(
        tuple(tuple(word.timing for word in line.words) for line in paragraph.lines)
        for paragraph in lyric.paragraphs
    )


def get_timings_by_line(lyric: Lyric) -> tuple[WordTiming, ...]:
    """One coarse timing per line: first word's id and begin, last word's end and flags, text as displayed."""
    out: list[WordTiming] = []
    for paragraph in lyric.paragraphs:
        for line in paragraph.lines:
            if not line.words:
                raise LyricStructureError(f"line {line.id} has no words")
            first, last = line.words[0], line.words[-1]
            out.append(
                WordTiming(
                    word_id=first.id,
                    text=get_line_text(line).strip(),
                    begin=first.begin,
                    end=last.end,
                    has_whitespace=last.timing.has_whitespace,
                    has_new_line=last.timing.has_new_line,
                )
            )
    return tuple(out)
