from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

from lyric_timeline.config import DEFAULT_BUILD_CONFIG, BuildConfig
from lyric_timeline.model.ids import IdGenerator, uuid_ids
from lyric_timeline.model.result import Result, success
from lyric_timeline.model.schema import parse_lyric_timings
from lyric_timeline.model.types import Line, Lyric, Paragraph, TimingLike

from .factories import create_line, fuse_fragments
from .index import rebuild_index
from .segmenters import LineRequest, LineSegmenter, LineSpec, ParagraphSegmenter

logger = logging.getLogger(__name__)


def merge_line_groups(
    groups: Sequence[Sequence[TimingLike]],
    config: BuildConfig = DEFAULT_BUILD_CONFIG,
) -> list[list[TimingLike]]:
    """
    Paragraph-level merge pass over per-line fragment groups.

    A group is folded into the previous one when
    - the previous group's last fragment ends after this group's first begins, or
    - they touch exactly and the previous trailing fragment is short
      (fewer than short_text_chars characters): a partial line, not a real break.
    The touching fragments are fused into one; the rest of the group follows.
    Empty groups are skipped.
    """
    merged: list[list[TimingLike]] = []
    for i, group in enumerate(groups):
        if not group:
            logger.warning("skipping empty line group at index %d", i)
            continue
        first = group[0]
        if merged:
            prev = merged[-1]
            last = prev[-1]
            overlaps = last.end > first.begin
            short_touch = last.end == first.begin and len(last.text) < config.short_text_chars
            if overlaps or short_touch:
                logger.debug(
                    "merging line group %d into previous (%s)", i, "overlap" if overlaps else "short trailing text"
                )
                prev[-1] = fuse_fragments(last, first)
                prev.extend(group[1:])
                continue
        merged.append(list(group))
    return merged


async def _default_line_spec(request: LineRequest, config: BuildConfig) -> Mapping[int, LineSpec]:
    return {
        request.position: LineSpec(
            position=request.position,
            timings=request.timings,
            join_near_words=config.join_near_words,
        )
    }


async def create_paragraph(
    position: int,
    groups: Sequence[Sequence[TimingLike]],
    line_segmenter: LineSegmenter | None = None,
    paragraph_segmenter: ParagraphSegmenter | None = None,
    *,
    ids: IdGenerator = uuid_ids,
    config: BuildConfig = DEFAULT_BUILD_CONFIG,
) -> Paragraph:
    pid = ids("paragraph")
    if paragraph_segmenter is not None:
        groups = await paragraph_segmenter(groups)

    merged = merge_line_groups(groups, config)

    requests = [LineRequest(position=n, timings=tuple(g)) for n, g in enumerate(merged, start=1)]
    if line_segmenter is not None:
        # all issued at once; gather keeps input order whatever finishes first
        specs = await asyncio.gather(*(line_segmenter(r) for r in requests))
    else:
        specs = await asyncio.gather(*(_default_line_spec(r, config) for r in requests))

    lines: list[Line] = []
    for by_position in specs:
        for key in sorted(by_position):
            spec = by_position[key]
            lines.append(
                create_line(
                    len(lines) + 1,
                    spec.timings,
                    spec.join_near_words,
                    ids=ids,
                    config=config,
                )
            )
    return Paragraph(id=pid, position=position, lines=tuple(lines))


def derive_duration(paragraphs: Sequence[Paragraph]) -> float:
    words = [w for p in paragraphs for line in p.lines for w in line.words]
    if not words:
        return 0.0
    first = min(w.begin for w in words)
    last = max(w.end for w in words)
    return round(last - first, 2)


async def create_lyric(
    timings: Sequence[Sequence[Sequence[TimingLike]]],
    *,
    resource_id: str = "",
    duration: float | None = None,
    offset_sec: float = 0.0,
    id: str | None = None,
    init_id: bool = False,
    line_segmenter: LineSegmenter | None = None,
    paragraph_segmenter: ParagraphSegmenter | None = None,
    ids: IdGenerator = uuid_ids,
    config: BuildConfig = DEFAULT_BUILD_CONFIG,
) -> Lyric:
    """
    Build a Lyric from paragraphs -> lines -> fragments.

    Paragraphs are built concurrently and kept in input order. The id is the
    explicit one if given, a generated one with init_id, otherwise "" (the
    caller manages identity). Without an explicit duration it is derived
    from the words (last end minus first begin).
    """
    paragraphs = await asyncio.gather(
        *(
            create_paragraph(
                n,
                groups,
                line_segmenter,
                paragraph_segmenter,
                ids=ids,
                config=config,
            )
            for n, groups in enumerate(timings, start=1)
        )
    )
    paragraphs = tuple(paragraphs)

    if id:
        lyric_id = id
    elif init_id:
        lyric_id = ids("lyric")
    else:
        lyric_id = ""

    return Lyric(
        id=lyric_id,
        resource_id=resource_id,
        duration=round(duration, 2) if duration is not None else derive_duration(paragraphs),
        offset_sec=offset_sec,
        paragraphs=paragraphs,
        index=rebuild_index(paragraphs),
    )


async def load_lyric(raw: Sequence[Sequence[Sequence[Any]]], **kwargs: Any) -> Result[Lyric]:
    """Validate raw input (dicts or timing records) and build the Lyric."""
    parsed = parse_lyric_timings(raw)
    if not parsed.success:
        logger.debug("rejected timing input: %s", parsed.error.code.value)
        return parsed
    return success(await create_lyric(parsed.data, **kwargs))
