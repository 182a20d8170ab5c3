from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from lyric_timeline.model.chars import split_graphemes
from lyric_timeline.model.types import TimingInput, TimingLike


@dataclass(frozen=True, slots=True)
class LineRequest:
    position: int
    timings: tuple[TimingLike, ...]


@dataclass(frozen=True, slots=True)
class LineSpec:
    position: int
    timings: tuple[TimingLike, ...]
    join_near_words: bool | None = None


class LineSegmenter(Protocol):
    """Re-segments one line group; may return several lines keyed by position."""

    async def __call__(self, request: LineRequest) -> Mapping[int, LineSpec]: ...


class ParagraphSegmenter(Protocol):
    """Rewrites the whole list of line groups of a paragraph before merging."""

    async def __call__(
        self, groups: Sequence[Sequence[TimingLike]]
    ) -> Sequence[Sequence[TimingLike]]: ...


def split_fragment(fragment: TimingLike) -> list[TimingLike]:
    """
    Split a multi-word fragment on whitespace, sharing its time by grapheme count.
    Pieces get has_whitespace except the last, which keeps the fragment's flags.
    """
    pieces = fragment.text.split()
    if len(pieces) <= 1:
        return [fragment]

    weights = [len(split_graphemes(p)) for p in pieces]
    total = sum(weights)
    span = fragment.end - fragment.begin
    out: list[TimingLike] = []
    cursor = fragment.begin
    for i, (piece, weight) in enumerate(zip(pieces, weights)):
        last = i == len(pieces) - 1
        end = fragment.end if last else cursor + span * weight / total
        out.append(
            TimingInput(
                text=piece,
                begin=cursor,
                end=end,
                has_whitespace=fragment.has_whitespace if last else True,
                has_new_line=fragment.has_new_line if last else False,
            )
        )
        cursor = end
    return out


class WhitespaceLineSegmenter:
    """
    Reference line segmenter for line-granularity input: every fragment that
    holds several space separated words is split into one fragment per word.
    Joining is switched off so the split is not undone by create_line.
    """

    async def __call__(self, request: LineRequest) -> Mapping[int, LineSpec]:
        timings: list[TimingLike] = []
        for fragment in request.timings:
            timings.extend(split_fragment(fragment))
        return {
            request.position: LineSpec(
                position=request.position,
                timings=tuple(timings),
                join_near_words=False,
            )
        }
