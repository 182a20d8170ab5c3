from __future__ import annotations

from lyric_timeline.build.segmenters import split_fragment
from lyric_timeline.model.types import TimingInput, TimingLike

from .model import LrcDocument, LyricEvent

# shortest line or word we emit when two stamps coincide
_MIN_LINE_SEC = 0.01


def _word_timed(event: LyricEvent, line_end: float) -> list[TimingLike]:
    out: list[TimingLike] = []
    for stamp in event.words:
        begin = stamp.t_ms / 1000
        end = line_end if stamp.end_ms is None else stamp.end_ms / 1000
        out.append(
            TimingInput(
                text=stamp.text,
                begin=begin,
                end=max(end, begin + _MIN_LINE_SEC),
                has_whitespace=stamp.has_whitespace,
            )
        )
    return out


def _line_timed(event: LyricEvent, line_end: float) -> list[TimingLike]:
    return split_fragment(TimingInput(text=event.text, begin=event.t_ms / 1000, end=line_end))


def lrc_to_timings(doc: LrcDocument, last_line_sec: float = 2.0) -> list[list[list[TimingLike]]]:
    """
    Turn LRC events into paragraphs -> lines -> fragments.

    A line lasts until the next event (the final one for last_line_sec).
    Plain lines are split into words that share the line's time by
    grapheme count; enhanced lines use their word stamps. An event with
    empty text closes the current paragraph.
    """
    events = doc.events
    paragraphs: list[list[list[TimingLike]]] = []
    current: list[list[TimingLike]] = []

    for i, event in enumerate(events):
        if not event.text:
            if current:
                paragraphs.append(current)
                current = []
            continue

        begin = event.t_ms / 1000
        if i + 1 < len(events):
            line_end = max(events[i + 1].t_ms / 1000, begin + _MIN_LINE_SEC)
        else:
            line_end = begin + last_line_sec

        fragments = _word_timed(event, line_end) if event.words else _line_timed(event, line_end)
        if fragments:
            current.append(fragments)

    if current:
        paragraphs.append(current)
    return paragraphs
