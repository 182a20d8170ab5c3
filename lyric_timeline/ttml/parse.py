from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lyric_timeline.build.lyric import load_lyric
from lyric_timeline.errors import TtmlParseError
from lyric_timeline.model.result import Result
from lyric_timeline.model.types import Lyric, TimingInput, TimingLike

logger = logging.getLogger(__name__)


class TimingType(str, Enum):
    WORD = "word"
    LINE = "line"


@dataclass(frozen=True, slots=True)
class TtmlDocument:
    resource_id: str
    duration: float
    timing_type: TimingType
    timings: tuple[tuple[tuple[TimingLike, ...], ...], ...]


def _strip_ns(tag: str) -> str:
    return tag.split("}", 1)[1] if "}" in tag else tag


def _children(elem: ET.Element, tag: str) -> list[ET.Element]:
    return [c for c in elem.iter() if c is not elem and _strip_ns(c.tag) == tag]


def parse_time(t: str | None) -> float:
    """Accepts "12.5s", "mm:ss.xx" and "hh:mm:ss.xx"; empty means 0."""
    if not t:
        return 0.0
    t = t.strip()
    try:
        if t.endswith("s"):
            return float(t[:-1])
        total = 0.0
        for part in t.split(":"):
            total = total * 60 + float(part)
        return total
    except ValueError as e:
        raise TtmlParseError(f"Invalid time: {t!r}") from e


def _span_timings(p: ET.Element) -> list[TimingLike]:
    out: list[TimingLike] = []
    for span in [c for c in p if _strip_ns(c.tag) == "span"]:
        text = "".join(span.itertext()).strip()
        if not text:
            continue
        out.append(
            TimingInput(
                text=text,
                begin=parse_time(span.get("begin")),
                end=parse_time(span.get("end")),
                # whitespace between this span and the next one
                has_whitespace=bool(span.tail) and span.tail[:1].isspace(),
            )
        )
    return out


def _line_timings(p: ET.Element) -> list[TimingLike]:
    words = "".join(p.itertext()).split()
    if not words:
        return []
    begin = parse_time(p.get("begin"))
    end = parse_time(p.get("end"))
    step = (end - begin) / len(words)
    return [
        TimingInput(
            text=word,
            begin=begin + step * i,
            end=end if i == len(words) - 1 else begin + step * (i + 1),
            has_whitespace=i != len(words) - 1,
        )
        for i, word in enumerate(words)
    ]


def parse_ttml(text: str, resource_id: str = "") -> TtmlDocument:
    """
    Each div is a paragraph and each p a line. A p with span children is
    word timed (one fragment per span); otherwise its text is split on
    whitespace and the line's time divided equally.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise TtmlParseError(f"Invalid TTML: {e}") from e

    body = next((e for e in root.iter() if _strip_ns(e.tag) == "body"), None)
    if body is None:
        raise TtmlParseError("Invalid TTML: no body element")
    duration = parse_time(body.get("dur"))

    timing_type = TimingType.LINE
    paragraphs: list[tuple[tuple[TimingLike, ...], ...]] = []
    for div in _children(body, "div"):
        lines: list[tuple[TimingLike, ...]] = []
        for p in _children(div, "p"):
            if any(_strip_ns(c.tag) == "span" for c in p):
                timing_type = TimingType.WORD
                fragments = _span_timings(p)
            else:
                fragments = _line_timings(p)
            if fragments:
                lines.append(tuple(fragments))
            else:
                logger.debug("skipping empty <p> in div %d", len(paragraphs) + 1)
        if lines:
            paragraphs.append(tuple(lines))

    return TtmlDocument(
        resource_id=resource_id,
        duration=duration,
        timing_type=timing_type,
        timings=tuple(paragraphs),
    )


async def ttml_to_lyric(text: str, resource_id: str = "", **kwargs: Any) -> Result[Lyric]:
    """Parse, validate the timings, then build. Bad timings come back as a Failure."""
    doc = parse_ttml(text, resource_id)
    return await load_lyric(
        doc.timings,
        resource_id=doc.resource_id,
        duration=doc.duration or None,
        **kwargs,
    )
