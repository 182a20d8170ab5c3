from __future__ import annotations

import re

from lyric_timeline.errors import LrcParseError

from .model import LrcDocument, LrcParseStats, LyricEvent, WordStamp

_LINE_TS_RE = re.compile(r"\[(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?\]")  # [mm:ss] / [mm:ss.xx] / [mm:ss.xxx]
_WORD_TS_RE = re.compile(r"<(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?>")  # enhanced <mm:ss.xx>
_OFFSET_RE = re.compile(r"^\[offset:([+-]?\d+)\]\s*$", re.IGNORECASE)
_TAG_RE = re.compile(r"^\[([a-zA-Z]{1,8}):(.*)\]\s*$")


def _stamp_ms(m: re.Match[str], offset_ms: int) -> int:
    minutes, seconds, frac = int(m.group(1)), int(m.group(2)), m.group(3)
    if not (0 <= seconds <= 59):
        raise LrcParseError(f"Invalid seconds: {seconds}")
    # "2" -> 200ms, "23" -> 230ms, "234" -> 234ms
    ms = int(frac.ljust(3, "0")[:3]) if frac else 0
    return max(0, (minutes * 60 + seconds) * 1000 + ms + offset_ms)


def parse_words(payload: str, offset_ms: int = 0) -> tuple[str, tuple[WordStamp, ...]]:
    """
    Split an enhanced payload like "<00:01.00>Hello <00:01.50>World<00:02.00>"
    into its display text and word stamps. A stamp followed by no text only
    ends the previous word. Plain payloads come back unchanged with no stamps.
    """
    stamps = list(_WORD_TS_RE.finditer(payload))
    if not stamps:
        return payload, ()

    words: list[WordStamp] = []
    for i, m in enumerate(stamps):
        nxt = stamps[i + 1] if i + 1 < len(stamps) else None
        raw = payload[m.end() : nxt.start() if nxt else len(payload)]
        if not raw.strip():
            continue
        words.append(
            WordStamp(
                t_ms=_stamp_ms(m, offset_ms),
                end_ms=_stamp_ms(nxt, offset_ms) if nxt else None,
                text=raw.strip(),
                has_whitespace=raw != raw.rstrip(),
            )
        )
    text = "".join(w.text + (" " if w.has_whitespace else "") for w in words).strip()
    return text, tuple(words)


def parse_lrc(text: str) -> LrcDocument:
    """
    Supported:
    - [mm:ss], [mm:ss.xx], [mm:ss.xxx], several per line
    - [offset:+/-ms], applied to every following stamp
    - tags: [ar:], [ti:], [al:], ...
    - enhanced word stamps <mm:ss.xx>, parsed into LyricEvent.words

    Events are sorted by time then text, duplicates are dropped and
    negative times are clamped to 0.
    """
    doc, _ = parse_lrc_with_stats(text)
    return doc


def parse_lrc_with_stats(text: str) -> tuple[LrcDocument, LrcParseStats]:
    offset_ms = 0
    tags: dict[str, str] = {}
    events: list[LyricEvent] = []
    lines = text.splitlines()
    timed = 0
    ignored = 0

    for line in lines:
        if not line.strip():
            ignored += 1
            continue

        off = _OFFSET_RE.match(line)
        if off:
            offset_ms = int(off.group(1))
            continue

        stamps = list(_LINE_TS_RE.finditer(line))
        if not stamps:
            tag = _TAG_RE.match(line)
            if tag is None:
                ignored += 1
            elif tag.group(2).strip():
                tags[tag.group(1).lower()] = tag.group(2).strip()
            continue

        timed += 1
        payload, words = parse_words(line[stamps[-1].end() :].strip(), offset_ms)
        events.extend(LyricEvent(_stamp_ms(s, offset_ms), payload, words) for s in stamps)

    unique = tuple(dict.fromkeys(sorted(events, key=lambda e: (e.t_ms, e.text))))
    doc = LrcDocument(events=unique, offset_ms=offset_ms, tags=tags)
    stats = LrcParseStats(
        lines_total=len(lines),
        events_total=len(unique),
        lines_with_timestamps=timed,
        lines_ignored=ignored,
    )
    return doc, stats
