from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WordStamp:
    """One word of an enhanced line. end_ms is None for the line's last, unterminated word."""

    t_ms: int
    end_ms: int | None
    text: str
    has_whitespace: bool = False


@dataclass(frozen=True, slots=True)
class LyricEvent:
    t_ms: int
    text: str
    words: tuple[WordStamp, ...] = ()


@dataclass(frozen=True, slots=True)
class LrcDocument:
    events: tuple[LyricEvent, ...]
    offset_ms: int = 0
    tags: dict[str, str] | None = None


@dataclass(frozen=True, slots=True)
class LrcParseStats:
    lines_total: int
    events_total: int
    lines_with_timestamps: int
    lines_ignored: int
