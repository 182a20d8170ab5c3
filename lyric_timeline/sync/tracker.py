from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from lyric_timeline.model.types import Line, Lyric, Word

from .helpers import get_line_begin, get_line_end, get_lines, get_words


@dataclass(slots=True)
class LyricTracker:
    """
    Efficient lookup: O(log n) via bisect + update only on change.

    Index -1 means no word (or line) is active, e.g. during a void period.
    """

    word_begins: list[float]
    words: list[Word]
    line_begins: list[float]
    lines: list[Line]
    offset_sec: float = 0.0
    last_word_idx: int = -1
    last_line_idx: int = -1

    @classmethod
    def from_lyric(cls, lyric: Lyric) -> "LyricTracker":
        words = get_words(lyric)
        lines = get_lines(lyric)
        return cls(
            word_begins=[w.begin for w in words],
            words=words,
            line_begins=[get_line_begin(line) for line in lines],
            lines=lines,
            offset_sec=lyric.offset_sec,
        )

    def current_word_index(self, now: float) -> int:
        t = now + self.offset_sec
        i = bisect_right(self.word_begins, t) - 1
        if i < 0 or t > self.words[i].end:
            return -1
        return i

    def current_line_index(self, now: float) -> int:
        t = now + self.offset_sec
        i = bisect_right(self.line_begins, t) - 1
        if i < 0 or t > get_line_end(self.lines[i]):
            return -1
        return i

    def current_word(self, now: float) -> Word | None:
        i = self.current_word_index(now)
        return self.words[i] if i >= 0 else None

    def current_line(self, now: float) -> Line | None:
        i = self.current_line_index(now)
        return self.lines[i] if i >= 0 else None

    def changed_word_index(self, now: float) -> int | None:
        i = self.current_word_index(now)
        if i != self.last_word_idx:
            self.last_word_idx = i
            return i
        return None

    def changed_line_index(self, now: float) -> int | None:
        i = self.current_line_index(now)
        if i != self.last_line_idx:
            self.last_line_idx = i
            return i
        return None

    def changed_word(self, now: float) -> Word | None:
        """The new current word when it changed since the last call, else None."""
        i = self.changed_word_index(now)
        return self.words[i] if i is not None and i >= 0 else None

    def changed_line(self, now: float) -> Line | None:
        i = self.changed_line_index(now)
        return self.lines[i] if i is not None and i >= 0 else None
