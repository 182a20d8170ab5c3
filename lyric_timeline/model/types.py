from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class CharCategory(str, Enum):
    WHITESPACE = "whitespace"
    ALPHABET = "alphabet"
    NUMBER = "number"
    KANJI = "kanji"
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class TimingInput:
    """Raw timing fragment as supplied by a caller or a markup parser (no identity yet)."""

    text: str
    begin: float
    end: float
    has_whitespace: bool | None = None
    has_new_line: bool | None = None


@dataclass(frozen=True, slots=True)
class WordTiming:
    """Resolved timing of a word: identity assigned and flags filled in."""

    word_id: str
    text: str
    begin: float
    end: float
    has_whitespace: bool = False
    has_new_line: bool = False


TimingLike = Union[TimingInput, WordTiming]


@dataclass(frozen=True, slots=True)
class Char:
    id: str
    word_id: str
    text: str
    category: CharCategory
    position: int
    begin: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.begin


@dataclass(frozen=True, slots=True)
class Word:
    id: str
    line_id: str
    position: int
    timing: WordTiming
    chars: tuple[Char, ...] = ()

    @property
    def text(self) -> str:
        return self.timing.text

    @property
    def begin(self) -> float:
        return self.timing.begin

    @property
    def end(self) -> float:
        return self.timing.end


@dataclass(frozen=True, slots=True)
class Line:
    id: str
    position: int
    words: tuple[Word, ...] = ()


@dataclass(frozen=True, slots=True)
class Paragraph:
    id: str
    position: int
    lines: tuple[Line, ...] = ()


def _empty_map() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class LyricIndex:
    """Derived lookup tables; always reconstructible from the paragraphs."""

    word_by_char_id: Mapping[str, Word] = field(default_factory=_empty_map)
    line_by_word_id: Mapping[str, Line] = field(default_factory=_empty_map)
    paragraph_by_line_id: Mapping[str, Paragraph] = field(default_factory=_empty_map)
    word_by_id: Mapping[str, Word] = field(default_factory=_empty_map)
    line_by_id: Mapping[str, Line] = field(default_factory=_empty_map)
    paragraph_by_id: Mapping[str, Paragraph] = field(default_factory=_empty_map)


@dataclass(frozen=True, slots=True)
class Lyric:
    id: str
    resource_id: str
    duration: float
    offset_sec: float
    paragraphs: tuple[Paragraph, ...] = ()
    index: LyricIndex = field(default_factory=LyricIndex, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class VoidPeriod:
    begin: float
    end: float
    duration: float


@dataclass(frozen=True, slots=True)
class GridPosition:
    row: int
    column: int
    word: Word


@dataclass(frozen=True, slots=True)
class CharPosition:
    row: int
    column: int
    in_line_position: int


@dataclass(frozen=True, slots=True)
class LyricSummary:
    is_connected: bool
    is_paragraph_finish_motion: bool
    current_char: Char | None = None
    current_word: Word | None = None
    current_line: Line | None = None
    current_paragraph: Paragraph | None = None
    next_word: Word | None = None
    next_line: Line | None = None
    next_paragraph: Paragraph | None = None
    prev_word: Word | None = None
    prev_line: Line | None = None
    prev_paragraph: Paragraph | None = None
    next_waiting_time: float | None = None
    last_line_index: int | None = None
    last_line_index_in_paragraph: int | None = None
    lyric_text_per_second: float | None = None
    paragraph_text_per_second: float | None = None
    line_text_per_second: float | None = None
