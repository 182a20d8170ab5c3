from __future__ import annotations

import asyncio
from typing import Any

from lyric_timeline.build.lyric import create_lyric
from lyric_timeline.model.ids import SequentialIds
from lyric_timeline.model.types import Lyric, TimingInput, Word
from lyric_timeline.sync.helpers import get_words


def T(text: str, begin: float, end: float, ws: bool = False, nl: bool = False) -> TimingInput:
    return TimingInput(text=text, begin=begin, end=end, has_whitespace=ws, has_new_line=nl)


def build(timings, **kwargs: Any) -> Lyric:
    kwargs.setdefault("ids", SequentialIds())
    return asyncio.run(create_lyric(timings, **kwargs))


def word(lyric: Lyric, text: str) -> Word:
    return next(w for w in get_words(lyric) if w.text == text)


def texts(lyric: Lyric) -> list[list[list[str]]]:
    return [[[w.text for w in line.words] for line in p.lines] for p in lyric.paragraphs]


def line_of(lyric: Lyric, text: str):
    return lyric.index.line_by_word_id[word(lyric, text).id]
