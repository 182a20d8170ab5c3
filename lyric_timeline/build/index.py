from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from lyric_timeline.model.types import Line, LyricIndex, Paragraph, Word


def rebuild_index(paragraphs: Iterable[Paragraph]) -> LyricIndex:
    """Single pass over the tree. Never patched incrementally."""
    word_by_char_id: dict[str, Word] = {}
    line_by_word_id: dict[str, Line] = {}
    paragraph_by_line_id: dict[str, Paragraph] = {}
    word_by_id: dict[str, Word] = {}
    line_by_id: dict[str, Line] = {}
    paragraph_by_id: dict[str, Paragraph] = {}

    for paragraph in paragraphs:
        paragraph_by_id[paragraph.id] = paragraph
        for line in paragraph.lines:
            line_by_id[line.id] = line
            paragraph_by_line_id[line.id] = paragraph
            for word in line.words:
                word_by_id[word.id] = word
                line_by_word_id[word.id] = line
                for char in word.chars:
                    word_by_char_id[char.id] = word

    return LyricIndex(
        word_by_char_id=MappingProxyType(word_by_char_id),
        line_by_word_id=MappingProxyType(line_by_word_id),
        paragraph_by_line_id=MappingProxyType(paragraph_by_line_id),
        word_by_id=MappingProxyType(word_by_id),
        line_by_id=MappingProxyType(line_by_id),
        paragraph_by_id=MappingProxyType(paragraph_by_id),
    )
