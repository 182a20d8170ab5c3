from __future__ import annotations

from lyric_timeline.errors import LyricStructureError
from lyric_timeline.model.types import Char, Line, Lyric, Paragraph, Word


def get_words(lyric: Lyric) -> list[Word]:
    """All words in document order, sorted by begin."""
    words = [w for p in lyric.paragraphs for line in p.lines for w in line.words]
    words.sort(key=lambda w: w.begin)
    return words


def get_lines(lyric: Lyric) -> list[Line]:
    lines = [line for p in lyric.paragraphs for line in p.lines]
    lines.sort(key=get_line_begin)
    return lines


def get_paragraphs(lyric: Lyric) -> list[Paragraph]:
    return sorted(lyric.paragraphs, key=get_paragraph_begin)


def get_line_begin(line: Line) -> float:
    return line.words[0].begin if line.words else 0.0


def get_line_end(line: Line) -> float:
    return line.words[-1].end if line.words else 0.0


def get_paragraph_begin(paragraph: Paragraph) -> float:
    return get_line_begin(paragraph.lines[0]) if paragraph.lines else 0.0


def get_paragraph_end(paragraph: Paragraph) -> float:
    return get_line_end(paragraph.lines[-1]) if paragraph.lines else 0.0


def get_word_duration(word: Word) -> float:
    if word.begin >= word.end:
        raise LyricStructureError(f"invalid word interval: {word.id} {word.begin}-{word.end}")
    return word.end - word.begin


def get_line_duration(line: Line) -> float:
    begin, end = get_line_begin(line), get_line_end(line)
    if begin >= end:
        raise LyricStructureError(f"invalid line interval: {line.id} {begin}-{end}")
    return end - begin


def get_paragraph_duration(paragraph: Paragraph) -> float:
    begin, end = get_paragraph_begin(paragraph), get_paragraph_end(paragraph)
    if begin >= end:
        raise LyricStructureError(f"invalid paragraph interval: {paragraph.id} {begin}-{end}")
    return end - begin


def get_line_chars(line: Line) -> list[Char]:
    return [c for w in line.words for c in w.chars]


def get_paragraph_chars(paragraph: Paragraph) -> list[Char]:
    return [c for line in paragraph.lines for c in get_line_chars(line)]


def get_word_text(word: Word) -> str:
    return "".join(c.text for c in word.chars)


def get_line_text(line: Line) -> str:
    out: list[str] = []
    for word in line.words:
        out.append(get_word_text(word))
        if word.timing.has_new_line:
            out.append("\n")
        elif word.timing.has_whitespace:
            out.append(" ")
    return "".join(out)


def is_current_time(begin: float, end: float, now: float, offset: float = 0.0, equal: bool = True) -> bool:
    t = now + offset
    if equal:
        return begin <= t <= end
    return begin < t < end


def find_paragraph_at(lyric: Lyric, position: int) -> Paragraph | None:
    return next((p for p in lyric.paragraphs if p.position == position), None)


def find_line_at(paragraph: Paragraph, position: int) -> Line | None:
    return next((line for line in paragraph.lines if line.position == position), None)


def find_word_at(line: Line, position: int) -> Word | None:
    return next((w for w in line.words if w.position == position), None)


def find_char_at(word: Word, position: int) -> Char | None:
    return next((c for c in word.chars if c.position == position), None)
