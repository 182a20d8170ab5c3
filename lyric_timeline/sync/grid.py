from __future__ import annotations

from lyric_timeline.model.types import CharPosition, GridPosition, Line, Lyric, Word

from .helpers import get_lines


def get_word_grid_positions(line: Line) -> dict[str, GridPosition]:
    """Row/column of each word; a word after a has_new_line word opens a new row."""
    out: dict[str, GridPosition] = {}
    row, column = 1, 0
    prev: Word | None = None
    for word in line.words:
        if prev is not None and prev.timing.has_new_line:
            row += 1
            column = 1
        else:
            column += 1
        out[word.id] = GridPosition(row=row, column=column, word=word)
        prev = word
    return out


def get_words_by_row(line: Line) -> dict[int, list[Word]]:
    rows: dict[int, list[Word]] = {}
    for pos in get_word_grid_positions(line).values():
        rows.setdefault(pos.row, []).append(pos.word)
    return rows


def get_row_words(line: Line, row: int) -> list[Word]:
    return get_words_by_row(line).get(row, [])


def get_word_row_position(line: Line, word_id: str) -> int | None:
    pos = get_word_grid_positions(line).get(word_id)
    return pos.row if pos else None


def get_max_row_position(line: Line) -> int:
    return max((pos.row for pos in get_word_grid_positions(line).values()), default=0)


def get_char_positions(line: Line) -> dict[str, CharPosition]:
    out: dict[str, CharPosition] = {}
    in_line = 0
    current_row = 0
    row_offset = 0
    for pos in get_word_grid_positions(line).values():
        if pos.row != current_row:
            current_row, row_offset = pos.row, 0
        for char in pos.word.chars:
            in_line += 1
            out[char.id] = CharPosition(row=pos.row, column=row_offset + char.position, in_line_position=in_line)
        row_offset += len(pos.word.chars)
    return out


def get_words_by_line_id_and_row_position(lyric: Lyric) -> dict[str, dict[int, dict[int, Word]]]:
    """line id -> row -> column -> word"""
    out: dict[str, dict[int, dict[int, Word]]] = {}
    for line in get_lines(lyric):
        rows: dict[int, dict[int, Word]] = {}
        for pos in get_word_grid_positions(line).values():
            rows.setdefault(pos.row, {})[pos.column] = pos.word
        out[line.id] = rows
    return out
