from builders import T, build
from lyric_timeline.model.types import CharPosition
from lyric_timeline.sync.grid import (
    get_char_positions,
    get_max_row_position,
    get_row_words,
    get_word_grid_positions,
    get_word_row_position,
    get_words_by_line_id_and_row_position,
    get_words_by_row,
)


def _two_row_lyric():
    return build([[[T("ab", 0, 1, nl=True), T("cd", 1.2, 2), T("ef", 2.2, 3)]]])


def test_new_line_starts_a_row():
    lyric = _two_row_lyric()
    line = lyric.paragraphs[0].lines[0]
    ab, cd, ef = line.words
    grid = get_word_grid_positions(line)
    assert (grid[ab.id].row, grid[ab.id].column) == (1, 1)
    assert (grid[cd.id].row, grid[cd.id].column) == (2, 1)
    assert (grid[ef.id].row, grid[ef.id].column) == (2, 2)
    assert grid[ef.id].word is ef


def test_rows(song):
    lyric = _two_row_lyric()
    line = lyric.paragraphs[0].lines[0]
    assert [[w.text for w in ws] for ws in get_words_by_row(line).values()] == [["ab"], ["cd", "ef"]]
    assert [w.text for w in get_row_words(line, 2)] == ["cd", "ef"]
    assert get_row_words(line, 3) == []
    assert get_word_row_position(line, line.words[2].id) == 2
    assert get_word_row_position(line, "missing") is None
    assert get_max_row_position(line) == 2
    assert get_max_row_position(song.paragraphs[0].lines[0]) == 1


def test_char_positions():
    lyric = _two_row_lyric()
    line = lyric.paragraphs[0].lines[0]
    chars = [c for w in line.words for c in w.chars]
    positions = [get_char_positions(line)[c.id] for c in chars]
    assert positions == [
        CharPosition(row=1, column=1, in_line_position=1),
        CharPosition(row=1, column=2, in_line_position=2),
        CharPosition(row=2, column=1, in_line_position=3),
        CharPosition(row=2, column=2, in_line_position=4),
        CharPosition(row=2, column=3, in_line_position=5),
        CharPosition(row=2, column=4, in_line_position=6),
    ]


def test_words_by_line_id_and_row_position(song):
    table = get_words_by_line_id_and_row_position(song)
    l2 = song.paragraphs[0].lines[1]
    assert set(table) == {line.id for p in song.paragraphs for line in p.lines}
    assert {col: w.text for col, w in table[l2.id][1].items()} == {1: "an", 2: "red", 3: "sky"}
