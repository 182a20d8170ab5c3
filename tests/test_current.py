from dataclasses import replace

from builders import T, build, line_of, word
from lyric_timeline.sync.current import (
    get_current_char,
    get_current_line,
    get_current_paragraph,
    get_current_word,
    get_line_of_word,
    get_paragraph_of_line,
    get_word_of_char,
)
from lyric_timeline.sync.helpers import is_current_time


def test_is_current_time_inclusive_and_strict():
    assert is_current_time(1, 2, 1)
    assert is_current_time(1, 2, 2)
    assert not is_current_time(1, 2, 1, equal=False)
    assert is_current_time(1, 2, 1.5, equal=False)
    assert is_current_time(1, 2, 0.5, offset=0.5)


def test_hello_world_current_word(hello_world):
    assert get_current_word(hello_world, 0.5).text == "Hello"
    assert get_current_word(hello_world, 2.0).text == "World"
    assert get_current_word(hello_world, 1.2) is None
    assert get_current_word(hello_world, 2.8) is None


def test_current_levels(song):
    assert get_current_paragraph(song, 0.7) is song.paragraphs[0]
    assert get_current_line(song, 0.7) is song.paragraphs[0].lines[0]
    assert get_current_word(song, 0.7).text == "Hello"

    # between words, inside the line
    assert get_current_line(song, 1.2) is song.paragraphs[0].lines[0]
    assert get_current_word(song, 1.2) is None

    # between lines, inside the paragraph
    assert get_current_paragraph(song, 2.7) is song.paragraphs[0]
    assert get_current_line(song, 2.7) is None

    # between paragraphs
    assert get_current_paragraph(song, 5.5) is None
    assert get_current_word(song, 5.5) is None


def test_strict_boundaries(song):
    assert get_current_word(song, 1.0).text == "Hello"
    assert get_current_word(song, 1.0, equal=False) is None


def test_offset_argument_and_lyric_offset(song):
    assert get_current_word(song, 0.2, offset=0.5).text == "Hello"
    shifted = replace(song, offset_sec=0.5)
    assert get_current_word(shifted, 0.2).text == "Hello"
    assert get_current_word(shifted, 0.2, offset=0.0) is None


def test_touching_words_prefer_latest_begin():
    lyric = build([[[T("a", 0, 1, ws=True), T("b", 1, 2)]]])
    assert get_current_word(lyric, 1.0).text == "b"


def test_current_char(song):
    # Hello spans 0.5-1.0, 0.1s per char
    assert get_current_char(song, 0.55).text == "H"
    assert get_current_char(song, 0.65).text == "e"
    assert get_current_char(song, 0.95).text == "o"
    assert get_current_char(song, 1.2) is None


def test_parent_lookups(song):
    w = word(song, "red")
    line = line_of(song, "red")
    assert get_line_of_word(song, w) is line
    assert get_paragraph_of_line(song, line) is song.paragraphs[0]
    assert get_word_of_char(song, w.chars[1]) is w
