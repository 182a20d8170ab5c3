import pytest

from builders import T, build, word
from lyric_timeline.model.types import VoidPeriod
from lyric_timeline.sync.analysis import (
    SpeedUnit,
    calculate_speed,
    get_current_summary,
    get_line_speed,
    get_lyric_speed,
    get_paragraph_average_line_duration,
    get_paragraph_speed,
    get_void_periods,
    get_word_speed,
    is_void_time,
)


def test_hello_world_voids(hello_world):
    assert get_void_periods(hello_world) == [
        VoidPeriod(begin=1, end=1.5, duration=0.5),
        VoidPeriod(begin=2.5, end=3.0, duration=0.5),
    ]


def test_void_periods_ordered_and_disjoint(song):
    voids = get_void_periods(song)
    assert voids[0] == VoidPeriod(begin=0.0, end=0.5, duration=0.5)
    assert voids[-1] == VoidPeriod(begin=8.0, end=10.0, duration=2.0)
    assert len(voids) == 8
    for v in voids:
        assert v.begin < v.end
    for a, b in zip(voids, voids[1:]):
        assert a.end <= b.begin


def test_void_periods_measured_from_furthest_end():
    lyric = build([[[T("long", 0, 5)]], [[T("short", 1, 2), T("after", 6, 7)]]], duration=7.0)
    assert get_void_periods(lyric) == [VoidPeriod(begin=5, end=6, duration=1.0)]


def test_void_periods_empty_lyric():
    assert get_void_periods(build([], duration=3.0)) == []


def test_is_void_time(song):
    assert is_void_time(song, 0.2)
    assert is_void_time(song, 5.5)
    assert not is_void_time(song, 0.7)


def test_calculate_speed_median():
    assert calculate_speed([]) == 0.0
    assert calculate_speed([SpeedUnit(1.0, ()), SpeedUnit(1.0, ()), SpeedUnit(1.0, ())]) == 0.0


def test_word_speed_weights(song):
    # 5 latin chars at 0.5 over 0.5s
    assert get_word_speed(word(song, "Hello")) == 5.0
    kana = build([[[T("さくら", 0, 1.5)]]])
    assert get_word_speed(word(kana, "さくら")) == 2.0


def test_line_speed_is_median_of_words(song):
    # Hello 5.0, World 2.5
    assert get_line_speed(song.paragraphs[0].lines[0]) == 3.75


def test_paragraph_and_lyric_speed(song):
    assert get_paragraph_speed(song.paragraphs[1]) == 2.25
    assert get_lyric_speed(song) == pytest.approx(2.12, abs=0.01)


def test_median_resists_outlier():
    lyric = build(
        [
            [
                [T("abcd", 0, 1, ws=True), T("abcd", 2, 3, ws=True), T("abcdefghijklmnopqrstuvwxyz", 4, 4.1)],
            ]
        ]
    )
    assert get_line_speed(lyric.paragraphs[0].lines[0]) == 2.0


def test_average_line_duration(song):
    assert get_paragraph_average_line_duration(song.paragraphs[0]) == 2.0


def test_summary_inside_word(song):
    s = get_current_summary(song, 2.0)
    assert s.current_word.text == "World"
    assert s.current_line is song.paragraphs[0].lines[0]
    assert s.current_paragraph is song.paragraphs[0]
    assert s.next_line is song.paragraphs[0].lines[1]
    assert s.next_word.text == "an"
    assert s.prev_word.text == "Hello"
    assert s.next_waiting_time == 1.0
    assert s.last_line_index == 2
    assert s.last_line_index_in_paragraph == 1
    assert s.is_connected is False
    assert s.is_paragraph_finish_motion is False
    assert s.line_text_per_second == 3.75


def test_summary_between_paragraphs(song):
    s = get_current_summary(song, 5.5)
    assert s.current_paragraph is None
    assert s.current_line is None
    assert s.is_paragraph_finish_motion is True
    assert s.prev_word.text == "sky"
    assert s.next_waiting_time == 0.5
    assert s.last_line_index_in_paragraph is None
    assert s.paragraph_text_per_second is None


def test_summary_connected_lines():
    lyric = build([[[T("a", 0, 1)], [T("b", 1.05, 2)]]])
    s = get_current_summary(lyric, 1.5)
    assert s.current_line is lyric.paragraphs[0].lines[1]
    assert s.is_connected is True
