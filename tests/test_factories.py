import pytest

from builders import T
from lyric_timeline.build.factories import build_chars, create_line, create_word, fuse_fragments
from lyric_timeline.config import BuildConfig
from lyric_timeline.model.ids import SequentialIds
from lyric_timeline.model.types import CharCategory, TimingInput, WordTiming


def test_create_word_spreads_chars_evenly():
    ids = SequentialIds()
    w = create_word("line-x", 1, T("abcd", 1.0, 2.0), ids=ids)
    assert w.id == "word-1"
    assert w.text == "abcd"
    assert [c.text for c in w.chars] == ["a", "b", "c", "d"]
    assert [c.position for c in w.chars] == [1, 2, 3, 4]
    assert w.chars[0].begin == 1.0
    assert w.chars[1].begin == pytest.approx(1.25)
    assert w.chars[-1].end == 2.0
    assert all(c.word_id == w.id for c in w.chars)
    assert all(c.category is CharCategory.ALPHABET for c in w.chars)


def test_create_word_keeps_word_id():
    w = create_word("l", 1, WordTiming(word_id="keep-me", text="x", begin=0, end=1), ids=SequentialIds())
    assert w.id == "keep-me"
    assert w.timing.word_id == "keep-me"


def test_chars_are_contiguous():
    chars = build_chars(WordTiming(word_id="w", text="さくらさく", begin=0.3, end=1.3), ids=SequentialIds())
    assert len(chars) == 5
    for a, b in zip(chars, chars[1:]):
        assert a.end == b.begin
    assert chars[-1].end == 1.3


def test_create_line_sorts_and_positions():
    line = create_line(1, [T("b", 2, 3), T("a", 0, 1, ws=True)], ids=SequentialIds())
    assert [w.text for w in line.words] == ["a", "b"]
    assert [w.position for w in line.words] == [1, 2]
    assert all(w.line_id == line.id for w in line.words)


def test_create_line_joins_near_fragments():
    line = create_line(1, [T("さ", 0, 0.5), T("くら", 0.55, 1.0)], ids=SequentialIds())
    assert [w.text for w in line.words] == ["さくら"]
    assert line.words[0].begin == 0
    assert line.words[0].end == 1.0


def test_no_join_after_whitespace_or_newline():
    line = create_line(1, [T("a", 0, 0.5, ws=True), T("b", 0.5, 1.0, nl=True), T("c", 1.0, 1.5)], ids=SequentialIds())
    assert [w.text for w in line.words] == ["a", "b", "c"]


def test_no_join_when_gap_too_large():
    line = create_line(1, [T("a", 0, 0.5), T("b", 0.65, 1.0)], ids=SequentialIds())
    assert [w.text for w in line.words] == ["a", "b"]


def test_join_disabled_by_flag_and_config():
    frags = [T("a", 0, 0.5), T("b", 0.5, 1.0)]
    assert len(create_line(1, frags, False, ids=SequentialIds()).words) == 2
    cfg = BuildConfig(join_near_words=False)
    assert len(create_line(1, frags, ids=SequentialIds(), config=cfg).words) == 2


def test_join_gap_is_configurable():
    frags = [T("a", 0, 0.5), T("b", 0.8, 1.0)]
    assert len(create_line(1, frags, ids=SequentialIds()).words) == 2
    cfg = BuildConfig(join_gap_sec=0.5)
    assert [w.text for w in create_line(1, frags, ids=SequentialIds(), config=cfg).words] == ["ab"]


def test_blank_fragment_marks_whitespace():
    line = create_line(1, [T("a", 0, 0.5), T(" ", 0.5, 0.55), T("b", 0.55, 1.0)], ids=SequentialIds())
    assert [w.text for w in line.words] == ["a", "b"]
    assert line.words[0].timing.has_whitespace is True


def test_explicit_line_id():
    line = create_line(3, [T("a", 0, 1)], line_id="my-line", ids=SequentialIds())
    assert line.id == "my-line"
    assert line.position == 3
    assert line.words[0].line_id == "my-line"


def test_fuse_fragments():
    fused = fuse_fragments(T("an", 0, 1), TimingInput(text="other", begin=0.9, end=1.5, has_whitespace=True))
    assert fused.text == "an other"
    assert fused.begin == 0
    assert fused.end == 1.5
    assert fused.has_whitespace is True

    head = WordTiming(word_id="w-9", text="x", begin=0, end=2)
    fused = fuse_fragments(head, T("y", 1, 1.5))
    assert isinstance(fused, WordTiming)
    assert fused.word_id == "w-9"
    assert fused.end == 2
