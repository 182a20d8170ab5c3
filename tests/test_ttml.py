import asyncio

import pytest

from builders import texts
from lyric_timeline.errors import TtmlParseError
from lyric_timeline.model.ids import SequentialIds
from lyric_timeline.model.result import ErrorCode
from lyric_timeline.ttml.parse import TimingType, parse_time, parse_ttml, ttml_to_lyric

WORD_TIMED = """<?xml version="1.0" encoding="UTF-8"?>
<tt xmlns="http://www.w3.org/ns/ttml" xml:lang="ja">
  <body dur="00:10.00">
    <div begin="0.5s" end="5s">
      <p begin="0.5s" end="2.5s"><span begin="0.5s" end="1s">Hello</span> <span begin="1.5s" end="2.5s">World</span></p>
      <p begin="3s" end="5s"><span begin="3s" end="3.5s">an</span><span begin="3.65s" end="4s">red</span> <span begin="4.2s" end="5s">sky</span></p>
    </div>
    <div begin="6s" end="8s">
      <p begin="6s" end="8s"><span begin="00:06.00" end="00:06.50">good</span> <span begin="00:07.00" end="00:08.00">night</span></p>
    </div>
  </body>
</tt>
"""

LINE_TIMED = """<tt xmlns="http://www.w3.org/ns/ttml">
  <body dur="1:00.5">
    <div>
      <p begin="1s" end="4s">one two three</p>
      <p begin="5s" end="6s"></p>
    </div>
  </body>
</tt>
"""


@pytest.mark.parametrize(
    "raw,expected",
    [("12.5s", 12.5), ("01:02.5", 62.5), ("1:00:01.25", 3601.25), ("", 0.0), (None, 0.0)],
)
def test_parse_time(raw, expected):
    assert parse_time(raw) == expected


def test_parse_time_invalid():
    with pytest.raises(TtmlParseError):
        parse_time("abc")


def test_word_timed_document():
    doc = parse_ttml(WORD_TIMED, "res-1")
    assert doc.resource_id == "res-1"
    assert doc.duration == 10.0
    assert doc.timing_type is TimingType.WORD
    assert [[[t.text for t in line] for line in p] for p in doc.timings] == [
        [["Hello", "World"], ["an", "red", "sky"]],
        [["good", "night"]],
    ]
    hello, world = doc.timings[0][0]
    assert (hello.begin, hello.end, hello.has_whitespace) == (0.5, 1.0, True)
    assert world.has_whitespace is False
    an = doc.timings[0][1][0]
    assert an.has_whitespace is False


def test_line_timed_document():
    doc = parse_ttml(LINE_TIMED)
    assert doc.timing_type is TimingType.LINE
    assert doc.duration == 60.5
    ((line,),) = doc.timings
    assert [(t.text, t.begin, t.end) for t in line] == [("one", 1.0, 2.0), ("two", 2.0, 3.0), ("three", 3.0, 4.0)]
    assert [t.has_whitespace for t in line] == [True, True, False]


def test_invalid_xml():
    with pytest.raises(TtmlParseError):
        parse_ttml("<tt><body>")


def test_missing_body():
    with pytest.raises(TtmlParseError):
        parse_ttml("<tt></tt>")


def test_ttml_to_lyric():
    result = asyncio.run(ttml_to_lyric(WORD_TIMED, "res-1", ids=SequentialIds(), init_id=True))
    assert result.success
    lyric = result.data
    assert lyric.resource_id == "res-1"
    assert lyric.duration == 10.0
    assert lyric.id == "lyric-1"
    assert texts(lyric) == [[["Hello", "World"], ["an", "red", "sky"]], [["good", "night"]]]


def _single_p(spans: str) -> str:
    return f'<tt xmlns="http://www.w3.org/ns/ttml"><body><div><p>{spans}</p></div></body></tt>'


def test_ttml_to_lyric_rejects_span_without_times():
    text = _single_p('<span begin="0s" end="1s">a</span> <span>c</span>')
    result = asyncio.run(ttml_to_lyric(text))
    assert not result.success
    assert result.error.code is ErrorCode.VALIDATION_ERROR
    assert result.error.details["paragraph"] == 1
    assert result.error.details["line"] == 1


def test_ttml_to_lyric_rejects_overlapping_spans():
    text = _single_p('<span begin="0s" end="1s">a</span> <span begin="0.5s" end="2s">b</span>')
    result = asyncio.run(ttml_to_lyric(text))
    assert not result.success
    assert result.error.code is ErrorCode.OVERLAP_DETECTED
    assert (result.error.details["word1"], result.error.details["word2"]) == ("a", "b")
