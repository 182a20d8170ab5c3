from __future__ import annotations

from lyric_timeline.build.factories import create_char, create_line, create_word
from lyric_timeline.build.lyric import create_lyric, create_paragraph, load_lyric
from lyric_timeline.build.segmenters import (
    LineRequest,
    LineSegmenter,
    LineSpec,
    ParagraphSegmenter,
    WhitespaceLineSegmenter,
)
from lyric_timeline.build.update import get_timings, get_timings_by_line, update_lyric
from lyric_timeline.config import DEFAULT_BUILD_CONFIG, BuildConfig
from lyric_timeline.edit.adjust import adjust_word_begin, adjust_word_end, adjust_word_timing
from lyric_timeline.edit.merge import merge_lines, merge_words
from lyric_timeline.edit.shift import shift_lines, shift_paragraphs, shift_range, shift_words
from lyric_timeline.edit.split import SplitAtChar, SplitAtTime, SplitAtWord, split_line, split_word
from lyric_timeline.errors import LrcParseError, LyricStructureError, LyricTimelineError, TtmlParseError
from lyric_timeline.model.ids import SequentialIds, uuid_ids
from lyric_timeline.model.result import EditError, ErrorCode, Failure, Result, Success, is_failure, is_success
from lyric_timeline.model.schema import parse_lyric_timings, parse_word_timing, parse_word_timings
from lyric_timeline.model.types import (
    Char,
    CharCategory,
    Line,
    Lyric,
    LyricIndex,
    Paragraph,
    TimingInput,
    VoidPeriod,
    Word,
    WordTiming,
)
from lyric_timeline.sync.analysis import get_current_summary, get_lyric_speed, get_void_periods, is_void_time
from lyric_timeline.sync.current import (
    get_current_char,
    get_current_line,
    get_current_paragraph,
    get_current_word,
)
from lyric_timeline.sync.navigation import (
    get_next_line,
    get_next_paragraph,
    get_next_word,
    get_prev_line,
    get_prev_paragraph,
    get_prev_word,
)
from lyric_timeline.sync.tracker import LyricTracker

__version__ = "0.1.0"
