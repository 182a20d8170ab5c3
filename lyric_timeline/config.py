from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class BuildConfig:
    # Fragments closer than this (seconds) are joined into one word
    join_gap_sec: float = 0.1
    # Adjacent line groups merge when the trailing fragment is shorter than this
    short_text_chars: int = 6
    # Joining policy when no line segmenter decides
    join_near_words: bool = True


DEFAULT_BUILD_CONFIG = BuildConfig()


@dataclass(frozen=True)
class AppConfig:
    build: BuildConfig

    # Import / export
    last_line_sec: float  # length of the final LRC event, which has no successor
    time_precision: int  # decimals when printing times


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw not in ("0", "false", "False", "no")


def load_config() -> AppConfig:
    build = BuildConfig(
        join_gap_sec=float(os.getenv("LYRIC_TIMELINE_JOIN_GAP", str(DEFAULT_BUILD_CONFIG.join_gap_sec))),
        short_text_chars=int(
            os.getenv("LYRIC_TIMELINE_SHORT_TEXT_CHARS", str(DEFAULT_BUILD_CONFIG.short_text_chars))
        ),
        join_near_words=_env_bool("LYRIC_TIMELINE_JOIN_NEAR_WORDS", DEFAULT_BUILD_CONFIG.join_near_words),
    )
    return AppConfig(
        build=build,
        last_line_sec=float(os.getenv("LYRIC_TIMELINE_LAST_LINE_SEC", "2.0")),
        time_precision=int(os.getenv("LYRIC_TIMELINE_TIME_PRECISION", "2")),
    )
