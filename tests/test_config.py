from __future__ import annotations

import logging

import pytest

from lyric_timeline.config import DEFAULT_BUILD_CONFIG, BuildConfig, load_config
from lyric_timeline.logging_setup import setup_logging

_ENV = (
    "LYRIC_TIMELINE_JOIN_GAP",
    "LYRIC_TIMELINE_SHORT_TEXT_CHARS",
    "LYRIC_TIMELINE_JOIN_NEAR_WORDS",
    "LYRIC_TIMELINE_LAST_LINE_SEC",
    "LYRIC_TIMELINE_TIME_PRECISION",
    "LYRIC_TIMELINE_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Test env-driven load_config."""

    def test_defaults(self, clean_env):
        cfg = load_config()
        assert cfg.build == DEFAULT_BUILD_CONFIG
        assert cfg.build == BuildConfig(join_gap_sec=0.1, short_text_chars=6, join_near_words=True)
        assert cfg.last_line_sec == 2.0
        assert cfg.time_precision == 2

    def test_env_overrides(self, clean_env):
        clean_env.setenv("LYRIC_TIMELINE_JOIN_GAP", "0.25")
        clean_env.setenv("LYRIC_TIMELINE_SHORT_TEXT_CHARS", "3")
        clean_env.setenv("LYRIC_TIMELINE_LAST_LINE_SEC", "4.5")
        clean_env.setenv("LYRIC_TIMELINE_TIME_PRECISION", "3")
        cfg = load_config()
        assert cfg.build.join_gap_sec == 0.25
        assert cfg.build.short_text_chars == 3
        assert cfg.last_line_sec == 4.5
        assert cfg.time_precision == 3

    @pytest.mark.parametrize("raw,expected", [("0", False), ("false", False), ("no", False), ("1", True), ("yes", True)])
    def test_join_near_words_flag(self, clean_env, raw, expected):
        clean_env.setenv("LYRIC_TIMELINE_JOIN_NEAR_WORDS", raw)
        assert load_config().build.join_near_words is expected


class TestSetupLogging:
    """Test setup_logging level selection."""

    @pytest.fixture
    def basic_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        return calls

    def test_default_level(self, clean_env, basic_config):
        setup_logging(False)
        assert basic_config[0]["level"] == logging.INFO

    def test_debug_flag(self, clean_env, basic_config):
        setup_logging(True)
        assert basic_config[0]["level"] == logging.DEBUG

    def test_env_level_wins(self, clean_env, basic_config):
        clean_env.setenv("LYRIC_TIMELINE_LOG_LEVEL", "warning")
        setup_logging(True)
        assert basic_config[0]["level"] == logging.WARNING

    def test_unknown_env_level_ignored(self, clean_env, basic_config):
        clean_env.setenv("LYRIC_TIMELINE_LOG_LEVEL", "chatty")
        setup_logging(False)
        assert basic_config[0]["level"] == logging.INFO
