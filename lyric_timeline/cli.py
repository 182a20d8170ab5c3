from __future__ import annotations

import asyncio
import math
from pathlib import Path
from typing import NoReturn

import typer

from lyric_timeline.build.lyric import load_lyric
from lyric_timeline.config import AppConfig, load_config
from lyric_timeline.edit.shift import shift_range
from lyric_timeline.errors import MarkupParseError
from lyric_timeline.logging_setup import setup_logging
from lyric_timeline.lrc.convert import lrc_to_timings
from lyric_timeline.lrc.export import export_json, export_lrc, export_srt
from lyric_timeline.lrc.parse import parse_lrc
from lyric_timeline.model.ids import uuid_ids
from lyric_timeline.model.result import EditError
from lyric_timeline.model.types import Lyric
from lyric_timeline.sync.analysis import get_current_summary, get_lyric_speed, get_void_periods, is_void_time
from lyric_timeline.sync.helpers import get_line_text, get_lines, get_words
from lyric_timeline.ttml.parse import TimingType, parse_ttml


app = typer.Typer(no_args_is_help=True, add_completion=False)

_TTML_SUFFIXES = (".ttml", ".xml")


@app.callback()
def _root(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    """Inspect, query and edit time-synchronized lyrics (TTML / LRC)."""
    setup_logging(debug)


def _fail(error: EditError) -> NoReturn:
    typer.echo(f"Error: {error.code.value}: {error.message}", err=True)
    raise typer.Exit(code=1)


def _load(path: Path, cfg: AppConfig) -> tuple[Lyric, TimingType]:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in _TTML_SUFFIXES:
            doc = parse_ttml(text, resource_id=path.stem)
            timings, duration, timing_type = doc.timings, doc.duration or None, doc.timing_type
        elif suffix == ".lrc":
            timings = lrc_to_timings(parse_lrc(text), last_line_sec=cfg.last_line_sec)
            ends = [t.end for p in timings for line in p for t in line]
            duration = max(ends) if ends else None
            timing_type = TimingType.LINE
        else:
            raise typer.BadParameter(f"unsupported input: {path.name} (expected .ttml, .xml or .lrc)")
    except MarkupParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = asyncio.run(
        load_lyric(
            timings,
            resource_id=path.stem,
            duration=duration,
            init_id=True,
            ids=uuid_ids,
            config=cfg.build,
        )
    )
    if not result.success:
        _fail(result.error)
    return result.data, timing_type


def _render(lyric: Lyric, fmt: str, word_level: bool) -> str:
    fmt_l = fmt.lower()
    if fmt_l == "json":
        return export_json(lyric)
    if fmt_l == "lrc":
        return export_lrc(lyric, word_level=word_level)
    if fmt_l == "srt":
        return export_srt(lyric)
    raise typer.BadParameter("format must be one of: lrc, srt, json")


def _write(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def inspect(path: Path):
    """Print structure counts, duration and reading speed."""
    cfg = load_config()
    lyric, timing_type = _load(path, cfg)
    p = cfg.time_precision
    typer.echo(f"resource_id={lyric.resource_id}")
    typer.echo(f"timing_type={timing_type.value}")
    typer.echo(f"duration={lyric.duration:.{p}f}")
    typer.echo(f"paragraphs={len(lyric.paragraphs)}")
    typer.echo(f"lines={len(get_lines(lyric))}")
    typer.echo(f"words={len(get_words(lyric))}")
    typer.echo(f"chars={len(lyric.index.word_by_char_id)}")
    typer.echo(f"speed={get_lyric_speed(lyric):.2f}")


@app.command()
def at(
    path: Path,
    time: float = typer.Option(..., "--time", "-t", help="Playback time (seconds)"),
    offset: float | None = typer.Option(None, "--offset", help="Offset added to --time (seconds)"),
):
    """Show what is being sung at a given time."""
    cfg = load_config()
    lyric, _ = _load(path, cfg)
    s = get_current_summary(lyric, time, offset)
    p = cfg.time_precision

    def text(el) -> str:
        if el is None:
            return "-"
        if hasattr(el, "words"):
            return " ".join(get_line_text(el).split())
        if hasattr(el, "lines"):
            return " / ".join(" ".join(get_line_text(line).split()) for line in el.lines)
        return el.text

    typer.echo(f"paragraph: {text(s.current_paragraph)}")
    typer.echo(f"line:      {text(s.current_line)}")
    typer.echo(f"word:      {text(s.current_word)}")
    typer.echo(f"char:      {text(s.current_char)}")
    typer.echo(f"prev word: {text(s.prev_word)}")
    typer.echo(f"next word: {text(s.next_word)}")
    typer.echo(f"next line: {text(s.next_line)}")
    if s.next_waiting_time is not None:
        typer.echo(f"next line in: {s.next_waiting_time:.{p}f}s")
    typer.echo(f"void: {is_void_time(lyric, time + (lyric.offset_sec if offset is None else offset))}")
    typer.echo(f"connected: {s.is_connected}")


@app.command()
def voids(path: Path):
    """List the periods where nothing is sung."""
    cfg = load_config()
    lyric, _ = _load(path, cfg)
    p = cfg.time_precision
    for v in get_void_periods(lyric):
        typer.echo(f"{v.begin:.{p}f}\t{v.end:.{p}f}\t{v.duration:.{p}f}")


@app.command()
def export(
    path: Path,
    fmt: str = typer.Option("lrc", "--format", case_sensitive=False, help="lrc|srt|json"),
    word_level: bool = typer.Option(False, "--word-level", help="Enhanced LRC with <mm:ss.xx> word stamps"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Export TTML/LRC to LRC/SRT/JSON."""
    lyric, _ = _load(path, load_config())
    _write(_render(lyric, fmt, word_level), out)


@app.command()
def shift(
    path: Path,
    offset: float = typer.Option(..., "--offset", help="Seconds to move by (negative = earlier)"),
    begin: float = typer.Option(0.0, "--begin", help="Shift words starting at or after this time"),
    end: float | None = typer.Option(None, "--end", help="Shift words starting before this time"),
    fmt: str = typer.Option("lrc", "--format", case_sensitive=False, help="lrc|srt|json"),
    word_level: bool = typer.Option(False, "--word-level", help="Enhanced LRC with <mm:ss.xx> word stamps"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Shift a time range and export the result."""
    lyric, _ = _load(path, load_config())
    result = shift_range(lyric, begin, math.inf if end is None else end, offset)
    if not result.success:
        _fail(result.error)
    _write(_render(result.data, fmt, word_level), out)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
