from __future__ import annotations

import json
from typing import Any, Mapping

from lyric_timeline.model.types import Char, Line, Lyric, Paragraph, Word
from lyric_timeline.sync.helpers import get_line_begin, get_line_end, get_line_text


def _to_ms(sec: float) -> int:
    return max(0, int(round(sec * 1000)))


def _char_dict(c: Char) -> dict[str, Any]:
    return {
        "id": c.id,
        "text": c.text,
        "category": c.category.value,
        "position": c.position,
        "begin": c.begin,
        "end": c.end,
    }


def _word_dict(w: Word) -> dict[str, Any]:
    return {
        "id": w.id,
        "position": w.position,
        "text": w.text,
        "begin": w.begin,
        "end": w.end,
        "has_whitespace": w.timing.has_whitespace,
        "has_new_line": w.timing.has_new_line,
        "chars": [_char_dict(c) for c in w.chars],
    }


def _line_dict(line: Line) -> dict[str, Any]:
    return {"id": line.id, "position": line.position, "words": [_word_dict(w) for w in line.words]}


def _paragraph_dict(p: Paragraph) -> dict[str, Any]:
    return {"id": p.id, "position": p.position, "lines": [_line_dict(line) for line in p.lines]}


def export_json(lyric: Lyric) -> str:
    return json.dumps(
        {
            "id": lyric.id,
            "resource_id": lyric.resource_id,
            "duration": lyric.duration,
            "offset_sec": lyric.offset_sec,
            "paragraphs": [_paragraph_dict(p) for p in lyric.paragraphs],
        },
        ensure_ascii=False,
        indent=2,
    )


def _fmt_lrc_time(ms: int) -> str:
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    # keep 2 decimals for compatibility
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def _enhanced_text(line: Line) -> str:
    parts: list[str] = []
    words = line.words
    for i, w in enumerate(words):
        parts.append(f"<{_fmt_lrc_time(_to_ms(w.begin))}>{w.text}")
        if w.timing.has_whitespace or w.timing.has_new_line:
            parts.append(" ")
        nxt = words[i + 1] if i + 1 < len(words) else None
        # an extra end stamp keeps the gap before the next word
        if nxt is None or w.end < nxt.begin:
            parts.append(f"<{_fmt_lrc_time(_to_ms(w.end))}>")
    return "".join(parts)


def export_lrc(lyric: Lyric, word_level: bool = False, tags: Mapping[str, str] | None = None) -> str:
    """
    One [mm:ss.xx] event per line. Paragraphs are separated by an empty
    event at the end of the paragraph's last line. With word_level every
    word is prefixed by an enhanced <mm:ss.xx> stamp; a word followed by
    a gap (or ending the line) also gets an end stamp.
    """
    out: list[str] = []
    if tags:
        for k in sorted(tags.keys()):
            out.append(f"[{k}:{tags[k]}]")

    paragraphs = [p for p in lyric.paragraphs if p.lines]
    for n, paragraph in enumerate(paragraphs, start=1):
        for line in paragraph.lines:
            if not line.words:
                continue
            text = _enhanced_text(line) if word_level else " ".join(get_line_text(line).split())
            out.append(f"[{_fmt_lrc_time(_to_ms(get_line_begin(line)))}]{text}")
        if n < len(paragraphs):
            out.append(f"[{_fmt_lrc_time(_to_ms(get_line_end(paragraph.lines[-1])))}]")
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(lyric: Lyric) -> str:
    """One cue per line, from its first word's begin to its last word's end."""
    out: list[str] = []
    n = 0
    for paragraph in lyric.paragraphs:
        for line in paragraph.lines:
            if not line.words:
                continue
            n += 1
            out.append(str(n))
            out.append(f"{_fmt_srt_time(_to_ms(get_line_begin(line)))} --> {_fmt_srt_time(_to_ms(get_line_end(line)))}")
            out.append(get_line_text(line).strip())
            out.append("")
    return "\n".join(out)
