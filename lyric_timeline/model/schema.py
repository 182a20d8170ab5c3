"""
Boundary validation of raw timing input.

Rules for a single fragment:
- text must not be empty
- begin and end are finite, begin >= 0
- begin < end

Rules for a line (array of fragments):
- after sorting by begin, no fragment may end after the next one begins
  (touching, end == next begin, is fine)

Everything is reported as a Failure, never raised.
"""

from __future__ import annotations

import math
from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .result import ErrorCode, Result, failure, success
from .types import TimingInput, TimingLike, WordTiming


class WordTimingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    word_id: str | None = Field(default=None, alias="wordID")
    text: str = Field(min_length=1)
    begin: float = Field(ge=0)
    end: float
    has_whitespace: bool = Field(default=False, alias="hasWhitespace")
    has_new_line: bool = Field(default=False, alias="hasNewLine")

    @field_validator("begin", "end")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be finite")
        return v

    @model_validator(mode="after")
    def _ordered(self) -> "WordTimingSchema":
        if self.begin >= self.end:
            raise ValueError("begin must be less than end")
        return self

    def to_timing(self) -> TimingLike:
        if self.word_id is None:
            return TimingInput(
                text=self.text,
                begin=self.begin,
                end=self.end,
                has_whitespace=self.has_whitespace,
                has_new_line=self.has_new_line,
            )
        return WordTiming(
            word_id=self.word_id,
            text=self.text,
            begin=self.begin,
            end=self.end,
            has_whitespace=self.has_whitespace,
            has_new_line=self.has_new_line,
        )


def _as_mapping(raw: Any) -> Any:
    if is_dataclass(raw) and not isinstance(raw, type):
        data = asdict(raw)
        # unset flags of a raw TimingInput fall back to the schema defaults
        return {k: v for k, v in data.items() if v is not None}
    return raw


def _issues(err: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in err.errors(include_url=False)
    ]


def parse_word_timing(raw: Any) -> Result[TimingLike]:
    try:
        model = WordTimingSchema.model_validate(_as_mapping(raw))
    except ValidationError as e:
        issues = _issues(e)
        return failure(
            ErrorCode.VALIDATION_ERROR,
            ", ".join(i["msg"] for i in issues),
            issues=issues,
        )
    return success(model.to_timing())


def _label(t: TimingLike) -> str:
    return t.word_id if isinstance(t, WordTiming) else t.text


def find_overlap(timings: Iterable[TimingLike]) -> tuple[int, TimingLike, TimingLike] | None:
    ordered = sorted(timings, key=lambda t: t.begin)
    for i in range(len(ordered) - 1):
        cur, nxt = ordered[i], ordered[i + 1]
        if cur.end > nxt.begin:
            return i, cur, nxt
    return None


def parse_word_timings(raw: Sequence[Any]) -> Result[tuple[TimingLike, ...]]:
    out: list[TimingLike] = []
    for i, item in enumerate(raw):
        res = parse_word_timing(item)
        if not res.success:
            err = res.error
            return failure(err.code, f"timing {i}: {err.message}", index=i, **err.details)
        out.append(res.data)

    overlap = find_overlap(out)
    if overlap is not None:
        i, cur, nxt = overlap
        return failure(
            ErrorCode.OVERLAP_DETECTED,
            f"Timeline overlap: word ending at {cur.end} overlaps with word starting at {nxt.begin}",
            index=i,
            word1=_label(cur),
            word2=_label(nxt),
        )
    return success(tuple(out))


def parse_lyric_timings(
    raw: Sequence[Sequence[Sequence[Any]]],
) -> Result[tuple[tuple[tuple[TimingLike, ...], ...], ...]]:
    paragraphs: list[tuple[tuple[TimingLike, ...], ...]] = []
    for p_idx, groups in enumerate(raw):
        lines: list[tuple[TimingLike, ...]] = []
        for l_idx, group in enumerate(groups):
            res = parse_word_timings(group)
            if not res.success:
                err = res.error
                return failure(
                    err.code,
                    f"paragraph {p_idx + 1}, line {l_idx + 1}: {err.message}",
                    paragraph=p_idx + 1,
                    line=l_idx + 1,
                    **err.details,
                )
            lines.append(res.data)
        paragraphs.append(tuple(lines))
    return success(tuple(paragraphs))


def timing_to_dict(t: TimingLike) -> Mapping[str, Any]:
    return {k: v for k, v in asdict(t).items() if v is not None}
