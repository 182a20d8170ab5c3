from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Literal, Mapping, TypeGuard, TypeVar, Union

T = TypeVar("T")


class ErrorCode(str, Enum):
    WORD_NOT_FOUND = "WORD_NOT_FOUND"
    LINE_NOT_FOUND = "LINE_NOT_FOUND"
    PARAGRAPH_NOT_FOUND = "PARAGRAPH_NOT_FOUND"
    INSUFFICIENT_WORDS = "INSUFFICIENT_WORDS"
    INSUFFICIENT_LINES = "INSUFFICIENT_LINES"
    WORDS_NOT_IN_SAME_LINE = "WORDS_NOT_IN_SAME_LINE"
    LINES_NOT_IN_SAME_PARAGRAPH = "LINES_NOT_IN_SAME_PARAGRAPH"
    INVALID_SPLIT_POSITION = "INVALID_SPLIT_POSITION"
    INVALID_SPLIT_WORD = "INVALID_SPLIT_WORD"
    INVALID_SPLIT_TIME = "INVALID_SPLIT_TIME"
    INVALID_TIME = "INVALID_TIME"
    OVERLAP_DETECTED = "OVERLAP_DETECTED"
    VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass(frozen=True, slots=True)
class EditError:
    code: ErrorCode
    message: str
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    success: Literal[True] = True


@dataclass(frozen=True, slots=True)
class Failure:
    error: EditError
    success: Literal[False] = False


Result = Union[Success[T], Failure]


def success(data: T) -> Success[T]:
    return Success(data=data)


def failure(code: ErrorCode, message: str, **details: Any) -> Failure:
    return Failure(error=EditError(code=code, message=message, details=MappingProxyType(details)))


def is_success(result: Result[T]) -> TypeGuard[Success[T]]:
    return result.success is True


def is_failure(result: Result[T]) -> TypeGuard[Failure]:
    return result.success is False
