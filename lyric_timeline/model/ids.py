from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Protocol


class IdGenerator(Protocol):
    def __call__(self, kind: str) -> str: ...


def uuid_ids(kind: str) -> str:
    return f"{kind}-{uuid.uuid4()}"


class SequentialIds:
    """
    Deterministic ids: "word-1", "word-2", "line-1", ...
    One counter per kind.
    """

    def __init__(self, prefix: str = ""):
        self.prefix = prefix
        self._counters: defaultdict[str, int] = defaultdict(int)

    def __call__(self, kind: str) -> str:
        self._counters[kind] += 1
        return f"{self.prefix}{kind}-{self._counters[kind]}"
