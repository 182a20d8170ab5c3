from __future__ import annotations

import pytest

from builders import T, build


@pytest.fixture
def hello_world():
    """One line: Hello 0-1, World 1.5-2.5, song length 3s."""
    return build([[[T("Hello", 0, 1, ws=True), T("World", 1.5, 2.5)]]], duration=3.0)


@pytest.fixture
def song():
    """
    p1: "Hello World" / "an red sky"
    p2: "good night"
    """
    return build(
        [
            [
                [T("Hello", 0.5, 1.0, ws=True), T("World", 1.5, 2.5)],
                [T("an", 3.0, 3.5), T("red", 3.65, 4.0, ws=True), T("sky", 4.2, 5.0)],
            ],
            [
                [T("good", 6.0, 6.5, ws=True), T("night", 7.0, 8.0)],
            ],
        ],
        duration=10.0,
    )
