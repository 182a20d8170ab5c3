class LyricTimelineError(Exception):
    pass


class LyricStructureError(LyricTimelineError, RuntimeError):
    """Internal invariant of the tree was violated (a bug, not bad input)."""


class MarkupParseError(LyricTimelineError, ValueError):
    pass


class LrcParseError(MarkupParseError):
    pass


class TtmlParseError(MarkupParseError):
    pass
