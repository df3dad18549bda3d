from __future__ import annotations

import bisect
from dataclasses import dataclass


@dataclass
class Stream:
    # Maps character offsets in some text to line/column locations.
    _chars: str
    _lineBreaks: list[int]
    startLine: int
    context: str | None

    def __init__(self, chars: str, startLine: int = 1, context: str | None = None) -> None:
        self._chars = chars
        self._lineBreaks = [i for i, char in enumerate(chars) if char == "\n"]
        self.startLine = startLine
        self.context = context

    def line(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        return lineIndex + self.startLine

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.context is None:
            return rc
        return f"{rc} of {self.context}"
