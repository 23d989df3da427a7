"""Fenced code block tracking shared by the changelog parser and lint rules."""

import re
from typing import Iterator

FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def _closes(match: re.Match | None, fence: str) -> bool:
    # A closing fence uses the same character, is at least as long, and has no info string
    return bool(match) and match.group(1).startswith(fence) and not match.group(2).strip()


def iter_prose_lines(body: str) -> Iterator[tuple[int, str]]:
    """Yield (index, line) for body lines outside fenced code blocks."""
    fence: str | None = None
    for index, line in enumerate(body.splitlines()):
        match = FENCE_OPEN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                continue
            yield index, line
        elif _closes(match, fence):
            fence = None


def find_unclosed_fence(body: str) -> tuple[str, int] | None:
    """Return (fence, line index) of a code block that is never closed, if any."""
    fence: str | None = None
    opened_at = 0
    for index, line in enumerate(body.splitlines()):
        match = FENCE_OPEN.match(line)
        if fence is None:
            if match:
                fence = match.group(1)
                opened_at = index
        elif _closes(match, fence):
            fence = None
    if fence is None:
        return None
    return fence, opened_at
