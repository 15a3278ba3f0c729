"""Locate the convertible token that ends at the cursor (pure functions)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from modeless.platform.document_adapter import IDocumentAdapter

DEFAULT_PATTERN = "[a-zA-Z]+"

PatternLike = Union[str, "re.Pattern[str]"]


@dataclass(frozen=True)
class Token:
    start: int
    text: str

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def compile_pattern(pattern: PatternLike = DEFAULT_PATTERN) -> "re.Pattern[str]":
    """Compile *pattern* so that it can only match a run ending at the string end.

    Raises ``ValueError`` for invalid regular expressions.
    """
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    flags = pattern.flags if isinstance(pattern, re.Pattern) else 0
    try:
        return re.compile(f"(?:{source})\\Z", flags)
    except re.error as exc:
        raise ValueError(f"Invalid token pattern {source!r}: {exc}") from exc


def _compile_unit(pattern: PatternLike) -> "re.Pattern[str]":
    source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    flags = pattern.flags if isinstance(pattern, re.Pattern) else 0
    return re.compile(f"(?:{source})", flags)


def detect_token(line_prefix: str, cursor: int, pattern: PatternLike = DEFAULT_PATTERN) -> Token | None:
    """Return the longest run matching *pattern* that ends exactly at *cursor*.

    *line_prefix* is the text between the start of the cursor's line and the
    cursor.  The match is always anchored at the cursor: a search that
    merely walks backwards through the line can settle on an earlier,
    non-adjacent run and miss the token right before the cursor.

    Only the run of characters that each match *pattern* on their own and
    reach back from the cursor is searched, so a long line costs no more
    than its last word.  Within that run ``re.search`` tries start offsets
    left to right, so the first anchored match it finds is the longest one.
    """
    # Never look past the line start, even if the caller handed us more.
    line_prefix = line_prefix.rsplit("\n", 1)[-1]
    if not line_prefix:
        return None

    anchored = compile_pattern(pattern)
    unit = _compile_unit(pattern)
    run_start = len(line_prefix)
    while run_start > 0 and unit.fullmatch(line_prefix[run_start - 1]):
        run_start -= 1
    if run_start == len(line_prefix):
        return None

    match = anchored.search(line_prefix, run_start)
    if match is None or match.start() == match.end():
        return None

    line_start = cursor - len(line_prefix)
    return Token(start=line_start + match.start(), text=match.group(0))


def find_token(document: "IDocumentAdapter", pattern: PatternLike = DEFAULT_PATTERN) -> Token | None:
    """Snapshot *document* at its cursor and run :func:`detect_token`."""
    cursor = document.cursor_position()
    return detect_token(document.line_prefix(cursor), cursor, pattern)
