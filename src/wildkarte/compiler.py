# Wildcard-to-regex compilation for wildkarte.
# This module is pure logic and must remain side-effect free.
#
# Grammar of a segment:
#   *        zero or more characters except "/"
#   ?        exactly one character except "/"
#   {a,b}    alternation, nestable; "," outside braces is a literal comma
#   <...>    verbatim block; "<>>" is a literal ">"
# Everything else is matched literally.

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from wildkarte.config import resolve_case_sensitive
from wildkarte.errors import RecursiveMisuse, UnmatchedBrace, UnsupportedWildcard

# Regex fragments for the recursive operator in path mode.
_ANY_DIRS = "(?:[^/]+/)*"
_ANY_DIRS_AND_NAME = "(?:[^/]+/)*[^/]+"


class Mode(str, Enum):
    filename = "filename"
    path = "path"


@dataclass(frozen=True)
class SegmentMatcher:
    pattern: str
    regex: re.Pattern[str]

    def matches(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None

    def __call__(self, name: str) -> bool:
        return self.matches(name)


def _is_whole_segment(text: str, i: int) -> bool:
    # True when the "**" starting at i is delimited by "/" or the text edges.
    before = i == 0 or text[i - 1] == "/"
    after = i + 2 == len(text) or text[i + 2] == "/"
    return before and after


def _translate(text: str, mode: Mode, pattern: str, offset: int) -> str:
    # Scan left to right, emitting one regex fragment per token.
    # `opened` holds the pattern indices of braces not yet closed.
    parts: List[str] = ["^"]
    opened: List[int] = []
    n = len(text)
    i = 0
    while i < n:
        ch = text[i]
        if ch == "<":
            end = text.find(">", i + 2)
            if end != -1 and "/" not in text[i + 1:end]:
                parts.append(re.escape(text[i + 1:end]))
                i = end + 1
                continue
            parts.append(re.escape(ch))
        elif ch == "*":
            if i + 1 < n and text[i + 1] == "*":
                if mode is not Mode.path or not _is_whole_segment(text, i):
                    raise RecursiveMisuse(pattern, offset + i)
                if i + 2 < n:
                    # "**/" consumes its separator.
                    parts.append(_ANY_DIRS)
                    i += 3
                else:
                    parts.append(_ANY_DIRS_AND_NAME)
                    i += 2
                continue
            parts.append("[^/]*")
        elif ch == "?":
            parts.append("[^/]")
        elif ch == "{":
            opened.append(offset + i)
            parts.append("(?:")
        elif ch == "}":
            if not opened:
                raise UnmatchedBrace("}", pattern, offset + i)
            opened.pop()
            parts.append(")")
        elif ch == ",":
            parts.append("|" if opened else ",")
        else:
            parts.append(re.escape(ch))
        i += 1

    if opened:
        raise UnmatchedBrace("{", pattern, opened[-1])

    # \Z rather than $, which would also match before a trailing newline.
    parts.append(r"\Z")
    return "".join(parts)


def _flags(case_sensitive: Optional[bool]) -> int:
    if case_sensitive is None:
        case_sensitive = resolve_case_sensitive(None)
    return 0 if case_sensitive else re.IGNORECASE


def compile_segment(
    segment: str,
    case_sensitive: Optional[bool] = None,
    *,
    pattern: Optional[str] = None,
    offset: int = 0,
) -> SegmentMatcher:
    # Compile one path segment into a filename matcher.
    # When the segment was cut out of a longer pattern, pass that pattern and
    # the segment's offset so errors point into the caller's text.
    full = segment if pattern is None else pattern
    if not segment:
        raise UnsupportedWildcard(segment)
    if "/" in segment:
        raise UnsupportedWildcard(segment, full, offset + segment.index("/"))
    if segment == "**":
        raise UnsupportedWildcard(segment, full, offset)

    regex = _translate(segment, Mode.filename, full, offset)
    return SegmentMatcher(pattern=segment, regex=re.compile(regex, _flags(case_sensitive)))


def compile_path(pattern: str, case_sensitive: Optional[bool] = None) -> SegmentMatcher:
    # Compile a whole relative path pattern, "**" allowed as a full segment.
    if not pattern:
        raise UnsupportedWildcard(pattern)

    regex = _translate(pattern, Mode.path, pattern, 0)
    return SegmentMatcher(pattern=pattern, regex=re.compile(regex, _flags(case_sensitive)))


def to_regex(
    pattern: str,
    mode: Mode = Mode.filename,
    case_sensitive: Optional[bool] = None,
) -> re.Pattern[str]:
    if Mode(mode) is Mode.path:
        return compile_path(pattern, case_sensitive).regex
    return compile_segment(pattern, case_sensitive).regex
