# Pattern parsing for wildkarte.
# Splits a full wildcard pattern into an ordered chain of segment
# descriptors. Parsing is pure: no filesystem access happens here.
#
# A cursor into the original pattern is threaded through every step so
# that errors can point at the exact offending character.

from __future__ import annotations

import logging
import os
import re
from typing import List, Optional, Tuple

from wildkarte.compiler import compile_segment
from wildkarte.config import resolve_case_sensitive
from wildkarte.errors import UnrecognizedToken
from wildkarte.models import Descriptor, LiteralRun, ParsedPattern, Recursive, Wildcard

log = logging.getLogger(__name__)

# Drive letter ("C:/"), UNC share ("//host/share/") or plain root ("/").
_ROOT_RE = re.compile(r"(?:[a-z]:|//[^/]+/[^/]+)?/", re.IGNORECASE)

# Without drive letters, "a:/" is an ordinary relative directory name.
_POSIX_ROOT_RE = re.compile(r"(?://[^/]+/[^/]+)?/")

# Drive-letter anchors only exist on Windows.
DRIVE_ANCHORS = os.name == "nt"

# "**" as a whole segment.
_RECURSIVE_RE = re.compile(r"\*\*(?:/|$)")

# A maximal run of segments free of wildcard characters.
_LITERAL_RUN_RE = re.compile(r"(?:[^/*?{}<>]+(?:/|$))+")


def parse(pattern: str, case_sensitive: Optional[bool] = None) -> ParsedPattern:
    # Parse the pattern once; the result is immutable and reusable.
    if case_sensitive is None:
        case_sensitive = resolve_case_sensitive(None)

    root = None
    pos = 0
    root_re = _ROOT_RE if DRIVE_ANCHORS else _POSIX_ROOT_RE
    m = root_re.match(pattern)
    if m:
        root = m.group(0)
        pos = m.end()

    descriptors: List[Descriptor] = []
    while pos < len(pattern):
        descriptor, pos = _next_descriptor(pattern, pos, case_sensitive)
        descriptors.append(descriptor)

    log.debug("parsed %r into %d descriptor(s), root=%r", pattern, len(descriptors), root)
    return ParsedPattern(pattern=pattern, root=root, descriptors=tuple(descriptors))


def _next_descriptor(pattern: str, pos: int, case_sensitive: bool) -> Tuple[Descriptor, int]:
    # Rules are tried in priority order: recursive, literal run, wildcard.
    m = _RECURSIVE_RE.match(pattern, pos)
    if m:
        return Recursive(directory_only=m.group(0).endswith("/"), index=pos), m.end()

    m = _LITERAL_RUN_RE.match(pattern, pos)
    if m:
        text = m.group(0)
        directory_only = text.endswith("/")
        fragment = text[:-1] if directory_only else text
        return LiteralRun(fragment=fragment, directory_only=directory_only, index=pos), m.end()

    return _wildcard(pattern, pos, case_sensitive)


def _wildcard(pattern: str, pos: int, case_sensitive: bool) -> Tuple[Descriptor, int]:
    end = pattern.find("/", pos)
    if end == pos:
        # Empty segment, e.g. "a//b".
        raise UnrecognizedToken(pattern, pos)

    if end == -1:
        segment, next_pos, directory_only = pattern[pos:], len(pattern), False
    else:
        segment, next_pos, directory_only = pattern[pos:end], end + 1, True

    matcher = compile_segment(segment, case_sensitive, pattern=pattern, offset=pos)
    return Wildcard(segment=segment, matcher=matcher, directory_only=directory_only, index=pos), next_pos
