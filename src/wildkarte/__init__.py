# Package initialization for wildkarte.
# Re-exports the public entry points so callers can write
# `wildkarte.expand(...)` and `wildkarte.compile_segment(...)`.

from wildkarte.api import Finder, compile, expand, expand_paths, match
from wildkarte.compiler import Mode, SegmentMatcher, compile_path, compile_segment, to_regex
from wildkarte.errors import (
    RecursiveMisuse,
    UnmatchedBrace,
    UnrecognizedToken,
    UnsupportedWildcard,
    WildcardError,
)
from wildkarte.models import Item, Options

__all__ = [
    "__version__",
    "Finder",
    "Item",
    "Mode",
    "Options",
    "RecursiveMisuse",
    "SegmentMatcher",
    "UnmatchedBrace",
    "UnrecognizedToken",
    "UnsupportedWildcard",
    "WildcardError",
    "compile",
    "compile_path",
    "compile_segment",
    "expand",
    "expand_paths",
    "match",
    "to_regex",
]

# Package version.
# This is duplicated in pyproject.toml by design; keep them in sync.
__version__ = "0.1.0"
