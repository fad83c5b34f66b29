# Shared data models for wildkarte.
# Lives in its own module to avoid circular imports between the parser,
# the traversal engine and the public entry points.

from __future__ import annotations

import logging
import os
import posixpath
import stat as stat_mod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Tuple, Union

if TYPE_CHECKING:
    from wildkarte.compiler import SegmentMatcher

log = logging.getLogger(__name__)


def normalize_sep(fpath: str) -> str:
    # Convert a host path into `/`-separated form.
    if os.sep == "/":
        return fpath
    return fpath.replace(os.sep, "/")


@dataclass(frozen=True)
class Item:
    # One filesystem entry as seen at enumeration time.
    # The entry may be gone by the time a consumer looks at it.
    path: str
    name: str
    stat: os.stat_result

    @classmethod
    def from_path(cls, fpath: str, name: Optional[str] = None) -> Optional["Item"]:
        # Stat failures (vanished entry, permission denied) mean "no item".
        try:
            st = os.stat(fpath)
        except OSError as exc:
            log.debug("cannot stat %s: %s", fpath, exc)
            return None
        fpath = normalize_sep(fpath)
        if name is None:
            # A root such as "/" or "C:/" has no basename; use the path itself.
            name = posixpath.basename(fpath.rstrip("/")) or fpath
        return cls(path=fpath, name=name, stat=st)

    @property
    def is_dir(self) -> bool:
        return stat_mod.S_ISDIR(self.stat.st_mode)

    @property
    def is_file(self) -> bool:
        return stat_mod.S_ISREG(self.stat.st_mode)

    def relative_to(self, base: str) -> str:
        # Relative path from `base`, always `/`-separated.
        return normalize_sep(os.path.relpath(self.path, base))


IgnorePredicate = Callable[[Item], bool]


@dataclass(frozen=True)
class LiteralRun:
    # One or more wildcard-free segments, resolved with a single stat.
    fragment: str
    directory_only: bool
    index: int


@dataclass(frozen=True)
class Wildcard:
    segment: str
    matcher: "SegmentMatcher"
    directory_only: bool
    index: int


@dataclass(frozen=True)
class Recursive:
    directory_only: bool
    index: int


Descriptor = Union[LiteralRun, Wildcard, Recursive]


@dataclass(frozen=True)
class ParsedPattern:
    pattern: str
    # Anchor such as "/", "C:/" or "//host/share/"; None for relative patterns.
    root: Optional[str]
    descriptors: Tuple[Descriptor, ...]


@dataclass(frozen=True)
class Options:
    basedir: Optional[str] = None
    ignore: Optional[IgnorePredicate] = None
    file_only: bool = False
    ignore_case: Optional[bool] = None
