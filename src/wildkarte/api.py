# Public entry points for wildkarte.
# A pattern is parsed once into a Finder; the Finder can then be started
# from any number of base directories, each start being an independent
# lazy walk.
#
# Pattern errors surface when the Finder is built, never mid-walk.

from __future__ import annotations

import logging
import os
from typing import Iterator, Optional, Union

from wildkarte.compiler import compile_path
from wildkarte.config import resolve_case_sensitive
from wildkarte.models import IgnorePredicate, Item, Options, normalize_sep
from wildkarte.parser import parse
from wildkarte.traverse import build_stages, walk

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class Finder:
    """A compiled pattern, reusable across base directories.

    The descriptor chain and its stage functions are built in the
    constructor and never mutated afterwards, so concurrent walks started
    from the same Finder share no state.
    """

    def __init__(
        self,
        pattern: str,
        *,
        ignore: Optional[IgnorePredicate] = None,
        file_only: bool = False,
        ignore_case: Optional[bool] = None,
    ):
        self.pattern = pattern
        self.ignore = ignore
        self.file_only = file_only
        self.case_sensitive = resolve_case_sensitive(ignore_case)
        self.parsed = parse(pattern, self.case_sensitive)
        self._stages = build_stages(self.parsed.descriptors, ignore)
        log.debug("compiled %r into %d stage(s)", pattern, len(self._stages))

    @property
    def anchored(self) -> bool:
        return self.parsed.root is not None

    def base_path(self, basedir: Optional[PathLike] = None) -> str:
        # Anchored patterns ignore basedir; relative ones default to the cwd.
        if self.parsed.root is not None:
            return self.parsed.root
        return normalize_sep(os.path.abspath(os.fspath(basedir) if basedir else "."))

    def start(self, basedir: Optional[PathLike] = None) -> Iterator[Item]:
        """Yield every matching item below ``basedir``, lazily."""
        if not self.pattern:
            return iter(())
        return self._run(self.base_path(basedir))

    __call__ = start

    def paths(self, basedir: Optional[PathLike] = None) -> Iterator[str]:
        """Like :meth:`start`, but yield ``/``-separated path strings.

        Paths are relative to ``basedir`` for relative patterns and
        absolute for anchored ones.
        """
        base = self.base_path(basedir)
        for item in self.start(basedir):
            yield item.path if self.anchored else item.relative_to(base)

    def _run(self, start: str) -> Iterator[Item]:
        item = Item.from_path(start)
        if item is None:
            return
        if self.ignore is not None and self.ignore(item):
            return
        for found in walk(self._stages, item):
            if self.file_only and found.is_dir:
                continue
            yield found

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(pattern={self.pattern!r})"


def compile(
    pattern: str,
    *,
    ignore: Optional[IgnorePredicate] = None,
    file_only: bool = False,
    ignore_case: Optional[bool] = None,
) -> Finder:
    return Finder(pattern, ignore=ignore, file_only=file_only, ignore_case=ignore_case)


def _finder_and_basedir(
    pattern: str,
    basedir: Union[PathLike, Options, IgnorePredicate, None],
    ignore: Optional[IgnorePredicate],
    file_only: bool,
    ignore_case: Optional[bool],
):
    # Accept expand(pattern, basedir, ignore), expand(pattern, ignore)
    # and expand(pattern, options).
    if isinstance(basedir, Options):
        opts = basedir
        basedir = opts.basedir
        ignore = opts.ignore or ignore
        file_only = opts.file_only or file_only
        if opts.ignore_case is not None:
            ignore_case = opts.ignore_case
    elif callable(basedir):
        ignore = basedir
        basedir = None
    finder = compile(pattern, ignore=ignore, file_only=file_only, ignore_case=ignore_case)
    return finder, basedir


def expand(
    pattern: str,
    basedir: Union[PathLike, Options, IgnorePredicate, None] = None,
    ignore: Optional[IgnorePredicate] = None,
    *,
    file_only: bool = False,
    ignore_case: Optional[bool] = None,
) -> Iterator[Item]:
    """Yield every filesystem item matching ``pattern``.

    ``**`` matches any number of directories, ``*`` any run of characters
    within one name, ``?`` one character, ``{a,b}`` either alternative and
    ``<...>`` its content verbatim. A trailing ``/`` restricts a segment
    to directories.

    The pattern is compiled before this function returns, so malformed
    patterns raise :class:`wildkarte.errors.WildcardError` immediately.
    """
    finder, basedir = _finder_and_basedir(pattern, basedir, ignore, file_only, ignore_case)
    return finder.start(basedir)


def expand_paths(
    pattern: str,
    basedir: Union[PathLike, Options, IgnorePredicate, None] = None,
    ignore: Optional[IgnorePredicate] = None,
    *,
    file_only: bool = False,
    ignore_case: Optional[bool] = None,
) -> Iterator[str]:
    # Same as expand(), projected to "/"-separated path strings.
    finder, basedir = _finder_and_basedir(pattern, basedir, ignore, file_only, ignore_case)
    return finder.paths(basedir)


def match(pattern: str, relpath: PathLike, ignore_case: Optional[bool] = None) -> bool:
    # Test a relative path against a whole-path pattern without touching disk.
    matcher = compile_path(pattern, resolve_case_sensitive(ignore_case))
    return matcher.matches(normalize_sep(os.fspath(relpath)))
