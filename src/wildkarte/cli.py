# Command-line interface definition for wildkarte.
# This file is responsible only for argument parsing, validation,
# and dispatch into the library entry points.
#
# No matching or traversal logic should live here.

from __future__ import annotations

import logging
import os
from pathlib import Path as FSPath
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from wildkarte import __version__
from wildkarte.api import compile as compile_finder
from wildkarte.compiler import Mode, compile_segment, to_regex
from wildkarte.config import resolve_case_sensitive
from wildkarte.errors import WildcardError
from wildkarte.models import IgnorePredicate, Item

app = typer.Typer(
    add_completion=False,
    help="Find files and directories matching wildcard patterns.",
)
console = Console(highlight=False, emoji=False, soft_wrap=True)
_err = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

# Exit status for malformed patterns, same as typer's usage errors.
EXIT_BAD_PATTERN = 2


def _setup_logging(verbose: bool) -> None:
    # Library modules only log at DEBUG; nothing is shown unless asked for.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err, show_time=False, show_path=False)],
        force=True,
    )


def _exclude_predicate(globs: List[str], case_sensitive: bool) -> Optional[IgnorePredicate]:
    # Excluded names prune their whole subtree.
    if not globs:
        return None
    matchers = [compile_segment(g, case_sensitive) for g in globs]

    def ignore(item: Item) -> bool:
        return any(m.matches(item.name) for m in matchers)

    return ignore


def _display(path: str) -> str:
    # Undecodable bytes in names (kept by os.listdir as surrogate escapes)
    # are shown as \xNN rather than failing the write.
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit(code=0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    # Options shared by every command.
    pass


def _fail(exc: WildcardError) -> NoReturn:
    _err.print(Text.assemble(("ERROR: ", "red"), exc.message))
    if exc.pointer:
        _err.print(exc.pointer, markup=False)
    raise typer.Exit(code=EXIT_BAD_PATTERN)


@app.command(help="Print every path matching the given patterns.")
def find(
    patterns: List[str] = typer.Argument(
        ...,
        help="Wildcard patterns, e.g. 'src/**/*.{py,pyi}'.",
    ),
    basedir: Optional[FSPath] = typer.Option(
        None, "--basedir", "-C",
        help="Directory to search from. Defaults to the current directory.",
    ),
    file_only: bool = typer.Option(
        False, "--file-only",
        help="Never print directories.",
    ),
    ignore_case: Optional[bool] = typer.Option(
        None, "--ignore-case/--match-case",
        help="Override the platform's default case sensitivity.",
    ),
    exclude: List[str] = typer.Option(
        [], "--exclude",
        help="Skip entries whose name matches this wildcard, and everything below them.",
    ),
    absolute: bool = typer.Option(
        False, "--absolute",
        help="Print absolute paths instead of paths relative to the base directory.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log skipped entries and compiled patterns to stderr.",
    ),
):
    _setup_logging(verbose)
    case_sensitive = resolve_case_sensitive(ignore_case)

    # Compile everything up front so a bad pattern fails before any output.
    try:
        ignore = _exclude_predicate(exclude, case_sensitive)
        finders = [
            compile_finder(p, ignore=ignore, file_only=file_only, ignore_case=not case_sensitive)
            for p in patterns
        ]
    except WildcardError as exc:
        _fail(exc)

    for finder in finders:
        if absolute:
            for item in finder.start(basedir):
                console.print(_display(item.path), markup=False)
        else:
            for path in finder.paths(basedir):
                console.print(_display(path), markup=False)


@app.command(help="Show the regular expression a wildcard compiles to.")
def regex(
    pattern: str = typer.Argument(..., help="Wildcard pattern."),
    path: bool = typer.Option(
        False, "--path",
        help="Compile as a relative path where '**' spans directories.",
    ),
    ignore_case: Optional[bool] = typer.Option(
        None, "--ignore-case/--match-case",
        help="Override the platform's default case sensitivity.",
    ),
):
    mode = Mode.path if path else Mode.filename
    try:
        compiled = to_regex(pattern, mode, resolve_case_sensitive(ignore_case))
    except WildcardError as exc:
        _fail(exc)
    console.print(compiled.pattern, markup=False)


if __name__ == "__main__":
    app()
