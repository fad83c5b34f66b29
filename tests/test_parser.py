# Unit tests for wildkarte.parser.
# These tests validate descriptor chains and index-annotated errors.

from __future__ import annotations

import pytest

from wildkarte.errors import RecursiveMisuse, UnmatchedBrace, UnrecognizedToken, WildcardError
from wildkarte.models import LiteralRun, Recursive, Wildcard
from wildkarte.parser import parse


def _shape(pattern: str):
    return [
        (type(d).__name__, getattr(d, "fragment", getattr(d, "segment", None)), d.directory_only, d.index)
        for d in parse(pattern, case_sensitive=True).descriptors
    ]


def test_parse_mixed_pattern() -> None:
    assert _shape("test/**/{a,b}?/*.txt") == [
        ("LiteralRun", "test", True, 0),
        ("Recursive", None, True, 5),
        ("Wildcard", "{a,b}?", True, 8),
        ("Wildcard", "*.txt", False, 15),
    ]


def test_literal_segments_collapse_into_one_run() -> None:
    parsed = parse("a/b/c", case_sensitive=True)
    assert parsed.root is None
    assert parsed.descriptors == (LiteralRun(fragment="a/b/c", directory_only=False, index=0),)


def test_trailing_slash_marks_directory_only() -> None:
    (d,) = parse("a/b/", case_sensitive=True).descriptors
    assert d == LiteralRun(fragment="a/b", directory_only=True, index=0)

    (d,) = parse("**/", case_sensitive=True).descriptors
    assert d == Recursive(directory_only=True, index=0)


def test_bare_recursive_segment() -> None:
    assert parse("**", case_sensitive=True).descriptors == (Recursive(directory_only=False, index=0),)


def test_literal_run_after_wildcard() -> None:
    assert _shape("src/*/lib/x.py") == [
        ("LiteralRun", "src", True, 0),
        ("Wildcard", "*", True, 4),
        ("LiteralRun", "lib/x.py", False, 6),
    ]


def test_verbatim_segment_is_a_wildcard_descriptor() -> None:
    (d,) = parse("<a*b>", case_sensitive=True).descriptors
    assert isinstance(d, Wildcard)
    assert d.matcher.matches("a*b")


def test_root_anchor() -> None:
    parsed = parse("/usr/lib/*.so", case_sensitive=True)
    assert parsed.root == "/"
    assert _shape("/usr/lib/*.so") == [
        ("LiteralRun", "usr/lib", True, 1),
        ("Wildcard", "*.so", False, 9),
    ]


def test_drive_and_unc_anchors(monkeypatch) -> None:
    monkeypatch.setattr("wildkarte.parser.DRIVE_ANCHORS", True)
    assert parse("C:/x/*", case_sensitive=True).root == "C:/"
    parsed = parse("//host/share/x", case_sensitive=True)
    assert parsed.root == "//host/share/"
    assert parsed.descriptors == (LiteralRun(fragment="x", directory_only=False, index=13),)


def test_drive_letter_is_a_plain_name_without_drive_anchors(monkeypatch) -> None:
    monkeypatch.setattr("wildkarte.parser.DRIVE_ANCHORS", False)
    parsed = parse("a:/f", case_sensitive=True)
    assert parsed.root is None
    assert parsed.descriptors == (LiteralRun(fragment="a:/f", directory_only=False, index=0),)


def test_anchor_only_pattern_has_no_descriptors() -> None:
    parsed = parse("/", case_sensitive=True)
    assert parsed.root == "/"
    assert parsed.descriptors == ()


def test_empty_pattern() -> None:
    parsed = parse("", case_sensitive=True)
    assert parsed.root is None
    assert parsed.descriptors == ()


def test_case_sensitivity_reaches_wildcard_matchers() -> None:
    (d,) = parse("*.TXT", case_sensitive=False).descriptors
    assert d.matcher.matches("a.txt")
    (d,) = parse("*.TXT", case_sensitive=True).descriptors
    assert not d.matcher.matches("a.txt")


def test_empty_segment_is_unrecognized() -> None:
    with pytest.raises(UnrecognizedToken) as info:
        parse("test/**/{a,b}?//*.txt")
    assert info.value.index == 15
    assert info.value.pointer.endswith("\n" + " " * 15 + "^")


def test_unmatched_open_brace_reports_full_pattern_index() -> None:
    with pytest.raises(UnmatchedBrace, match="Unmatched `{`") as info:
        parse("test/**/{a,b}?/{*.txt")
    assert info.value.index == 15
    assert info.value.pattern == "test/**/{a,b}?/{*.txt"


def test_unmatched_close_brace_reports_full_pattern_index() -> None:
    with pytest.raises(UnmatchedBrace, match="Unmatched `}`") as info:
        parse("test/a}")
    assert info.value.index == 6


def test_brace_cannot_span_segments() -> None:
    with pytest.raises(UnmatchedBrace) as info:
        parse("x/{a/b}")
    assert info.value.index == 2


def test_recursive_inside_segment_is_rejected() -> None:
    with pytest.raises(RecursiveMisuse) as info:
        parse("src/foo**bar/x")
    assert info.value.index == 7


def test_all_pattern_errors_share_a_base_class() -> None:
    for bad in ("a//b", "{", "}", "a**"):
        with pytest.raises(WildcardError):
            parse(bad)
    with pytest.raises(ValueError):
        parse("{")
