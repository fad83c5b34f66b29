# Pattern errors for wildkarte.
# Every error here is structural: it is raised while a pattern is being
# parsed or compiled, before the filesystem is touched.
#
# Indices always refer to the full pattern the caller passed in.

from __future__ import annotations

from typing import Optional


class WildcardError(ValueError):
    # Base class for malformed wildcard patterns.
    def __init__(
        self,
        message: str,
        pattern: Optional[str] = None,
        index: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.pattern = pattern
        self.index = index

    @property
    def pointer(self) -> str:
        # Caret-style display: the pattern, then a `^` under the offending character.
        if self.pattern is None or self.index is None:
            return ""
        return f"{self.pattern}\n{' ' * self.index}^"

    def __str__(self) -> str:
        pointer = self.pointer
        if not pointer:
            return self.message
        return f"{self.message}\n{pointer}"


class UnsupportedWildcard(WildcardError):
    def __init__(
        self,
        text: str,
        pattern: Optional[str] = None,
        index: Optional[int] = None,
    ):
        super().__init__(f"Unsupported wildcard: '{text}'", pattern, index)
        self.text = text


class UnmatchedBrace(WildcardError):
    def __init__(self, brace: str, pattern: str, index: int):
        super().__init__(f"Unmatched `{brace}` at index {index}", pattern, index)
        self.brace = brace


class UnrecognizedToken(WildcardError):
    def __init__(self, pattern: str, index: int):
        super().__init__(f"Unrecognized token at index {index}", pattern, index)


class RecursiveMisuse(WildcardError):
    def __init__(self, pattern: str, index: int):
        super().__init__("`**` found in wildcard", pattern, index)
