# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Composable matchers for relative file paths.

A `Matcher` answers `match(rel_path) -> bool`. Leaf matchers test either the
base name of every component of a path (`name`, `hidden`) or the path and each
of its ancestors against glob patterns (`path`), so a match on a directory is
also a match on everything beneath it. `all_of`, `any_of` and `not_` combine
them.

Paths use `/` separators. Absolute paths never match a leaf matcher.

Example:
    exclude = any_of(hidden(), path("vendor", "build/*/cache"))
    exclude.match("src/.git/config")     # True
    exclude.match("vendor/lib/a.py")     # True
    exclude.match("src/app.py")          # False
"""
from __future__ import annotations

import posixpath
import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class Matcher(Protocol):
    def match(self, rel_path: str) -> bool: ...


def all_subpaths(rel_path: str) -> list[str]:
    """
    Return `rel_path` and each of its ancestors, up to but not including ".".

    `"foo/bar/baz.txt"` gives `["foo/bar/baz.txt", "foo/bar", "foo"]`.
    Absolute paths give an empty list.
    """
    if posixpath.isabs(rel_path):
        return []
    subpaths = []
    current = posixpath.normpath(rel_path)
    while current not in (".", ""):
        subpaths.append(current)
        current = posixpath.dirname(current)
    return subpaths


def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob pattern into a regular expression over whole paths.

    `*` matches any run of non-`/` characters, `?` one non-`/` character, and
    `[...]` a character class, negated as `[^...]`. `!` is an ordinary class
    character, so `[!a]` matches `!` or `a`. A backslash escapes the next
    character.

    Raises:
        ValueError: If the pattern has an unterminated class or a trailing
            backslash.
    """
    parts = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        i += 1
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "\\":
            if i >= n:
                raise ValueError(f"Bad pattern {pattern!r}: trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif char == "[":
            end = i
            if end < n and pattern[end] == "^":
                end += 1
            if end < n and pattern[end] == "]":
                end += 1
            while end < n and pattern[end] != "]":
                end += 1
            if end >= n:
                raise ValueError(f"Bad pattern {pattern!r}: unterminated character class")
            body = pattern[i:end]
            i = end + 1
            negate = body[:1] == "^"
            if negate:
                body = body[1:]
            body = "".join(c if c == "-" else re.escape(c) for c in body)
            parts.append(f"[^/{body}]" if negate else f"[{body}]")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts))


class AllMatcher:
    """True if every non-None matcher matches; False if there are none."""

    def __init__(self, *matchers: Matcher | None) -> None:
        self.matchers = list(matchers)

    def match(self, rel_path: str) -> bool:
        found = False
        for matcher in self.matchers:
            if matcher is None:
                continue
            found = True
            if not matcher.match(rel_path):
                return False
        return found


class AnyMatcher:
    """True if at least one non-None matcher matches."""

    def __init__(self, *matchers: Matcher | None) -> None:
        self.matchers = list(matchers)

    def match(self, rel_path: str) -> bool:
        return any(
            matcher is not None and matcher.match(rel_path) for matcher in self.matchers
        )


class NotMatcher:
    def __init__(self, matcher: Matcher) -> None:
        self.matcher = matcher

    def match(self, rel_path: str) -> bool:
        return not self.matcher.match(rel_path)


class NameMatcher:
    """
    Matches if the base name of the path, or of any of its ancestors, fully
    matches one of the regular expressions.
    """

    def __init__(self, *expressions: str) -> None:
        self.expressions = [re.compile(expression) for expression in expressions]

    def match(self, rel_path: str) -> bool:
        for subpath in all_subpaths(rel_path):
            base = posixpath.basename(subpath)
            if any(expression.fullmatch(base) for expression in self.expressions):
                return True
        return False


class PathMatcher:
    """
    Matches if the path, or any of its ancestors, matches one of the globs.

    `path("foo")` matches `foo`, `foo/bar` and `foo/bar.txt` but not `bar/foo`.
    """

    def __init__(self, *patterns: str) -> None:
        self.patterns = [compile_glob(pattern) for pattern in patterns]

    def match(self, rel_path: str) -> bool:
        subpaths = all_subpaths(rel_path)
        return any(
            pattern.fullmatch(subpath) for pattern in self.patterns for subpath in subpaths
        )


def all_of(*matchers: Matcher | None) -> Matcher:
    return AllMatcher(*matchers)


def any_of(*matchers: Matcher | None) -> Matcher:
    return AnyMatcher(*matchers)


def not_(matcher: Matcher) -> Matcher:
    return NotMatcher(matcher)


def name(*expressions: str) -> Matcher:
    return NameMatcher(*expressions)


def hidden() -> Matcher:
    """Match any path with a component that starts with `.`."""
    return NameMatcher(r"\..+")


def path(*patterns: str) -> Matcher:
    return PathMatcher(*patterns)
