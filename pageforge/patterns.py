"""Glob-style matching of page source paths.

Supported syntax:
    *       any run of characters except "/"
    **      any run of characters including "/"; "**/" also matches no directory
    ?       a single character except "/"
    [abc]   a character class ("[!abc]" negates)
    {a,b}   alternation

Patterns and paths are compared after dropping a leading "./".
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pageforge.page import Page

ALL_PAGES = "**/*"


def _normalize(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


def _expand_braces(pattern: str) -> list[str]:
    """Expand the first top-level {a,b} group, recursively."""
    depth = 0
    start = -1
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0:
                body = pattern[start + 1 : i]
                alternatives = _split_alternatives(body)
                if len(alternatives) < 2:
                    # "{x}" without a comma is literal
                    continue
                prefix, suffix = pattern[:start], pattern[i + 1 :]
                expanded: list[str] = []
                for alt in alternatives:
                    expanded.extend(_expand_braces(prefix + alt + suffix))
                return expanded
    return [pattern]


def _split_alternatives(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = []
    for ch in body:
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        current.append(ch)
    parts.append("".join(current))
    return parts


def _translate(pattern: str) -> str:
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if pattern.startswith("**", i):
            at_segment_start = i == 0 or pattern[i - 1] == "/"
            if at_segment_start and i + 2 < n and pattern[i + 2] == "/":
                out.append("(?:.*/)?")
                i += 3
            else:
                out.append(".*")
                i += 2
            continue
        if ch == "*":
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        elif ch == "[":
            end = pattern.find("]", i + 2 if pattern[i + 1 : i + 2] in ("!", "]") else i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                body = pattern[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end + 1
                continue
        else:
            out.append(re.escape(ch))
        i += 1
    return "".join(out)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern into an anchored regular expression."""
    alternatives = [_translate(_normalize(p)) for p in _expand_braces(pattern)]
    return re.compile(r"(?s:" + "|".join(alternatives) + r")\Z")


def matches(pattern: str, src: str) -> bool:
    """Return True if ``src`` matches the glob ``pattern``."""
    return compile_pattern(pattern).match(_normalize(src)) is not None


class PatternMatcher:
    """A compiled glob pattern used to select pages by ``src``."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._regex = compile_pattern(pattern)

    def __repr__(self) -> str:
        return f"PatternMatcher({self.pattern!r})"

    def match(self, src: str) -> bool:
        return self._regex.match(_normalize(src)) is not None

    def filter(self, pages: Iterable[Page]) -> list[Page]:
        """Matching pages, in input order."""
        return [page for page in pages if self.match(page.src)]
