"""Glob-style path matching shared by access policies and audit queries.

Pattern syntax
--------------
- ``*``  — zero or more characters within one path segment (never ``/``)
- ``**`` — zero or more characters across segments (may cross ``/``)
- ``?``  — exactly one character other than ``/``
- anything else matches literally, case-sensitively

Matching is anchored at both ends.  A trailing ``/`` on the candidate is
ignored; when the candidate is a directory path (ends with ``/``) a second
attempt is made with one trailing ``/``, ``/*`` or ``/**`` removed from the
pattern, so ``a/b/**`` also matches ``a/b/``.

Example
-------
>>> matches("a/b/c.txt", "a/b/*")
True
>>> matches("a/b/c/d.txt", "a/b/*")
False
>>> matches("a/b/c/d.txt", "a/b/**")
True
>>> matches("a/b/", "a/b/**")
True
"""
from __future__ import annotations

import functools
import re

from fileserver_governance.errors import PatternError

SEPARATOR: str = "/"

_TRAILING_WILDCARD = re.compile(r"/\*{0,2}$")


@functools.lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into a compiled regular expression.

    Compiled patterns are cached by pattern string.

    Raises
    ------
    PatternError
        If *pattern* is empty or not a string.
    """
    if not isinstance(pattern, str) or not pattern:
        raise PatternError(f"Path pattern must be a non-empty string; got {pattern!r}.")

    parts: list[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "*":
            if index + 1 < length and pattern[index + 1] == "*":
                parts.append(".*")
                index += 2
                continue
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(char))
        index += 1
    return re.compile("".join(parts), re.DOTALL)


def _strip_trailing_separator(candidate_path: str) -> str:
    stripped = candidate_path.rstrip(SEPARATOR)
    return stripped or candidate_path[:1]


def matches(candidate_path: str, pattern: str) -> bool:
    """Return True if *candidate_path* matches the glob *pattern* in full."""
    compiled = compile_pattern(pattern)
    path = _strip_trailing_separator(candidate_path)
    if compiled.fullmatch(path):
        return True

    if candidate_path.endswith(SEPARATOR):
        directory_pattern = _TRAILING_WILDCARD.sub("", pattern)
        if directory_pattern and directory_pattern != pattern:
            return compile_pattern(directory_pattern).fullmatch(path) is not None
    return False


def validate_pattern(pattern: str) -> str:
    """Compile *pattern* eagerly and return it unchanged.

    Used by policy and query constructors so malformed patterns are
    reported where they are supplied rather than during evaluation.
    """
    compile_pattern(pattern)
    return pattern
