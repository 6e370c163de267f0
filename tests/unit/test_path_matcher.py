"""Tests for the glob path matcher."""
from __future__ import annotations

import pytest

from fileserver_governance.access.path_matcher import (
    compile_pattern,
    matches,
    validate_pattern,
)
from fileserver_governance.errors import PatternError


# ---------------------------------------------------------------------------
# Wildcards
# ---------------------------------------------------------------------------


class TestSingleStar:
    def test_matches_within_segment(self) -> None:
        assert matches("a/b/c.txt", "a/b/*") is True

    def test_does_not_cross_separator(self) -> None:
        assert matches("a/b/c/d.txt", "a/b/*") is False

    def test_extension_pattern(self) -> None:
        assert matches("c.txt", "*.txt") is True
        assert matches("c.txt", "*.jpg") is False

    def test_star_matches_empty(self) -> None:
        assert matches("a/b/", "a/b/*") is True
        assert matches(".txt", "*.txt") is True


class TestDoubleStar:
    def test_crosses_segments(self) -> None:
        assert matches("a/b/c/d.txt", "a/b/**") is True

    def test_leading_double_star_requires_separator(self) -> None:
        assert matches("user1/files/data.txt", "**/*.txt") is True
        assert matches("data.txt", "**/*.txt") is False

    def test_bare_double_star_matches_everything(self) -> None:
        assert matches("x/y/z", "**") is True
        assert matches("", "**") is True

    def test_bare_directory_path_without_slash_not_matched(self) -> None:
        assert matches("a/b", "a/b/**") is False


class TestQuestionMark:
    def test_matches_exactly_one_character(self) -> None:
        assert matches("c.txt", "*.???") is True
        assert matches("c.txt", "*.????") is False

    def test_does_not_match_separator(self) -> None:
        assert matches("a/b", "a?b") is False
        assert matches("axb", "a?b") is True


# ---------------------------------------------------------------------------
# Literal matching and anchoring
# ---------------------------------------------------------------------------


class TestLiterals:
    def test_exact_path(self) -> None:
        assert matches("secret.pdf", "secret.pdf") is True

    def test_regex_metacharacters_are_literal(self) -> None:
        assert matches("a+b(1).txt", "a+b(1).txt") is True
        assert matches("abtxt", "ab.txt") is False
        assert matches("a[1]", "a[1]") is True

    def test_case_sensitive(self) -> None:
        assert matches("Secret.pdf", "secret.pdf") is False

    def test_full_string_not_substring(self) -> None:
        assert matches("x/a/b.txt", "a/*") is False
        assert matches("a/b.txt.bak", "a/*.txt") is False


# ---------------------------------------------------------------------------
# Directory paths
# ---------------------------------------------------------------------------


class TestDirectoryPaths:
    def test_directory_matches_its_double_star_pattern(self) -> None:
        assert matches("a/b/", "a/b/**") is True
        assert matches("user1/files/", "user1/files/**") is True

    def test_directory_matches_its_single_star_pattern(self) -> None:
        assert matches("user1/files/", "user1/files/*") is True

    def test_parent_directory_does_not_match(self) -> None:
        assert matches("user1/", "user1/files/**") is False
        assert matches("user1/", "user1/files/*") is False

    def test_trailing_slash_ignored_for_literal_pattern(self) -> None:
        assert matches("public/readonly/", "public/readonly") is True

    def test_directory_matches_pattern_with_trailing_slash(self) -> None:
        assert matches("a/b/", "a/b/") is True

    def test_non_wildcard_pattern_is_not_stripped(self) -> None:
        assert matches("a/", "a?") is False


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


class TestCompilation:
    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(PatternError):
            compile_pattern("")

    def test_pattern_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_pattern("")

    def test_compiled_patterns_cached(self) -> None:
        assert compile_pattern("docs/**/*.md") is compile_pattern("docs/**/*.md")

    def test_validate_returns_pattern(self) -> None:
        assert validate_pattern("a/*") == "a/*"

    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("a/*", r"a/[^/]*"),
            ("a/**", r"a/.*"),
            ("a?", r"a[^/]"),
        ],
    )
    def test_translation(self, pattern: str, expected: str) -> None:
        assert compile_pattern(pattern).pattern == expected
