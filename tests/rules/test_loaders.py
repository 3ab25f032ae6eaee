#!/usr/bin/env python3
"""Tests for building rulesets from strings and files."""

from pathlib import Path

import pytest

from globignore.core.constants import ErrorCode
from globignore.core.validators import GlobIgnoreError
from globignore.rules.engine import Ruleset
from globignore.rules.loaders import (
    Expectation,
    load_from_file,
    load_from_string,
    parse_expectations,
    split_lines,
    verify_expectations,
)


def _annotated_cases():
    path = Path(__file__).parent.parent / "data" / "basic.ruleset"
    return parse_expectations(path.read_text(encoding="utf-8"))


class TestSplitLines:
    """Tests for split_lines()."""

    def test_line_endings(self):
        """Test that every line-ending style splits."""
        assert split_lines("a\nb\r\nc\rd") == ["a", "b", "c", "d"]

    def test_trailing_newline(self):
        """Test that a trailing newline adds no empty line."""
        assert split_lines("a\n") == ["a"]

    def test_empty(self):
        """Test that empty input has no lines."""
        assert split_lines("") == []


class TestLoadFromString:
    """Tests for load_from_string()."""

    def test_load(self):
        """Test loading rules from a string."""
        ruleset = load_from_string("*.o\n\n# comment\n!keep.o\n")

        assert len(ruleset) == 2
        assert ruleset.match("main.o")
        assert not ruleset.match("keep.o")

    def test_crlf(self):
        """Test that Windows line endings leave no stray characters."""
        ruleset = load_from_string("foo\r\nbar\r\n")

        assert [str(rule) for rule in ruleset] == ["foo", "bar"]

    def test_strict(self):
        """Test that strict is forwarded."""
        assert load_from_string("a?c", strict=True).strict

    def test_classmethod(self):
        """Test the Ruleset convenience constructor."""
        ruleset = Ruleset.load_from_string("foo")

        assert isinstance(ruleset, Ruleset)
        assert ruleset.match("a/foo")


class TestLoadFromFile:
    """Tests for load_from_file()."""

    def test_load(self, rules_file):
        """Test loading rules from a file."""
        ruleset = load_from_file(rules_file)

        assert len(ruleset) == 3
        assert ruleset.match("src/main.o")
        assert ruleset.match("build/x")
        assert not ruleset.match("keep.o")
        assert not ruleset.match("src/build")

    def test_load_str_path(self, rules_file):
        """Test that a string path is accepted."""
        assert len(load_from_file(str(rules_file))) == 3

    def test_crlf_file(self, tmp_path):
        """Test that CRLF files load cleanly."""
        path = tmp_path / "crlf.ignore"
        path.write_bytes(b"foo\r\n!foo/bar\r\n")

        ruleset = load_from_file(path)

        assert [str(rule) for rule in ruleset] == ["foo", "!foo/bar"]
        assert not ruleset.match("foo/bar")

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises NOT_FOUND."""
        with pytest.raises(GlobIgnoreError) as exc_info:
            load_from_file(tmp_path / "missing.ignore")
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_undecodable_file(self, tmp_path):
        """Test that a file in the wrong encoding raises."""
        path = tmp_path / "latin1.ignore"
        path.write_bytes(b"caf\xe9\n")

        with pytest.raises(GlobIgnoreError) as exc_info:
            load_from_file(path)
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_encoding(self, tmp_path):
        """Test reading a file in another encoding."""
        path = tmp_path / "latin1.ignore"
        path.write_bytes(b"caf\xe9\n")

        assert load_from_file(path, encoding="latin-1").match("café")

    def test_classmethod(self, rules_file):
        """Test the Ruleset convenience constructor."""
        assert len(Ruleset.load_from_file(rules_file)) == 3


class TestExpectations:
    """Tests for annotation parsing and verification."""

    def test_parse(self):
        """Test reading annotations with line numbers."""
        text = "foo\n# should match: foo\n# should not match: bar\n# other comment\n"

        assert parse_expectations(text) == [
            Expectation("foo", True, 2),
            Expectation("bar", False, 3),
        ]

    def test_annotations_are_comments(self):
        """Test that annotations create no rules."""
        ruleset = load_from_string("# should match: foo\n")

        assert len(ruleset) == 0

    def test_verify_reports_failures(self):
        """Test that unmet expectations are returned."""
        text = "foo\n# should match: foo\n# should match: bar\n# should not match: a/foo\n"
        ruleset = load_from_string(text)

        failures = verify_expectations(ruleset, parse_expectations(text))

        assert [f.path for f in failures] == ["bar", "a/foo"]

    def test_data_file_has_cases(self, basic_ruleset_file):
        """Test that the shipped rules file is annotated."""
        assert len(parse_expectations(basic_ruleset_file.read_text(encoding="utf-8"))) > 20

    @pytest.mark.parametrize(
        "case", _annotated_cases(), ids=lambda c: f"{c.line_number}:{c.path}"
    )
    def test_data_file_expectation(self, basic_ruleset_file, case):
        """Test each annotation of the shipped rules file."""
        ruleset = load_from_file(basic_ruleset_file)

        assert ruleset.match(case.path) is case.should_match
