#!/usr/bin/env python3
"""Reading ignore rules from strings and files.

The loaders only split input into lines and hand them to
Ruleset.load_from_lines(); no matching logic lives here. Rules files may
also carry self-test annotations:

    *.log
    # should match: debug.log
    # should not match: debug.txt
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from globignore.core.constants import ErrorCode, Syntax
from globignore.core.logging import get_logger
from globignore.core.validators import GlobIgnoreError
from globignore.rules.engine import Ruleset

logger = get_logger("globignore.rules")


@dataclass(frozen=True)
class Expectation:
    """An annotated path and whether the rules should exclude it."""

    path: str
    should_match: bool
    line_number: int = 0


def split_lines(text: str) -> List[str]:
    """Split text on any line ending ("\\n", "\\r\\n" or "\\r")."""
    return text.splitlines()


def load_from_string(text: str, strict: bool = False) -> Ruleset:
    """Build a ruleset from the contents of an ignore file.

    Args:
        text: Ignore-file contents
        strict: Compile "?" as exactly one character

    Returns:
        New Ruleset
    """
    return Ruleset.load_from_lines(split_lines(text), strict=strict)


def load_from_file(
    path: Union[str, Path], encoding: str = "utf-8", strict: bool = False
) -> Ruleset:
    """Build a ruleset from an ignore file.

    Args:
        path: Ignore file to read
        encoding: File encoding
        strict: Compile "?" as exactly one character

    Returns:
        New Ruleset

    Raises:
        GlobIgnoreError: If the file does not exist or cannot be read
    """
    path = Path(path)
    if not path.is_file():
        raise GlobIgnoreError(f"Rules file not found: {path}", ErrorCode.NOT_FOUND)

    try:
        with open(path, "r", encoding=encoding, newline=None) as f:
            ruleset = Ruleset.load_from_lines(f, strict=strict)
    except (OSError, UnicodeDecodeError) as e:
        raise GlobIgnoreError(f"Failed to read rules file {path}: {e}", ErrorCode.INVALID_INPUT)

    logger.info("Loaded rules", source=str(path), count=len(ruleset))
    return ruleset


def parse_expectations(text: str) -> List[Expectation]:
    """Collect "# should match:" / "# should not match:" annotations.

    Args:
        text: Ignore-file contents

    Returns:
        Expectations in file order
    """
    expectations = []
    for number, line in enumerate(split_lines(text), start=1):
        if line.startswith(Syntax.SHOULD_MATCH):
            expectations.append(Expectation(line[len(Syntax.SHOULD_MATCH):], True, number))
        elif line.startswith(Syntax.SHOULD_NOT_MATCH):
            expectations.append(Expectation(line[len(Syntax.SHOULD_NOT_MATCH):], False, number))
    return expectations


def verify_expectations(ruleset: Ruleset, expectations: Iterable[Expectation]) -> List[Expectation]:
    """Check annotations against a ruleset.

    Returns:
        The expectations the ruleset does not meet
    """
    return [e for e in expectations if ruleset.match(e.path) != e.should_match]
