#!/usr/bin/env python3
"""Rule evaluation for ignore files.

This module turns ignore-file lines into rules and decides whether a path
is excluded:
- Rule: a compiled Pattern plus a negation flag ("!" prefix)
- MatchResult: what a single rule says about a path
- Ruleset: ordered rules, last applicable rule wins

Example:
    >>> ruleset = Ruleset.load_from_lines(["*.log", "!keep.log"])
    >>> ruleset.match("debug.log")
    True
    >>> ruleset.match("keep.log")
    False
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union

from globignore.core.constants import ErrorCode, RelativePath, Syntax
from globignore.core.logging import get_logger
from globignore.core.validators import GlobIgnoreError, RuleTypeError, describe, validate_path
from globignore.rules.patterns import Pattern

logger = get_logger("globignore.rules")


class MatchResult(Enum):
    """What a single rule says about a path."""

    INCLUDE = "include"  # Matched a "!" rule: path is re-included
    EXCLUDE = "exclude"  # Matched a plain rule: path is excluded
    NOT_APPLICABLE = "not_applicable"  # Pattern did not match


@dataclass(frozen=True)
class Rule:
    """One ignore-file rule.

    negated is True for lines starting with "!", which re-include paths
    excluded by earlier rules.
    """

    pattern: Pattern
    negated: bool = False

    @classmethod
    def parse(cls, line: str, strict: bool = False) -> "Rule":
        """Parse a single (already trimmed, non-comment) line.

        Args:
            line: Rule text, optionally starting with "!"
            strict: Compile "?" as exactly one character

        Returns:
            Parsed Rule
        """
        negated = line.startswith(Syntax.NEGATION)
        if negated:
            line = line[1:]
        return cls(pattern=Pattern.parse(line, strict=strict), negated=negated)

    def match(self, path: RelativePath) -> MatchResult:
        """Evaluate this rule against path.

        Raises:
            InvalidArgumentError: If path is not a string or starts with "/"
        """
        validate_path(path, "Rule.match")
        if not self.pattern.match(path):
            return MatchResult.NOT_APPLICABLE
        return MatchResult.INCLUDE if self.negated else MatchResult.EXCLUDE

    def __str__(self) -> str:
        return (Syntax.NEGATION if self.negated else "") + self.pattern.pattern


class Ruleset:
    """Ordered ignore rules with last-applicable-rule-wins evaluation.

    Rules are only ever appended; a later rule overrides earlier ones for
    the paths it matches. match() does not modify the ruleset, so a built
    ruleset can be shared between threads. freeze() makes any further
    append() fail.
    """

    def __init__(self, strict: bool = False):
        """Initialize an empty ruleset.

        Args:
            strict: Compile "?" as exactly one character in appended lines
        """
        self._rules: List[Rule] = []
        self._strict = strict
        self._frozen = False

    @classmethod
    def load_from_lines(cls, lines: Iterable[str], strict: bool = False) -> "Ruleset":
        """Build a ruleset from ignore-file lines, in order.

        Args:
            lines: Raw lines; blanks and comments are skipped
            strict: Compile "?" as exactly one character

        Returns:
            New Ruleset
        """
        ruleset = cls(strict=strict)
        for line in lines:
            ruleset.append(line)
        return ruleset

    @classmethod
    def load_from_string(cls, text: str, strict: bool = False) -> "Ruleset":
        """Build a ruleset from the text of an ignore file.

        Args:
            text: File contents; any line ending is accepted
            strict: Compile "?" as exactly one character

        Returns:
            New Ruleset
        """
        from globignore.rules.loaders import load_from_string

        return load_from_string(text, strict=strict)

    @classmethod
    def load_from_file(cls, path, encoding: str = "utf-8", strict: bool = False) -> "Ruleset":
        """Build a ruleset from an ignore file on disk.

        Args:
            path: Path of the rules file
            encoding: Text encoding of the file
            strict: Compile "?" as exactly one character

        Returns:
            New Ruleset

        Raises:
            GlobIgnoreError: If the file does not exist or cannot be read
        """
        from globignore.rules.loaders import load_from_file

        return load_from_file(path, encoding=encoding, strict=strict)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Ruleset":
        """Reject further appends. Returns self for chaining."""
        self._frozen = True
        return self

    def append(self, rule: Union[str, Rule]) -> None:
        """Add a raw line or a compiled rule.

        Lines are trimmed; empty lines and "#" comments are dropped, and a
        leading "\\#" stands for a literal "#".

        Args:
            rule: Ignore-file line or Rule

        Raises:
            RuleTypeError: If rule is neither a string nor a Rule
            GlobIgnoreError: If the ruleset is frozen
        """
        if self._frozen:
            raise GlobIgnoreError("Cannot append to a frozen ruleset", ErrorCode.CONFLICT)

        if isinstance(rule, str):
            line = rule.strip()
            if not line or line.startswith(Syntax.COMMENT):
                return
            if line.startswith(Syntax.ESCAPED_COMMENT):
                line = line[1:]
            rule = Rule.parse(line, strict=self._strict)

        if not isinstance(rule, Rule):
            raise RuleTypeError(
                f"Argument to Ruleset.append should be a string or Rule; received {describe(rule)}"
            )

        self._rules.append(rule)
        logger.debug("Rule added", rule=rule, position=len(self._rules))

    def match(self, path: RelativePath) -> bool:
        """Decide whether path is excluded.

        Every rule is evaluated in order and the last one that applies
        decides. A path no rule applies to is not excluded.

        Args:
            path: Relative "/"-separated path, without a leading slash

        Returns:
            True if the path is excluded

        Raises:
            InvalidArgumentError: If path is not a string or starts with "/"
        """
        decided = self.explain(path)
        return decided is not None and not decided.negated

    def explain(self, path: RelativePath) -> Optional[Rule]:
        """Return the rule that decides path, or None if no rule applies.

        Raises:
            InvalidArgumentError: If path is not a string or starts with "/"
        """
        validate_path(path, "Ruleset.match")
        decided: Optional[Rule] = None
        for rule in self._rules:
            if rule.match(path) is not MatchResult.NOT_APPLICABLE:
                decided = rule
        return decided

    def get_matching_rules(self, path: RelativePath) -> List[Rule]:
        """Get all rules whose pattern matches path, in order.

        Raises:
            InvalidArgumentError: If path is not a string or starts with "/"
        """
        validate_path(path, "Ruleset.get_matching_rules")
        return [rule for rule in self._rules if rule.match(path) is not MatchResult.NOT_APPLICABLE]

    def get_rules(self) -> List[Rule]:
        return self._rules.copy()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.copy())

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)
