"""globignore Rules System.

This module provides ignore-file parsing and evaluation:
- Pattern: glob pattern compiled to a segment-boundary matcher
- Rule: a Pattern with a negation flag
- Ruleset: ordered rules, last applicable rule wins
- loaders: building rulesets from strings and files

Example:
    >>> from globignore.rules import Ruleset
    >>> Ruleset.load_from_lines(["build", "*.o"]).match("src/main.o")
    True
"""

from .engine import MatchResult, Rule, Ruleset
from .loaders import (
    Expectation,
    load_from_file,
    load_from_string,
    parse_expectations,
    split_lines,
    verify_expectations,
)
from .patterns import Pattern, tokenize, translate

__all__ = [
    # Pattern compilation
    "Pattern",
    "tokenize",
    "translate",
    # Rule evaluation
    "MatchResult",
    "Rule",
    "Ruleset",
    # Loading
    "Expectation",
    "split_lines",
    "load_from_string",
    "load_from_file",
    "parse_expectations",
    "verify_expectations",
]
