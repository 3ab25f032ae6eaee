"""globignore - gitignore-style path matching."""

from globignore.core.constants import GLOBIGNORE_VERSION
from globignore.core.validators import GlobIgnoreError, InvalidArgumentError, RuleTypeError
from globignore.rules import MatchResult, Pattern, Rule, Ruleset, load_from_file, load_from_string

__version__ = GLOBIGNORE_VERSION

__all__ = [
    "GlobIgnoreError",
    "InvalidArgumentError",
    "RuleTypeError",
    "MatchResult",
    "Pattern",
    "Rule",
    "Ruleset",
    "load_from_file",
    "load_from_string",
]
