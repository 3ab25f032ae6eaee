#!/usr/bin/env python3
r"""Glob pattern compilation for ignore-file rules.

A pattern is translated token by token into a regular expression:

- ``**`` matches anything, including "/"
- ``*`` matches anything within one path segment
- ``?`` becomes the regex quantifier ``?`` (the previous token is optional);
  with ``strict=True`` it matches exactly one character other than "/"
- ``[...]`` and ``[!...]`` are passed through as character classes
- everything else matches literally

The compiled expression must start at a segment boundary (the start of the
path, or right after a "/") and end at one (the end of the path, or right
before a "/"). A pattern beginning with "/" may only start at the beginning
of the path.

Example:
    >>> Pattern.parse("*.pyc").match("src/module.pyc")
    True
    >>> Pattern.parse("/build").match("src/build")
    False
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from globignore.core.constants import PatternString, RelativePath, Syntax
from globignore.core.logging import get_logger
from globignore.core.validators import validate_path

logger = get_logger("globignore.rules")

# Alternatives are ordered longest first: "**" before "*", a whole bracket
# expression before a lone "[".
_TOKEN_RE = re.compile(r"\*\*|\*|\?|\[!?[^\]]+\]|.", re.DOTALL)

_SEGMENT_START = "(?:^|/)"
_SEGMENT_END = "(?:$|/)"


def tokenize(pattern: PatternString) -> List[str]:
    """Split a glob pattern into its atomic tokens.

    Example:
        >>> tokenize("a/**/[!x]*.py?")
        ['a', '/', '**', '/', '[!x]', '*', '.', 'p', 'y', '?']
    """
    return _TOKEN_RE.findall(pattern)


def _translate_token(token: str, strict: bool) -> str:
    if token == "**":
        return ".*"
    if token == "*":
        return "[^/]*"
    if token == "?":
        return "[^/]" if strict else "?"
    if len(token) > 1 and token[0] == "[":
        # Close enough; the class contents are not validated.
        if token[1] == "!":
            return "[^" + token[2:]
        return token
    return re.escape(token)


def translate(pattern: PatternString, strict: bool = False) -> Optional[str]:
    """Translate a glob pattern into regular expression source.

    Args:
        pattern: Glob pattern, possibly starting with "/"
        strict: Compile "?" as exactly one character

    Returns:
        Regex source, or None if the pattern has nothing to match
    """
    anchored = pattern.startswith(Syntax.SEPARATOR)
    body = pattern[1:] if anchored else pattern
    if not body:
        return None

    regex = "".join(_translate_token(token, strict) for token in tokenize(body))
    if anchored:
        return "^" + regex + _SEGMENT_END
    return _SEGMENT_START + regex + _SEGMENT_END


def _compile(pattern: PatternString, strict: bool) -> Optional[re.Pattern]:
    source = translate(pattern, strict)
    if source is None:
        return None

    try:
        return re.compile(source)
    except re.error as e:
        logger.warning(
            "Pattern cannot be compiled and will match nothing",
            pattern=pattern,
            regex=source,
            error=e,
        )
        return None


@dataclass(frozen=True)
class Pattern:
    """A compiled glob pattern.

    The expression is compiled once, on construction, and depends only on
    the pattern string and the strict flag. Construction never raises: a
    pattern with no usable body, or one whose translation the regex engine
    rejects (e.g. "/?x" without strict mode), matches no path.
    """

    pattern: PatternString
    strict: bool = False
    _regex: Optional[re.Pattern] = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", _compile(self.pattern, self.strict))

    @classmethod
    def parse(cls, pattern: PatternString, strict: bool = False) -> "Pattern":
        """Compile a glob pattern.

        Args:
            pattern: Glob pattern string
            strict: Compile "?" as exactly one character

        Returns:
            Compiled Pattern
        """
        return cls(pattern=pattern, strict=strict)

    @property
    def anchored(self) -> bool:
        """True if the pattern only matches from the start of the path."""
        return self.pattern.startswith(Syntax.SEPARATOR)

    @property
    def regex(self) -> Optional[str]:
        """Regex source of the compiled pattern, or None if it matches nothing."""
        return self._regex.pattern if self._regex is not None else None

    def match(self, path: RelativePath) -> bool:
        """Check if path contains this pattern at a segment boundary.

        Args:
            path: Relative "/"-separated path, without a leading slash

        Returns:
            True if the pattern matches

        Raises:
            InvalidArgumentError: If path is not a string or starts with "/"
        """
        validate_path(path, "Pattern.match")
        if self._regex is None:
            return False
        return self._regex.search(path) is not None

    def __str__(self) -> str:
        return self.pattern
