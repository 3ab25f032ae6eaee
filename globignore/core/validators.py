"""
globignore Core: Errors and Input Validators.

This module provides the exception hierarchy, the value-description helpers
used to build error messages, and the validation functions for paths handed
to the matchers and for configuration documents.
"""
from typing import Any, Dict

from globignore.core.constants import ConfigKey, ErrorCode, Syntax

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class GlobIgnoreError(Exception):
    """Base exception for globignore errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        """Initialize GlobIgnoreError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


class InvalidArgumentError(GlobIgnoreError, ValueError):
    """A path handed to a matcher is not a relative path string."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)


class RuleTypeError(GlobIgnoreError, TypeError):
    """A value added to a ruleset is neither a line nor a compiled rule."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)


class ValidationError(GlobIgnoreError):
    """Configuration document failed validation."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)


def with_article(word: str) -> str:
    """Prefix a noun with "a" or "an".

    Example:
        >>> with_article("list")
        'a list'
        >>> with_article("object")
        'an object'
    """
    if word[:1].lower() in ("a", "e", "i", "o", "u"):
        return f"an {word}"
    return f"a {word}"


def describe(value: Any) -> str:
    """Describe a value for use in an error message.

    Args:
        value: Any value

    Returns:
        Human-readable phrase naming the value's kind, e.g. "None",
        "True", "the number 3", "a list", "an object of type Rule"
    """
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return f"the number {value}"
    if isinstance(value, str):
        return f"the string {value!r}"

    value_type = type(value)
    if value_type.__module__ == "builtins":
        return with_article(value_type.__name__)
    return f"an object of type {value_type.__name__}"


def validate_path(path: Any, caller: str = "match") -> str:
    """Validate a path handed to a matcher.

    Paths are relative, "/"-separated strings. A leading slash is a caller
    error rather than something a pattern can answer.

    Args:
        path: Path to validate
        caller: Name of the operation, used in the error message

    Returns:
        The path, unchanged

    Raises:
        InvalidArgumentError: If path is not a string or starts with "/"
    """
    if not isinstance(path, str):
        raise InvalidArgumentError(f"{caller} expects a string; given {describe(path)}")

    if path.startswith(Syntax.SEPARATOR):
        raise InvalidArgumentError(
            f"Paths passed to {caller} should not start with a slash; given: {path!r}"
        )

    return path


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a globignore configuration document.

    The document may either be wrapped in the "globignore" root key or
    hold the section keys directly.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError(f"Configuration must be a dictionary, got {describe(config)}")

    section = config.get(ConfigKey.ROOT, config)
    if not isinstance(section, dict):
        raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    if ConfigKey.RULES_FILE in section:
        rules_file = section[ConfigKey.RULES_FILE]
        if not isinstance(rules_file, str) or not rules_file:
            raise ValidationError(f"Rules file must be a non-empty string: {rules_file!r}")

    if ConfigKey.MATCHING in section:
        matching = section[ConfigKey.MATCHING]
        if not isinstance(matching, dict):
            raise ValidationError("Matching configuration must be a dictionary")

        strict = matching.get(ConfigKey.STRICT_QUESTION_MARK, False)
        if not isinstance(strict, bool):
            raise ValidationError(f"strict_question_mark must be boolean: {strict!r}")

    if ConfigKey.LOGGING in section:
        logging_config = section[ConfigKey.LOGGING]
        if not isinstance(logging_config, dict):
            raise ValidationError("Logging configuration must be a dictionary")

        level = logging_config.get(ConfigKey.LOG_LEVEL, "WARNING")
        if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {level!r}. Must be one of {sorted(_LOG_LEVELS)}"
            )

        log_file = logging_config.get(ConfigKey.LOG_FILE)
        if log_file is not None and not isinstance(log_file, str):
            raise ValidationError(f"Log file must be a string: {log_file!r}")

    return True
