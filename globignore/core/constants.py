"""
globignore Core: Constants and Type Definitions

This module provides package-wide constants, error codes, configuration keys
and the tokens of the ignore-file syntax.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
GLOBIGNORE_VERSION = "1.0.0"


# Error codes
class ErrorCode(IntEnum):
    """Standardized error codes for globignore operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, bad rule argument, invalid configuration
    NOT_FOUND = 2  # Rules or config file doesn't exist
    CONFLICT = 4  # Ruleset is frozen
    INTERNAL_ERROR = 6  # Bug in globignore


# Type aliases for clarity
RelativePath: TypeAlias = str
PatternString: TypeAlias = str


# Ignore-file syntax
class Syntax:
    """Characters with special meaning in an ignore file."""

    COMMENT = "#"
    ESCAPED_COMMENT = "\\#"
    NEGATION = "!"
    SEPARATOR = "/"

    # Annotation comments understood by the self-test mode
    SHOULD_MATCH = "# should match: "
    SHOULD_NOT_MATCH = "# should not match: "


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    ROOT = "globignore"

    # Top-level keys
    RULES_FILE = "rules_file"
    MATCHING = "matching"
    LOGGING = "logging"

    # Matching configuration
    STRICT_QUESTION_MARK = "strict_question_mark"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.RULES_FILE: ".gitignore",
        ConfigKey.MATCHING: {
            ConfigKey.STRICT_QUESTION_MARK: False,
        },
        ConfigKey.LOGGING: {
            ConfigKey.LOG_LEVEL: "WARNING",
            ConfigKey.LOG_FILE: None,
        },
    }
}
