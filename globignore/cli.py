#!/usr/bin/env python3
"""Command-line interface for globignore.

This module provides the CLI for checking paths against an ignore file:
- Argument parsing and validation
- Configuration file loading
- Excluded-path listing, per-path explanations and annotation self-tests

Example:
    >>> from globignore.cli import parse_arguments
    >>> args = parse_arguments(["--rules", ".gitignore", "build/out.o"])
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, TextIO

from globignore.core.config import ConfigManager, ConfigSource
from globignore.core.constants import GLOBIGNORE_VERSION, ConfigKey
from globignore.core.logging import Logger, configure_logging, get_logger
from globignore.core.validators import GlobIgnoreError
from globignore.rules.engine import Ruleset
from globignore.rules.loaders import load_from_file, parse_expectations, verify_expectations

DESCRIPTION = "globignore - check paths against gitignore-style rules"

EXIT_EXCLUDED = 0
EXIT_NOT_EXCLUDED = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If argument validation fails
    """
    parser = argparse.ArgumentParser(
        prog="globignore",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List which of the given paths are excluded
  globignore --rules .gitignore build/main.o src/main.c

  # Read paths from stdin
  git ls-files | globignore --rules .gitignore

  # Show the deciding rule for each path
  globignore --explain build/main.o

  # Check "# should match:" annotations in a rules file
  globignore --rules tests.ruleset --verify

Exit status is 0 if any path is excluded, 1 if none is, 2 on error.
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {GLOBIGNORE_VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    parser.add_argument(
        "-r",
        "--rules",
        metavar="FILE",
        type=str,
        help="Rules file (default: .gitignore, or rules_file from the configuration)",
    )

    parser.add_argument(
        "paths",
        metavar="PATH",
        nargs="*",
        help="Relative paths to check (read from stdin when omitted)",
    )

    # Matching options
    match_group = parser.add_argument_group("matching options")

    match_group.add_argument(
        "--strict",
        action="store_true",
        help="Treat '?' as exactly one character instead of an optional previous token",
    )

    match_group.add_argument(
        "--explain",
        action="store_true",
        help="Print every path with its verdict and the deciding rule",
    )

    match_group.add_argument(
        "--verify",
        action="store_true",
        help="Check the '# should match:' annotations of the rules file",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log messages to FILE",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if args.verify and args.paths:
        raise CLIError("--verify does not take paths\nUse --help for usage information")

    if args.verify and args.explain:
        raise CLIError("--verify and --explain cannot be combined")

    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")


def build_config_from_args(args: argparse.Namespace) -> Dict:
    """
    Build configuration dictionary from command-line arguments.

    Only options given on the command line are included, so that they
    override the configuration file without masking it.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for ConfigManager
    """
    config: Dict = {}

    if args.rules:
        config[ConfigKey.RULES_FILE] = args.rules

    if args.strict:
        config[ConfigKey.MATCHING] = {ConfigKey.STRICT_QUESTION_MARK: True}

    logging_config = {}
    if args.debug:
        logging_config[ConfigKey.LOG_LEVEL] = "DEBUG"
    if args.log_file:
        logging_config[ConfigKey.LOG_FILE] = args.log_file
    if logging_config:
        config[ConfigKey.LOGGING] = logging_config

    return {ConfigKey.ROOT: config}


def load_configuration(args: argparse.Namespace) -> ConfigManager:
    """
    Merge defaults, configuration file, environment and arguments.

    Raises:
        ConfigError: If a configuration source is invalid
    """
    config = ConfigManager(args.config)
    config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on the merged configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance
    """
    logger = get_logger("globignore.cli")
    configure_logging(config.log_level, config.log_file)
    return logger


def read_paths(stream: TextIO) -> List[str]:
    """Read one path per line, skipping blank lines."""
    return [line.strip() for line in stream if line.strip()]


def check_paths(
    ruleset: Ruleset, paths: Iterable[str], explain: bool, out: TextIO
) -> int:
    """
    Print excluded paths (or every verdict with --explain).

    Returns:
        EXIT_EXCLUDED if any path is excluded, EXIT_NOT_EXCLUDED otherwise
    """
    any_excluded = False
    for path in paths:
        rule = ruleset.explain(path)
        excluded = rule is not None and not rule.negated
        any_excluded = any_excluded or excluded

        if explain:
            verdict = "excluded" if excluded else "included"
            print(f"{path}\t{verdict}\t{rule if rule is not None else '-'}", file=out)
        elif excluded:
            print(path, file=out)

    return EXIT_EXCLUDED if any_excluded else EXIT_NOT_EXCLUDED


def verify_rules_file(rules_file: str, ruleset: Ruleset, out: TextIO) -> int:
    """
    Check the annotations of a rules file against its own rules.

    Returns:
        0 if every annotation holds, 1 otherwise
    """
    text = Path(rules_file).read_text(encoding="utf-8")
    expectations = parse_expectations(text)
    failures = verify_expectations(ruleset, expectations)

    for failure in failures:
        expected = "match" if failure.should_match else "not match"
        print(
            f"{rules_file}:{failure.line_number}: expected '{failure.path}' to {expected}",
            file=out,
        )

    print(f"{len(expectations) - len(failures)}/{len(expectations)} expectations met", file=out)
    return 0 if not failures else 1


def run(
    args: argparse.Namespace, out: Optional[TextIO] = None, stdin: Optional[TextIO] = None
) -> int:
    """
    Execute the command described by parsed arguments.

    Raises:
        GlobIgnoreError: On configuration, rules-file or path errors
    """
    out = out or sys.stdout
    stdin = stdin or sys.stdin
    config = load_configuration(args)
    logger = setup_logging(config)

    rules_file = config.rules_file
    logger.debug("Using rules file", rules_file=rules_file, strict=config.strict_question_mark)
    ruleset = load_from_file(rules_file, strict=config.strict_question_mark).freeze()

    if args.verify:
        return verify_rules_file(rules_file, ruleset, out)

    paths = args.paths or read_paths(stdin)
    return check_paths(ruleset, paths, args.explain, out)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit status
    """
    try:
        args = parse_arguments(argv)
        return run(args)

    except (CLIError, GlobIgnoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
