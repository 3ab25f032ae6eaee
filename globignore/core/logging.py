"""Structured logging for globignore.

A thin layer over the standard library's logging module that appends
key=value context to every message:

    >>> logger = Logger("globignore.rules", level=LogLevel.DEBUG)
    >>> logger.debug("Rule added", pattern="*.pyc", negated=False)
    >>> with logger.add_context(source=".gitignore"):
    ...     logger.info("Loaded rules", count=12)
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """Logger with key=value context support.

    Context pushed with add_context() is thread-local and is merged with
    the keyword arguments of each call.
    """

    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "globignore",
        level: Union[LogLevel, str] = LogLevel.WARNING,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers. Without them the
                logger has a NullHandler and propagates, leaving output to
                the host application or to configure_logging().
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        propagate = handlers is None
        if handlers is None:
            handlers = [logging.NullHandler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = propagate

    def create_console_handler(self) -> logging.StreamHandler:
        """Create a stderr handler with the default format."""
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or name such as "debug")
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def _get_context(self) -> Dict[str, Any]:
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context: Dict[str, Any] = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Args:
            **kwargs: Key-value pairs to add to context
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        combined_context = self._get_context()
        combined_context.update(context)
        self.logger.log(
            level, self._format_message(msg, combined_context), extra={"context": combined_context}
        )

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)


_loggers: Dict[str, Logger] = {}
_loggers_lock = threading.Lock()


def get_logger(name: str = "globignore") -> Logger:
    """Get or create the logger registered under name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    with _loggers_lock:
        if name not in _loggers:
            _loggers[name] = Logger(name=name)
        return _loggers[name]


def configure_logging(
    level: Union[LogLevel, str], log_file: Optional[str] = None, console: bool = True
) -> Logger:
    """Route globignore logging to the console and, optionally, a log file.

    Handlers are attached to the root "globignore" logger only; named loggers
    below it propagate to them. Handlers from a previous call are replaced.

    Args:
        level: Minimum log level for every registered logger
        log_file: Optional path of a rotating log file
        console: Whether to log to stderr

    Returns:
        The root "globignore" logger
    """
    root = get_logger("globignore")

    for handler in list(root.logger.handlers):
        root.remove_handler(handler)
        handler.close()

    if console:
        root.add_handler(root.create_console_handler())
    if log_file:
        root.add_handler(root.create_file_handler(log_file))
    if not root.logger.handlers:
        root.add_handler(logging.NullHandler())
    root.logger.propagate = False

    with _loggers_lock:
        for logger in _loggers.values():
            logger.set_level(level)
    return root
