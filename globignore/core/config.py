"""Layered configuration for globignore.

Configuration is merged from several sources, lowest precedence first:

1. Compiled defaults
2. User config file (YAML)
3. Environment variables (GLOBIGNORE_*)
4. Command-line arguments
5. Runtime updates

Example:
    >>> config = ConfigManager()
    >>> config.load_file("globignore.yaml")
    >>> config.get("globignore.matching.strict_question_mark", default=False)
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from globignore.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from globignore.core.validators import GlobIgnoreError, ValidationError, validate_config

ENV_PREFIX = "GLOBIGNORE_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(GlobIgnoreError):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)


class ConfigManager:
    """Thread-safe layered configuration manager."""

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML config file to load
            load_environment: Whether to read GLOBIGNORE_* variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded, parsed or validated
        """
        path = Path(file_path).expanduser()

        if not path.is_file():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}")
        except OSError as e:
            raise ConfigError(f"Error reading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}")

        self.load_dict(config_data, source)

    def load_dict(
        self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME
    ) -> None:
        """Load configuration from dictionary.

        A document without the "globignore" root key is wrapped in one.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level

        Raises:
            ConfigError: If the document fails validation
        """
        try:
            validate_config(config_data)
        except ValidationError as e:
            raise ConfigError(str(e), e.error_code)

        if ConfigKey.ROOT not in config_data:
            config_data = {ConfigKey.ROOT: config_data}

        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Nesting uses a double underscore, since keys contain single ones:
        GLOBIGNORE_RULES_FILE=.ignore sets globignore.rules_file and
        GLOBIGNORE_LOGGING__LEVEL=DEBUG sets globignore.logging.level.

        Raises:
            ConfigError: If the resulting section fails validation
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("__")

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            self.load_dict(env_config, ConfigSource.ENVIRONMENT)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value into bool, int, float or str."""
        if value.lower() in ("true", "yes", "on", "1"):
            return True
        if value.lower() in ("false", "no", "off", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "globignore.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @property
    def rules_file(self) -> str:
        return self.get(f"{ConfigKey.ROOT}.{ConfigKey.RULES_FILE}")

    @property
    def strict_question_mark(self) -> bool:
        return bool(
            self.get(f"{ConfigKey.ROOT}.{ConfigKey.MATCHING}.{ConfigKey.STRICT_QUESTION_MARK}")
        )

    @property
    def log_level(self) -> str:
        return self.get(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}", "WARNING")

    @property
    def log_file(self) -> Optional[str]:
        return self.get(f"{ConfigKey.ROOT}.{ConfigKey.LOGGING}.{ConfigKey.LOG_FILE}")

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]
