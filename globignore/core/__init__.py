"""globignore Core - Shared utilities.

Import specific functions from submodules:
    from globignore.core.config import ConfigManager
    from globignore.core import constants
    from globignore.core import logging
    from globignore.core import validators
"""

from globignore.core import config, constants, logging, validators

__all__ = [
    "config",
    "constants",
    "logging",
    "validators",
]
