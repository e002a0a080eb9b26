"""
Error types raised by cagle.

All of them are fatal: they are raised where the failure happens and handled
once, by the CLI entry point, which reports them and picks the exit code.
"""

from pathlib import Path
from typing import Optional


class CagleError(Exception):
    """Base class for cagle errors."""


class ConfigError(CagleError):
    """Configuration could not be resolved (e.g. no home directory)."""


class SettingsError(CagleError):
    """A settings file could not be read, parsed, shaped or written.

    Attributes:
        path: The settings file involved, when known
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
