"""
cagle - promote project Claude permissions to your global settings.

Reads the allow-rules of .claude/settings.local.json, lists them in an
interactive terminal picker, and appends the chosen ones to
~/.claude/settings.json.
"""

__version__ = "0.1.0"

from .controller import Controller, Key, SessionState, decode_key
from .errors import CagleError, ConfigError, SettingsError
from .selection import PromoteResult, SelectionList

__all__ = [
    "Controller",
    "Key",
    "SessionState",
    "decode_key",
    "CagleError",
    "ConfigError",
    "SettingsError",
    "PromoteResult",
    "SelectionList",
]
