"""
Configuration - resolve settings file locations and logging options.

Provides:
- CagleConfig: Resolved configuration
- ConfigLoader: Build a CagleConfig from a project root, a home directory
  and CAGLE_* environment variables

Settings locations:
1. <project>/.claude/settings.local.json (local, read-only)
2. ~/.claude/settings.json (global, read-write)
"""

from .loader import (
    CagleConfig,
    ConfigLoader,
    load_config,
    LOCAL_SETTINGS_RELPATH,
    GLOBAL_SETTINGS_RELPATH,
)

__all__ = [
    "CagleConfig",
    "ConfigLoader",
    "load_config",
    "LOCAL_SETTINGS_RELPATH",
    "GLOBAL_SETTINGS_RELPATH",
]
