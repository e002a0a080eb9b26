"""
Configuration Loader - Resolve where settings live and how to log.

Settings paths are fixed relative to the project root and the user's home
directory. Only logging can be tuned, through environment variables:

    CAGLE_LOG_ENABLED   '0', '1', 'true', 'false' (default: off)
    CAGLE_LOG_LEVEL     'ERROR', 'WARN', 'INFO', 'DEBUG', 'TRACE'
    CAGLE_LOG_DIR       Log directory (setting it also enables logging)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..errors import ConfigError

LOCAL_SETTINGS_RELPATH = Path(".claude") / "settings.local.json"
GLOBAL_SETTINGS_RELPATH = Path(".claude") / "settings.json"


@dataclass
class CagleConfig:
    """Resolved cagle configuration.

    Attributes:
        local_settings_path: Project-local settings file (read-only)
        global_settings_path: User-global settings file (read-write)
        log_enabled: Whether the JSON-lines log file is written
        log_level: Minimum logging level
        log_directory: Directory for log files (temp dir when None)
    """
    local_settings_path: Path
    global_settings_path: Path
    log_enabled: bool = False
    log_level: str = "INFO"
    log_directory: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "local_settings_path": str(self.local_settings_path),
            "global_settings_path": str(self.global_settings_path),
            "log_enabled": self.log_enabled,
            "log_level": self.log_level,
            "log_directory": self.log_directory,
        }


class ConfigLoader:
    """Build a CagleConfig.

    Example:
        loader = ConfigLoader(project_root="/path/to/project")
        config = loader.load()
        print(config.global_settings_path)  # /home/me/.claude/settings.json
    """

    def __init__(
        self,
        project_root: Optional[str] = None,
        home_dir: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the config loader.

        Args:
            project_root: Project root directory (default: current working dir)
            home_dir: Home directory (default: resolved from the OS)
            environ: Environment mapping (default: os.environ)
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self._home_dir = Path(home_dir) if home_dir else None
        self.environ = os.environ if environ is None else environ

    @property
    def home_dir(self) -> Path:
        """The user's home directory.

        Raises:
            ConfigError: If the OS cannot tell us where home is
        """
        if self._home_dir is None:
            try:
                self._home_dir = Path.home()
            except (KeyError, RuntimeError) as e:
                raise ConfigError(f"Could not determine home directory: {e}") from e
        return self._home_dir

    def load(self) -> CagleConfig:
        """Resolve paths and apply environment overrides.

        Returns:
            Resolved CagleConfig
        """
        log_dir = self.environ.get("CAGLE_LOG_DIR") or None
        enabled = _parse_bool(self.environ.get("CAGLE_LOG_ENABLED"), bool(log_dir))

        return CagleConfig(
            local_settings_path=self.project_root / LOCAL_SETTINGS_RELPATH,
            global_settings_path=self.home_dir / GLOBAL_SETTINGS_RELPATH,
            log_enabled=enabled,
            log_level=self.environ.get("CAGLE_LOG_LEVEL", "INFO"),
            log_directory=log_dir,
        )


def _parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse string to boolean."""
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def load_config(project_root: Optional[str] = None) -> CagleConfig:
    """Convenience function to load configuration.

    Args:
        project_root: Optional project root directory

    Returns:
        Loaded CagleConfig
    """
    return ConfigLoader(project_root=project_root).load()
