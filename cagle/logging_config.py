"""
Logging configuration utilities for cagle.

Usage:
    from cagle.config import load_config
    from cagle.logging_config import configure_from_config

    configure_from_config(load_config())
"""

from typing import Optional

from cagle.config import CagleConfig
from cagle.logger import configure_logger


def configure_from_config(config: CagleConfig, session_id: Optional[str] = None) -> None:
    """Configure the global logger from a resolved CagleConfig.

    Args:
        config: Resolved configuration
        session_id: Optional session ID for correlating runs
    """
    configure_logger(
        enabled=config.log_enabled,
        level=config.log_level,
        log_directory=config.log_directory,
        session_id=session_id,
    )


__all__ = [
    "configure_from_config",
]
