"""Allow ``python -m cagle``."""

from .cli import run

run()
