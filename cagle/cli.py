"""
CLI entry point for cagle.

Usage:
    cagle              # run from a project containing .claude/settings.local.json
    python -m cagle

Exit codes:
    0  quit normally, or nothing to promote
    1  no .claude/settings.local.json in the current directory
    2  any other fatal error (bad JSON, I/O failure, no home directory)
"""

import argparse
import locale
import sys
from typing import List, Optional

from . import __version__
from .config import ConfigLoader, LOCAL_SETTINGS_RELPATH
from .controller import Controller
from .errors import CagleError
from .logger import get_logger
from .logging_config import configure_from_config
from .selection import SelectionList
from .settings import extract_list, load_global_document, load_local_list
from .tui import run_interactive

_logger = get_logger()

EXIT_OK = 0
EXIT_NO_LOCAL_SETTINGS = 1
EXIT_FATAL = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cagle",
        description=(
            f"Promote permissions.allow entries from {LOCAL_SETTINGS_RELPATH} "
            "into your global Claude settings."
        ),
        epilog="Keys: Up/k and Down/j move, Enter promotes, q/Esc/Ctrl+C quit.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run(loader: ConfigLoader) -> int:
    local_path = loader.project_root / LOCAL_SETTINGS_RELPATH
    if not local_path.exists():
        print(f"No {LOCAL_SETTINGS_RELPATH} found in current directory.", file=sys.stderr)
        return EXIT_NO_LOCAL_SETTINGS

    config = loader.load()
    configure_from_config(config)
    _logger.info("cli", "startup", config.to_dict())

    entries = load_local_list(config.local_settings_path)
    if not entries:
        print(f"No permissions.allow entries in {LOCAL_SETTINGS_RELPATH}", file=sys.stderr)
        return EXIT_OK

    document = load_global_document(config.global_settings_path)
    selection = SelectionList(entries, promoted=extract_list(document))
    controller = Controller(selection, document, config.global_settings_path)

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        _logger.warn("cli", "locale_unavailable")
    run_interactive(controller)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    create_parser().parse_args(argv)

    try:
        return _run(ConfigLoader())
    except CagleError as e:
        _logger.error("cli", "fatal", {"error": e})
        print(f"cagle: {e}", file=sys.stderr)
        return EXIT_FATAL
    finally:
        _logger.close()


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
