"""
Controller - turn key presses into model changes and settings writes.

The controller owns the global settings document for the whole session.
Each promotion produces a new document value, which the controller writes
out before the next frame is drawn.
"""

import curses
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .logger import get_logger
from .selection import PromoteResult, SelectionList
from .settings import merge_list, persist

_logger = get_logger()

KEY_CTRL_C = 3
KEY_ESC = 27


class Key(Enum):
    """Input the controller reacts to. Everything else is OTHER."""
    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    CONFIRM = "confirm"
    OTHER = "other"


_KEYMAP = {
    ord("q"): Key.QUIT,
    KEY_CTRL_C: Key.QUIT,
    # Alt+q arrives as Esc followed by q and quits on the Esc byte
    KEY_ESC: Key.QUIT,
    curses.KEY_UP: Key.UP,
    ord("k"): Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    ord("j"): Key.DOWN,
    ord("\n"): Key.CONFIRM,
    ord("\r"): Key.CONFIRM,
    curses.KEY_ENTER: Key.CONFIRM,
}


def decode_key(code: int) -> Key:
    """Map a curses key code to a Key.

    Ctrl+C arrives as a plain byte because the session runs in raw mode.
    Resize events, function keys and any other input decode to Key.OTHER.
    """
    return _KEYMAP.get(code, Key.OTHER)


class SessionState(Enum):
    RUNNING = "running"
    EXITED = "exited"


class Controller:
    """Drives one interactive session.

    Attributes:
        selection: Rows, promoted entries and cursor
        document: Current global settings document
        global_path: Where the global document is written
        state: RUNNING until a quit key is pressed
        status: Transient message from the last confirm, if any
    """

    def __init__(
        self,
        selection: SelectionList,
        document: Dict[str, Any],
        global_path: Path,
    ):
        self.selection = selection
        self.document = document
        self.global_path = global_path
        self.state = SessionState.RUNNING
        self.status: Optional[str] = None

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def handle_code(self, code: int) -> None:
        """Decode a raw key code and handle it."""
        self.handle(decode_key(code))

    def handle(self, key: Key) -> None:
        """Apply one key to the session.

        Raises:
            SettingsError: If a promotion cannot be written out
        """
        if not self.running:
            return

        if key is Key.QUIT:
            self.state = SessionState.EXITED
            _logger.info("controller", "quit", {"promoted": len(self.selection.promoted)})
        elif key is Key.UP:
            self.selection.move_up()
            self.status = None
        elif key is Key.DOWN:
            self.selection.move_down()
            self.status = None
        elif key is Key.CONFIRM:
            self._confirm()
        else:
            _logger.trace("controller", "key_ignored")

    def _confirm(self) -> None:
        entry = self.selection.current
        result = self.selection.promote(self.selection.cursor)

        if result is PromoteResult.ALREADY_PROMOTED:
            self.status = f'"{entry}" is already global'
            _logger.info("controller", "already_promoted", {"entry": entry})
            return

        document = merge_list(self.document, self.selection.promoted)
        persist(self.global_path, document)
        self.document = document
        self.status = f'Added "{entry}" to global settings'
        _logger.info("controller", "promoted", {"entry": entry, "path": str(self.global_path)})
