"""
Render Loop - draw the selection list and feed keys to the controller.

One frame per key press: the whole screen is erased and redrawn, then the
loop blocks on the next key. Nothing happens between key presses.

Frame layout:

    cagle - promote project permissions to global
    <blank>
     > [✓] Bash(ls:*)        <- selected row, reverse video
       [ ] Read(./src/**)
    <blank>
    Added "Bash(ls:*)" to global settings   <- only after a confirm
    Enter: apply globally | q: quit
"""

import curses
from dataclasses import dataclass
from typing import Any, Tuple

from .controller import Controller
from .logger import get_logger

_logger = get_logger()

TITLE = "cagle"
SUBTITLE = " - promote project permissions to global"
HELP_LINE = "Enter: apply globally | q: quit"
MARK_PROMOTED = "[✓]"
MARK_LOCAL = "[ ]"

HEADER_ROWS = 2  # title + blank
FOOTER_ROWS = 3  # blank + status + help

STATUS_PAIR = 1


@dataclass
class Theme:
    """Curses attributes for each part of the frame."""
    title: int = curses.A_BOLD
    selected: int = curses.A_REVERSE
    status: int = curses.A_NORMAL
    help: int = curses.A_DIM

    @classmethod
    def from_curses(cls) -> "Theme":
        """Build the theme for a live screen; needs an initialised curses."""
        theme = cls()
        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
                curses.init_pair(STATUS_PAIR, curses.COLOR_GREEN, -1)
            except curses.error:
                curses.init_pair(STATUS_PAIR, curses.COLOR_GREEN, curses.COLOR_BLACK)
            theme.status = curses.color_pair(STATUS_PAIR)
        return theme


def format_row(selected: bool, promoted: bool, entry: str) -> str:
    arrow = ">" if selected else " "
    marker = MARK_PROMOTED if promoted else MARK_LOCAL
    return f" {arrow} {marker} {entry}"


def visible_range(cursor: int, count: int, rows: int) -> Tuple[int, int]:
    """Slice of rows to draw so that the cursor stays on screen.

    Returns:
        (start, end) indices into the item list
    """
    rows = max(1, rows)
    start = max(0, cursor - rows + 1)
    return start, min(count, start + rows)


def _put(window: Any, y: int, x: int, text: str, attr: int = 0) -> None:
    """Write ``text`` clipped to the window; the last column is never touched."""
    height, width = window.getmaxyx()
    room = width - 1 - x
    if y >= height or room <= 0:
        return
    window.addnstr(y, x, text, room, attr)


def draw_frame(window: Any, controller: Controller, theme: Theme) -> None:
    """Erase the window and draw the current session state."""
    selection = controller.selection
    height, _ = window.getmaxyx()

    window.erase()
    _put(window, 0, 0, TITLE, theme.title)
    _put(window, 0, len(TITLE), SUBTITLE)

    items = selection.items
    start, end = visible_range(selection.cursor, len(items), height - HEADER_ROWS - FOOTER_ROWS)
    y = HEADER_ROWS
    for index in range(start, end):
        is_selected = index == selection.cursor
        text = format_row(is_selected, selection.is_promoted(index), items[index])
        _put(window, y, 0, text, theme.selected if is_selected else curses.A_NORMAL)
        y += 1

    y += 1
    if controller.status is not None:
        _put(window, y, 0, controller.status, theme.status)
        y += 1
    _put(window, y, 0, HELP_LINE, theme.help)

    window.refresh()


def interact(window: Any, controller: Controller, theme: Theme) -> None:
    """Draw, wait for a key, apply it; until the controller exits."""
    while controller.running:
        draw_frame(window, controller, theme)
        controller.handle_code(window.getch())


def _prepare_terminal(stdscr: Any) -> None:
    # Raw mode delivers Ctrl+C as a key instead of raising KeyboardInterrupt
    curses.raw()
    curses.set_escdelay(25)
    stdscr.keypad(True)
    stdscr.nodelay(False)
    try:
        curses.curs_set(0)
    except curses.error:
        pass


def run_session(stdscr: Any, controller: Controller) -> None:
    """Session body for ``curses.wrapper``."""
    _prepare_terminal(stdscr)
    theme = Theme.from_curses()
    _logger.info("tui", "session_start", {"items": len(controller.selection)})
    interact(stdscr, controller, theme)
    _logger.info("tui", "session_end")


def run_interactive(controller: Controller) -> None:
    """Run the interactive session with the terminal restored on every exit.

    ``curses.wrapper`` undoes raw mode, leaves the curses screen and shows
    the cursor again before any exception from the session propagates.
    """
    curses.wrapper(run_session, controller)
