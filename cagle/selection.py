"""
Selection List Model - the rows the user picks from.

Holds the local permission entries (fixed for the session), the global
entries they are promoted into, and the cursor.
"""

from enum import Enum
from typing import Iterable, List, Sequence


class PromoteResult(Enum):
    """Outcome of promoting the entry under the cursor."""
    PROMOTED = "promoted"
    ALREADY_PROMOTED = "already_promoted"


class SelectionList:
    """Ordered candidate entries, promoted entries and a cursor.

    ``promoted`` keeps insertion order and is never deduplicated or reordered
    here: it starts as the global allow-list and only grows by appends.
    Identical local entries stay separate rows.

    Example:
        selection = SelectionList(["Bash(ls:*)", "Read"], promoted=["Read"])
        selection.is_promoted(1)   # True
        selection.promote(0)       # PromoteResult.PROMOTED
        selection.promoted         # ["Read", "Bash(ls:*)"]
    """

    def __init__(self, items: Sequence[str], promoted: Iterable[str] = ()):
        """Initialize the model.

        Args:
            items: Local permission entries, in display order
            promoted: Entries already present globally

        Raises:
            ValueError: If there are no items to select from
        """
        if not items:
            raise ValueError("SelectionList needs at least one item")
        self._items: List[str] = list(items)
        self.promoted: List[str] = list(promoted)
        self.cursor: int = 0

    @property
    def items(self) -> List[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def current(self) -> str:
        """Entry under the cursor."""
        return self._items[self.cursor]

    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.cursor + 1 < len(self._items):
            self.cursor += 1

    def is_promoted(self, index: int) -> bool:
        return self._items[index] in self.promoted

    def promote(self, index: int) -> PromoteResult:
        """Append ``items[index]`` to ``promoted`` unless it is already there.

        Returns:
            PROMOTED if the entry was appended (the caller must persist),
            ALREADY_PROMOTED if nothing changed
        """
        entry = self._items[index]
        if entry in self.promoted:
            return PromoteResult.ALREADY_PROMOTED
        self.promoted.append(entry)
        return PromoteResult.PROMOTED
