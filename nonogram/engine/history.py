"""
History Module - Linear undo/redo log of committed cell changes.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cell import CellId, CellValue


@dataclass(frozen=True)
class CellChange:
    """
    One cell touched by a commit.

    old_ground is the ground truth before an edit-mode commit and None in
    play mode, where ground truth never changes.
    """
    cell_id: CellId
    old_value: CellValue
    value: CellValue
    old_ground: Optional[CellValue] = None


@dataclass(frozen=True)
class HistoryEntry:
    """All cell changes made by a single gesture."""
    changes: Tuple[CellChange, ...]

    @property
    def cell_ids(self) -> List[CellId]:
        return [change.cell_id for change in self.changes]

    def __len__(self) -> int:
        return len(self.changes)


@dataclass
class History:
    """
    Linear history with a cursor.

    Attributes:
        entries: Recorded gestures, oldest first
        index: Position of the most recently applied entry (-1 when none)
    """
    entries: List[HistoryEntry] = field(default_factory=list)
    index: int = -1

    @property
    def can_undo(self) -> bool:
        return self.index >= 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.entries) - 1

    def push(self, entry: HistoryEntry) -> None:
        """Record a new entry, discarding anything that was undone."""
        del self.entries[self.index + 1:]
        self.entries.append(entry)
        self.index = len(self.entries) - 1

    def undo(self) -> Optional[HistoryEntry]:
        """
        Step the cursor back.

        Returns:
            The entry to revert, or None at the floor
        """
        if not self.can_undo:
            return None
        entry = self.entries[self.index]
        self.index -= 1
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        """
        Step the cursor forward.

        Returns:
            The entry to reapply, or None at the ceiling
        """
        if not self.can_redo:
            return None
        self.index += 1
        return self.entries[self.index]

    def clear(self) -> None:
        self.entries.clear()
        self.index = -1

    def __deepcopy__(self, memo):
        # Entries are frozen; only the list and cursor need copying
        return History(entries=list(self.entries), index=self.index)
