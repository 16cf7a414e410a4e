"""
Cell Module - Cell values, identities and the mutable cell record.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


class CellValue(str, Enum):
    """
    The three states a nonogram cell can hold.

    Ground truth only ever uses EMPTY and FILLED. MARKED is a player
    annotation meaning "known to be empty".
    """
    EMPTY = "EMPTY"
    FILLED = "FILLED"
    MARKED = "MARKED"


class CellId(NamedTuple):
    """Stable (row, column) identity of a cell."""
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row}-{self.column}"


@dataclass
class Cell:
    """
    Mutable cell record owned by the puzzle state.

    Attributes:
        id: Cell identity
        value: Ground truth (authored target in edit mode)
        user_value: Player's committed mark
        transient_value: Preview shown while a drag spans the cell
        is_valid: Whether user_value is consistent with value
    """
    id: CellId
    value: CellValue
    user_value: CellValue = CellValue.EMPTY
    transient_value: Optional[CellValue] = None
    is_valid: bool = False

    @property
    def row(self) -> int:
        return self.id.row

    @property
    def column(self) -> int:
        return self.id.column

    @property
    def display_value(self) -> CellValue:
        """Value a renderer should show: the preview if any, else the committed mark."""
        if self.transient_value is not None:
            return self.transient_value
        return self.user_value
