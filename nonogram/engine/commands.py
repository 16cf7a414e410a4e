"""
Commands Module - The messages the store dispatches to the reducer.
"""

from dataclasses import dataclass
from typing import Optional

from .cell import CellId
from .clue import ClueId
from .state import PuzzleInput, ZoomLevel


@dataclass(frozen=True)
class Initialize:
    """
    Load a puzzle, replacing any prior state.

    Attributes:
        puzzle: Dimensions and solution string
        is_editing: Author the puzzle instead of playing it
        reset: Start every cell EMPTY regardless of user_solution
        user_solution: Previously serialized player solution to restore
    """
    puzzle: PuzzleInput
    is_editing: bool = False
    reset: bool = False
    user_solution: Optional[str] = None


@dataclass(frozen=True)
class StartDragging:
    cell_id: CellId


@dataclass(frozen=True)
class ContinueDragging:
    cell_id: CellId


@dataclass(frozen=True)
class StopDragging:
    pass


@dataclass(frozen=True)
class LeaveGrid:
    """Pointer left the grid: commit any drag and drop the cross-hair."""


@dataclass(frozen=True)
class ToggleClue:
    clue_id: ClueId


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class SetHighlightedRow:
    row: Optional[int]


@dataclass(frozen=True)
class SetHighlightedColumn:
    column: Optional[int]


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


@dataclass(frozen=True)
class SetZoomLevel:
    zoom_level: ZoomLevel


@dataclass(frozen=True)
class Reset:
    pass
