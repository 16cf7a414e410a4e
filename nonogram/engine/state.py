"""
Puzzle State Module - The aggregate state the reducer operates on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .cell import Cell, CellId, CellValue
from .clue import Clue, ClueId
from .geometry import DragDirection, MarkedCellsCount
from .history import History


class ZoomLevel(str, Enum):
    """Ordinal display size of the grid."""
    XS = "xs"
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"


# Smallest to largest
ZOOM_LEVELS: List[ZoomLevel] = list(ZoomLevel)
DEFAULT_ZOOM_LEVEL = ZoomLevel.SM


@dataclass(frozen=True)
class PuzzleInput:
    """
    A puzzle as handed over by the host.

    Attributes:
        width: Number of columns
        height: Number of rows
        solution: Row-major '0'/'1' string of length width*height
    """
    width: int
    height: int
    solution: str


@dataclass
class DragSession:
    """
    An in-progress drag gesture.

    Attributes:
        start: Cell the drag started on
        end: Current end cell, on the start's row or column
        value: Value the drag paints
        direction: Locked axis, None until the end leaves the start cell
        marked: Live count feedback
    """
    start: CellId
    end: CellId
    value: CellValue
    direction: Optional[DragDirection] = None
    marked: MarkedCellsCount = field(default_factory=MarkedCellsCount)


@dataclass
class ClueIndex:
    """Ordered clue ids per line plus the clue records themselves."""
    columns: List[List[ClueId]] = field(default_factory=list)
    rows: List[List[ClueId]] = field(default_factory=list)
    by_id: Dict[ClueId, Clue] = field(default_factory=dict)


@dataclass
class PuzzleState:
    """
    Everything the store knows about the active puzzle.

    A freshly constructed PuzzleState is the pristine, uninitialized
    state that reset() returns to.
    """
    width: int = 0
    height: int = 0
    grid: List[List[CellId]] = field(default_factory=list)
    cells: Dict[CellId, Cell] = field(default_factory=dict)
    clues: ClueIndex = field(default_factory=ClueIndex)
    next_clue_id: int = 0
    is_initialized: bool = False
    is_editing: bool = False
    is_complete: bool = False
    zoom_level: ZoomLevel = DEFAULT_ZOOM_LEVEL
    highlighted_row: Optional[int] = None
    highlighted_column: Optional[int] = None
    drag: Optional[DragSession] = None
    history: History = field(default_factory=History)
    user_solution: Optional[str] = None

    @property
    def is_dragging(self) -> bool:
        return self.drag is not None

    @property
    def marked_cells_count(self) -> MarkedCellsCount:
        if self.drag is None:
            return MarkedCellsCount()
        return self.drag.marked

    def cell_at(self, row: int, column: int) -> Optional[Cell]:
        """Cell at a position, or None outside the grid."""
        return self.cells.get(CellId(row, column))

    def grid_cells(self) -> List[List[Cell]]:
        """The grid as rows of cell records."""
        return [[self.cells[cell_id] for cell_id in row] for row in self.grid]
