"""
Clue Module - Run-length clue records and their derivation from cell lines.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .cell import Cell, CellId, CellValue


# Opaque clue identity, unique within one puzzle state
ClueId = int


class ClueType(str, Enum):
    """Orientation of the line a clue belongs to."""
    ROW = "row"
    COLUMN = "column"


@dataclass
class Clue:
    """
    One contiguous run of FILLED cells in a row or column.

    A line without any filled cell carries a single placeholder clue with
    value 0 and no cells.

    Attributes:
        id: Opaque clue identity
        type: Row or column
        index: Row or column index of the line
        value: Run length (0 for the placeholder)
        cell_ids: Cells making up the run, in line order
        is_valid: True iff every cell of the run is valid
        is_complete: Player-set "crossed off" flag
    """
    id: ClueId
    type: ClueType
    index: int
    value: int
    cell_ids: Tuple[CellId, ...] = field(default_factory=tuple)
    is_valid: bool = True
    is_complete: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.value == 0


def clue_id_sequence(start: int = 0) -> Callable[[], ClueId]:
    """Return a callable handing out consecutive clue ids from start."""
    counter: Iterator[int] = itertools.count(start)
    return lambda: next(counter)


def derive_line_clues(
    line: Sequence[Cell],
    index: int,
    clue_type: ClueType,
    new_id: Callable[[], ClueId],
) -> List[Clue]:
    """
    Derive the ordered clues of one row or column.

    Uses each cell's ground-truth value, not the player's mark.

    Args:
        line: Cells of the line, left-to-right or top-to-bottom
        index: Line index
        clue_type: Whether the line is a row or a column
        new_id: Clue id generator

    Returns:
        Clues in line order; a single zero-value placeholder if the
        line has no filled cell
    """
    clues: List[Clue] = []
    run: List[CellId] = []
    run_valid = True

    def flush() -> None:
        if run:
            clues.append(Clue(
                id=new_id(),
                type=clue_type,
                index=index,
                value=len(run),
                cell_ids=tuple(run),
                is_valid=run_valid,
            ))

    for cell in line:
        if cell.value == CellValue.FILLED:
            run.append(cell.id)
            run_valid = run_valid and cell.is_valid
        else:
            flush()
            run = []
            run_valid = True

    # A run touching the end of the line is only closed here
    flush()

    if clues:
        return clues

    return [Clue(id=new_id(), type=clue_type, index=index, value=0)]


def derive_clues(
    grid: Sequence[Sequence[Cell]],
    new_id: Callable[[], ClueId],
) -> Tuple[List[List[Clue]], List[List[Clue]]]:
    """
    Derive clues for every column and every row of a grid.

    Args:
        grid: Row-major 2-D cell grid
        new_id: Clue id generator

    Returns:
        (column_clues, row_clues), one clue list per line
    """
    width = len(grid[0]) if grid else 0

    column_clues = [
        derive_line_clues([row[c] for row in grid if c < len(row)], c, ClueType.COLUMN, new_id)
        for c in range(width)
    ]
    row_clues = [
        derive_line_clues(row, r, ClueType.ROW, new_id)
        for r, row in enumerate(grid)
    ]
    return column_clues, row_clues


def pad_clue_lines(lines: Sequence[Sequence[ClueId]]) -> List[List[Optional[ClueId]]]:
    """
    Left-pad every clue line with None up to the longest line.

    Clue headers are rendered right-aligned against the grid, so the
    padding goes in front.
    """
    longest = max((len(line) for line in lines), default=0)
    return [[None] * (longest - len(line)) + list(line) for line in lines]
