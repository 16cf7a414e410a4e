"""
Geometry Module - Cell ranges and drag feedback counts.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

from .cell import Cell, CellId, CellValue


class DragDirection(str, Enum):
    """Axis a drag is locked to."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class MarkedCellsCount:
    """
    Live drag feedback.

    Attributes:
        count: Cells spanned by the drag itself
        block_count: Matching cells adjacent to the span, outside it
    """
    count: int = 0
    block_count: int = 0

    @property
    def total(self) -> int:
        """Run length once the drag merges with its adjacent matches."""
        return self.count + self.block_count

    @property
    def label(self) -> str:
        """Tooltip text: "3" when count and block count agree, otherwise "3/2"."""
        if self.count == self.block_count:
            return str(self.count)
        return f"{self.count}/{self.block_count}"

    @property
    def is_visible(self) -> bool:
        """A single-cell drag shows no tooltip."""
        return self.count >= 2


def cells_in_range(grid: Sequence[Sequence[CellId]], one: CellId, two: CellId) -> List[CellId]:
    """
    Every cell in the rectangle spanned by two corner cells.

    Args:
        grid: Row-major grid of cell ids
        one: First corner
        two: Opposite corner

    Returns:
        Cell ids in row-major order; positions outside the grid are skipped
    """
    start_row, end_row = sorted((one.row, two.row))
    start_col, end_col = sorted((one.column, two.column))

    cells = []
    for r in range(start_row, end_row + 1):
        if not 0 <= r < len(grid):
            continue
        for c in range(start_col, end_col + 1):
            if 0 <= c < len(grid[r]):
                cells.append(grid[r][c])
    return cells


def marked_cells_count(
    cells: Dict[CellId, Cell],
    grid: Sequence[Sequence[CellId]],
    direction: DragDirection,
    start: CellId,
    end: CellId,
    value: CellValue,
) -> MarkedCellsCount:
    """
    Compute drag feedback for a drag confined to one row or column.

    Walks the whole line outside the dragged span. Before the span a
    matching cell extends the block and a mismatch resets it, so only the
    run touching the span survives. After the span the scan stops at the
    first mismatch.

    Args:
        cells: Cell records by id
        grid: Row-major grid of cell ids
        direction: Axis of the drag
        start: Drag start cell
        end: Drag end cell (on the same line as start)
        value: Value the drag is painting

    Returns:
        MarkedCellsCount with span size and adjacent match count
    """
    if direction == DragDirection.HORIZONTAL:
        span_start, span_end = sorted((start.column, end.column))
        line = list(grid[start.row]) if 0 <= start.row < len(grid) else []
    else:
        span_start, span_end = sorted((start.row, end.row))
        line = [row[start.column] for row in grid if start.column < len(row)]

    block_count = 0
    for cell_id in line:
        pos = cell_id.column if direction == DragDirection.HORIZONTAL else cell_id.row
        matches = cells[cell_id].user_value == value

        if pos < span_start:
            block_count = block_count + 1 if matches else 0
        elif pos > span_end:
            if not matches:
                break
            block_count += 1

    return MarkedCellsCount(count=span_end - span_start + 1, block_count=block_count)
