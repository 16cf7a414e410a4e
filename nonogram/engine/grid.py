"""
Grid Module - Build cell grids from flat solution strings and serialize them back.
"""

from typing import Callable, Dict, List, Sequence, TypeVar

from .cell import Cell, CellId, CellValue

T = TypeVar("T")

# Serialized player solution alphabet
FILLED_CHAR = "1"
MARKED_CHAR = "x"
EMPTY_CHAR = "0"

SOLUTION_ALPHABET = frozenset((FILLED_CHAR, EMPTY_CHAR))


def build_grid(width: int, solution: str,
               create_cell: Callable[[int, int, str], T]) -> List[List[T]]:
    """
    Turn a flat '0'/'1' solution string into a row-major 2-D grid.

    Position is derived purely from the flat index. Any mode-specific
    initialization belongs in create_cell. A string shorter than
    width*height yields a truncated grid; only complete rows are kept.

    Args:
        width: Number of columns
        solution: Flat solution string, row-major
        create_cell: Callback (row, column, raw_char) -> cell

    Returns:
        List of rows of whatever create_cell returns
    """
    grid: List[List[T]] = []
    current_row: List[T] = []

    for index, char in enumerate(solution):
        current_row.append(create_cell(index // width, index % width, char))

        if len(current_row) == width:
            grid.append(current_row)
            current_row = []

    return grid


def ground_value(char: str) -> CellValue:
    """Map a solution character to its ground-truth value."""
    return CellValue.FILLED if char == FILLED_CHAR else CellValue.EMPTY


def parse_user_value(char: str) -> CellValue:
    """Map a serialized player character to a cell value ('1', 'x', anything else)."""
    if char == FILLED_CHAR:
        return CellValue.FILLED
    if char == MARKED_CHAR:
        return CellValue.MARKED
    return CellValue.EMPTY


def format_user_value(value: CellValue) -> str:
    """Inverse of parse_user_value."""
    if value == CellValue.FILLED:
        return FILLED_CHAR
    if value == CellValue.MARKED:
        return MARKED_CHAR
    return EMPTY_CHAR


def user_solution_string(grid: Sequence[Sequence[CellId]], cells: Dict[CellId, Cell]) -> str:
    """Serialize the player's marks row-major in the '0'/'1'/'x' alphabet."""
    return "".join(
        format_user_value(cells[cell_id].user_value)
        for row in grid
        for cell_id in row
    )


def ground_solution_string(grid: Sequence[Sequence[CellId]], cells: Dict[CellId, Cell]) -> str:
    """Serialize the ground truth row-major as '0'/'1'."""
    return "".join(
        FILLED_CHAR if cells[cell_id].value == CellValue.FILLED else EMPTY_CHAR
        for row in grid
        for cell_id in row
    )


def empty_solution_string(width: int, height: int) -> str:
    """Solution string of an all-empty width x height puzzle."""
    return EMPTY_CHAR * (width * height)
