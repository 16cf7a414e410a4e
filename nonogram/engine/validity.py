"""
Validity Module - Cell, clue and puzzle correctness rules.
"""

from typing import Dict, Iterable

from .cell import Cell, CellId, CellValue
from .clue import Clue


def is_cell_valid(value: CellValue, user_value: CellValue) -> bool:
    """
    Check a player's mark against the ground truth.

    A mark is valid when it equals the ground truth, or when it crosses
    out (MARKED) a cell that is empty in the solution.
    """
    if user_value == value:
        return True
    return value == CellValue.EMPTY and user_value == CellValue.MARKED


def cell_validity(cell: Cell, is_editing: bool) -> bool:
    """Validity of a cell under the current mode; everything is valid while authoring."""
    if is_editing:
        return True
    return is_cell_valid(cell.value, cell.user_value)


def is_clue_valid(clue: Clue, cells: Dict[CellId, Cell]) -> bool:
    """A clue is valid iff every cell of its run is valid."""
    return all(cells[cell_id].is_valid for cell_id in clue.cell_ids)


def is_puzzle_complete(cells: Iterable[Cell], is_editing: bool) -> bool:
    """Play mode is complete when every cell is valid. Authoring never completes."""
    if is_editing:
        return False
    return all(cell.is_valid for cell in cells)
