"""
Engine Package - Puzzle state engine for nonogram play and authoring.

Holds the cell and clue model, clue derivation, drag geometry,
validity rules, the undo/redo history and the store that ties them
together through a reducer.

Public API:
    - PuzzleStore: Stateful command API with subscriptions
    - PuzzleInput: Width, height and solution string
    - PuzzleState: Aggregate state the reducer operates on
    - reduce(): Pure (state, command) -> state transition
    - CellId, CellValue, Cell: Cell identity, states and record
    - Clue, ClueId, ClueType: Clue record and identity
    - ConfigurationError: Raised for malformed puzzles

Usage:
    from nonogram.engine import PuzzleStore, PuzzleInput, CellId

    store = PuzzleStore()
    store.initialize(PuzzleInput(width=5, height=1, solution="10010"))

    # Drag across the whole row and release
    store.start_dragging(CellId(0, 0))
    store.continue_dragging(CellId(0, 4))
    store.stop_dragging()

    print(store.user_solution, store.is_complete)
"""

# Core data structures
from .cell import Cell, CellId, CellValue
from .clue import Clue, ClueId, ClueType, derive_clues, derive_line_clues, pad_clue_lines
from .errors import ConfigurationError
from .geometry import DragDirection, MarkedCellsCount, cells_in_range, marked_cells_count
from .grid import (
    build_grid,
    empty_solution_string,
    parse_user_value,
    user_solution_string,
)
from .history import CellChange, History, HistoryEntry
from .state import ZOOM_LEVELS, DragSession, PuzzleInput, PuzzleState, ZoomLevel
from .validity import is_cell_valid, is_clue_valid, is_puzzle_complete

# Commands and reducer
from . import commands
from .reducer import reduce, register_handler, update_cells
from .store import PuzzleStore

__all__ = [
    # Data structures
    "Cell",
    "CellId",
    "CellValue",
    "Clue",
    "ClueId",
    "ClueType",
    "DragDirection",
    "DragSession",
    "MarkedCellsCount",
    "History",
    "HistoryEntry",
    "CellChange",
    "PuzzleInput",
    "PuzzleState",
    "ZoomLevel",
    "ZOOM_LEVELS",
    # Errors
    "ConfigurationError",
    # Algorithms
    "derive_clues",
    "derive_line_clues",
    "pad_clue_lines",
    "build_grid",
    "empty_solution_string",
    "parse_user_value",
    "user_solution_string",
    "cells_in_range",
    "marked_cells_count",
    "is_cell_valid",
    "is_clue_valid",
    "is_puzzle_complete",
    # Store
    "commands",
    "reduce",
    "register_handler",
    "update_cells",
    "PuzzleStore",
]
