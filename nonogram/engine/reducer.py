"""
Reducer Module - Pure (state, command) -> state transitions.

reduce() deep-copies the incoming state and lets the handler registered
for the command's type mutate the copy. The caller's state is never
touched, so a handler that raises leaves nothing half-applied.
"""

import copy
import logging
from typing import Callable, Dict, Iterable, Optional, Type

from .cell import Cell, CellId, CellValue
from .clue import derive_clues
from .commands import (
    ContinueDragging,
    Initialize,
    LeaveGrid,
    Redo,
    Reset,
    SetHighlightedColumn,
    SetHighlightedRow,
    SetZoomLevel,
    StartDragging,
    StopDragging,
    ToggleClue,
    Undo,
    ZoomIn,
    ZoomOut,
)
from .errors import ConfigurationError
from .geometry import DragDirection, cells_in_range, marked_cells_count
from .grid import (
    SOLUTION_ALPHABET,
    build_grid,
    ground_value,
    parse_user_value,
    user_solution_string,
)
from .history import CellChange, HistoryEntry
from .state import ZOOM_LEVELS, ClueIndex, DragSession, PuzzleState
from .validity import cell_validity, is_cell_valid, is_clue_valid, is_puzzle_complete

logger = logging.getLogger(__name__)

# A handler mutates the draft in place, or returns a replacement state
Handler = Callable[[PuzzleState, object], Optional[PuzzleState]]

# Registry of command handlers keyed by command class
_HANDLERS: Dict[Type, Handler] = {}


def register_handler(command_type: Type) -> Callable[[Handler], Handler]:
    """
    Decorator registering the handler for a command class.

    Usage:
        @register_handler(ZoomIn)
        def _zoom_in(state, command):
            ...
    """
    def decorator(handler: Handler) -> Handler:
        _HANDLERS[command_type] = handler
        return handler
    return decorator


def reduce(state: PuzzleState, command: object) -> PuzzleState:
    """
    Apply a command to a state.

    Args:
        state: Current state (left untouched)
        command: One of the command dataclasses

    Returns:
        The next state

    Raises:
        ValueError: If no handler is registered for the command's type
        ConfigurationError: If an Initialize command carries a malformed puzzle
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        available = ", ".join(cls.__name__ for cls in _HANDLERS)
        raise ValueError(f"Unknown command: {type(command).__name__}. Available: {available}")

    draft = copy.deepcopy(state)
    result = handler(draft, command)
    return draft if result is None else result


# ----------------------------
# Shared state updates
# ----------------------------

def next_drag_value(committed: CellValue, is_editing: bool) -> CellValue:
    """Value a drag starting on a cell paints: one step along the mark cycle."""
    if committed == CellValue.EMPTY:
        return CellValue.FILLED
    if committed == CellValue.FILLED:
        return CellValue.EMPTY if is_editing else CellValue.MARKED
    return CellValue.EMPTY


def rebuild_clues(state: PuzzleState) -> None:
    """Re-derive the whole clue index from the current ground truth."""
    def new_id() -> int:
        clue_id = state.next_clue_id
        state.next_clue_id += 1
        return clue_id

    column_clues, row_clues = derive_clues(state.grid_cells(), new_id)

    index = ClueIndex(
        columns=[[clue.id for clue in line] for line in column_clues],
        rows=[[clue.id for clue in line] for line in row_clues],
    )
    for line in column_clues + row_clues:
        for clue in line:
            index.by_id[clue.id] = clue
    state.clues = index


def refresh_derived(state: PuzzleState, touched: Iterable[CellId]) -> None:
    """
    Bring everything derived from cell values up to date.

    Recomputes validity of clues touching the given cells, completion,
    the clue index (edit mode only) and the serialized player solution.
    """
    touched = set(touched)
    for clue in state.clues.by_id.values():
        if touched.intersection(clue.cell_ids):
            clue.is_valid = is_clue_valid(clue, state.cells)

    state.is_complete = is_puzzle_complete(state.cells.values(), state.is_editing)

    if state.is_editing:
        rebuild_clues(state)

    state.user_solution = user_solution_string(state.grid, state.cells)


def update_cells(state: PuzzleState, ids: Iterable[CellId], value: CellValue) -> Optional[HistoryEntry]:
    """
    Commit a value to a batch of cells as one history entry.

    In edit mode the value becomes the ground truth; in play mode it is
    checked against it.

    Args:
        state: Draft state to mutate
        ids: Cells to commit
        value: Value to commit

    Returns:
        The recorded entry, or None for an empty batch
    """
    ids = list(ids)
    changes = []

    for cell_id in ids:
        cell = state.cells[cell_id]
        changes.append(CellChange(
            cell_id=cell_id,
            old_value=cell.user_value,
            value=value,
            old_ground=cell.value if state.is_editing else None,
        ))

        if state.is_editing:
            cell.value = value
            cell.is_valid = True
        else:
            cell.is_valid = is_cell_valid(cell.value, value)

        cell.transient_value = None
        cell.user_value = value

    entry = None
    if changes:
        entry = HistoryEntry(changes=tuple(changes))
        state.history.push(entry)
        logger.debug(f"Committed {value.value} to {len(changes)} cells "
                     f"(history {state.history.index + 1}/{len(state.history.entries)})")

    refresh_derived(state, ids)
    return entry


def _clear_previews(state: PuzzleState) -> None:
    for cell in state.cells.values():
        cell.transient_value = None


def _commit_drag(state: PuzzleState) -> None:
    drag = state.drag
    ids = cells_in_range(state.grid, drag.start, drag.end)
    _clear_previews(state)
    update_cells(state, ids, drag.value)
    state.drag = None


def _restore_values(state: PuzzleState, restored: Dict[CellId, CellValue],
                    grounds: Optional[Dict[CellId, Optional[CellValue]]] = None) -> None:
    for cell_id, value in restored.items():
        cell = state.cells[cell_id]
        cell.user_value = value
        if state.is_editing:
            ground = grounds.get(cell_id) if grounds else None
            cell.value = value if ground is None else ground
        cell.is_valid = cell_validity(cell, state.is_editing)
    refresh_derived(state, restored)


# ----------------------------
# Command handlers
# ----------------------------

@register_handler(Initialize)
def _initialize(state: PuzzleState, command: Initialize) -> PuzzleState:
    puzzle = command.puzzle
    width, height, solution = puzzle.width, puzzle.height, puzzle.solution

    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Puzzle dimensions must be positive, got {width}x{height}")
    if len(solution) != width * height:
        raise ConfigurationError(
            f"Solution has {len(solution)} cells, expected {width * height} for {width}x{height}"
        )
    invalid = set(solution) - SOLUTION_ALPHABET
    if invalid:
        raise ConfigurationError(f"Solution contains invalid characters: {sorted(invalid)}")

    user_solution = command.user_solution
    if user_solution is not None and len(user_solution) != width * height:
        raise ConfigurationError(
            f"User solution has {len(user_solution)} cells, expected {width * height}"
        )

    # Zoom is a display preference and survives re-initialization
    fresh = PuzzleState(zoom_level=state.zoom_level, next_clue_id=state.next_clue_id)
    fresh.width = width
    fresh.height = height
    fresh.is_editing = command.is_editing

    def create_cell(row: int, column: int, char: str) -> CellId:
        value = ground_value(char)

        if command.is_editing:
            user_value = value
        elif command.reset or not user_solution:
            user_value = CellValue.EMPTY
        else:
            user_value = parse_user_value(user_solution[row * width + column])

        cell = Cell(id=CellId(row, column), value=value, user_value=user_value)
        cell.is_valid = cell_validity(cell, command.is_editing)
        fresh.cells[cell.id] = cell
        return cell.id

    fresh.grid = build_grid(width, solution, create_cell)
    rebuild_clues(fresh)

    fresh.is_complete = is_puzzle_complete(fresh.cells.values(), fresh.is_editing)
    fresh.user_solution = user_solution_string(fresh.grid, fresh.cells)
    fresh.is_initialized = True

    mode = "edit" if command.is_editing else "play"
    logger.info(f"Initialized {width}x{height} puzzle in {mode} mode")
    return fresh


@register_handler(StartDragging)
def _start_dragging(state: PuzzleState, command: StartDragging) -> None:
    cell = state.cells.get(command.cell_id)
    if cell is None:
        logger.debug(f"Ignoring drag start on unknown cell {command.cell_id}")
        return

    if state.drag is not None:
        logger.debug("Drag started while another was active, committing it first")
        _commit_drag(state)

    value = next_drag_value(cell.user_value, state.is_editing)
    cell.transient_value = value
    state.drag = DragSession(start=cell.id, end=cell.id, value=value)


@register_handler(ContinueDragging)
def _continue_dragging(state: PuzzleState, command: ContinueDragging) -> None:
    pointer = command.cell_id
    if pointer not in state.cells:
        return

    state.highlighted_row = pointer.row
    state.highlighted_column = pointer.column

    drag = state.drag
    if drag is None:
        return

    direction = drag.direction
    if direction is None:
        direction = DragDirection.HORIZONTAL if pointer.row == drag.start.row else DragDirection.VERTICAL

    if direction == DragDirection.HORIZONTAL:
        end = CellId(drag.start.row, pointer.column)
    else:
        end = CellId(pointer.row, drag.start.column)

    drag.end = end
    drag.direction = None if end == drag.start else direction
    drag.marked = marked_cells_count(state.cells, state.grid, direction, drag.start, end, drag.value)

    _clear_previews(state)
    for cell_id in cells_in_range(state.grid, drag.start, end):
        state.cells[cell_id].transient_value = drag.value


@register_handler(StopDragging)
def _stop_dragging(state: PuzzleState, command: StopDragging) -> None:
    if state.drag is None:
        logger.debug("Ignoring drag stop without an active drag")
        return
    _commit_drag(state)


@register_handler(LeaveGrid)
def _leave_grid(state: PuzzleState, command: LeaveGrid) -> None:
    if state.drag is not None:
        _commit_drag(state)
    state.highlighted_row = None
    state.highlighted_column = None


@register_handler(ToggleClue)
def _toggle_clue(state: PuzzleState, command: ToggleClue) -> None:
    clue = state.clues.by_id.get(command.clue_id)
    if clue is None:
        logger.debug(f"Ignoring toggle of unknown clue {command.clue_id}")
        return
    # TODO: decide whether completing a clue should mark the rest of its line
    clue.is_complete = not clue.is_complete


@register_handler(Undo)
def _undo(state: PuzzleState, command: Undo) -> None:
    if state.drag is not None:
        logger.debug("Ignoring undo during a drag")
        return

    entry = state.history.undo()
    if entry is None:
        logger.debug("Nothing to undo")
        return

    _restore_values(
        state,
        {change.cell_id: change.old_value for change in entry.changes},
        {change.cell_id: change.old_ground for change in entry.changes},
    )


@register_handler(Redo)
def _redo(state: PuzzleState, command: Redo) -> None:
    if state.drag is not None:
        logger.debug("Ignoring redo during a drag")
        return

    entry = state.history.redo()
    if entry is None:
        logger.debug("Nothing to redo")
        return

    _restore_values(state, {change.cell_id: change.value for change in entry.changes})


@register_handler(SetHighlightedRow)
def _set_highlighted_row(state: PuzzleState, command: SetHighlightedRow) -> None:
    state.highlighted_row = command.row


@register_handler(SetHighlightedColumn)
def _set_highlighted_column(state: PuzzleState, command: SetHighlightedColumn) -> None:
    state.highlighted_column = command.column


@register_handler(ZoomIn)
def _zoom_in(state: PuzzleState, command: ZoomIn) -> None:
    position = ZOOM_LEVELS.index(state.zoom_level)
    state.zoom_level = ZOOM_LEVELS[min(position + 1, len(ZOOM_LEVELS) - 1)]


@register_handler(ZoomOut)
def _zoom_out(state: PuzzleState, command: ZoomOut) -> None:
    position = ZOOM_LEVELS.index(state.zoom_level)
    state.zoom_level = ZOOM_LEVELS[max(position - 1, 0)]


@register_handler(SetZoomLevel)
def _set_zoom_level(state: PuzzleState, command: SetZoomLevel) -> None:
    state.zoom_level = command.zoom_level


@register_handler(Reset)
def _reset(state: PuzzleState, command: Reset) -> PuzzleState:
    return PuzzleState()
