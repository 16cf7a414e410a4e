"""
Puzzle Store Module - Owns the puzzle state and dispatches commands.

The store is an explicit instance owned by the host application. Every
command goes through reduce(), so each dispatch either fully applies or
leaves the state unchanged. Listeners subscribed with a selector are only
called when the selected slice actually changes.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .cell import Cell, CellId
from .clue import Clue, ClueId, pad_clue_lines
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
from .geometry import MarkedCellsCount
from .grid import ground_solution_string
from .reducer import reduce
from .state import PuzzleInput, PuzzleState, ZoomLevel

logger = logging.getLogger(__name__)


__all__ = [
    "PuzzleStore",
    "Listener",
    "Selector",
]


# listener(current, previous) receives whole states or selected slices
Listener = Callable[[Any, Any], None]
Selector = Callable[[PuzzleState], Any]


@dataclass(eq=False)
class _Subscription:
    listener: Listener
    selector: Optional[Selector] = None


class PuzzleStore:
    """
    Stateful facade over the reducer.

    State Flow:
        uninitialized --initialize--> ready (idle <-> dragging)
              ^                          |
              |_________reset____________|

    Example:
        store = PuzzleStore()
        store.initialize(PuzzleInput(width=5, height=1, solution="10010"))
        store.start_dragging(CellId(0, 0))
        store.continue_dragging(CellId(0, 4))
        store.stop_dragging()
        store.undo()
    """

    def __init__(self):
        self._state = PuzzleState()
        self._subscriptions: List[_Subscription] = []

    @property
    def state(self) -> PuzzleState:
        """Current state. Treat as read-only; the store replaces it on every dispatch."""
        return self._state

    def dispatch(self, command: object) -> PuzzleState:
        """
        Apply a command and notify listeners.

        Args:
            command: One of the command dataclasses

        Returns:
            The new state

        Raises:
            ConfigurationError: If an Initialize command is malformed
        """
        logger.debug(f"Dispatching {type(command).__name__}")
        previous = self._state
        self._state = reduce(previous, command)
        self._notify(previous, self._state)
        return self._state

    def subscribe(self, listener: Listener, selector: Optional[Selector] = None) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Args:
            listener: Called as listener(current, previous)
            selector: Optional projection; the listener only fires when
                the projected value changes, and receives projected values

        Returns:
            Callable that removes the subscription
        """
        subscription = _Subscription(listener=listener, selector=selector)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def _notify(self, previous: PuzzleState, current: PuzzleState) -> None:
        for subscription in list(self._subscriptions):
            if subscription.selector is None:
                subscription.listener(current, previous)
                continue

            old = subscription.selector(previous)
            new = subscription.selector(current)
            if old != new:
                subscription.listener(new, old)

    # ----------------------------
    # Commands
    # ----------------------------

    def initialize(self, puzzle: PuzzleInput, is_editing: bool = False, reset: bool = False,
                   user_solution: Optional[str] = None) -> None:
        self.dispatch(Initialize(puzzle=puzzle, is_editing=is_editing, reset=reset,
                                 user_solution=user_solution))

    def start_dragging(self, cell_id: CellId) -> None:
        self.dispatch(StartDragging(cell_id))

    def continue_dragging(self, cell_id: CellId) -> None:
        self.dispatch(ContinueDragging(cell_id))

    def stop_dragging(self) -> None:
        self.dispatch(StopDragging())

    def leave_grid(self) -> None:
        self.dispatch(LeaveGrid())

    def toggle_clue(self, clue_id: ClueId) -> None:
        self.dispatch(ToggleClue(clue_id))

    def undo(self) -> None:
        self.dispatch(Undo())

    def redo(self) -> None:
        self.dispatch(Redo())

    def set_highlighted_row(self, row: Optional[int]) -> None:
        self.dispatch(SetHighlightedRow(row))

    def set_highlighted_column(self, column: Optional[int]) -> None:
        self.dispatch(SetHighlightedColumn(column))

    def zoom_in(self) -> None:
        self.dispatch(ZoomIn())

    def zoom_out(self) -> None:
        self.dispatch(ZoomOut())

    def set_zoom_level(self, zoom_level: ZoomLevel) -> None:
        self.dispatch(SetZoomLevel(ZoomLevel(zoom_level)))

    def reset(self) -> None:
        self.dispatch(Reset())

    # ----------------------------
    # Read-only projections
    # ----------------------------

    def cell(self, cell_id: CellId) -> Optional[Cell]:
        """Copy of a cell record, or None for an unknown id."""
        cell = self._state.cells.get(cell_id)
        return copy.copy(cell) if cell is not None else None

    def clue(self, clue_id: ClueId) -> Optional[Clue]:
        """Copy of a clue record, or None for an unknown id."""
        clue = self._state.clues.by_id.get(clue_id)
        return copy.copy(clue) if clue is not None else None

    @property
    def grid(self) -> List[List[CellId]]:
        return [list(row) for row in self._state.grid]

    @property
    def row_clues(self) -> List[List[ClueId]]:
        return [list(line) for line in self._state.clues.rows]

    @property
    def column_clues(self) -> List[List[ClueId]]:
        return [list(line) for line in self._state.clues.columns]

    @property
    def padded_row_clues(self) -> List[List[Optional[ClueId]]]:
        return pad_clue_lines(self._state.clues.rows)

    @property
    def padded_column_clues(self) -> List[List[Optional[ClueId]]]:
        return pad_clue_lines(self._state.clues.columns)

    def clue_values(self, clue_ids: List[ClueId]) -> List[int]:
        """Run lengths of a clue line."""
        return [self._state.clues.by_id[clue_id].value for clue_id in clue_ids]

    @property
    def is_complete(self) -> bool:
        return self._state.is_complete

    @property
    def is_dragging(self) -> bool:
        return self._state.is_dragging

    @property
    def marked_cells_count(self) -> MarkedCellsCount:
        return self._state.marked_cells_count

    @property
    def can_undo(self) -> bool:
        return self._state.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._state.history.can_redo

    @property
    def user_solution(self) -> Optional[str]:
        """Serialized player solution ('0'/'1'/'x'), None before initialize."""
        return self._state.user_solution

    @property
    def solution(self) -> str:
        """Current ground truth as '0'/'1'; in edit mode, the authored puzzle."""
        return ground_solution_string(self._state.grid, self._state.cells)
