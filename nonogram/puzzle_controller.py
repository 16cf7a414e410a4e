"""
Puzzle Controller Module for the Nonogram Engine

Wraps a PuzzleStore in a QObject so a PyQt5 view can drive it with
pointer events and listen for state changes through Qt signals.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from nonogram.engine import (
    CellId,
    ConfigurationError,
    PuzzleInput,
    PuzzleStore,
    ZoomLevel,
)
from nonogram.settings import save_settings


# Configure module logger
logger = logging.getLogger(__name__)


class PuzzleController(QObject):
    """
    Qt-facing adapter over a PuzzleStore.

    Signals:
        state_changed(object): Emitted after every dispatch with the new PuzzleState
        cells_changed(object): List of CellIds whose record changed
        clues_changed(): Clue index or any clue flag changed
        completion_changed(bool): Puzzle completion flipped
        drag_feedback_changed(int, int): (count, block_count) of the active drag
        history_changed(bool, bool): (can_undo, can_redo)
        zoom_changed(str): New zoom level name
        error_occurred(str): A puzzle could not be loaded

    Example:
        controller = PuzzleController()
        controller.completion_changed.connect(view.show_solved)
        controller.load(5, 5, solution)
        controller.press_cell(0, 0)
        controller.enter_cell(0, 4)
        controller.release()
    """

    state_changed = pyqtSignal(object)
    cells_changed = pyqtSignal(object)  # list of CellId
    clues_changed = pyqtSignal()
    completion_changed = pyqtSignal(bool)
    drag_feedback_changed = pyqtSignal(int, int)
    history_changed = pyqtSignal(bool, bool)
    zoom_changed = pyqtSignal(str)
    error_occurred = pyqtSignal(str)

    def __init__(self, store: Optional[PuzzleStore] = None,
                 settings: Optional[Dict[str, Any]] = None,
                 settings_path: Optional[Path] = None):
        """
        Initialize the controller.

        Args:
            store: Store to drive (a new one if omitted)
            settings: Loaded settings; zoom_level is applied and kept in sync
            settings_path: Where to persist settings changes (not persisted if None)
        """
        super().__init__()
        self.store = store or PuzzleStore()
        self.settings = settings
        self.settings_path = settings_path
        self._unsubscribers: List[Callable[[], None]] = []

        self._connect_store()

        if settings and settings.get("zoom_level"):
            try:
                self.store.set_zoom_level(ZoomLevel(settings["zoom_level"]))
            except ValueError:
                logger.warning(f"Ignoring unknown zoom level in settings: {settings['zoom_level']}")

    def _connect_store(self):
        """Subscribe signal emitters to the slices of state they report."""
        subscribe = self.store.subscribe
        self._unsubscribers = [
            subscribe(lambda state, _: self.state_changed.emit(state)),
            subscribe(self._on_cells, lambda state: state.cells),
            subscribe(lambda *_: self.clues_changed.emit(), lambda state: state.clues),
            subscribe(lambda complete, _: self.completion_changed.emit(complete),
                      lambda state: state.is_complete),
            subscribe(lambda marked, _: self.drag_feedback_changed.emit(marked.count, marked.block_count),
                      lambda state: state.marked_cells_count),
            subscribe(lambda flags, _: self.history_changed.emit(*flags),
                      lambda state: (state.history.can_undo, state.history.can_redo)),
            subscribe(self._on_zoom, lambda state: state.zoom_level),
        ]

    def disconnect_store(self):
        """Stop listening to the store."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_cells(self, cells, previous):
        changed = [cell_id for cell_id, cell in cells.items() if previous.get(cell_id) != cell]
        if changed:
            self.cells_changed.emit(changed)

    def _on_zoom(self, zoom_level: ZoomLevel, _previous):
        self.zoom_changed.emit(zoom_level.value)

        if self.settings is not None:
            self.settings["zoom_level"] = zoom_level.value
            if self.settings_path is not None:
                save_settings(self.settings, self.settings_path)

    # ----------------------------
    # View events
    # ----------------------------

    def load(self, width: int, height: int, solution: str, is_editing: bool = False,
             reset: bool = False, user_solution: Optional[str] = None) -> bool:
        """
        Load a puzzle into the store.

        Returns:
            True on success; False if the puzzle was rejected (error_occurred emitted)
        """
        try:
            self.store.initialize(PuzzleInput(width=width, height=height, solution=solution),
                                  is_editing=is_editing, reset=reset, user_solution=user_solution)
        except ConfigurationError as e:
            logger.error(f"Failed to load puzzle: {e}")
            self.error_occurred.emit(str(e))
            return False
        return True

    def press_cell(self, row: int, column: int):
        """Mouse button went down on a cell."""
        self.store.start_dragging(CellId(row, column))

    def enter_cell(self, row: int, column: int):
        """Pointer moved onto a cell, with or without a drag."""
        self.store.continue_dragging(CellId(row, column))

    def release(self):
        """Mouse button released."""
        self.store.stop_dragging()

    def leave_grid(self):
        """Pointer left the grid area."""
        self.store.leave_grid()

    def toggle_clue(self, clue_id: int):
        self.store.toggle_clue(clue_id)

    def undo(self):
        self.store.undo()

    def redo(self):
        self.store.redo()

    def zoom_in(self):
        self.store.zoom_in()

    def zoom_out(self):
        self.store.zoom_out()
