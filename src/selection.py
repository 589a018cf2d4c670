# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Selection controller for tracing words across the grid.

Turns a gesture (press on a cell, drag over neighbours, release) into a
candidate word. Moves that break adjacency or revisit a cell are expected
input and are ignored rather than reported.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from models import Cell, PlacementPath


logger = logging.getLogger(__name__)

# Appended to the forming word while a gesture is in progress
PENDING_MARKER = "..."


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"


class SelectionController:
    """
    Accumulates selected cells for one gesture at a time.

    Invariants while selecting: no cell appears twice, and consecutive
    cells are within one step of each other, diagonals included.

    Usage:
        controller = SelectionController(on_change=print)
        controller.begin_selection(grid.get_cell(0, 0))
        controller.extend_selection(grid.get_cell(1, 1))
        candidate = controller.end_selection()
    """

    def __init__(self, on_change: Optional[Callable[[str], None]] = None):
        """
        Args:
            on_change: Called with the forming word after every accepted
                transition ('' once the gesture ends)
        """
        self.on_change = on_change
        self._state = SelectionState.IDLE
        self._cells: List[Cell] = []
        self._last_path: PlacementPath = []

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def is_selecting(self) -> bool:
        return self._state == SelectionState.SELECTING

    @property
    def selected_cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    @property
    def path(self) -> PlacementPath:
        return [cell.coord for cell in self._cells]

    @property
    def last_path(self) -> PlacementPath:
        """Path of the most recently ended gesture."""
        return list(self._last_path)

    @property
    def forming_word(self) -> str:
        return "".join(cell.letter for cell in self._cells)

    @property
    def display_text(self) -> str:
        """Forming word with the pending marker, or '' when idle."""
        if not self.is_selecting or not self._cells:
            return ""
        return self.forming_word + PENDING_MARKER

    def begin_selection(self, cell: Cell) -> bool:
        """Start a gesture on a cell. Ignored while a gesture is active."""
        if self.is_selecting or cell.solved:
            return False

        self._state = SelectionState.SELECTING
        self._cells = [cell]
        self._notify()
        return True

    def extend_selection(self, cell: Cell) -> bool:
        """
        Add a cell to the active gesture.

        Returns:
            True if the cell was appended, False if the move was ignored
        """
        if not self.is_selecting or cell.solved:
            return False
        if cell in self._cells:
            return False
        if not self._cells[-1].coord.is_adjacent(cell.coord):
            return False

        self._cells.append(cell)
        self._notify()
        return True

    def end_selection(self) -> Optional[str]:
        """
        Finish the gesture.

        Returns:
            The candidate word, or None if no gesture was active
        """
        if not self.is_selecting:
            return None

        candidate = self.forming_word
        self._last_path = self.path
        self._reset()
        logger.debug(f"Selection ended with candidate '{candidate}'")
        return candidate

    def cancel_selection(self):
        """Drop any gesture in progress. Safe to call in any state."""
        was_selecting = self.is_selecting
        self._reset()
        if was_selecting:
            logger.debug("Selection cancelled")

    def _reset(self):
        self._state = SelectionState.IDLE
        self._cells = []
        self._notify()

    def _notify(self):
        if self.on_change:
            self.on_change(self.forming_word)
