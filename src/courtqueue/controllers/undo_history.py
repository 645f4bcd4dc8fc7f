"""Undo and redo through full state snapshots."""

# Court Queue
# Copyright (C) 2025  Court Queue developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import List, Optional

from courtqueue.models.state import ManagerState


class UndoHistory:
    """Unbounded undo and redo stacks of manager state snapshots.

    Snapshots are detached copies, so later changes to the live state never
    leak into them.
    """

    def __init__(self):
        self._undo_stack: List[ManagerState] = []
        self._redo_stack: List[ManagerState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def record(self, before: ManagerState) -> None:
        """Remember the state before a change. A new change discards redo history."""
        self._undo_stack.append(before.copy())
        self._redo_stack.clear()

    def undo(self, current: ManagerState) -> Optional[ManagerState]:
        """Step back one change.

        Returns:
            The state to restore, or None if there is nothing to undo
        """
        if not self._undo_stack:
            return None
        self._redo_stack.append(current.copy())
        return self._undo_stack.pop()

    def redo(self, current: ManagerState) -> Optional[ManagerState]:
        """Reapply the last undone change.

        Returns:
            The state to restore, or None if there is nothing to redo
        """
        if not self._redo_stack:
            return None
        self._undo_stack.append(current.copy())
        return self._redo_stack.pop()

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
