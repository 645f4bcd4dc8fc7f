"""The waiting line of teams not currently on a court."""

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

from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from courtqueue.exceptions import QueueIndexError
from courtqueue.models.player import Team


class TeamQueue:
    """Ordered line of waiting teams. The front team plays next."""

    def __init__(self, teams: Optional[Iterable[Team]] = None):
        self._teams: List[Team] = list(teams) if teams is not None else []

    def __len__(self) -> int:
        return len(self._teams)

    def __iter__(self) -> Iterator[Team]:
        return iter(self._teams)

    def __getitem__(self, index: int) -> Team:
        return self._teams[index]

    def __contains__(self, team: object) -> bool:
        return team in self._teams

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TeamQueue):
            return self._teams == other._teams
        return NotImplemented

    def __repr__(self) -> str:
        return f"TeamQueue({self._teams!r})"

    @property
    def player_ids(self) -> Set[int]:
        ids: Set[int] = set()
        for team in self._teams:
            ids |= team.player_ids
        return ids

    def as_tuple(self) -> Tuple[Team, ...]:
        """Read-only view of the queue, front first."""
        return tuple(self._teams)

    def peek(self) -> Optional[Team]:
        return self._teams[0] if self._teams else None

    def enqueue(self, team: Team) -> None:
        """Add a team to the back of the line."""
        self._teams.append(team)

    def extend(self, teams: Iterable[Team]) -> None:
        self._teams.extend(teams)

    def dequeue(self) -> Optional[Team]:
        """Remove and return the front team, or None if the queue is empty."""
        if not self._teams:
            return None
        return self._teams.pop(0)

    def check_index(self, index: int) -> None:
        """Raise QueueIndexError unless index is a position in the queue."""
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < len(self._teams)
        ):
            raise QueueIndexError(
                f"Queue position {index!r} is out of range "
                f"(queue has {len(self._teams)} teams)"
            )

    def move(self, from_index: int, to_index: int) -> None:
        """Move the team at from_index to to_index, shifting the teams between.

        Raises:
            QueueIndexError: If either index is out of range
        """
        self.check_index(from_index)
        self.check_index(to_index)
        team = self._teams.pop(from_index)
        self._teams.insert(to_index, team)

    def to_list(self) -> List[Dict[str, Any]]:
        """Serialize queue to a list of team dictionaries."""
        return [team.to_dict() for team in self._teams]

    @classmethod
    def from_list(cls, data: Iterable[Dict[str, Any]]) -> "TeamQueue":
        """Deserialize queue from a list of team dictionaries."""
        return cls(Team.from_dict(t) for t in data)
