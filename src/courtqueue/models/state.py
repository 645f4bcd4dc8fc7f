"""Complete state of a queue manager."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

from courtqueue.constants import FIRST_MATCH_NUMBER
from courtqueue.models.court import Court
from courtqueue.models.history import MatchHistory
from courtqueue.models.player import Team
from courtqueue.models.team_queue import TeamQueue


@dataclass
class ManagerState:
    """Everything needed to rebuild a queue manager.

    Attributes:
        courts: Courts in id order, one per playing surface
        queue: Teams waiting to play
        match_history: Finished matches in play order
        next_match_number: Number the next new match will get
        queue_locked: Whether manual reordering of the queue is blocked
    """

    courts: List[Court] = field(default_factory=list)
    queue: TeamQueue = field(default_factory=TeamQueue)
    match_history: MatchHistory = field(default_factory=MatchHistory)
    next_match_number: int = FIRST_MATCH_NUMBER
    queue_locked: bool = False

    @classmethod
    def empty(cls, court_count: int) -> "ManagerState":
        """State with idle courts and nothing else."""
        return cls(courts=[Court(id=i) for i in range(1, court_count + 1)])

    def get_court(self, court_id: int) -> Optional[Court]:
        for court in self.courts:
            if court.id == court_id:
                return court
        return None

    def live_teams(self) -> Iterator[Team]:
        """Every team on a court or in the queue."""
        for court in self.courts:
            yield from court.live_teams
        yield from self.queue

    def live_player_ids(self) -> Set[int]:
        ids: Set[int] = set()
        for team in self.live_teams():
            ids |= team.player_ids
        return ids

    def take_match_number(self) -> int:
        number = self.next_match_number
        self.next_match_number += 1
        return number

    def copy(self) -> "ManagerState":
        """Detached copy sharing no mutable objects with this state."""
        return ManagerState.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to dictionary."""
        return {
            "courts": [c.to_dict() for c in self.courts],
            "queue": self.queue.to_list(),
            "match_history": self.match_history.to_list(),
            "next_match_number": self.next_match_number,
            "queue_locked": self.queue_locked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManagerState":
        """Deserialize state from dictionary."""
        return cls(
            courts=[Court.from_dict(c) for c in data["courts"]],
            queue=TeamQueue.from_list(data["queue"]),
            match_history=MatchHistory.from_list(data["match_history"]),
            next_match_number=data["next_match_number"],
            queue_locked=data["queue_locked"],
        )
