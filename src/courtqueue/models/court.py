"""Court data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from courtqueue.models.match import Match
from courtqueue.models.player import Team


@dataclass
class Court:
    """A playing surface hosting at most one match.

    A court without a match is idle. An idle court may still hold the winner
    of its last match in ``waiting_team`` until an opponent becomes available.

    Attributes
    ----------
    id : int
        Court number, 1..N
    current_match : Match or None
        The match being played, if any
    waiting_team : Team or None
        Winner kept on an idle court, awaiting an opponent
    """

    id: int
    current_match: Optional[Match] = None
    waiting_team: Optional[Team] = None

    @property
    def is_active(self) -> bool:
        return self.current_match is not None

    @property
    def is_idle(self) -> bool:
        return self.current_match is None

    @property
    def live_teams(self) -> List[Team]:
        """Teams currently assigned to this court, playing or waiting."""
        if self.current_match is not None:
            return [self.current_match.team1, self.current_match.team2]
        if self.waiting_team is not None:
            return [self.waiting_team]
        return []

    def start_match(self, match: Match) -> None:
        self.current_match = match
        self.waiting_team = None

    def hold_winner(self, team: Team) -> None:
        """Leave the court idle with a winner waiting for an opponent."""
        self.current_match = None
        self.waiting_team = team

    def to_dict(self) -> Dict[str, Any]:
        """Serialize court to dictionary."""
        return {
            "id": self.id,
            "current_match": (
                self.current_match.to_dict() if self.current_match else None
            ),
            "waiting_team": self.waiting_team.to_dict() if self.waiting_team else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Court":
        """Deserialize court from dictionary."""
        match_data = data.get("current_match")
        waiting_data = data.get("waiting_team")
        return cls(
            id=data["id"],
            current_match=Match.from_dict(match_data) if match_data else None,
            waiting_team=Team.from_dict(waiting_data) if waiting_data else None,
        )
