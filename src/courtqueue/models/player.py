"""Players and the doubles teams they form."""

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
from typing import Any, Dict, FrozenSet

from courtqueue.constants import TEAM_NAME_SEPARATOR
from courtqueue.exceptions import InvalidTeamError


@dataclass(frozen=True)
class Player:
    """A player taking part in the session.

    Attributes:
        id: Small integer id, unique within the session
        name: Display name (not part of identity)
    """

    id: int
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.name or f"Player {self.id}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass(frozen=True, eq=False)
class Team:
    """Two players who play and rotate together.

    Teams compare by the set of their player ids, so ``Team(a, b)`` equals
    ``Team(b, a)``.

    Attributes:
        player1: First player
        player2: Second player, never the same player as player1
    """

    player1: Player
    player2: Player

    def __post_init__(self):
        if self.player1.id == self.player2.id:
            raise InvalidTeamError(
                f"A team needs two different players, got player {self.player1.id} twice"
            )

    @property
    def player_ids(self) -> FrozenSet[int]:
        return frozenset((self.player1.id, self.player2.id))

    @property
    def display_name(self) -> str:
        return f"{self.player1}{TEAM_NAME_SEPARATOR}{self.player2}"

    def shares_player_with(self, other: "Team") -> bool:
        """Check whether this team and another have a player in common."""
        return not self.player_ids.isdisjoint(other.player_ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Team):
            return self.player_ids == other.player_ids
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.player_ids)

    def __str__(self) -> str:
        return self.display_name

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            "player1": self.player1.to_dict(),
            "player2": self.player2.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            player1=Player.from_dict(data["player1"]),
            player2=Player.from_dict(data["player2"]),
        )


def create_player(player_id: int, name: str) -> Player:
    """Create a player with the given id and display name."""
    return Player(id=player_id, name=name)


def create_team(player1: Player, player2: Player) -> Team:
    """Create a team from two players.

    Raises:
        InvalidTeamError: If both players have the same id
    """
    return Team(player1=player1, player2=player2)


def teams_equal(team1: Team, team2: Team) -> bool:
    """Check whether two teams contain the same two players, in any order."""
    return team1.player_ids == team2.player_ids
