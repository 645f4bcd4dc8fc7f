"""Matches, running scores and finished match results."""

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
from datetime import datetime
from typing import Any, Dict, FrozenSet, Optional, Tuple

from dateutil.parser import isoparse

from courtqueue.constants import TEAM_ONE, TEAM_TWO
from courtqueue.exceptions import DuplicatePlayerError, InvalidScoreError
from courtqueue.models.player import Team
from courtqueue.type_hints import TeamIndex


@dataclass(frozen=True)
class Score:
    """Points scored by one team in a match.

    Attributes:
        team: The team the points belong to
        score: Points scored, never negative
    """

    team: Team
    score: int

    def __post_init__(self):
        if self.score < 0:
            raise InvalidScoreError(f"Score cannot be negative: {self.score}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize score to dictionary."""
        return {"team": self.team.to_dict(), "score": self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Score":
        """Deserialize score from dictionary."""
        return cls(team=Team.from_dict(data["team"]), score=data["score"])


@dataclass
class MatchScores:
    """Running scores of a live match."""

    team1: int = 0
    team2: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"team1": self.team1, "team2": self.team2}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScores":
        return cls(team1=data["team1"], team2=data["team2"])


@dataclass
class Match:
    """Two teams playing each other on a court.

    Attributes:
        match_number: Session-wide match number, assigned in increasing order
        team1: First team
        team2: Second team, sharing no player with team1
        current_scores: Running scores, updated while the match is played
    """

    match_number: int
    team1: Team
    team2: Team
    current_scores: MatchScores = field(default_factory=MatchScores)

    def __post_init__(self):
        if self.team1.shares_player_with(self.team2):
            raise DuplicatePlayerError(
                f"Match {self.match_number}: {self.team1} and {self.team2} share a player"
            )

    @property
    def teams(self) -> Tuple[Team, Team]:
        return (self.team1, self.team2)

    @property
    def player_ids(self) -> FrozenSet[int]:
        return self.team1.player_ids | self.team2.player_ids

    def involves(self, team: Team) -> bool:
        """Check whether a team is playing in this match."""
        return team == self.team1 or team == self.team2

    def team_at(self, index: TeamIndex) -> Team:
        """Get the team in slot 1 or 2."""
        if index == TEAM_ONE:
            return self.team1
        if index == TEAM_TWO:
            return self.team2
        raise InvalidScoreError(f"Team index must be 1 or 2, got {index!r}")

    def score_for(self, index: TeamIndex) -> int:
        """Get the running score of the team in slot 1 or 2."""
        if index == TEAM_ONE:
            return self.current_scores.team1
        if index == TEAM_TWO:
            return self.current_scores.team2
        raise InvalidScoreError(f"Team index must be 1 or 2, got {index!r}")

    def adjust_score(self, index: TeamIndex, delta: int) -> bool:
        """Add delta to a team's running score, never going below zero.

        Returns:
            True if the score changed
        """
        old_score = self.score_for(index)
        new_score = max(0, old_score + delta)
        if index == TEAM_ONE:
            self.current_scores.team1 = new_score
        else:
            self.current_scores.team2 = new_score
        return new_score != old_score

    def __str__(self) -> str:
        return f"Match #{self.match_number}: {self.team1} vs {self.team2}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_number": self.match_number,
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict(),
            "current_scores": self.current_scores.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            match_number=data["match_number"],
            team1=Team.from_dict(data["team1"]),
            team2=Team.from_dict(data["team2"]),
            current_scores=MatchScores.from_dict(data["current_scores"]),
        )


@dataclass
class MatchResult:
    """Represents the result of a finished match.

    Only ``winner``, ``loser`` and ``scores`` change after the result is
    recorded, and only through a history correction.

    Attributes:
        match: The match as it was played
        winner: Team with the higher score
        loser: Team with the lower score
        scores: Recorded scores, winner first, or None if never entered
        timestamp: When the result was recorded
        court_id: Court the match was played on
    """

    match: Match
    winner: Team
    loser: Team
    scores: Optional[Tuple[Score, Score]]
    timestamp: datetime
    court_id: int

    @property
    def match_number(self) -> int:
        return self.match.match_number

    def score_for(self, team: Team) -> Optional[int]:
        """Get the recorded score of a team, or None if it has none."""
        if self.scores is None:
            return None
        for entry in self.scores:
            if entry.team == team:
                return entry.score
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "match": self.match.to_dict(),
            "winner": self.winner.to_dict(),
            "loser": self.loser.to_dict(),
            "scores": (
                [s.to_dict() for s in self.scores] if self.scores is not None else None
            ),
            "timestamp": self.timestamp.isoformat(),
            "court_id": self.court_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        scores = data.get("scores")
        return cls(
            match=Match.from_dict(data["match"]),
            winner=Team.from_dict(data["winner"]),
            loser=Team.from_dict(data["loser"]),
            scores=(
                tuple(Score.from_dict(s) for s in scores) if scores is not None else None
            ),
            timestamp=isoparse(data["timestamp"]),
            court_id=data["court_id"],
        )
