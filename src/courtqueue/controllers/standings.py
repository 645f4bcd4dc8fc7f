"""Team standings derived from the match history."""

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
from typing import Dict, Iterable, List

from courtqueue.models.match import MatchResult
from courtqueue.models.player import Team


@dataclass
class TeamStatistics:
    """Win/loss record of one team.

    Attributes:
        team: The team
        wins: Matches won
        losses: Matches lost
        total_points: Sum of the team's own recorded scores
    """

    team: Team
    wins: int = 0
    losses: int = 0
    total_points: int = 0

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.wins / self.matches_played


class StandingsCalculator:
    """Aggregates match results into ranked team statistics.

    Ranking: most wins first, then most points, then the team that appeared
    in the history earliest.
    """

    def calculate(self, results: Iterable[MatchResult]) -> List[TeamStatistics]:
        """Build standings for every team appearing in the results.

        Args:
            results: Match results in play order

        Returns:
            List of TeamStatistics sorted by rank (best to worst)
        """
        stats: Dict[Team, TeamStatistics] = {}

        for result in results:
            for team in result.match.teams:
                if team not in stats:
                    stats[team] = TeamStatistics(team=team)

            stats[result.winner].wins += 1
            stats[result.loser].losses += 1

            if result.scores is not None:
                for entry in result.scores:
                    stats[entry.team].total_points += entry.score

        # dicts keep insertion order and sorted() is stable, so first appearance breaks ties
        return sorted(
            stats.values(), key=lambda s: (s.wins, s.total_points), reverse=True
        )
