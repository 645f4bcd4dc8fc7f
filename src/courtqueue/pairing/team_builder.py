"""Partner suggestions for building doubles teams.

Players are paired with the partner they have teamed up with least often in
earlier sessions, so teams get mixed up from one session to the next.
"""

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

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from courtqueue.exceptions import DuplicatePlayerError
from courtqueue.models.match import MatchResult
from courtqueue.models.player import Player, Team
from courtqueue.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class PartnerHistory:
    """
    Counts how often two players have been on the same team.

    Attributes
    ----------
    pair_counts : Counter of frozenset of int
        Number of recorded matches per unordered pair of player ids.
    """

    pair_counts: Counter = field(default_factory=Counter)

    def record(self, team: Team) -> None:
        """Count one match played by a team."""
        self.pair_counts[team.player_ids] += 1

    def count(self, player1_id: int, player2_id: int) -> int:
        """How often two players have partnered."""
        return self.pair_counts[frozenset({player1_id, player2_id})]

    def merge(self, other: "PartnerHistory") -> None:
        self.pair_counts.update(other.pair_counts)

    @classmethod
    def from_results(cls, results: Iterable[MatchResult]) -> "PartnerHistory":
        """Build partner counts from finished matches, counting both teams."""
        history = cls()
        for result in results:
            history.record(result.winner)
            history.record(result.loser)
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize partner history to dictionary."""
        return {
            "pair_counts": [
                [sorted(pair), count] for pair, count in self.pair_counts.items()
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PartnerHistory":
        """Deserialize partner history from dictionary."""
        return cls(
            pair_counts=Counter(
                {frozenset(pair): count for pair, count in data.get("pair_counts", [])}
            )
        )


@dataclass
class TeamBuildResult:
    """Teams built from a player pool and the players who could not be paired."""

    teams: List[Team] = field(default_factory=list)
    leftover: List[Player] = field(default_factory=list)


class TeamBuilder:
    """Pairs players into teams, preferring partners they rarely had."""

    def __init__(
        self,
        partner_history: Optional[PartnerHistory] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            partner_history: Partner counts from earlier sessions
            seed: Seed for shuffling, for repeatable suggestions
        """
        self.partner_history = partner_history or PartnerHistory()
        self.random = random.Random(seed) if seed is not None else random.Random()

    def build_teams(self, players: Sequence[Player]) -> TeamBuildResult:
        """Pair players from a single pool.

        The pool is shuffled, then the first remaining player is paired with
        the remaining player they partnered least often (earliest wins a tie).
        With an odd pool, one player is left over.
        """
        candidates = self._shuffled(players)
        result = TeamBuildResult()

        while len(candidates) >= 2:
            first = candidates.pop(0)
            partner_index = self._least_frequent_partner(first, candidates)
            partner = candidates.pop(partner_index)
            result.teams.append(Team(player1=first, player2=partner))

        result.leftover = candidates
        logger.info(
            f"Built {len(result.teams)} teams, {len(result.leftover)} player(s) left over"
        )
        return result

    def build_mixed_teams(
        self, pool1: Sequence[Player], pool2: Sequence[Player]
    ) -> TeamBuildResult:
        """Pair each player of pool1 with a partner from pool2.

        Used for mixed doubles. Players of the larger pool that find no
        partner are left over.
        """
        firsts = self._shuffled(pool1)
        seconds = self._shuffled(pool2)
        result = TeamBuildResult()

        while firsts and seconds:
            first = firsts.pop(0)
            partner_index = self._least_frequent_partner(first, seconds)
            partner = seconds.pop(partner_index)
            result.teams.append(Team(player1=first, player2=partner))

        result.leftover = firsts + seconds
        logger.info(
            f"Built {len(result.teams)} mixed teams, "
            f"left over: {len(firsts)} from first pool, {len(seconds)} from second"
        )
        return result

    def _shuffled(self, players: Sequence[Player]) -> List[Player]:
        seen = set()
        pool = []
        for player in players:
            if player.id in seen:
                raise DuplicatePlayerError(
                    f"Player {player.id} appears twice in the pool"
                )
            seen.add(player.id)
            pool.append(player)
        self.random.shuffle(pool)
        return pool

    def _least_frequent_partner(self, player: Player, candidates: List[Player]) -> int:
        counts = [self.partner_history.count(player.id, c.id) for c in candidates]
        return counts.index(min(counts))
