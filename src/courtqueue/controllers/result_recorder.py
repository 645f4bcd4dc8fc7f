"""Result recording and validation for court matches.

This module turns submitted scores into match results, checking that the
scores name the right teams and that the match did not end in a tie.
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

from collections.abc import Mapping
from datetime import datetime
from typing import List, Sequence, Tuple

from courtqueue.exceptions import InvalidScoreError, TiedScoreError
from courtqueue.models.match import Match, MatchResult, Score
from courtqueue.models.player import Team
from courtqueue.type_hints import ScoreEntries, ScorePair
from courtqueue.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Accepting scores as a score map, Score objects or (score, team) pairs
    - Rejecting ties and scores for teams that did not play the match
    - Deciding winner and loser
    - Building the MatchResult that goes into the history
    """

    def record(
        self, match: Match, entries: ScoreEntries, court_id: int, timestamp: datetime
    ) -> MatchResult:
        """Build the result of a finished match.

        Args:
            match: The match that just ended
            entries: Final scores, one per team
            court_id: Court the match was played on
            timestamp: When the match ended

        Returns:
            MatchResult with scores ordered winner first

        Raises:
            TiedScoreError: If both teams have the same score
            InvalidScoreError: If the scores do not name both teams of the match
        """
        scores = self.validate_scores(match, self.normalize_scores(entries))
        winner, loser, ordered = self._decide(scores)

        logger.debug(
            f"Court {court_id}, match #{match.match_number}: "
            f"{winner} beat {loser} {ordered[0].score}-{ordered[1].score}"
        )
        return MatchResult(
            match=match,
            winner=winner,
            loser=loser,
            scores=ordered,
            timestamp=timestamp,
            court_id=court_id,
        )

    def rescore(
        self, result: MatchResult, new_scores: Sequence[Score]
    ) -> Tuple[Team, Team, ScorePair]:
        """Work out the corrected outcome of a recorded match.

        Returns:
            Tuple of (winner, loser, scores ordered winner first)

        Raises:
            TiedScoreError: If both new scores are equal
            InvalidScoreError: If the scores do not name both teams of the match
        """
        scores = self.validate_scores(result.match, self.normalize_scores(new_scores))
        return self._decide(scores)

    def normalize_scores(self, entries: ScoreEntries) -> List[Score]:
        """Convert any accepted score format into a list of Score objects."""
        if isinstance(entries, Mapping):
            pairs = list(entries.items())
        else:
            pairs = list(entries)

        scores = []
        for entry in pairs:
            if isinstance(entry, Score):
                scores.append(entry)
                continue
            try:
                score, team = entry
            except (TypeError, ValueError):
                raise InvalidScoreError(f"Cannot read score entry: {entry!r}") from None
            if not isinstance(team, Team) or not isinstance(score, int):
                raise InvalidScoreError(f"Cannot read score entry: {entry!r}")
            scores.append(Score(team=team, score=score))
        return scores

    def validate_scores(self, match: Match, scores: List[Score]) -> List[Score]:
        """Check that scores name exactly the two teams of a match and differ.

        A score map built from two equal scores collapses into one entry, so a
        single entry for a team of the match is reported as a tie.
        """
        if len(scores) == 1 and match.involves(scores[0].team):
            logger.warning(
                f"Match #{match.match_number}: only one score given, "
                "scores were probably equal"
            )
            raise TiedScoreError(
                f"Match #{match.match_number} cannot end in a tie "
                f"({scores[0].score}-{scores[0].score})"
            )

        if len(scores) != 2:
            raise InvalidScoreError(
                f"Match #{match.match_number} needs exactly two scores, got {len(scores)}"
            )

        first, second = scores
        if {first.team, second.team} != {match.team1, match.team2}:
            raise InvalidScoreError(
                f"Scores must be for {match.team1} and {match.team2}, "
                f"got {first.team} and {second.team}"
            )

        if first.score == second.score:
            logger.warning(f"Match #{match.match_number}: rejected tied score")
            raise TiedScoreError(
                f"Match #{match.match_number} cannot end in a tie "
                f"({first.score}-{second.score})"
            )
        # Keep the match's own Team objects so player names stay consistent
        return [
            Score(
                team=match.team1 if entry.team == match.team1 else match.team2,
                score=entry.score,
            )
            for entry in scores
        ]

    def _decide(self, scores: List[Score]) -> Tuple[Team, Team, ScorePair]:
        high, low = sorted(scores, key=lambda s: s.score, reverse=True)
        return high.team, low.team, (high, low)
