"""Court assignment and rotation rules.

Winner stays, loser rotates: after a match the winning team keeps the court,
the losing team joins the back of the queue and the team at the front of the
queue steps in as the new challenger.
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

from typing import List, Optional, Sequence

from courtqueue.constants import TEAMS_PER_COURT
from courtqueue.models.court import Court
from courtqueue.models.match import Match, MatchResult
from courtqueue.models.player import Team
from courtqueue.models.state import ManagerState
from courtqueue.utils import setup_logger

logger = setup_logger(__name__)


class CourtRotation:
    """Moves teams between courts and the queue.

    This class is responsible for:
    - Placing the opening matches when a session starts
    - Rotating a court after its match is recorded
    - Refilling idle courts once teams are waiting
    - Handing out match numbers in increasing order
    """

    def assign_initial(self, state: ManagerState, teams: Sequence[Team]) -> None:
        """Pair teams onto courts in order and queue the rest.

        Courts 1..N get teams (1, 2), (3, 4), ... as matches 1..N.
        """
        court_count = len(state.courts)
        for court in state.courts:
            offset = (court.id - 1) * TEAMS_PER_COURT
            court.start_match(
                Match(
                    match_number=state.take_match_number(),
                    team1=teams[offset],
                    team2=teams[offset + 1],
                )
            )
        state.queue.extend(teams[court_count * TEAMS_PER_COURT :])

    def rotate(
        self, state: ManagerState, court: Court, result: MatchResult
    ) -> Optional[Match]:
        """Apply winner-stays, loser-rotates to a court.

        The challenger is taken from the queue before the loser rejoins it,
        so a loser never replays the same winner straight away. With nobody
        waiting, the court goes idle and keeps the winner.

        Returns:
            The new match on the court, or None if the court went idle
        """
        challenger = state.queue.dequeue()
        state.queue.enqueue(result.loser)

        if challenger is None:
            court.hold_winner(result.winner)
            logger.info(
                f"Court {court.id}: queue empty, {result.winner} waiting for an opponent"
            )
            return None

        match = Match(
            match_number=state.take_match_number(),
            team1=result.winner,
            team2=challenger,
        )
        court.start_match(match)
        logger.debug(f"Court {court.id}: started {match}")
        return match

    def fill_idle_courts(self, state: ManagerState) -> List[Match]:
        """Start matches on idle courts from the front of the queue.

        Courts are filled in id order. A court holding a waiting winner needs
        one team, an empty court needs two.

        Returns:
            The matches that were started
        """
        started = []
        for court in state.courts:
            if court.is_active:
                continue

            if court.waiting_team is not None:
                if len(state.queue) < 1:
                    break
                team1 = court.waiting_team
                team2 = state.queue.dequeue()
            else:
                if len(state.queue) < TEAMS_PER_COURT:
                    continue
                team1 = state.queue.dequeue()
                team2 = state.queue.dequeue()

            match = Match(
                match_number=state.take_match_number(), team1=team1, team2=team2
            )
            court.start_match(match)
            started.append(match)
            logger.info(f"Court {court.id}: idle court filled with {match}")
        return started
