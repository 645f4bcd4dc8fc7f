"""Main QueueManager class - orchestrates a session of court rotation.

This is the primary interface for running doubles matches across a fixed set
of courts: it places teams on courts, records results, rotates teams through
the queue, keeps the match history and supports undo/redo.
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

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence, Set, Tuple

from courtqueue.constants import MIN_COURT_COUNT, TEAM_INDICES, TEAMS_PER_COURT
from courtqueue.controllers.court_rotation import CourtRotation
from courtqueue.controllers.result_recorder import ResultRecorder
from courtqueue.controllers.standings import StandingsCalculator, TeamStatistics
from courtqueue.controllers.undo_history import UndoHistory
from courtqueue.exceptions import (
    DuplicatePlayerError,
    InsufficientTeamsError,
    InvalidCourtCountError,
    InvalidCourtError,
    InvalidScoreError,
    QueueLockedError,
)
from courtqueue.models.court import Court
from courtqueue.models.match import MatchResult, Score
from courtqueue.models.player import Team
from courtqueue.models.state import ManagerState
from courtqueue.serialization.codec import StateCodec
from courtqueue.type_hints import ScoreEntries, TeamIndex
from courtqueue.utils import setup_logger, utc_now
from courtqueue.utils.print import QueuePrintUtils

logger = setup_logger(__name__)


class QueueManager:
    """Runs winner-stays, loser-rotates play across a fixed number of courts.

    The manager coordinates specialized helpers:
    - CourtRotation: places teams on courts and rotates them after results
    - ResultRecorder: validates scores and builds match results
    - StandingsCalculator: ranks teams from the match history
    - UndoHistory: snapshots state for undo/redo
    - StateCodec: saves and restores state as text

    Every mutating call either completes or raises with state unchanged.
    Calls must not overlap; the manager is not thread-safe.
    """

    def __init__(
        self, court_count: int, clock: Optional[Callable[[], datetime]] = None
    ) -> None:
        """Create a manager with idle courts.

        Args:
            court_count: Number of courts, fixed for the life of the manager
            clock: Returns the time stamped on match results, UTC now by default

        Raises:
            InvalidCourtCountError: If court_count is below 1
        """
        if (
            isinstance(court_count, bool)
            or not isinstance(court_count, int)
            or court_count < MIN_COURT_COUNT
        ):
            raise InvalidCourtCountError(
                f"Court count must be a positive integer, got {court_count!r}"
            )

        self._state = ManagerState.empty(court_count)
        self._clock = clock or utc_now

        self.rotation = CourtRotation()
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator()
        self.undo_history = UndoHistory()
        self.codec = StateCodec()

    # ========== Properties ==========

    @property
    def court_count(self) -> int:
        return len(self._state.courts)

    @property
    def queue(self) -> Tuple[Team, ...]:
        """Waiting teams, front of the line first."""
        return self._state.queue.as_tuple()

    @property
    def queue_locked(self) -> bool:
        return self._state.queue_locked

    @property
    def next_match_number(self) -> int:
        return self._state.next_match_number

    @property
    def can_undo(self) -> bool:
        return self.undo_history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.undo_history.can_redo

    # ========== Session Setup ==========

    def initialize(self, teams: Sequence[Team]) -> None:
        """Start a fresh session with teams in order of arrival.

        Courts 1..N get matches 1..N between teams (1, 2), (3, 4), ...; the
        remaining teams wait in the queue in the given order. Any previous
        state, including undo/redo history, is discarded.

        Args:
            teams: Teams in order of arrival

        Raises:
            InsufficientTeamsError: If there are fewer than two teams per court
            DuplicatePlayerError: If a player appears in more than one team
        """
        teams = list(teams)
        required = self.court_count * TEAMS_PER_COURT
        if len(teams) < required:
            logger.warning(
                f"Cannot initialize: {len(teams)} teams for {self.court_count} courts"
            )
            raise InsufficientTeamsError(
                f"Need at least {required} teams for {self.court_count} courts, "
                f"got {len(teams)}"
            )
        self._check_no_shared_players(teams, set())

        state = ManagerState.empty(self.court_count)
        self.rotation.assign_initial(state, teams)

        self._state = state
        self.undo_history.clear()
        logger.info(
            f"Initialized {self.court_count} courts with {len(teams)} teams, "
            f"{len(state.queue)} waiting"
        )

    # ========== Results ==========

    def record_result(self, court_id: int, scores: ScoreEntries) -> MatchResult:
        """Record the final score of a court's match and rotate the court.

        The winner stays on the court, the loser joins the back of the queue
        and the front team of the queue becomes the new opponent. If nobody
        is waiting, the court goes idle holding the winner.

        Args:
            court_id: Court whose match finished
            scores: Final scores, e.g. ``{21: team_a, 15: team_b}``

        Returns:
            The MatchResult appended to the history

        Raises:
            InvalidCourtError: If the court does not exist or is idle
            TiedScoreError: If both teams scored the same
            InvalidScoreError: If the scores are not for the two teams on court
        """
        court = self._require_active_court(court_id)
        result = self.result_recorder.record(
            court.current_match, scores, court_id, self._clock()
        )

        with self._undoable():
            court = self._state.get_court(court_id)
            self._state.match_history.append(result)
            # Courts already waiting for an opponent are served before this one
            self.rotation.fill_idle_courts(self._state)
            self.rotation.rotate(self._state, court, result)

        logger.info(
            f"Court {court_id}: match #{result.match_number} won by {result.winner}, "
            f"{result.loser} rejoins the queue"
        )
        return result

    def update_score(self, court_id: int, team_index: TeamIndex, delta: int) -> int:
        """Adjust the running score of one team on a court.

        The score never drops below zero; lowering a zero score does nothing.

        Args:
            court_id: Court being scored
            team_index: 1 for team1, 2 for team2
            delta: Points to add, negative to take away

        Returns:
            The team's new score

        Raises:
            InvalidCourtError: If the court does not exist or is idle
            InvalidScoreError: If team_index is not 1 or 2
        """
        if team_index not in TEAM_INDICES or isinstance(team_index, bool):
            raise InvalidScoreError(f"Team index must be 1 or 2, got {team_index!r}")
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise InvalidScoreError(f"Score change must be an integer, got {delta!r}")

        match = self._require_active_court(court_id).current_match
        current = match.score_for(team_index)
        if max(0, current + delta) == current:
            return current

        with self._undoable():
            match = self._state.get_court(court_id).current_match
            match.adjust_score(team_index, delta)

        new_score = match.score_for(team_index)
        logger.info(
            f"Court {court_id}: team {team_index} score {current} -> {new_score}"
        )
        return new_score

    def edit_match_result(
        self, match_index: int, new_scores: Sequence[Score]
    ) -> MatchResult:
        """Correct the scores of a match already in the history.

        Winner and loser are recomputed from the new scores. Courts and queue
        are left exactly as they are, even if the winner changes.

        Args:
            match_index: Position of the match in the history, oldest first
            new_scores: One Score for each team of the match

        Returns:
            The corrected MatchResult

        Raises:
            MatchIndexError: If match_index is out of range
            TiedScoreError: If the new scores are equal
            InvalidScoreError: If the scores are not for the two teams of the match
        """
        result = self._state.match_history.get(match_index)
        winner, loser, ordered = self.result_recorder.rescore(result, new_scores)

        with self._undoable():
            corrected = self._state.match_history.correct(
                match_index, winner, loser, ordered
            )

        logger.info(
            f"Corrected match #{corrected.match_number}: {winner} beat {loser} "
            f"{ordered[0].score}-{ordered[1].score}"
        )
        return corrected

    # ========== Queue Management ==========

    def add_teams_to_queue(self, teams: Sequence[Team]) -> None:
        """Add teams to the back of the queue in the given order.

        Allowed whether or not the queue is locked. Idle courts are filled
        from the queue afterwards.

        Raises:
            DuplicatePlayerError: If a team shares a player with a team on a
                court, in the queue or earlier in ``teams``
        """
        teams = list(teams)
        if not teams:
            return
        self._check_no_shared_players(teams, self._state.live_player_ids())

        with self._undoable():
            self._state.queue.extend(teams)
            self.rotation.fill_idle_courts(self._state)

        logger.info(f"Added {len(teams)} teams to the queue")

    def reorder_queue(self, from_index: int, to_index: int) -> None:
        """Move the team at from_index to to_index.

        Raises:
            QueueLockedError: If the queue is locked
            QueueIndexError: If either index is out of range
        """
        if self._state.queue_locked:
            logger.warning("Rejected queue reorder: queue is locked")
            raise QueueLockedError("The queue is locked and cannot be reordered")

        self._state.queue.check_index(from_index)
        self._state.queue.check_index(to_index)
        if from_index == to_index:
            return

        with self._undoable():
            self._state.queue.move(from_index, to_index)

        logger.info(f"Moved queue position {from_index} to {to_index}")

    def toggle_queue_lock(self) -> bool:
        """Lock or unlock manual queue reordering. Not recorded for undo.

        Returns:
            The new lock state
        """
        self._state.queue_locked = not self._state.queue_locked
        logger.info(f"Queue {'locked' if self._state.queue_locked else 'unlocked'}")
        return self._state.queue_locked

    # ========== Undo / Redo ==========

    def undo(self) -> bool:
        """Revert the last change.

        Returns:
            True if a change was reverted, False if there was nothing to undo
        """
        previous = self.undo_history.undo(self._state)
        if previous is None:
            return False
        self._restore(previous)
        logger.info("Undid last change")
        return True

    def redo(self) -> bool:
        """Reapply the last undone change.

        Returns:
            True if a change was reapplied, False if there was nothing to redo
        """
        following = self.undo_history.redo(self._state)
        if following is None:
            return False
        self._restore(following)
        logger.info("Redid last undone change")
        return True

    # ========== Read Access ==========

    def get_courts(self) -> Tuple[Court, ...]:
        """Copies of the courts in id order."""
        return tuple(self._state.copy().courts)

    def get_queue(self) -> Tuple[Team, ...]:
        return self.queue

    def get_match_history(self) -> Tuple[MatchResult, ...]:
        """Copies of the finished matches, oldest first."""
        return self._state.copy().match_history.as_tuple()

    def get_current_state(self) -> ManagerState:
        """Detached copy of the whole state."""
        return self._state.copy()

    def get_team_statistics(self) -> List[TeamStatistics]:
        """Standings of every team in the history, best first."""
        return self.standings_calculator.calculate(self._state.match_history)

    def beautify_queue(self) -> str:
        """Human-readable text of court assignments and queue order."""
        return QueuePrintUtils.render(self._state.courts, self._state.queue)

    # ========== Serialization ==========

    def save_state(self) -> str:
        """Encode the complete state as a versioned text blob.

        Undo/redo history is not included.
        """
        return self.codec.encode(self._state)

    def load_state(self, blob: str) -> None:
        """Replace all state with a blob from ``save_state``.

        The court count is taken from the blob. Undo/redo history is cleared.
        Nothing changes if the blob is rejected.

        Raises:
            CorruptStateError: If the blob is not valid saved state
        """
        state = self.codec.decode(blob)
        self._state = state
        self.undo_history.clear()
        logger.info(
            f"Loaded state: {self.court_count} courts, {len(state.queue)} queued, "
            f"{len(state.match_history)} matches played"
        )

    # ========== Internals ==========

    def _restore(self, snapshot: ManagerState) -> None:
        # The queue lock is not game state and survives undo/redo
        snapshot.queue_locked = self._state.queue_locked
        self._state = snapshot

    @contextmanager
    def _undoable(self) -> Iterator[None]:
        """Apply a change as a single undo step, rolling back if it fails."""
        before = self._state.copy()
        try:
            yield
        except Exception:
            self._state = before
            raise
        self.undo_history.record(before)

    def _require_active_court(self, court_id: int) -> Court:
        court = self._state.get_court(court_id)
        if court is None:
            logger.warning(f"Rejected operation on unknown court {court_id!r}")
            raise InvalidCourtError(f"Court {court_id!r} does not exist")
        if court.current_match is None:
            logger.warning(f"Rejected operation on idle court {court_id}")
            raise InvalidCourtError(f"Court {court_id} has no match in progress")
        return court

    def _check_no_shared_players(self, teams: List[Team], taken: Set[int]) -> None:
        """Raise if any team reuses a player from ``taken`` or from another team."""
        seen = set(taken)
        for team in teams:
            if not isinstance(team, Team):
                raise TypeError(f"Expected a Team, got {type(team).__name__}")
            repeated = seen & team.player_ids
            if repeated:
                logger.warning(f"Rejected {team}: player already in play")
                raise DuplicatePlayerError(
                    f"Player {min(repeated)} of {team} is already on a court or queued"
                )
            seen |= team.player_ids
