"""
Plain-text rendering of court assignments and the waiting queue.
Used for previews and displays; nothing here changes state.
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

from typing import Iterable, List

from courtqueue.constants import EMPTY_QUEUE_LABEL, IDLE_COURT_LABEL, QUEUE_HEADER
from courtqueue.models.court import Court
from courtqueue.models.player import Team


class QueuePrintUtils:
    """Utility class for rendering the current line-up as text."""

    @staticmethod
    def format_court(court: Court) -> str:
        """
        Render one court on a single line.

        Examples:
            Court 1: Ann & Bo vs Cy & Di (Match #3, 12-9)
            Court 2: Idle - Ed & Flo waiting for opponent
            Court 3: Idle
        """
        match = court.current_match
        if match is not None:
            scores = match.current_scores
            return (
                f"Court {court.id}: {match.team1} vs {match.team2} "
                f"(Match #{match.match_number}, {scores.team1}-{scores.team2})"
            )
        if court.waiting_team is not None:
            return (
                f"Court {court.id}: {IDLE_COURT_LABEL} - "
                f"{court.waiting_team} waiting for opponent"
            )
        return f"Court {court.id}: {IDLE_COURT_LABEL}"

    @staticmethod
    def format_queue(queue: Iterable[Team]) -> List[str]:
        """Render the queue as a header line followed by numbered teams."""
        teams = list(queue)
        if not teams:
            return [f"{QUEUE_HEADER} {EMPTY_QUEUE_LABEL}"]
        lines = [QUEUE_HEADER]
        lines.extend(f"  {position}. {team}" for position, team in enumerate(teams, 1))
        return lines

    @classmethod
    def render(cls, courts: Iterable[Court], queue: Iterable[Team]) -> str:
        """
        Render every court, a blank line, then the queue.

        The output depends only on the courts and queue, so the same state
        always renders the same text.
        """
        lines = [cls.format_court(court) for court in courts]
        lines.append("")
        lines.extend(cls.format_queue(queue))
        return "\n".join(lines)
