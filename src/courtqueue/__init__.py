"""Court Queue - winner-stays court rotation for doubles sessions.

This package schedules doubles matches across a fixed number of courts from a
rotating queue of teams, tracks live scores and match history, derives
standings, and saves/restores its state as a versioned text blob.
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

from courtqueue.controllers import QueueManager, TeamStatistics
from courtqueue.exceptions import (
    CorruptStateError,
    CourtQueueError,
    DuplicatePlayerError,
    InsufficientTeamsError,
    InvalidCourtError,
    InvalidTeamError,
    QueueLockedError,
    TiedScoreError,
)
from courtqueue.models import (
    Court,
    Match,
    MatchResult,
    Player,
    Score,
    Team,
    create_player,
    create_team,
    teams_equal,
)

__version__ = "1.0.0"

__all__ = [
    "QueueManager",
    "TeamStatistics",
    "Player",
    "Team",
    "Score",
    "Match",
    "MatchResult",
    "Court",
    "create_player",
    "create_team",
    "teams_equal",
    "CourtQueueError",
    "InsufficientTeamsError",
    "InvalidCourtError",
    "TiedScoreError",
    "DuplicatePlayerError",
    "QueueLockedError",
    "CorruptStateError",
    "InvalidTeamError",
]
