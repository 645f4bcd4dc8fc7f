"""Exceptions for use in Court Queue"""

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


# ========== Base Application Exception ==========


class CourtQueueError(Exception):
    """Base exception for all Court Queue errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every scheduling failure with a single except clause.
    """

    pass


# ========== Team Exceptions ==========


class TeamError(CourtQueueError):
    """Base exception for team-related errors."""

    pass


class InvalidTeamError(TeamError, ValueError):
    """Raised when a team is built from the same player twice."""

    pass


class DuplicatePlayerError(TeamError):
    """Raised when a team shares a player with a team already on court or queued."""

    pass


# ========== Court Exceptions ==========


class CourtError(CourtQueueError):
    """Base exception for court-related errors."""

    pass


class InvalidCourtCountError(CourtError, ValueError):
    """Raised when a manager is created with fewer than one court."""

    pass


class InsufficientTeamsError(CourtError):
    """Raised when there are not enough teams to fill every court."""

    pass


class InvalidCourtError(CourtError):
    """Raised when a court does not exist or has no active match."""

    pass


# ========== Result Exceptions ==========


class ResultError(CourtQueueError):
    """Base exception for result recording errors."""

    pass


class TiedScoreError(ResultError):
    """Raised when a result is submitted with equal scores for both teams."""

    pass


class InvalidScoreError(ResultError, ValueError):
    """Raised when scores do not match the teams of the match they belong to."""

    pass


class MatchIndexError(ResultError, IndexError):
    """Raised when a match history index is out of range."""

    pass


# ========== Queue Exceptions ==========


class QueueError(CourtQueueError):
    """Base exception for queue editing errors."""

    pass


class QueueLockedError(QueueError):
    """Raised when the queue is reordered while locked."""

    pass


class QueueIndexError(QueueError, IndexError):
    """Raised when a queue position is out of range."""

    pass


# ========== State Exceptions ==========


class StateError(CourtQueueError):
    """Base exception for saved state errors."""

    pass


class CorruptStateError(StateError):
    """Raised when a saved state blob cannot be decoded.

    Attributes:
        cause: Human-readable description of what was wrong with the blob
    """

    def __init__(self, cause: str):
        super().__init__(f"Corrupt saved state: {cause}")
        self.cause = cause
