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

# --- Saved state ---
SAVE_FORMAT_NAME = "courtqueue"
SAVE_FORMAT_VERSION = 1

# --- Courts ---
# Two teams share a court, so initialization needs this many teams per court
TEAMS_PER_COURT = 2
MIN_COURT_COUNT = 1
FIRST_MATCH_NUMBER = 1

# Team slots within a match
TEAM_ONE = 1
TEAM_TWO = 2
TEAM_INDICES = (TEAM_ONE, TEAM_TWO)

# --- Logging ---
LOGGER_ROOT = "courtqueue"
LOG_LEVEL_ENV_VAR = "COURTQUEUE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Display ---
QUEUE_HEADER = "Queue:"
EMPTY_QUEUE_LABEL = "(empty)"
IDLE_COURT_LABEL = "Idle"
TEAM_NAME_SEPARATOR = " & "
