"""Save and restore queue manager state as a versioned JSON blob.

Blob layout::

    {
        "format": "courtqueue",
        "version": 1,
        "state": {
            "courts": [...],
            "queue": [...],
            "match_history": [...],
            "next_match_number": 7,
            "queue_locked": false
        }
    }

Decoding validates the whole blob before anything is built, and any problem
is reported as a CorruptStateError naming the offending field.
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

import json
from typing import Any, Dict, FrozenSet, List, Set

from dateutil.parser import isoparse

from courtqueue.constants import SAVE_FORMAT_NAME, SAVE_FORMAT_VERSION
from courtqueue.exceptions import CorruptStateError, CourtQueueError
from courtqueue.models.state import ManagerState
from courtqueue.utils import setup_logger

logger = setup_logger(__name__)

STATE_KEYS = {"courts", "queue", "match_history", "next_match_number", "queue_locked"}
RESULT_KEYS = {"match", "winner", "loser", "scores", "timestamp", "court_id"}
MATCH_KEYS = {"match_number", "team1", "team2", "current_scores"}
COURT_KEYS = {"id", "current_match", "waiting_team"}


class StateCodec:
    """Converts manager state to and from its saved text form."""

    def encode(self, state: ManagerState) -> str:
        """Encode state as a JSON blob."""
        payload = {
            "format": SAVE_FORMAT_NAME,
            "version": SAVE_FORMAT_VERSION,
            "state": state.to_dict(),
        }
        return json.dumps(payload)

    def decode(self, blob: str) -> ManagerState:
        """Decode a JSON blob produced by ``encode``.

        Raises:
            CorruptStateError: If the blob is not valid saved state
        """
        if not isinstance(blob, str):
            raise CorruptStateError(
                f"saved state must be text, got {type(blob).__name__}"
            )
        try:
            payload = json.loads(blob)
        except (json.JSONDecodeError, RecursionError) as e:
            raise CorruptStateError(f"not valid JSON ({e})") from e

        data = _StateValidator().validate_payload(payload)
        try:
            return ManagerState.from_dict(data)
        except (CourtQueueError, KeyError, TypeError, ValueError) as e:
            # Validation should have caught this already
            raise CorruptStateError(f"could not rebuild state ({e})") from e


class _StateValidator:
    """Walks a decoded payload and checks every field.

    Besides the shape of each object, it checks the invariants a live manager
    relies on: court ids 1..N, each player on at most one court or queue
    slot, one name per player id, and match numbers below next_match_number.
    """

    def __init__(self):
        self.player_names: Dict[int, str] = {}
        self.match_numbers: Set[int] = set()
        self.court_count = 0

    def validate_payload(self, payload: Any) -> Dict[str, Any]:
        self._require_dict(payload, "blob")
        if payload.get("format") != SAVE_FORMAT_NAME:
            self._fail("format", f"expected {SAVE_FORMAT_NAME!r}")
        version = payload.get("version")
        if not self._is_int(version):
            self._fail("version", "missing or not an integer")
        if version != SAVE_FORMAT_VERSION:
            self._fail("version", f"unsupported version {version}")

        state = payload.get("state")
        self._require_dict(state, "state")
        self._require_keys(state, STATE_KEYS, "state")

        self._validate_courts(state["courts"])
        queue_teams = self._validate_team_list(state["queue"], "state.queue")
        self._validate_history(state["match_history"])

        next_number = state["next_match_number"]
        if not self._is_int(next_number) or next_number < 1:
            self._fail("state.next_match_number", "must be a positive integer")
        if self.match_numbers and next_number <= max(self.match_numbers):
            self._fail(
                "state.next_match_number",
                f"{next_number} is not above used match number {max(self.match_numbers)}",
            )
        if not isinstance(state["queue_locked"], bool):
            self._fail("state.queue_locked", "must be true or false")

        self._check_live_players(state["courts"], queue_teams)
        return state

    # ========== Structure ==========

    def _validate_courts(self, courts: Any) -> None:
        if not isinstance(courts, list) or not courts:
            self._fail("state.courts", "must be a non-empty list")
        self.court_count = len(courts)

        for position, court in enumerate(courts):
            path = f"state.courts[{position}]"
            self._require_dict(court, path)
            self._require_keys(court, COURT_KEYS, path)
            if court["id"] != position + 1 or not self._is_int(court["id"]):
                self._fail(f"{path}.id", f"expected court id {position + 1}")

            if court["current_match"] is not None:
                if court["waiting_team"] is not None:
                    self._fail(path, "has both a match and a waiting team")
                self._validate_match(court["current_match"], f"{path}.current_match")
            elif court["waiting_team"] is not None:
                self._validate_team(court["waiting_team"], f"{path}.waiting_team")

    def _validate_history(self, history: Any) -> None:
        if not isinstance(history, list):
            self._fail("state.match_history", "must be a list")

        for position, result in enumerate(history):
            path = f"state.match_history[{position}]"
            self._require_dict(result, path)
            self._require_keys(result, RESULT_KEYS, path)

            teams = self._validate_match(result["match"], f"{path}.match")
            winner = self._validate_team(result["winner"], f"{path}.winner")
            loser = self._validate_team(result["loser"], f"{path}.loser")
            if {winner, loser} != set(teams):
                self._fail(path, "winner and loser must be the two teams of the match")

            if result["scores"] is not None:
                self._validate_scores(result["scores"], teams, winner, f"{path}.scores")

            timestamp = result["timestamp"]
            if not isinstance(timestamp, str):
                self._fail(f"{path}.timestamp", "must be an ISO 8601 string")
            try:
                isoparse(timestamp)
            except ValueError:
                self._fail(f"{path}.timestamp", f"cannot parse {timestamp!r}")

            court_id = result["court_id"]
            if not self._is_int(court_id) or not 1 <= court_id <= self.court_count:
                self._fail(f"{path}.court_id", f"no court {court_id!r}")

    def _validate_scores(
        self,
        scores: Any,
        teams: List[FrozenSet[int]],
        winner: FrozenSet[int],
        path: str,
    ) -> None:
        if not isinstance(scores, list) or len(scores) != 2:
            self._fail(path, "must be a list of two scores")

        values = []
        score_teams = []
        for position, entry in enumerate(scores):
            entry_path = f"{path}[{position}]"
            self._require_dict(entry, entry_path)
            self._require_keys(entry, {"team", "score"}, entry_path)
            score_teams.append(self._validate_team(entry["team"], f"{entry_path}.team"))
            values.append(self._validate_points(entry["score"], f"{entry_path}.score"))

        if set(score_teams) != set(teams):
            self._fail(path, "scores must belong to the two teams of the match")
        if values[0] == values[1]:
            self._fail(path, "tied scores")
        if score_teams[0] != winner or values[0] < values[1]:
            self._fail(path, "first score must be the winner's, and the higher one")

    def _validate_match(self, match: Any, path: str) -> List[FrozenSet[int]]:
        self._require_dict(match, path)
        self._require_keys(match, MATCH_KEYS, path)

        number = match["match_number"]
        if not self._is_int(number) or number < 1:
            self._fail(f"{path}.match_number", "must be a positive integer")
        if number in self.match_numbers:
            self._fail(f"{path}.match_number", f"match number {number} used twice")
        self.match_numbers.add(number)

        team1 = self._validate_team(match["team1"], f"{path}.team1")
        team2 = self._validate_team(match["team2"], f"{path}.team2")
        if team1 & team2:
            self._fail(path, "both teams share a player")

        scores = match["current_scores"]
        self._require_dict(scores, f"{path}.current_scores")
        self._require_keys(scores, {"team1", "team2"}, f"{path}.current_scores")
        for key in ("team1", "team2"):
            self._validate_points(scores[key], f"{path}.current_scores.{key}")
        return [team1, team2]

    def _validate_team_list(self, teams: Any, path: str) -> List[FrozenSet[int]]:
        if not isinstance(teams, list):
            self._fail(path, "must be a list")
        return [
            self._validate_team(team, f"{path}[{position}]")
            for position, team in enumerate(teams)
        ]

    def _validate_team(self, team: Any, path: str) -> FrozenSet[int]:
        self._require_dict(team, path)
        self._require_keys(team, {"player1", "player2"}, path)
        id1 = self._validate_player(team["player1"], f"{path}.player1")
        id2 = self._validate_player(team["player2"], f"{path}.player2")
        if id1 == id2:
            self._fail(path, f"player {id1} appears twice in one team")
        return frozenset((id1, id2))

    def _validate_player(self, player: Any, path: str) -> int:
        self._require_dict(player, path)
        self._require_keys(player, {"id", "name"}, path)
        player_id, name = player["id"], player["name"]
        if not self._is_int(player_id):
            self._fail(f"{path}.id", "must be an integer")
        if not isinstance(name, str):
            self._fail(f"{path}.name", "must be a string")

        known = self.player_names.setdefault(player_id, name)
        if known != name:
            self._fail(path, f"player {player_id} is named both {known!r} and {name!r}")
        return player_id

    def _validate_points(self, value: Any, path: str) -> int:
        if not self._is_int(value) or value < 0:
            self._fail(path, "must be a non-negative integer")
        return value

    # ========== Invariants ==========

    def _check_live_players(
        self, courts: List[Dict[str, Any]], queue_teams: List[FrozenSet[int]]
    ) -> None:
        live: List[FrozenSet[int]] = []
        for court in courts:
            match = court["current_match"]
            if match is not None:
                live.append(self._team_ids(match["team1"]))
                live.append(self._team_ids(match["team2"]))
            elif court["waiting_team"] is not None:
                live.append(self._team_ids(court["waiting_team"]))
        live.extend(queue_teams)

        seen: Set[int] = set()
        for team in live:
            repeated = seen & team
            if repeated:
                self._fail(
                    "state",
                    f"player {min(repeated)} is on more than one court or queue slot",
                )
            seen |= team

    # ========== Helpers ==========

    @staticmethod
    def _team_ids(team: Dict[str, Any]) -> FrozenSet[int]:
        return frozenset((team["player1"]["id"], team["player2"]["id"]))

    @staticmethod
    def _is_int(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def _require_dict(self, value: Any, path: str) -> None:
        if not isinstance(value, dict):
            self._fail(path, "must be an object")

    def _require_keys(self, value: Dict[str, Any], keys: Set[str], path: str) -> None:
        missing = keys - value.keys()
        if missing:
            self._fail(path, f"missing {', '.join(sorted(missing))}")
        extra = value.keys() - keys
        if extra:
            self._fail(path, f"unexpected {', '.join(sorted(extra))}")

    @staticmethod
    def _fail(path: str, reason: str) -> None:
        logger.warning(f"Rejected saved state: {path}: {reason}")
        raise CorruptStateError(f"{path}: {reason}")


_default_codec = StateCodec()


def encode_state(state: ManagerState) -> str:
    """Encode state with the default codec."""
    return _default_codec.encode(state)


def decode_state(blob: str) -> ManagerState:
    """Decode state with the default codec."""
    return _default_codec.decode(blob)
