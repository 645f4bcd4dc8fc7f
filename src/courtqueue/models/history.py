"""Append-only ledger of finished matches."""

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

from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from courtqueue.exceptions import MatchIndexError
from courtqueue.models.match import MatchResult, Score
from courtqueue.models.player import Team


class MatchHistory:
    """Finished matches in the order they were played.

    Entries are never removed or reordered. The only change allowed after
    appending is a score correction through ``correct``.
    """

    def __init__(self, results: Optional[Iterable[MatchResult]] = None):
        self._results: List[MatchResult] = list(results) if results is not None else []

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[MatchResult]:
        return iter(self._results)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MatchHistory):
            return self._results == other._results
        return NotImplemented

    def __repr__(self) -> str:
        return f"MatchHistory({len(self._results)} results)"

    def as_tuple(self) -> Tuple[MatchResult, ...]:
        """Read-only view of the history, oldest first."""
        return tuple(self._results)

    def append(self, result: MatchResult) -> None:
        self._results.append(result)

    def get(self, index: int) -> MatchResult:
        """Get the result at a position in play order.

        Raises:
            MatchIndexError: If index is out of range
        """
        if not 0 <= index < len(self._results):
            raise MatchIndexError(
                f"Match index {index} is out of range "
                f"(history has {len(self._results)} matches)"
            )
        return self._results[index]

    def correct(
        self, index: int, winner: Team, loser: Team, scores: Tuple[Score, Score]
    ) -> MatchResult:
        """Overwrite the outcome of an entry, leaving its match and position alone."""
        result = self.get(index)
        result.winner = winner
        result.loser = loser
        result.scores = scores
        return result

    def to_list(self) -> List[Dict[str, Any]]:
        """Serialize history to a list of result dictionaries."""
        return [r.to_dict() for r in self._results]

    @classmethod
    def from_list(cls, data: Iterable[Dict[str, Any]]) -> "MatchHistory":
        """Deserialize history from a list of result dictionaries."""
        return cls(MatchResult.from_dict(r) for r in data)
