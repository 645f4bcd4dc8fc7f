"""Type hints used in Court Queue."""

from typing import TYPE_CHECKING, Iterable, Literal, Mapping, Tuple, Union

if TYPE_CHECKING:
    from courtqueue.models.match import Score
    from courtqueue.models.player import Team

# Team slot on a court, 1 = team1, 2 = team2
TeamIndex = Literal[1, 2]

# Score -> team mapping handed over when a match ends, e.g. {21: team_a, 15: team_b}
ScoreMap = Mapping[int, "Team"]
# Anything record_result accepts: a score map, Score objects or (score, team) tuples
ScoreEntries = Union[ScoreMap, Iterable[Union["Score", Tuple[int, "Team"]]]]
# Recorded scores of a finished match, winner first
ScorePair = Tuple["Score", "Score"]
