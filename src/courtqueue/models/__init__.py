from courtqueue.models.court import Court
from courtqueue.models.history import MatchHistory
from courtqueue.models.match import Match, MatchResult, MatchScores, Score
from courtqueue.models.player import (
    Player,
    Team,
    create_player,
    create_team,
    teams_equal,
)
from courtqueue.models.state import ManagerState
from courtqueue.models.team_queue import TeamQueue

__all__ = [
    "Player",
    "Team",
    "create_player",
    "create_team",
    "teams_equal",
    "Score",
    "MatchScores",
    "Match",
    "MatchResult",
    "Court",
    "TeamQueue",
    "MatchHistory",
    "ManagerState",
]
