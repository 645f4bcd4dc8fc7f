from courtqueue.controllers.court_rotation import CourtRotation
from courtqueue.controllers.queue_manager import QueueManager
from courtqueue.controllers.result_recorder import ResultRecorder
from courtqueue.controllers.standings import StandingsCalculator, TeamStatistics
from courtqueue.controllers.undo_history import UndoHistory

__all__ = [
    "QueueManager",
    "CourtRotation",
    "ResultRecorder",
    "StandingsCalculator",
    "TeamStatistics",
    "UndoHistory",
]
