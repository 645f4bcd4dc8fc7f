from datetime import datetime, timedelta, timezone

import pytest

from courtqueue import QueueManager
from courtqueue.models import Player, Team

NAMES = [
    "Ana", "Ben", "Cat", "Dan", "Eve", "Fin", "Gus", "Hal", "Ivy", "Jay",
    "Kim", "Lou", "Max", "Ned", "Oli", "Pam", "Quin", "Rae", "Sam", "Tom",
]


def make_team(number: int) -> Team:
    """Team number n holds players 2n-1 and 2n."""
    first, second = 2 * number - 1, 2 * number
    return Team(
        player1=Player(first, NAMES[(first - 1) % len(NAMES)]),
        player2=Player(second, NAMES[(second - 1) % len(NAMES)]),
    )


class FakeClock:
    """Clock advancing one minute per call."""

    def __init__(self):
        self.now = datetime(2025, 6, 1, 18, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def teams():
    """Teams T1..T10."""
    return [make_team(n) for n in range(1, 11)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(teams, clock):
    """Two courts, six teams: (T1, T2) and (T3, T4) playing, T5 and T6 waiting."""
    queue_manager = QueueManager(2, clock=clock)
    queue_manager.initialize(teams[:6])
    return queue_manager
