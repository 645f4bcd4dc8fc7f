import pytest

from courtqueue.exceptions import DuplicatePlayerError
from courtqueue.models import Player, Team
from courtqueue.pairing import PartnerHistory, TeamBuilder


def players(*ids):
    return [Player(i, f"P{i}") for i in ids]


@pytest.fixture
def history():
    """Players 1 and 2 partnered twice, so did 3 and 4."""
    partners = PartnerHistory()
    for _ in range(2):
        partners.record(Team(Player(1), Player(2)))
        partners.record(Team(Player(3), Player(4)))
    return partners


@pytest.mark.parametrize("seed", range(10))
def test_builder_avoids_frequent_partners(history, seed):
    result = TeamBuilder(history, seed=seed).build_teams(players(1, 2, 3, 4))

    pairs = {team.player_ids for team in result.teams}
    assert len(result.teams) == 2
    assert frozenset({1, 2}) not in pairs
    assert frozenset({3, 4}) not in pairs
    assert result.leftover == []


def test_odd_pool_leaves_one_player_out():
    result = TeamBuilder(seed=3).build_teams(players(1, 2, 3, 4, 5))
    assert len(result.teams) == 2
    assert len(result.leftover) == 1

    used = set()
    for team in result.teams:
        used |= team.player_ids
    assert used | {result.leftover[0].id} == {1, 2, 3, 4, 5}


def test_same_seed_gives_same_teams():
    pool = players(*range(1, 9))
    first = TeamBuilder(seed=42).build_teams(pool)
    second = TeamBuilder(seed=42).build_teams(pool)
    assert first.teams == second.teams


def test_mixed_teams_take_one_player_from_each_pool():
    pool1 = players(1, 2, 3)
    pool2 = players(11, 12)
    result = TeamBuilder(seed=0).build_mixed_teams(pool1, pool2)

    assert len(result.teams) == 2
    for team in result.teams:
        assert team.player1.id in {1, 2, 3}
        assert team.player2.id in {11, 12}
    assert len(result.leftover) == 1
    assert result.leftover[0].id in {1, 2, 3}


def test_mixed_teams_prefer_new_partners():
    partners = PartnerHistory()
    partners.record(Team(Player(1), Player(11)))
    result = TeamBuilder(partners, seed=5).build_mixed_teams(players(1), players(11, 12))
    assert result.teams == [Team(Player(1), Player(12))]


def test_duplicate_player_in_pool_is_rejected():
    with pytest.raises(DuplicatePlayerError):
        TeamBuilder().build_teams(players(1, 2, 2, 3))


def test_history_from_results(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    manager.record_result(1, {21: teams[0], 15: teams[4]})

    partners = PartnerHistory.from_results(manager.get_match_history())
    assert partners.count(1, 2) == 2
    assert partners.count(2, 1) == 2
    assert partners.count(3, 4) == 1
    assert partners.count(9, 10) == 1
    assert partners.count(1, 3) == 0


def test_history_dict_round_trip_and_merge(history):
    restored = PartnerHistory.from_dict(history.to_dict())
    assert restored.count(1, 2) == 2

    restored.merge(history)
    assert restored.count(3, 4) == 4
