import pytest

from courtqueue import QueueManager
from courtqueue.exceptions import (
    DuplicatePlayerError,
    InsufficientTeamsError,
    InvalidCourtCountError,
    InvalidCourtError,
    InvalidScoreError,
    MatchIndexError,
    QueueIndexError,
    QueueLockedError,
    TiedScoreError,
)
from courtqueue.models import Player, Score, Team


def court_teams(manager):
    """(team1, team2) per court, or the waiting team for idle courts."""
    summary = []
    for court in manager.get_courts():
        if court.current_match is not None:
            summary.append((court.current_match.team1, court.current_match.team2))
        else:
            summary.append(court.waiting_team)
    return summary


# ========== Initialization ==========


def test_initialize_fills_courts_in_order(manager, teams):
    courts = manager.get_courts()
    assert [c.id for c in courts] == [1, 2]
    assert courts[0].current_match.match_number == 1
    assert courts[1].current_match.match_number == 2
    assert court_teams(manager) == [(teams[0], teams[1]), (teams[2], teams[3])]
    assert manager.queue == (teams[4], teams[5])
    assert manager.next_match_number == 3
    assert manager.get_match_history() == ()
    for court in courts:
        scores = court.current_match.current_scores
        assert (scores.team1, scores.team2) == (0, 0)


def test_initialize_with_exactly_two_teams_per_court(teams):
    manager = QueueManager(2)
    manager.initialize(teams[:4])
    assert manager.queue == ()
    assert all(c.is_active for c in manager.get_courts())


def test_initialize_rejects_too_few_teams(teams):
    manager = QueueManager(3)
    before = manager.get_current_state()
    with pytest.raises(InsufficientTeamsError):
        manager.initialize(teams[:5])
    assert manager.get_current_state() == before
    assert all(c.is_idle for c in manager.get_courts())


def test_initialize_rejects_shared_players(teams):
    manager = QueueManager(1)
    overlapping = Team(Player(1, "Ana"), Player(99, "Zed"))
    with pytest.raises(DuplicatePlayerError):
        manager.initialize([teams[0], teams[1], overlapping])


def test_reinitialize_discards_previous_session(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    manager.initialize(teams[6:10])

    assert manager.get_match_history() == ()
    assert court_teams(manager) == [(teams[6], teams[7]), (teams[8], teams[9])]
    assert manager.next_match_number == 3
    assert not manager.can_undo


@pytest.mark.parametrize("court_count", [0, -2, 1.5, True])
def test_court_count_must_be_positive_integer(court_count):
    with pytest.raises(InvalidCourtCountError):
        QueueManager(court_count)


# ========== Recording Results ==========


def test_winner_stays_and_loser_rotates(manager, teams):
    result = manager.record_result(1, {21: teams[0], 15: teams[1]})

    court = manager.get_courts()[0]
    assert court.current_match.match_number == 3
    assert court.current_match.team1 == teams[0]
    assert court.current_match.team2 == teams[4]
    scores = court.current_match.current_scores
    assert (scores.team1, scores.team2) == (0, 0)
    assert manager.queue == (teams[5], teams[1])

    history = manager.get_match_history()
    assert len(history) == 1
    assert history[0] == result
    assert result.winner == teams[0]
    assert result.loser == teams[1]
    assert [s.score for s in result.scores] == [21, 15]
    assert result.court_id == 1
    assert result.match.match_number == 1


def test_team2_can_win(manager, teams):
    result = manager.record_result(2, {12: teams[2], 21: teams[3]})
    assert result.winner == teams[3]
    assert result.scores[0] == Score(teams[3], 21)
    assert court_teams(manager)[1] == (teams[3], teams[4])
    assert manager.queue == (teams[5], teams[2])


def test_result_accepts_score_objects(manager, teams):
    manager.record_result(1, [Score(teams[1], 21), Score(teams[0], 19)])
    assert court_teams(manager)[0] == (teams[1], teams[4])


def test_result_timestamps_come_from_clock(manager, teams, clock):
    first = manager.record_result(1, {21: teams[0], 15: teams[1]})
    second = manager.record_result(2, {21: teams[2], 15: teams[3]})
    assert second.timestamp > first.timestamp
    assert first.timestamp.tzinfo is not None


def test_tied_score_map_is_rejected(manager, teams):
    before = manager.get_current_state()
    # Equal keys collapse to a single entry
    with pytest.raises(TiedScoreError):
        manager.record_result(1, {10: teams[0], 10: teams[1]})
    with pytest.raises(TiedScoreError):
        manager.record_result(1, [Score(teams[0], 10), Score(teams[1], 10)])
    assert manager.get_current_state() == before
    assert not manager.can_undo


def test_result_for_wrong_teams_is_rejected(manager, teams):
    before = manager.get_current_state()
    with pytest.raises(InvalidScoreError):
        manager.record_result(1, {21: teams[0], 15: teams[2]})
    with pytest.raises(InvalidScoreError):
        manager.record_result(1, {21: teams[4]})
    assert manager.get_current_state() == before


@pytest.mark.parametrize("court_id", [0, 3, 99])
def test_result_on_unknown_court_is_rejected(manager, teams, court_id):
    with pytest.raises(InvalidCourtError):
        manager.record_result(court_id, {21: teams[0], 15: teams[1]})


def test_empty_queue_leaves_winner_waiting(teams):
    manager = QueueManager(1)
    manager.initialize(teams[:2])
    manager.record_result(1, {21: teams[0], 9: teams[1]})

    court = manager.get_courts()[0]
    assert court.is_idle
    assert court.waiting_team == teams[0]
    assert manager.queue == (teams[1],)
    with pytest.raises(InvalidCourtError):
        manager.record_result(1, {21: teams[0], 9: teams[1]})
    with pytest.raises(InvalidCourtError):
        manager.update_score(1, 1, 1)


def test_waiting_winner_gets_next_team_from_queue(teams):
    manager = QueueManager(1)
    manager.initialize(teams[:2])
    manager.record_result(1, {21: teams[0], 9: teams[1]})

    manager.add_teams_to_queue([teams[2]])

    court = manager.get_courts()[0]
    assert court.current_match.match_number == 2
    assert (court.current_match.team1, court.current_match.team2) == (teams[0], teams[1])
    assert court.waiting_team is None
    assert manager.queue == (teams[2],)


def test_waiting_court_is_served_before_rotating_court(teams):
    manager = QueueManager(2)
    manager.initialize(teams[:4])
    manager.record_result(1, {21: teams[0], 5: teams[1]})
    assert court_teams(manager) == [teams[0], (teams[2], teams[3])]
    assert manager.queue == (teams[1],)

    manager.record_result(2, {21: teams[2], 5: teams[3]})

    assert court_teams(manager) == [(teams[0], teams[1]), teams[2]]
    assert manager.get_courts()[0].current_match.match_number == 3
    assert manager.queue == (teams[3],)
    assert manager.next_match_number == 4


def test_match_numbers_increase(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    manager.record_result(2, {21: teams[2], 15: teams[3]})
    manager.record_result(1, {21: teams[0], 15: teams[4]})

    numbers = [r.match_number for r in manager.get_match_history()]
    assert numbers == [1, 2, 3]
    assert [c.current_match.match_number for c in manager.get_courts()] == [5, 4]
    assert manager.next_match_number == 6


# ========== Live Scores ==========


def test_update_score(manager):
    assert manager.update_score(1, 1, 1) == 1
    assert manager.update_score(1, 1, 2) == 3
    assert manager.update_score(1, 2, 5) == 5
    assert manager.update_score(1, 1, -1) == 2

    scores = manager.get_courts()[0].current_match.current_scores
    assert (scores.team1, scores.team2) == (2, 5)
    assert manager.get_courts()[1].current_match.current_scores.team1 == 0


def test_decrement_at_zero_is_a_no_op(manager):
    before = manager.get_current_state()
    assert manager.update_score(1, 1, -1) == 0
    assert manager.get_current_state() == before
    assert not manager.can_undo


def test_update_score_never_goes_negative(manager):
    manager.update_score(1, 2, 3)
    assert manager.update_score(1, 2, -10) == 0


def test_update_score_rejects_bad_team_index(manager):
    with pytest.raises(InvalidScoreError):
        manager.update_score(1, 3, 1)
    with pytest.raises(InvalidCourtError):
        manager.update_score(5, 1, 1)


def test_recorded_match_keeps_running_scores(manager, teams):
    manager.update_score(1, 1, 21)
    manager.update_score(1, 2, 18)
    result = manager.record_result(1, {21: teams[0], 18: teams[1]})
    assert result.match.current_scores.team1 == 21
    assert result.match.current_scores.team2 == 18


# ========== Queue Editing ==========


def test_add_teams_appends_in_order(manager, teams):
    manager.add_teams_to_queue([teams[6], teams[7]])
    assert manager.queue == (teams[4], teams[5], teams[6], teams[7])
    assert manager.get_queue() == manager.queue


def test_add_team_sharing_player_is_rejected(manager, teams):
    before = manager.get_current_state()
    on_court = Team(Player(1, "Ana"), Player(50, "New"))
    queued = Team(Player(10, "Jay"), Player(51, "New"))
    within_batch = [teams[6], Team(Player(13, "Max"), Player(52, "New"))]

    for batch in ([on_court], [queued], within_batch):
        with pytest.raises(DuplicatePlayerError):
            manager.add_teams_to_queue(batch)
    assert manager.get_current_state() == before


def test_add_teams_allowed_while_locked(manager, teams):
    manager.toggle_queue_lock()
    manager.add_teams_to_queue([teams[6]])
    assert manager.queue[-1] == teams[6]


def test_add_no_teams_does_nothing(manager):
    manager.add_teams_to_queue([])
    assert not manager.can_undo


def test_reorder_queue(manager, teams):
    manager.add_teams_to_queue([teams[6], teams[7]])
    manager.reorder_queue(3, 0)
    assert manager.queue == (teams[7], teams[4], teams[5], teams[6])
    manager.reorder_queue(0, 2)
    assert manager.queue == (teams[4], teams[5], teams[7], teams[6])


def test_reorder_locked_queue_is_rejected(manager, teams):
    assert manager.toggle_queue_lock() is True
    with pytest.raises(QueueLockedError):
        manager.reorder_queue(0, 1)
    assert manager.queue == (teams[4], teams[5])
    assert manager.toggle_queue_lock() is False
    manager.reorder_queue(0, 1)
    assert manager.queue == (teams[5], teams[4])


def test_locked_queue_still_rotates(manager, teams):
    manager.toggle_queue_lock()
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    assert manager.queue == (teams[5], teams[1])
    assert manager.queue_locked


@pytest.mark.parametrize("from_index, to_index", [(0, 2), (2, 0), (-1, 0), (0, -1)])
def test_reorder_out_of_range(manager, teams, from_index, to_index):
    with pytest.raises(QueueIndexError):
        manager.reorder_queue(from_index, to_index)
    assert manager.queue == (teams[4], teams[5])


def test_toggle_lock_is_not_undoable(manager):
    manager.toggle_queue_lock()
    assert manager.queue_locked
    assert not manager.can_undo


# ========== History Corrections ==========


def test_edit_result_changes_winner_but_not_courts(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    courts_before = manager.get_courts()
    queue_before = manager.queue

    corrected = manager.edit_match_result(
        0, [Score(teams[0], 18), Score(teams[1], 21)]
    )

    assert corrected.winner == teams[1]
    assert corrected.loser == teams[0]
    assert corrected.scores == (Score(teams[1], 21), Score(teams[0], 18))
    assert manager.get_match_history()[0] == corrected
    assert manager.get_courts() == courts_before
    assert manager.queue == queue_before


def test_edit_result_keeps_match_and_position(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    manager.record_result(2, {21: teams[2], 15: teams[3]})
    original = manager.get_match_history()[0]

    manager.edit_match_result(0, [Score(teams[0], 25), Score(teams[1], 23)])

    edited = manager.get_match_history()[0]
    assert edited.match == original.match
    assert edited.timestamp == original.timestamp
    assert edited.court_id == original.court_id
    assert manager.get_match_history()[1].match_number == 2


def test_edit_result_rejects_tie(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    before = manager.get_current_state()
    with pytest.raises(TiedScoreError):
        manager.edit_match_result(0, [Score(teams[0], 20), Score(teams[1], 20)])
    assert manager.get_current_state() == before


@pytest.mark.parametrize("match_index", [1, -1, 7])
def test_edit_result_rejects_bad_index(manager, teams, match_index):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    with pytest.raises(MatchIndexError):
        manager.edit_match_result(match_index, [Score(teams[0], 1), Score(teams[1], 2)])


def test_edit_result_rejects_other_teams(manager, teams):
    manager.record_result(1, {21: teams[0], 15: teams[1]})
    with pytest.raises(InvalidScoreError):
        manager.edit_match_result(0, [Score(teams[0], 21), Score(teams[4], 2)])
