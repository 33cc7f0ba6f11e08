import pytest

from scoreboard.config import DOUBLES, SIDE_A, SIDE_B, SINGLES
from scoreboard.match_store import MatchStore
from scoreboard.models import MatchState
from scoreboard.projector import (
    ScoreboardProjector,
    build_view_model,
    can_undo,
    is_match_in_progress,
    match_winner,
    ordered_teams,
    set_progressions,
    set_scores,
)


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------

NAMES = {SIDE_A: ["Alice", ""], SIDE_B: ["Bob", ""]}


def store_after(rallies, match_type=SINGLES, names=None):
    store = MatchStore()
    store.start_match(match_type, names or NAMES)
    store.apply_rallies(rallies)
    return store


def progression_scores(progression):
    return [(p.scores[SIDE_A], p.scores[SIDE_B]) for p in progression.points]


# ---------------------------------------------------------
# Simple selectors
# ---------------------------------------------------------

def test_idle_state_projection():
    state = MatchState()

    assert is_match_in_progress(state) is False
    assert can_undo(state) is False
    assert match_winner(state) is None

    vm = build_view_model(state)
    assert vm.match_type_label == "Singles"
    assert [t.player_label for t in vm.teams] == ["Ready to Play", "Ready to Play"]


def test_in_progress_and_undo_flags():
    state = store_after("a").state

    assert is_match_in_progress(state) is True
    assert can_undo(state) is True


def test_match_winner_after_completion():
    state = store_after("b" * 42).state

    assert is_match_in_progress(state) is False
    assert match_winner(state) == SIDE_B


def test_ordered_teams_follow_court_order():
    state = store_after("a" * 21).state

    assert [t.id for t in ordered_teams(state)] == [SIDE_B, SIDE_A]


# ---------------------------------------------------------
# Team view
# ---------------------------------------------------------

def test_team_view_doubles_labels_and_serving():
    store = store_after(
        "ab",
        match_type=DOUBLES,
        names={SIDE_A: ["Ann", "Bea"], SIDE_B: ["Cat", ""]},
    )

    vm = build_view_model(store.state)

    assert vm.match_type_label == "Doubles"
    side_a, side_b = vm.teams
    assert side_a.player_label == "Ann & Bea"
    assert side_b.player_label == "Cat"
    assert side_a.is_serving is False
    assert side_b.is_serving is True
    assert (side_a.score, side_b.score) == (1, 1)


def test_view_model_metadata():
    vm = build_view_model(store_after("aaa").state)

    assert vm.match_in_progress is True
    assert vm.match_title == "Friendly Match"
    assert vm.current_game == 1
    assert vm.total_games == 3
    assert vm.venue_name is None
    assert vm.can_undo is True


# ---------------------------------------------------------
# Set scores
# ---------------------------------------------------------

def test_set_scores_mid_match():
    state = store_after("a" * 21 + "bab").state

    first, second, third = set_scores(state)

    assert first.scores == {SIDE_A: 21, SIDE_B: 0}
    assert first.is_complete and not first.is_current
    assert second.scores == {SIDE_A: 1, SIDE_B: 2}
    assert second.is_current and not second.is_complete
    assert third.scores == {SIDE_A: 0, SIDE_B: 0}
    assert not third.is_current and not third.is_complete


def test_set_scores_after_completion():
    state = store_after("a" * 21 + "b" * 4 + "a" * 21).state

    scores = set_scores(state)

    assert [s.is_complete for s in scores] == [True, True, False]
    assert [s.is_current for s in scores] == [False, False, False]
    assert scores[1].scores == {SIDE_A: 21, SIDE_B: 4}


# ---------------------------------------------------------
# Set progression
# ---------------------------------------------------------

def test_progression_replays_rallies():
    state = store_after("aba").state

    first = set_progressions(state)[0]

    assert progression_scores(first) == [(0, 0), (1, 0), (1, 1), (2, 1)]
    assert [p.rally for p in first.points] == [0, 1, 2, 3]
    assert first.is_current


def test_progression_fresh_match():
    progressions = set_progressions(store_after("").state)

    assert len(progressions) == 3
    for progression in progressions:
        assert progression_scores(progression) == [(0, 0)]
    assert [p.is_current for p in progressions] == [True, False, False]


def test_progression_across_game_boundary():
    state = store_after("a" * 21 + "b").state

    first, second, third = set_progressions(state)

    assert len(first.points) == 22
    assert progression_scores(first)[-1] == (21, 0)
    assert first.is_complete
    assert progression_scores(second) == [(0, 0), (0, 1)]
    assert second.is_current
    assert progression_scores(third) == [(0, 0)]


def test_progression_after_match_won():
    state = store_after("a" * 21 + "ba" + "a" * 20).state

    second = set_progressions(state)[1]

    assert second.is_complete
    assert not second.is_current
    assert progression_scores(second)[-1] == (21, 1)
    assert len(second.points) == 23


def test_progression_follows_undo():
    state = store_after("aabu").state

    first = set_progressions(state)[0]

    assert progression_scores(first) == [(0, 0), (1, 0), (2, 0)]


def test_progression_without_history_uses_final_scores():
    state = store_after("a" * 21 + "b").state
    state.history = []

    first, second, _ = set_progressions(state)

    assert progression_scores(first) == [(0, 0), (21, 0)]
    assert progression_scores(second) == [(0, 0), (0, 1)]


# ---------------------------------------------------------
# Memoization
# ---------------------------------------------------------

def test_projector_caches_per_version():
    store = store_after("a")
    projector = ScoreboardProjector(store)

    vm1 = projector.view_model()
    assert projector.view_model() is vm1

    store.undo_last_point()
    store.undo_last_point()  # empty history: ignored
    vm2 = projector.view_model()

    assert vm2 is not vm1
    assert vm2.teams[0].score == 0
    assert projector.view_model() is vm2


def test_projection_is_pure():
    state = store_after("abba" * 6).state

    assert build_view_model(state) == build_view_model(state)


@pytest.mark.parametrize("rallies", ["", "ab", "a" * 21, "b" * 42])
def test_projection_does_not_mutate_state(rallies):
    store = store_after(rallies)
    state = store.state

    build_view_model(state)

    assert state == store.state
