"""
Read-only projections of a MatchState for presentation.

Every function here is pure: same state in, equal view model out.
ScoreboardProjector adds memoization keyed on the store version.
"""
from typing import Dict, List, Optional, Tuple

from scoreboard.config import (
    EMPTY_PLAYER_LABEL,
    MATCH_TYPE_LABELS,
    PLAYER_SEPARATOR,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
)
from scoreboard.match_store import MatchStore
from scoreboard.models import (
    MatchState,
    ScoreboardTeam,
    ScoreboardViewModel,
    SetProgression,
    SetProgressionPoint,
    SetScore,
    TeamState,
    zero_scores,
)


def is_match_in_progress(state: MatchState) -> bool:
    return state.status == STATUS_IN_PROGRESS


def can_undo(state: MatchState) -> bool:
    return len(state.history) > 0


def match_winner(state: MatchState) -> Optional[str]:
    if state.status != STATUS_COMPLETED or not state.completed_games:
        return None
    return state.completed_games[-1].winner


def ordered_teams(state: MatchState) -> List[TeamState]:
    return [state.teams[team_id] for team_id in state.court_order]


def player_label(team: TeamState) -> str:
    if not team.players:
        return EMPTY_PLAYER_LABEL
    return PLAYER_SEPARATOR.join(team.players)


def scoreboard_teams(state: MatchState) -> Tuple[ScoreboardTeam, ...]:
    return tuple(
        ScoreboardTeam(
            id=team.id,
            label=team.label,
            score=team.score,
            is_serving=state.serving_team == team.id,
            player_label=player_label(team),
        )
        for team in ordered_teams(state)
    )


def _is_current_game(state: MatchState, game_number: int, completed: bool) -> bool:
    return (
        not completed
        and state.status != STATUS_COMPLETED
        and state.current_game == game_number
    )


def set_scores(state: MatchState) -> Tuple[SetScore, ...]:
    completed_by_game = {game.game_number: game for game in state.completed_games}
    result = []

    for game_number in range(1, state.total_games + 1):
        completed = completed_by_game.get(game_number)
        is_current = _is_current_game(state, game_number, completed is not None)

        if completed is not None:
            scores = dict(completed.scores)
        elif is_current:
            scores = state.scores()
        else:
            scores = zero_scores()

        result.append(
            SetScore(
                game_number=game_number,
                scores=scores,
                is_complete=completed is not None,
                is_current=is_current,
            )
        )

    return tuple(result)


def set_progressions(state: MatchState) -> Tuple[SetProgression, ...]:
    """
    Cumulative score after each rally, per game.

    Each game starts at rally 0 with its baseline score. History snapshots
    hold the score *before* each point, so the score *after* a point is read
    from the following snapshot while it stays in the same game, otherwise
    from the completed game record or the live score.
    """
    completed_by_game = {game.game_number: game for game in state.completed_games}
    live_scores = state.scores()
    history = state.history
    replayed: Dict[int, List[Dict[str, int]]] = {}

    for index, snapshot in enumerate(history):
        game_number = snapshot.current_game
        points = replayed.setdefault(game_number, [dict(snapshot.scores)])
        next_snapshot = history[index + 1] if index + 1 < len(history) else None

        if next_snapshot is not None and next_snapshot.current_game == game_number:
            after = next_snapshot.scores
        elif game_number in completed_by_game:
            after = completed_by_game[game_number].scores
        elif (
            next_snapshot is None
            and state.current_game == game_number
            and state.status != STATUS_COMPLETED
        ):
            after = live_scores
        else:
            after = snapshot.scores

        points.append(dict(after))

    result = []
    for game_number in range(1, state.total_games + 1):
        completed = completed_by_game.get(game_number)
        is_current = _is_current_game(state, game_number, completed is not None)
        final = dict(completed.scores) if completed is not None else None

        if game_number in replayed:
            points = replayed[game_number]
            if final is not None:
                if points[-1] != final:
                    points.append(final)
            elif is_current and points[-1] != live_scores:
                points.append(dict(live_scores))
        else:
            points = [zero_scores()]
            if final is not None:
                points.append(final)
            elif is_current and live_scores != zero_scores():
                points.append(dict(live_scores))

        result.append(
            SetProgression(
                game_number=game_number,
                points=tuple(
                    SetProgressionPoint(rally=rally, scores=scores)
                    for rally, scores in enumerate(points)
                ),
                is_complete=completed is not None,
                is_current=is_current,
            )
        )

    return tuple(result)


def build_view_model(state: MatchState) -> ScoreboardViewModel:
    return ScoreboardViewModel(
        match_in_progress=is_match_in_progress(state),
        match_title=state.match_title,
        match_type_label=MATCH_TYPE_LABELS[state.match_type],
        current_game=state.current_game,
        total_games=state.total_games,
        venue_name=state.venue_name,
        can_undo=can_undo(state),
        teams=scoreboard_teams(state),
        set_scores=set_scores(state),
        set_progressions=set_progressions(state),
    )


class ScoreboardProjector:
    """Recomputes the view model only when the store version changes."""

    def __init__(self, store: MatchStore):
        self._store = store
        self._cached_version: Optional[int] = None
        self._cached: Optional[ScoreboardViewModel] = None

    def view_model(self) -> ScoreboardViewModel:
        version = self._store.version
        if self._cached is None or self._cached_version != version:
            self._cached = build_view_model(self._store.state)
            self._cached_version = version
        return self._cached
