import logging
from typing import Dict, List, Sequence

from scoreboard.config import (
    MATCH_TYPES,
    MAX_POINT,
    MID_GAME_SWITCH_POINT,
    POINTS_TO_WIN,
    SIDE_A,
    SIDE_B,
    SINGLES,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    TEAM_IDS,
    TEAM_LABELS,
    TOTAL_GAMES,
    WIN_BY,
    games_needed_to_win,
    opponent_of,
)
from scoreboard.models import (
    CompletedGame,
    CourtOrder,
    MatchState,
    MatchType,
    ScoreSnapshot,
    TeamId,
    TeamState,
    zero_scores,
)


logger = logging.getLogger(__name__)


def sanitize_names(names: Sequence[str]) -> List[str]:
    return [name.strip() for name in names if name.strip()]


class ScoreEngine:
    """
    Badminton score engine.

    Responsibilities:
    - Start a match from setup input
    - Apply rally points (side-out serving, mid-game switch, game & match lifecycle)
    - Keep a snapshot stack so every point can be undone

    Commands mutate the wrapped MatchState in place and return whether
    anything changed. Invalid-state commands are ignored, never raised.
    """

    def __init__(self, match: MatchState):
        self.match = match

    # =========================================================
    # PUBLIC API
    # =========================================================

    def start_match(self, match_type: MatchType, player_names: Dict[TeamId, Sequence[str]]) -> bool:
        self._validate_start(match_type, player_names)

        match = self.match
        match.status = STATUS_IN_PROGRESS
        match.match_type = match_type
        match.current_game = 1
        match.total_games = TOTAL_GAMES
        match.games_won = zero_scores()
        match.court_order = (SIDE_A, SIDE_B)
        match.serving_team = match.court_order[0]
        match.has_switched_mid_game = False
        match.history = []
        match.completed_games = []
        match.teams = {
            team_id: TeamState(
                id=team_id,
                label=TEAM_LABELS[team_id],
                players=self._players_for(match_type, player_names[team_id]),
                score=0,
            )
            for team_id in TEAM_IDS
        }

        logger.info(
            "Match started (%s): %s vs %s",
            match_type,
            match.teams[SIDE_A].players,
            match.teams[SIDE_B].players,
        )
        return True

    def add_point(self, team_id: TeamId) -> bool:
        self._validate_team(team_id)

        match = self.match
        if match.status != STATUS_IN_PROGRESS:
            logger.debug("Ignoring point for %s: match is %s", team_id, match.status)
            return False

        match.history.append(self._take_snapshot())
        match.teams[team_id].score += 1

        scores = match.scores()
        self._apply_mid_game_switch(scores)

        match.serving_team = team_id

        if self._is_game_won(scores[team_id], scores[opponent_of(team_id)]):
            self._finalize_game(team_id, scores)
        else:
            logger.debug(
                "Point %s: %d-%d (game %d)",
                team_id,
                scores[SIDE_A],
                scores[SIDE_B],
                match.current_game,
            )

        return True

    def undo_last_point(self) -> bool:
        match = self.match
        if not match.history:
            logger.debug("Nothing to undo")
            return False

        snapshot = match.history.pop()

        for team_id in TEAM_IDS:
            match.teams[team_id].score = snapshot.scores[team_id]
        match.serving_team = snapshot.serving_team
        match.current_game = snapshot.current_game
        match.games_won = dict(snapshot.games_won)
        match.status = snapshot.status
        match.court_order = snapshot.court_order
        match.has_switched_mid_game = snapshot.has_switched_mid_game
        match.completed_games = [_copy_game(game) for game in snapshot.completed_games]

        logger.info(
            "Undo: game %d back to %d-%d",
            match.current_game,
            snapshot.scores[SIDE_A],
            snapshot.scores[SIDE_B],
        )
        return True

    # =========================================================
    # VALIDATION
    # =========================================================

    def _validate_team(self, team_id: TeamId):
        if team_id not in TEAM_IDS:
            raise ValueError(f"Invalid team: {team_id}")

    def _validate_start(self, match_type: MatchType, player_names: Dict[TeamId, Sequence[str]]):
        if match_type not in MATCH_TYPES:
            raise ValueError(f"Invalid match type: {match_type}")

        if set(player_names.keys()) != set(TEAM_IDS):
            raise ValueError("player_names must contain exactly keys side_a and side_b")

        for team_id in TEAM_IDS:
            names = player_names[team_id]
            if isinstance(names, str) or len(names) != 2:
                raise ValueError(f"player_names[{team_id}] must be a pair of names")
            if not all(isinstance(name, str) for name in names):
                raise ValueError(f"player_names[{team_id}] must contain strings")

    @staticmethod
    def _players_for(match_type: MatchType, names: Sequence[str]) -> List[str]:
        if match_type == SINGLES:
            return sanitize_names([names[0], ""])[:1]
        return sanitize_names(names)

    # =========================================================
    # GAME LOGIC
    # =========================================================

    def _apply_mid_game_switch(self, scores: Dict[TeamId, int]):
        match = self.match

        # Exact equality: the switch fires on the point that reaches 11.
        if (
            not match.has_switched_mid_game
            and match.current_game == match.total_games
            and MID_GAME_SWITCH_POINT in scores.values()
        ):
            match.court_order = _swapped(match.court_order)
            match.has_switched_mid_game = True
            logger.info("Ends switched at %d in game %d", MID_GAME_SWITCH_POINT, match.current_game)

    @staticmethod
    def _is_game_won(winner_score: int, opponent_score: int) -> bool:
        has_lead = winner_score >= POINTS_TO_WIN and winner_score - opponent_score >= WIN_BY
        return has_lead or winner_score == MAX_POINT

    def _finalize_game(self, team_id: TeamId, scores: Dict[TeamId, int]):
        match = self.match

        match.games_won[team_id] += 1
        match.completed_games.append(
            CompletedGame(
                game_number=match.current_game,
                scores=dict(scores),
                winner=team_id,
            )
        )
        logger.info(
            "Game %d won by %s %d-%d",
            match.current_game,
            team_id,
            scores[SIDE_A],
            scores[SIDE_B],
        )

        if match.games_won[team_id] >= games_needed_to_win(match.total_games):
            match.status = STATUS_COMPLETED
            logger.info("Match won by %s (%s)", team_id, match.games_won)
            return

        match.current_game += 1
        for team in match.teams.values():
            team.score = 0
        match.court_order = _swapped(match.court_order)
        match.has_switched_mid_game = False

    # =========================================================
    # SNAPSHOT
    # =========================================================

    def _take_snapshot(self) -> ScoreSnapshot:
        match = self.match

        return ScoreSnapshot(
            scores=match.scores(),
            serving_team=match.serving_team,
            current_game=match.current_game,
            games_won=dict(match.games_won),
            status=match.status,
            court_order=match.court_order,
            has_switched_mid_game=match.has_switched_mid_game,
            completed_games=tuple(_copy_game(game) for game in match.completed_games),
        )


def _swapped(court_order: CourtOrder) -> CourtOrder:
    return (court_order[1], court_order[0])


def _copy_game(game: CompletedGame) -> CompletedGame:
    return CompletedGame(
        game_number=game.game_number,
        scores=dict(game.scores),
        winner=game.winner,
    )
