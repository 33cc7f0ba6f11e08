from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple

from scoreboard.config import (
    DEFAULT_MATCH_TITLE,
    SIDE_A,
    SIDE_B,
    SINGLES,
    STATUS_IDLE,
    TEAM_LABELS,
    TOTAL_GAMES,
)


TeamId = Literal["side_a", "side_b"]
MatchType = Literal["singles", "doubles"]
MatchStatus = Literal["idle", "in-progress", "completed"]
CourtOrder = Tuple[TeamId, TeamId]


def zero_scores() -> Dict[TeamId, int]:
    return {SIDE_A: 0, SIDE_B: 0}


@dataclass
class TeamState:
    id: TeamId
    label: str
    players: List[str] = field(default_factory=list)
    score: int = 0


@dataclass(frozen=True)
class CompletedGame:
    game_number: int
    scores: Dict[TeamId, int]
    winner: TeamId


@dataclass(frozen=True)
class ScoreSnapshot:
    """
    Everything needed to reverse exactly one add_point call,
    captured before the point was applied.
    """
    scores: Dict[TeamId, int]
    serving_team: TeamId
    current_game: int
    games_won: Dict[TeamId, int]
    status: MatchStatus
    court_order: CourtOrder
    has_switched_mid_game: bool
    completed_games: Tuple[CompletedGame, ...]


def default_teams() -> Dict[TeamId, TeamState]:
    return {
        team_id: TeamState(id=team_id, label=TEAM_LABELS[team_id])
        for team_id in (SIDE_A, SIDE_B)
    }


@dataclass
class MatchState:
    status: MatchStatus = STATUS_IDLE
    match_title: str = DEFAULT_MATCH_TITLE
    match_type: MatchType = SINGLES
    current_game: int = 1
    total_games: int = TOTAL_GAMES
    venue_name: Optional[str] = None
    serving_team: TeamId = SIDE_A
    games_won: Dict[TeamId, int] = field(default_factory=zero_scores)
    court_order: CourtOrder = (SIDE_A, SIDE_B)
    has_switched_mid_game: bool = False
    teams: Dict[TeamId, TeamState] = field(default_factory=default_teams)
    history: List[ScoreSnapshot] = field(default_factory=list)
    completed_games: List[CompletedGame] = field(default_factory=list)

    def scores(self) -> Dict[TeamId, int]:
        return {team_id: team.score for team_id, team in self.teams.items()}


# --- VIEW MODELS ---

@dataclass(frozen=True)
class ScoreboardTeam:
    id: TeamId
    label: str
    score: int
    is_serving: bool
    player_label: str


@dataclass(frozen=True)
class SetScore:
    game_number: int
    scores: Dict[TeamId, int]
    is_complete: bool
    is_current: bool


@dataclass(frozen=True)
class SetProgressionPoint:
    rally: int
    scores: Dict[TeamId, int]


@dataclass(frozen=True)
class SetProgression:
    game_number: int
    points: Tuple[SetProgressionPoint, ...]
    is_complete: bool
    is_current: bool


@dataclass(frozen=True)
class ScoreboardViewModel:
    match_in_progress: bool
    match_title: str
    match_type_label: str
    current_game: int
    total_games: int
    venue_name: Optional[str]
    can_undo: bool
    teams: Tuple[ScoreboardTeam, ...]
    set_scores: Tuple[SetScore, ...]
    set_progressions: Tuple[SetProgression, ...]
