SIDE_A = "side_a"
SIDE_B = "side_b"
TEAM_IDS = (SIDE_A, SIDE_B)

SINGLES = "singles"
DOUBLES = "doubles"
MATCH_TYPES = (SINGLES, DOUBLES)

STATUS_IDLE = "idle"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

TOTAL_GAMES = 3
POINTS_TO_WIN = 21
WIN_BY = 2
MAX_POINT = 30
MID_GAME_SWITCH_POINT = 11

DEFAULT_MATCH_TITLE = "Friendly Match"
TEAM_LABELS = {SIDE_A: "Side A", SIDE_B: "Side B"}
MATCH_TYPE_LABELS = {SINGLES: "Singles", DOUBLES: "Doubles"}
EMPTY_PLAYER_LABEL = "Ready to Play"
PLAYER_SEPARATOR = " & "


def games_needed_to_win(total_games: int) -> int:
    return (total_games // 2) + 1


def opponent_of(team_id: str) -> str:
    return SIDE_B if team_id == SIDE_A else SIDE_A
