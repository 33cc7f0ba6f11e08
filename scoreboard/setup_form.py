from typing import Dict, List, Sequence, Tuple

from scoreboard.config import MATCH_TYPES, SINGLES, TEAM_IDS
from scoreboard.exceptions import PlayerNameError


def required_name_slots(match_type: str) -> List[Tuple[str, int]]:
    """Name slots the setup form must fill before a match can start."""
    if match_type not in MATCH_TYPES:
        raise ValueError(f"Invalid match type: {match_type}")

    slots = (0,) if match_type == SINGLES else (0, 1)
    return [(team_id, slot) for team_id in TEAM_IDS for slot in slots]


def missing_name_slots(match_type: str, player_names: Dict[str, Sequence[str]]) -> List[str]:
    missing = []
    for team_id, slot in required_name_slots(match_type):
        names = player_names.get(team_id) or ()
        name = names[slot] if slot < len(names) else ""
        if not name.strip():
            missing.append(f"{team_id}[{slot}]")
    return missing


def validate_player_names(match_type: str, player_names: Dict[str, Sequence[str]]):
    missing = missing_name_slots(match_type, player_names)
    if missing:
        raise PlayerNameError(missing)
