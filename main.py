import argparse
import logging
from typing import List, Optional

from scoreboard.config import DOUBLES, SIDE_A, SIDE_B, SINGLES
from scoreboard.exceptions import ScoreboardError
from scoreboard.match_store import MatchStore
from scoreboard.models import ScoreboardViewModel
from scoreboard.projector import ScoreboardProjector, match_winner
from scoreboard.setup_form import validate_player_names


def name_pair(names: List[str]) -> List[str]:
    return (list(names) + ["", ""])[:2]


def format_scoreboard(vm: ScoreboardViewModel, winner: Optional[str] = None) -> str:
    lines = [f"{vm.match_title} ({vm.match_type_label})  Game {vm.current_game}/{vm.total_games}"]

    for team in vm.teams:
        serve = "*" if team.is_serving else " "
        lines.append(f" {serve} {team.label:<8} {team.player_label:<24} {team.score:>3}")

    sets = []
    for s in vm.set_scores:
        marker = "+" if s.is_current else ""
        sets.append(f"{s.scores[SIDE_A]}-{s.scores[SIDE_B]}{marker}")
    lines.append("   Sets: " + "  ".join(sets))

    if winner:
        team = next(t for t in vm.teams if t.id == winner)
        lines.append(f"   Winner: {team.label} ({team.player_label})")

    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Badminton scoreboard: replay rallies and print the score")
    p.add_argument("--type", choices=[SINGLES, DOUBLES], default=SINGLES)
    p.add_argument("--side-a", nargs="+", required=True, help="Player name(s) for side A")
    p.add_argument("--side-b", nargs="+", required=True, help="Player name(s) for side B")
    p.add_argument("--rallies", default="", help="Rally codes: a / b = point to side, u = undo")
    p.add_argument("--strict", action="store_true", help="Fail on points after the match ends")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    player_names = {SIDE_A: name_pair(args.side_a), SIDE_B: name_pair(args.side_b)}

    try:
        validate_player_names(args.type, player_names)

        store = MatchStore(strict=args.strict)
        store.start_match(args.type, player_names)
        store.apply_rallies(args.rallies)

    except (ScoreboardError, ValueError) as e:
        print("ERROR:", e)
        return 1

    projector = ScoreboardProjector(store)
    print(format_scoreboard(projector.view_model(), match_winner(store.state)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
