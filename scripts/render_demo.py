import argparse

from scoreboard.config import DOUBLES, SIDE_A, SIDE_B
from scoreboard.match_store import MatchStore
from scoreboard.projector import ScoreboardProjector
from render.renderer import ScoreboardRenderer


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--out", type=str, default="scoreboard.png")
    args = ap.parse_args()

    store = MatchStore()
    store.start_match(DOUBLES, {SIDE_A: ["Ann", "Bea"], SIDE_B: ["Cat", "Dee"]})

    # Game 1: A 21-15, game 2 underway at 7-9
    store.apply_rallies("ab" * 15 + "a" * 6)
    store.apply_rallies("ab" * 7 + "bb")

    renderer = ScoreboardRenderer(ScoreboardProjector(store).view_model())
    renderer.save(args.out)
    print("Saved:", args.out)


if __name__ == "__main__":
    main()
