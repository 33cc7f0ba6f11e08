import cv2
import numpy as np

from scoreboard.config import SIDE_A, SIDE_B
from scoreboard.models import ScoreboardViewModel, SetProgression


WIDTH = 640
HEADER_HEIGHT = 60
TEAM_ROW_HEIGHT = 50
CHART_HEIGHT = 184
CHART_PADDING = {"top": 20, "right": 28, "bottom": 44, "left": 44}

BACKGROUND = (42, 23, 15)
WHITE = (255, 255, 255)
MUTED = (184, 163, 148)
SERVE = (0, 255, 0)
LINE_COLORS = {SIDE_A: (235, 99, 37), SIDE_B: (11, 158, 245)}


class ScoreboardRenderer:

    def __init__(self, view_model: ScoreboardViewModel):
        self.view_model = view_model

        if not self.view_model.teams:
            raise ValueError("View model has no teams")

    def render(self) -> np.ndarray:
        height = self._height()
        frame = np.zeros((height, WIDTH, 3), dtype=np.uint8)
        frame[:] = BACKGROUND

        self._draw_header(frame)
        self._draw_teams(frame)

        top = HEADER_HEIGHT + TEAM_ROW_HEIGHT * len(self.view_model.teams)
        for index, progression in enumerate(self.view_model.set_progressions):
            self._draw_progression(frame, progression, top + index * CHART_HEIGHT)

        return frame

    def save(self, output_path: str):
        if not cv2.imwrite(output_path, self.render()):
            raise RuntimeError(f"Cannot write scoreboard image: {output_path}")

    def _height(self) -> int:
        vm = self.view_model
        return (
            HEADER_HEIGHT
            + TEAM_ROW_HEIGHT * len(vm.teams)
            + CHART_HEIGHT * len(vm.set_progressions)
        )

    # ----------------------------------------------------
    # DRAWING
    # ----------------------------------------------------

    def _draw_header(self, frame):
        vm = self.view_model
        font = cv2.FONT_HERSHEY_SIMPLEX

        cv2.putText(frame, vm.match_title, (15, 28), font, 0.7, WHITE, 2)

        details = f"{vm.match_type_label}  Game {vm.current_game} of {vm.total_games}"
        if vm.venue_name:
            details += f"  @ {vm.venue_name}"
        cv2.putText(frame, details, (15, 50), font, 0.5, MUTED, 1)

    def _draw_teams(self, frame):
        font = cv2.FONT_HERSHEY_SIMPLEX

        for index, team in enumerate(self.view_model.teams):
            y = HEADER_HEIGHT + index * TEAM_ROW_HEIGHT + 32

            if team.is_serving:
                cv2.circle(frame, (22, y - 7), 7, SERVE, -1)

            cv2.putText(frame, team.label, (40, y), font, 0.6, WHITE, 2)
            cv2.putText(frame, team.player_label, (150, y), font, 0.5, MUTED, 1)
            cv2.putText(frame, str(team.score), (WIDTH - 80, y), font, 0.9, WHITE, 2)

    def _draw_progression(self, frame, progression: SetProgression, top: int):
        font = cv2.FONT_HERSHEY_SIMPLEX
        pad = CHART_PADDING

        left = pad["left"]
        right = WIDTH - pad["right"]
        chart_top = top + pad["top"]
        bottom = top + CHART_HEIGHT - pad["bottom"]

        if progression.is_complete:
            status = "Completed"
        elif progression.is_current:
            status = "In Progress"
        else:
            status = "Not Started"
        cv2.putText(
            frame,
            f"Set {progression.game_number}: {status}",
            (left, chart_top - 4),
            font,
            0.5,
            WHITE,
            1,
        )

        cv2.line(frame, (left, bottom), (right, bottom), MUTED, 1)
        cv2.line(frame, (left, chart_top), (left, bottom), MUTED, 1)

        points = progression.points
        max_rally = max(len(points) - 1, 1)
        max_score = max(
            [max(point.scores.values()) for point in points] + [1]
        )

        for team_id, color in LINE_COLORS.items():
            coords = np.array(
                [
                    (
                        left + int((right - left) * point.rally / max_rally),
                        bottom - int((bottom - chart_top) * point.scores[team_id] / max_score),
                    )
                    for point in points
                ],
                dtype=np.int32,
            )
            cv2.polylines(frame, [coords.reshape((-1, 1, 2))], False, color, 2)
