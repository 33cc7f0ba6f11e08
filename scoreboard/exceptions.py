class ScoreboardError(Exception):
    pass


class InvalidStateTransition(ScoreboardError):
    """Raised by a strict store when a command cannot apply to the current state."""
    pass


class PlayerNameError(ScoreboardError):

    def __init__(self, missing_slots):
        self.missing_slots = list(missing_slots)
        super().__init__(f"Missing player name(s): {', '.join(self.missing_slots)}")
