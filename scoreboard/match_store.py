import logging
from copy import deepcopy
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from scoreboard.config import SIDE_A, SIDE_B
from scoreboard.engine import ScoreEngine
from scoreboard.exceptions import InvalidStateTransition
from scoreboard.models import MatchState, MatchType, TeamId


logger = logging.getLogger(__name__)

Listener = Callable[["MatchStore"], None]

RALLY_CODES = {"a": SIDE_A, "b": SIDE_B}
UNDO_CODE = "u"


class MatchStore:
    """
    Owns the canonical MatchState for one scoring session.

    Responsibilities:
    - Expose start_match / add_point / undo_last_point
    - Hand out copies of the state, never the live object
    - Bump a version and notify subscribers after every change
    - Bulk replay rally codes (atomic)

    strict=False (the default) ignores commands that cannot apply.
    strict=True raises InvalidStateTransition for them instead.
    """

    def __init__(self, match: Optional[MatchState] = None, strict: bool = False):
        self._engine = ScoreEngine(deepcopy(match) if match is not None else MatchState())
        self._strict = strict
        self._version = 0
        self._listeners: List[Listener] = []

    # ---------------------------------------------------------
    # Read surface
    # ---------------------------------------------------------

    @property
    def state(self) -> MatchState:
        return deepcopy(self._engine.match)

    @property
    def version(self) -> int:
        return self._version

    # ---------------------------------------------------------
    # Commands
    # ---------------------------------------------------------

    def start_match(self, match_type: MatchType, player_names: Dict[TeamId, Sequence[str]]) -> MatchState:
        self._engine.start_match(match_type, player_names)
        self._commit()
        return self.state

    def add_point(self, team_id: TeamId) -> MatchState:
        if self._engine.add_point(team_id):
            self._commit()
        elif self._strict:
            raise InvalidStateTransition(
                f"Cannot add point while match is {self._engine.match.status}"
            )
        return self.state

    def undo_last_point(self) -> MatchState:
        if self._engine.undo_last_point():
            self._commit()
        elif self._strict:
            raise InvalidStateTransition("No point to undo")
        return self.state

    def apply_rallies(self, codes: Iterable[str]) -> MatchState:
        """
        Replay rally codes: "a" / "b" award a point, "u" undoes one.
        Blank and comma separators are skipped.
        Atomic: if any code is invalid (or strict mode rejects a command)
        the live state is left untouched.
        """
        codes = [code.strip(" ,").lower() for code in codes]
        codes = [code for code in codes if code]
        for code in codes:
            if code not in RALLY_CODES and code != UNDO_CODE:
                raise ValueError(f"Invalid rally code: {code!r}")

        temp = MatchStore(self._engine.match, strict=self._strict)
        for code in codes:
            if code == UNDO_CODE:
                temp.undo_last_point()
            else:
                temp.add_point(RALLY_CODES[code])

        if temp.version == 0:
            return self.state

        self._engine = temp._engine
        self._commit()
        logger.debug("Replayed %d rally code(s)", len(codes))
        return self.state

    # ---------------------------------------------------------
    # Subscriptions
    # ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self):
        self._version += 1
        for listener in list(self._listeners):
            listener(self)
