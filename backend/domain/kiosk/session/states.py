"""SessionState - screens of the kiosk flow."""

from enum import Enum


class SessionState(str, Enum):
    """Kiosk session state (exactly one active at a time).

    Flow: WELCOME -> DISH_SELECT -> THANK_YOU | SCORE -> LEADERBOARD,
    with ERROR reachable from anywhere and WELCOME as the only exit.
    """

    WELCOME = "welcome"
    DISH_SELECT = "dish_select"
    THANK_YOU = "thank_you"
    SCORE = "score"
    LEADERBOARD = "leaderboard"
    ERROR = "error"

    def is_interactive(self) -> bool:
        """True for states where the idle timer runs."""
        return self not in (SessionState.WELCOME, SessionState.ERROR)

    def requires_dish(self) -> bool:
        """True for states where a dish kind must be selected."""
        return self in (SessionState.THANK_YOU, SessionState.SCORE, SessionState.LEADERBOARD)
