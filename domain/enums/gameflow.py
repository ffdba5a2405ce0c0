"""Live game-client phases and UI status tones."""
from enum import Enum
from typing import Optional


class StatusTone(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class GameflowPhase(Enum):
    """Phases reported by /lol-gameflow/v1/gameflow-phase.

    Values are the normalized spellings (lowercase, no spaces/underscores).
    ``CLIENT_UNREACHABLE`` is not sent by the client; it stands for "no answer".
    """

    CLIENT_UNREACHABLE = "clientunreachable"
    NONE = "none"
    LOBBY = "lobby"
    MATCHMAKING = "matchmaking"
    READY_CHECK = "readycheck"
    CHAMP_SELECT = "champselect"
    GAME_START = "gamestart"
    IN_PROGRESS = "inprogress"
    RECONNECT = "reconnect"
    WAITING_FOR_STATS = "waitingforstats"
    PRE_END_OF_GAME = "preendofgame"
    END_OF_GAME = "endofgame"

    @classmethod
    def parse(cls, raw: Optional[str]) -> 'GameflowPhase':
        """Normalize a raw phase string. ``None`` means the client did not answer;
        anything unrecognized is treated like ``NONE``."""
        if raw is None:
            return cls.CLIENT_UNREACHABLE
        key = "".join(ch for ch in str(raw).lower() if ch.isalnum())
        if key in _UNREACHABLE_SPELLINGS:
            return cls.CLIENT_UNREACHABLE
        try:
            return cls(key)
        except ValueError:
            return cls.NONE


_UNREACHABLE_SPELLINGS = {"clientunreachable", "clientnotreachable", "notreachable", "unreachable"}

# Phases during which a game is (or is about to be) live.
LIVE_PHASES = frozenset({
    GameflowPhase.CHAMP_SELECT,
    GameflowPhase.IN_PROGRESS,
    GameflowPhase.GAME_START,
    GameflowPhase.RECONNECT,
})
