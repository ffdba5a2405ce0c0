"""Gameflow State Classifier: client phase -> UI status and enrichment gate."""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from domain.enums import GameflowPhase, StatusTone, LIVE_PHASES
from domain.enums.queue_category import queue_name
from domain.interfaces import PhaseSnapshot

_STATUS: Dict[GameflowPhase, Tuple[StatusTone, str]] = {
    GameflowPhase.CLIENT_UNREACHABLE: (StatusTone.ERROR, "League Client is not running"),
    GameflowPhase.NONE: (StatusTone.INFO, "Waiting for a lobby"),
    GameflowPhase.LOBBY: (StatusTone.INFO, "In lobby"),
    GameflowPhase.MATCHMAKING: (StatusTone.INFO, "Searching for a match"),
    GameflowPhase.READY_CHECK: (StatusTone.INFO, "Match found, waiting for ready check"),
    GameflowPhase.CHAMP_SELECT: (StatusTone.INFO, "Champion select"),
    GameflowPhase.GAME_START: (StatusTone.SUCCESS, "Game starting"),
    GameflowPhase.IN_PROGRESS: (StatusTone.SUCCESS, "Game in progress"),
    GameflowPhase.RECONNECT: (StatusTone.WARNING, "Reconnecting to the game"),
    GameflowPhase.WAITING_FOR_STATS: (StatusTone.INFO, "Game ended, waiting for stats"),
    GameflowPhase.PRE_END_OF_GAME: (StatusTone.INFO, "Game ended"),
    GameflowPhase.END_OF_GAME: (StatusTone.INFO, "Game ended, refreshing match history"),
}

ENRICHMENT_PHASES = frozenset({
    GameflowPhase.LOBBY,
    GameflowPhase.CHAMP_SELECT,
    GameflowPhase.GAME_START,
    GameflowPhase.IN_PROGRESS,
    GameflowPhase.RECONNECT,
})

# Phases in which the vendor may hide identities.
PRE_GAME_PHASES = frozenset({
    GameflowPhase.LOBBY,
    GameflowPhase.MATCHMAKING,
    GameflowPhase.READY_CHECK,
    GameflowPhase.CHAMP_SELECT,
})

ANONYMIZED_MESSAGE = "Champion select, names hidden until lock-in"


@dataclass(frozen=True)
class GameflowStatus:
    phase: GameflowPhase
    tone: StatusTone
    message: str
    anonymized: bool = False
    queue_id: Optional[int] = None

    @property
    def should_enrich(self) -> bool:
        return should_enrich(self.phase, self.anonymized)

    @property
    def is_live(self) -> bool:
        return self.phase in LIVE_PHASES

    def to_dict(self) -> dict:
        return {
            'phase': self.phase.value,
            'tone': self.tone.value,
            'message': self.message,
            'anonymized': self.anonymized,
            'queue_id': self.queue_id,
        }


def should_enrich(phase: GameflowPhase, anonymized: bool = False) -> bool:
    """Per-player lookups run only while identities are visible."""
    if phase not in ENRICHMENT_PHASES:
        return False
    return not (anonymized and phase in PRE_GAME_PHASES)


def classify(
    raw_phase: Optional[str],
    anonymized: bool = False,
    queue_id: Optional[int] = None,
) -> GameflowStatus:
    phase = GameflowPhase.parse(raw_phase)
    tone, message = _STATUS[phase]
    hidden = anonymized and phase in PRE_GAME_PHASES
    if hidden and phase is GameflowPhase.CHAMP_SELECT:
        message = ANONYMIZED_MESSAGE
    if queue_id and phase not in (GameflowPhase.CLIENT_UNREACHABLE, GameflowPhase.NONE):
        message = f"{message} ({queue_name(queue_id)})"
    return GameflowStatus(phase=phase, tone=tone, message=message, anonymized=hidden, queue_id=queue_id)


def ends_live_session(previous: Optional[GameflowPhase], current: GameflowPhase) -> bool:
    """Leaving the live set means the game that was running is over."""
    return previous in LIVE_PHASES and current not in LIVE_PHASES


@dataclass(frozen=True)
class GameflowTransition:
    previous: Optional[GameflowPhase]
    status: GameflowStatus

    @property
    def changed(self) -> bool:
        return self.previous is not self.status.phase

    @property
    def game_ended(self) -> bool:
        return ends_live_session(self.previous, self.status.phase)


class GameflowStateMachine:
    """Remembers the previous phase so transitions can be detected."""

    def __init__(self) -> None:
        self.phase: Optional[GameflowPhase] = None

    def step(self, snapshot: PhaseSnapshot) -> GameflowTransition:
        status = classify(snapshot.phase, snapshot.anonymized, snapshot.queue_id)
        transition = GameflowTransition(previous=self.phase, status=status)
        self.phase = status.phase
        return transition

    def reset(self) -> None:
        self.phase = None
