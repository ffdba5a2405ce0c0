"""Interface of the local game client (LCU) as the core needs it."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class GameClientError(Exception):
    """The local game client could not be reached or gave an unusable answer."""


@dataclass(frozen=True)
class PhaseSnapshot:
    """One poll of the client: raw phase string (None when unreachable),
    whether identities are currently hidden, and the queue id if known."""

    phase: Optional[str]
    anonymized: bool = False
    queue_id: Optional[int] = None


class IGameClient(ABC):
    @abstractmethod
    async def get_phase_snapshot(self) -> PhaseSnapshot:
        pass

    @abstractmethod
    async def get_lobby_roster(self) -> List[Dict[str, Any]]:
        """Raw player descriptors from champion select or the live game."""

    async def reset(self) -> None:
        """Forget cached connection details so the next call reconnects."""
