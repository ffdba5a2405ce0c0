"""Use case for an on-demand analysis of the current lobby or game."""
import logging
from dataclasses import dataclass
from typing import Optional

from domain.entities import LobbyAnalysis
from domain.interfaces import IGameClient, IUserConfigRepository
from infrastructure.api import LCUConnectionError, LCUCredentialsNotFound, LCURequestError
from application.services.lobby import LobbyDetector

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "No account configured. Run the settings command first."
CLIENT_NOT_RUNNING = "League Client is not running. Start the client and try again."
CREDENTIALS_NOT_FOUND = (
    "League Client credentials not found. Make sure the client is running, "
    "or set LCU_LOCKFILE to the lockfile path."
)
NOT_IN_GAME = "Not in a lobby, champion select or active game."


@dataclass
class LobbyLookup:
    analysis: Optional[LobbyAnalysis] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.analysis is not None


class AnalyzeLobbyUseCase:
    def __init__(self, client: IGameClient, detector: LobbyDetector, users: IUserConfigRepository):
        self.client = client
        self.detector = detector
        self.users = users

    async def execute(self) -> LobbyLookup:
        if self.users.get_user_config() is None:
            return LobbyLookup(error=NOT_CONFIGURED)
        try:
            roster = await self.client.get_lobby_roster()
        except LCUCredentialsNotFound:
            return LobbyLookup(error=CREDENTIALS_NOT_FOUND)
        except LCUConnectionError as exc:
            logger.warning(f"client unreachable: {exc}")
            await self.client.reset()
            return LobbyLookup(error=CLIENT_NOT_RUNNING)
        except LCURequestError as exc:
            logger.info(f"no roster: {exc}")
            return LobbyLookup(error=NOT_IN_GAME)
        return LobbyLookup(analysis=self.detector.analyze(roster))
