"""Local League Client (LCU) connector."""
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import httpx

from config import settings
from domain.interfaces import IGameClient, PhaseSnapshot
from .errors import LCUConnectionError, LCUCredentialsNotFound, LCURequestError

logger = logging.getLogger(__name__)

CHAMP_SELECT_PHASE = "ChampSelect"


@dataclass(frozen=True)
class LockfileCredentials:
    """Lockfile format: ``processName:pid:port:password:protocol``."""

    process_name: str
    pid: str
    port: int
    password: str
    protocol: str = "https"

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://127.0.0.1:{self.port}"


def parse_lockfile(content: str) -> Optional[LockfileCredentials]:
    parts = content.strip().split(":")
    if len(parts) < 4:
        return None
    process_name = parts[0]
    if "LeagueClient" not in process_name and "Riot Client" not in process_name:
        return None
    try:
        port = int(parts[2])
    except ValueError:
        return None
    protocol = parts[4] if len(parts) > 4 and parts[4] else "https"
    return LockfileCredentials(process_name, parts[1], port, parts[3], protocol)


def default_lockfile_paths() -> List[Path]:
    home = os.environ.get("HOME", "")
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA", "")
        program_data = os.environ.get("PROGRAMDATA", r"C:\ProgramData")
        return [
            Path(r"C:\Riot Games\League of Legends\lockfile"),
            Path(r"D:\Riot Games\League of Legends\lockfile"),
            Path(local) / "Riot Games" / "League of Legends" / "lockfile",
            Path(local) / "Riot Games" / "Riot Client" / "Config" / "lockfile",
            Path(program_data) / "Riot Games" / "League of Legends" / "lockfile",
        ]
    if sys.platform == "darwin":
        return [
            Path(home) / "Library" / "Application Support" / "Riot Games" / "League of Legends" / "lockfile",
            Path("/Applications/League of Legends.app/Contents/LoL/lockfile"),
        ]
    return [
        Path(home) / ".local" / "share" / "Riot Games" / "League of Legends" / "lockfile",
        Path(home) / "Games" / "league-of-legends" / "drive_c" / "Riot Games" / "League of Legends" / "lockfile",
    ]


def find_credentials(paths: Iterable[Path]) -> Optional[LockfileCredentials]:
    for path in paths:
        try:
            if not path.is_file():
                continue
            credentials = parse_lockfile(path.read_text(encoding="utf-8"))
        except OSError as exc:
            logger.debug(f"Cannot read lockfile {path}: {exc}")
            continue
        if credentials:
            return credentials
    return None


class LCUClient(IGameClient):
    """Read-only client for the local game client's HTTPS API.

    Credentials come from the lockfile and are cached until ``reset()``;
    the client uses a self-signed certificate, so verification is off.
    """

    def __init__(
        self,
        lockfile: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        credentials: Optional[LockfileCredentials] = None,
        timeout: Optional[float] = None,
    ):
        override = lockfile or settings.LCU_LOCKFILE
        self._lockfile_paths = [Path(override)] if override else default_lockfile_paths()
        self._transport = transport
        self._credentials = credentials
        self._timeout = settings.LCU_REQUEST_TIMEOUT if timeout is None else timeout
        self._session: Optional[httpx.AsyncClient] = None

    @property
    def connected(self) -> bool:
        return self._credentials is not None

    def connect(self) -> LockfileCredentials:
        if self._credentials is None:
            self._credentials = find_credentials(self._lockfile_paths)
        if self._credentials is None:
            raise LCUCredentialsNotFound("League Client is not running or credentials not found")
        return self._credentials

    async def reset(self) -> None:
        """Drop credentials and close the session bound to them."""
        self._credentials = None
        await self.aclose()

    async def aclose(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.aclose()

    def _client(self) -> httpx.AsyncClient:
        credentials = self.connect()
        if self._session is None:
            self._session = httpx.AsyncClient(
                base_url=credentials.base_url,
                auth=("riot", credentials.password),
                verify=False,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._session

    async def _request(self, endpoint: str) -> Optional[Any]:
        client = self._client()
        try:
            response = await client.get(endpoint)
        except httpx.TransportError as exc:
            raise LCUConnectionError(f"League Client did not answer: {exc}") from exc

        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as exc:
                raise LCURequestError(f"Failed to parse response from {endpoint}") from exc
        if response.status_code == 404:
            return None
        raise LCURequestError(
            f"Request {endpoint} failed with status {response.status_code}", response.status_code
        )

    # ── Endpoints ──────────────────────────────────────────────────────

    async def get_current_summoner(self) -> Optional[Dict]:
        return await self._request("/lol-summoner/v1/current-summoner")

    async def get_summoner(self, summoner_id: Any) -> Optional[Dict]:
        return await self._request(f"/lol-summoner/v1/summoners/{summoner_id}")

    async def get_champ_select(self) -> Optional[Dict]:
        return await self._request("/lol-champ-select/v1/session")

    async def get_gameflow_session(self) -> Optional[Dict]:
        return await self._request("/lol-gameflow/v1/session")

    async def get_lobby(self) -> Optional[Dict]:
        return await self._request("/lol-lobby/v2/lobby")

    async def get_gameflow_phase(self) -> Optional[str]:
        """Raw phase string, or None when the client cannot be reached."""
        try:
            phase = await self._request("/lol-gameflow/v1/gameflow-phase")
        except LCUConnectionError:
            return None
        return str(phase) if phase is not None else "None"

    async def get_phase_snapshot(self) -> PhaseSnapshot:
        phase = await self.get_gameflow_phase()
        if phase is None or phase == "None":
            return PhaseSnapshot(phase=phase)

        queue_id: Optional[int] = None
        session = await self.get_gameflow_session()
        if session:
            queue = (session.get("gameData") or {}).get("queue") or {}
            if isinstance(queue.get("id"), int):
                queue_id = queue["id"]

        anonymized = False
        if phase == CHAMP_SELECT_PHASE:
            champ_select = await self.get_champ_select()
            anonymized = is_anonymized(champ_select)
        return PhaseSnapshot(phase=phase, anonymized=anonymized, queue_id=queue_id)

    async def _with_summoner(self, entry: Dict[str, Any], source: str) -> Dict[str, Any]:
        descriptor = dict(entry)
        summoner_id = entry.get("summonerId")
        if summoner_id:
            try:
                summoner = await self.get_summoner(summoner_id)
            except LCURequestError as exc:
                logger.warning(f"Summoner lookup {summoner_id} failed: {exc}")
                summoner = None
            if summoner:
                descriptor.update({k: v for k, v in summoner.items() if v not in (None, "")})
        descriptor["source"] = source
        return descriptor

    async def get_lobby_roster(self) -> List[Dict[str, Any]]:
        """Champion select first, then the live game session, then the party lobby."""
        champ_select = await self.get_champ_select()
        if champ_select and champ_select.get("myTeam"):
            return [
                await self._with_summoner(entry, "championSelect")
                for entry in champ_select.get("myTeam") or []
            ]

        session = await self.get_gameflow_session()
        game_data = (session or {}).get("gameData") or {}
        if game_data.get("teamOne") or game_data.get("teamTwo"):
            players = list(game_data.get("teamOne") or []) + list(game_data.get("teamTwo") or [])
            return [await self._with_summoner(entry, "inGame") for entry in players]

        lobby = await self.get_lobby()
        if lobby and lobby.get("members"):
            return [await self._with_summoner(entry, "lobby") for entry in lobby["members"]]

        raise LCURequestError("Not in champion select or active game")


def is_anonymized(champ_select: Optional[Dict[str, Any]]) -> bool:
    """True while champion select hides teammates' identities."""
    if not champ_select:
        return False
    for entry in champ_select.get("myTeam") or []:
        if str(entry.get("nameVisibilityType", "")).upper() == "HIDDEN":
            return True
        if "puuid" in entry and not entry.get("puuid"):
            return True
    return False
