from __future__ import annotations

import asyncio
from typing import Optional

from domain.entities import LobbyAnalysis, PlayerRef
from domain.enums import Region, StatusTone
from infrastructure import LCUClient, RiotAPIClient
from infrastructure.api import RiotAPIError
from application.services.gameflow import GameflowMonitor, GameflowStatus
from application.use_cases import AnalyzeLobbyUseCase, ImportMatchHistoryUseCase, ImportFailedError
from config import settings
from core.logging.logger import get_logger
from .app_services import AppServices
from .render import lobby_lines, roster_lines, summary_lines

_TONE_COLORS = {
    StatusTone.SUCCESS: "\033[92m",
    StatusTone.ERROR: "\033[91m",
    StatusTone.INFO: "\033[96m",
    StatusTone.WARNING: "\033[93m",
}


class LobbyCommand:
    """Lobby analysis: one-shot, live monitor, and last match roster."""

    def __init__(self, services: AppServices, client: Optional[LCUClient] = None) -> None:
        self.services = services
        self.client = client or LCUClient()
        self._log = get_logger(__name__, service="lobby-cli")

    def _print_analysis(self, analysis: LobbyAnalysis) -> None:
        print("", flush=True)
        for line in lobby_lines(analysis):
            print(line, flush=True)

    def _print_status(self, status: GameflowStatus) -> None:
        color = _TONE_COLORS.get(status.tone, "")
        print(f"{color}[{status.tone.value}] {status.message}\033[0m", flush=True)

    def lookup_player(self) -> None:
        name = input("Player (Name#TAG): ").strip()
        if not name:
            return
        summary = self.services.aggregator.summary_for_configured_user(PlayerRef(display_name=name))
        if summary is None:
            print("No account configured.", flush=True)
            return
        for line in summary_lines(summary):
            print(line, flush=True)

    def print_last_match(self) -> None:
        config = self.services.players.get_user_config()
        if config is None:
            print("No account configured.", flush=True)
            return
        roster = self.services.matches.get_last_match_roster(config.puuid)
        if roster is None:
            print("No stored matches yet. Import your match history first.", flush=True)
            return
        for line in roster_lines(roster):
            print(line, flush=True)

    async def _reimport(self) -> None:
        config = self.services.players.get_user_config()
        api_key = (config.riot_api_key if config else None) or settings.RIOT_API_KEY
        if config is None or not api_key:
            return
        async with RiotAPIClient(api_key) as api:
            use_case = ImportMatchHistoryUseCase(api, self.services.matches)
            try:
                result = await use_case.execute(config.puuid, Region.from_string(config.region), count=5)
            except (ImportFailedError, RiotAPIError) as e:
                self._log.warning(f"post-game import failed: {e}")
                return
        if result.imported:
            print(f"Imported {result.imported} new match(es).", flush=True)
        self.print_last_match()

    async def analyze_once(self) -> None:
        use_case = AnalyzeLobbyUseCase(self.client, self.services.detector, self.services.players)
        try:
            lookup = await use_case.execute()
        finally:
            await self.client.aclose()
        if lookup.error:
            print(lookup.error, flush=True)
            return
        self._print_analysis(lookup.analysis)

    async def monitor(self) -> None:
        monitor = GameflowMonitor(
            self.client,
            self.services.detector,
            on_status=self._print_status,
            on_roster=self._print_analysis,
            on_game_ended=self._reimport,
        )
        print("Monitoring the League Client. Press Ctrl+C to stop.", flush=True)
        try:
            await monitor.run()
        finally:
            await self.client.aclose()

    def run(self) -> None:
        while True:
            print("\n=== Lobby ===", flush=True)
            print("1) Analyze current lobby / game", flush=True)
            print("2) Live monitor", flush=True)
            print("3) Last match roster", flush=True)
            print("4) Look up a player", flush=True)
            print("5) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                asyncio.run(self.analyze_once())
            elif choice == "2":
                try:
                    asyncio.run(self.monitor())
                except KeyboardInterrupt:
                    print("\nMonitor stopped.", flush=True)
            elif choice == "3":
                self.print_last_match()
            elif choice == "4":
                self.lookup_player()
            elif choice == "5":
                return
            else:
                print("Invalid option.", flush=True)
