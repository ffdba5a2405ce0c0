from __future__ import annotations

import asyncio

from domain.enums import Region
from infrastructure.api import RiotAPIError
from application.use_cases import ConfigureUserUseCase, ConfigurationError
from core.logging.logger import get_logger
from .app_services import AppServices


class SettingsCommand:
    """Show or change the configured account."""

    def __init__(self, services: AppServices) -> None:
        self.services = services
        self.log = get_logger(__name__, service="settings-cli")

    def _show(self) -> None:
        config = self.services.players.get_user_config()
        if config is None:
            print("No account configured.", flush=True)
            return
        print(f"Account: {config.summoner_name}", flush=True)
        print(f"Region:  {config.region}", flush=True)
        print(f"API key: {'stored' if config.riot_api_key else 'from RIOT_API_KEY'}", flush=True)

    def _configure(self) -> None:
        riot_id = input("Riot ID (Name#TAG): ").strip()
        regions = ", ".join(r.friendly.upper() for r in Region.all_regions())
        region = input(f"Region ({regions}): ").strip()
        api_key = input("Riot API key (blank to use RIOT_API_KEY): ").strip() or None
        use_case = ConfigureUserUseCase(self.services.players)
        try:
            config = asyncio.run(use_case.execute(riot_id, region, api_key))
        except ConfigurationError as e:
            print(f"Error: {e}", flush=True)
            return
        except RiotAPIError as e:
            self.log.error(lambda: f"configure-failed {e}")
            print(f"Riot API error: {e}", flush=True)
            return
        print(f"Saved {config.summoner_name} ({config.region}).", flush=True)

    def run(self) -> None:
        while True:
            print("\n=== Settings ===", flush=True)
            print("1) Show account", flush=True)
            print("2) Configure account", flush=True)
            print("3) Back", flush=True)
            choice = input("Choose: ").strip()
            if choice == "1":
                self._show()
            elif choice == "2":
                self._configure()
            elif choice == "3":
                return
            else:
                print("Invalid option.", flush=True)
