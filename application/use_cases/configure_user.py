"""Use case for configuring the local account."""
import logging
from typing import Callable, Optional

from config import settings
from domain.entities import UserConfig
from domain.enums import Region
from domain.interfaces import IUserConfigRepository
from infrastructure.api import RiotAPIClient
from application.services.identity import format_riot_id, parse_riot_id

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """The account could not be configured from the given input."""


class ConfigureUserUseCase:
    """Resolve a Riot ID (or legacy summoner name) and save it as the local user."""

    def __init__(
        self,
        users: IUserConfigRepository,
        client_factory: Callable[[str], RiotAPIClient] = RiotAPIClient,
    ):
        self.users = users
        self.client_factory = client_factory

    async def execute(self, riot_id: str, region: str, api_key: Optional[str] = None) -> UserConfig:
        key = (api_key or settings.RIOT_API_KEY or "").strip()
        if not key:
            raise ConfigurationError("A Riot API key is required (argument or RIOT_API_KEY)")
        try:
            reg = Region.from_string(region)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        game_name, tag_line = parse_riot_id(riot_id)
        if not game_name:
            raise ConfigurationError("Summoner name must not be empty")

        async with self.client_factory(key) as client:
            if tag_line:
                account = await client.get_account_by_riot_id(reg, game_name, tag_line)
                if not account or not account.get("puuid"):
                    raise ConfigurationError(f"Riot ID {game_name}#{tag_line} not found on {reg.friendly.upper()}")
                puuid = account["puuid"]
                name = format_riot_id(account.get("gameName") or game_name, account.get("tagLine") or tag_line)
            else:
                summoner = await client.get_summoner_by_name(reg, game_name)
                if not summoner or not summoner.get("puuid"):
                    raise ConfigurationError(f"Summoner {game_name} not found on {reg.friendly.upper()}")
                puuid = summoner["puuid"]
                name = summoner.get("name") or game_name

        config = UserConfig(
            puuid=puuid,
            summoner_name=name,
            region=reg.value,
            riot_api_key=api_key.strip() if api_key else None,
        )
        saved = self.users.save_user_config(config)
        logger.info(f"configured {saved.summoner_name} on {saved.region}")
        return saved
