"""Configured local user."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UserConfig:
    """The one local account every summary is computed against."""

    puuid: str
    summoner_name: str
    region: str
    riot_api_key: Optional[str] = None
    last_updated: int = 0

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'region': self.region,
            'has_api_key': bool(self.riot_api_key),
            'last_updated': self.last_updated,
        }
