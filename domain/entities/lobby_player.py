"""Players seen in the live lobby / game."""
from dataclasses import dataclass, field
from typing import List, Optional

from .encounter import EncounterSummary
from .player_tag import PlayerTag


@dataclass
class LobbyPlayer:
    """A roster entry after identity resolution.

    ``slot_id`` is whatever the client assigned locally (champ-select cell id,
    in-game summoner id); it only serves as a dedupe key when no stable id is
    known yet.
    """

    puuid: Optional[str]
    display_name: Optional[str]
    slot_id: Optional[str] = None
    champion_id: Optional[int] = None
    team_id: Optional[int] = None
    profile_icon_id: Optional[int] = None
    source: str = ""

    @property
    def dedupe_key(self) -> Optional[str]:
        if self.puuid:
            return f"puuid:{self.puuid}"
        if self.slot_id:
            return f"slot:{self.slot_id}"
        return None

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.display_name or 'Unknown',
            'champion_id': self.champion_id,
            'team_id': self.team_id,
            'profile_icon_id': self.profile_icon_id,
            'source': self.source,
        }


@dataclass
class LobbyPlayerAnalysis:
    """One roster entry with its encounter summary and local tags."""

    player: LobbyPlayer
    summary: EncounterSummary
    tags: List[PlayerTag] = field(default_factory=list)
    failed: bool = False

    def to_dict(self) -> dict:
        data = self.player.to_dict()
        data.update({
            'encounter_count': self.summary.total_games,
            'summary': self.summary.to_dict(),
            'tags': [t.to_dict() for t in self.tags],
        })
        return data


@dataclass
class LobbyAnalysis:
    """Result of one roster enrichment. ``configured`` is False when no local
    user has been set up, in which case ``players`` is empty."""

    configured: bool
    players: List[LobbyPlayerAnalysis] = field(default_factory=list)

    @property
    def known_players(self) -> List[LobbyPlayerAnalysis]:
        return [p for p in self.players if p.summary.has_history]

    def to_dict(self) -> dict:
        return {
            'configured': self.configured,
            'players': [p.to_dict() for p in self.players],
        }
