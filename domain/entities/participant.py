"""Participant entity representing a player in a match."""
from dataclasses import dataclass
from typing import Optional
from ..enums import Role


@dataclass
class Participant:
    """One player's row within one match.

    ``summoner_name`` freezes the display name as it was in that game
    (``gameName#tagLine`` when the match carried a Riot ID, otherwise the
    legacy summoner name).
    """

    # Identity
    puuid: str
    summoner_name: str
    game_name: Optional[str] = None
    tag_line: Optional[str] = None
    match_id: str = ""

    # Match context
    team_id: int = 0
    champion_id: int = 0
    champion_name: str = ""

    # Position as reported (teamPosition, else individualPosition, else lane)
    position: str = ""
    lane: str = ""

    # Match outcome
    win: bool = False
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    total_damage_dealt: int = 0
    total_damage_to_champions: int = 0
    total_minions_killed: int = 0
    gold_earned: int = 0
    profile_icon_id: Optional[int] = None

    @property
    def role(self) -> Role:
        return Role.from_string(self.position)

    @property
    def kda(self) -> float:
        """Calculate KDA ratio."""
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'game_name': self.game_name,
            'tag_line': self.tag_line,
            'team_id': self.team_id,
            'champion_id': self.champion_id,
            'champion_name': self.champion_name,
            'position': self.position,
            'role': self.role.label,
            'win': self.win,
            'kills': self.kills,
            'deaths': self.deaths,
            'assists': self.assists,
            'kda': round(self.kda, 2),
            'damage_to_champions': self.total_damage_to_champions,
            'cs': self.total_minions_killed,
            'gold_earned': self.gold_earned,
        }
