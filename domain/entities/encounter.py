"""Derived head-to-head records. Computed on demand, never persisted."""
from dataclasses import dataclass, field
from typing import Optional

from ..enums import AllyQuality, QueueCategory, Role, ThreatLevel


@dataclass(frozen=True)
class PlayerRef:
    """Who to look up: a stable id, a display name, or both."""

    puuid: Optional[str] = None
    display_name: Optional[str] = None


@dataclass
class SharedGame:
    """One match containing both the local user and the target player."""

    match_id: str
    game_creation: int
    game_duration: int
    queue_id: int
    game_mode: str

    user_team_id: int
    user_win: bool
    user_champion: str

    target_puuid: str
    target_name: str
    target_team_id: int
    target_champion: str
    target_champion_id: int
    target_kills: int
    target_deaths: int
    target_assists: int
    target_position: str = ""

    user_kills: int = 0
    user_deaths: int = 0
    user_assists: int = 0

    @property
    def is_ally(self) -> bool:
        return self.user_team_id == self.target_team_id

    @property
    def queue_category(self) -> QueueCategory:
        return QueueCategory.from_queue_id(self.queue_id)

    @property
    def target_role(self) -> Role:
        return Role.from_string(self.target_position)

    @property
    def outcome(self) -> str:
        """'W' or 'L' from the local user's point of view."""
        return 'W' if self.user_win else 'L'

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            'game_creation': self.game_creation,
            'game_duration': self.game_duration,
            'queue_id': self.queue_id,
            'queue_category': self.queue_category.label,
            'is_ally': self.is_ally,
            'user_champion': self.user_champion,
            'user_win': self.user_win,
            'user_kda': [self.user_kills, self.user_deaths, self.user_assists],
            'target_name': self.target_name,
            'target_champion': self.target_champion,
            'target_role': self.target_role.label,
            'target_kda': [self.target_kills, self.target_deaths, self.target_assists],
        }


@dataclass
class ChampionStat:
    champion: str
    games: int
    wins: int
    losses: int
    win_rate: int

    def to_dict(self) -> dict:
        return {
            'champion': self.champion,
            'games': self.games,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
        }


@dataclass
class RoleStat:
    role: Role
    games: int
    wins: int
    losses: int
    win_rate: int

    def to_dict(self) -> dict:
        return {
            'role': self.role.label,
            'games': self.games,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
        }


@dataclass
class CohortStats:
    """Ally-side or enemy-side aggregate. Wins are the local user's wins."""

    games: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: int = 0
    avg_kills: float = 0.0
    avg_deaths: float = 0.0
    avg_assists: float = 0.0
    avg_kda: float = 0.0
    recent_form: list[str] = field(default_factory=list)
    top_champions: list[ChampionStat] = field(default_factory=list)
    role_stats: list[RoleStat] = field(default_factory=list)
    last_played: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.games == 0

    def to_dict(self) -> dict:
        return {
            'games': self.games,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
            'last_played': self.last_played,
            'recent_form': list(self.recent_form),
            'performance': {
                'avg_kills': self.avg_kills,
                'avg_deaths': self.avg_deaths,
                'avg_assists': self.avg_assists,
                'avg_kda': self.avg_kda,
            },
            'top_champions': [c.to_dict() for c in self.top_champions],
            'role_stats': [r.to_dict() for r in self.role_stats],
        }


@dataclass
class ModeBreakdown:
    """Ally/enemy split within one queue category; a side is None when unplayed."""

    as_ally: Optional[CohortStats] = None
    as_enemy: Optional[CohortStats] = None

    def to_dict(self) -> dict:
        return {
            'as_ally': self.as_ally.to_dict() if self.as_ally else None,
            'as_enemy': self.as_enemy.to_dict() if self.as_enemy else None,
        }


@dataclass
class LastSeen:
    timestamp: int
    champion: str
    role: Role
    outcome: str  # 'win' | 'loss', local user's point of view
    is_ally: bool

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp,
            'champion': self.champion,
            'role': self.role.label,
            'outcome': self.outcome,
            'is_ally': self.is_ally,
        }


@dataclass
class EncounterSummary:
    target_puuid: Optional[str]
    display_name: Optional[str]
    total_games: int = 0
    wins: int = 0
    losses: int = 0
    as_ally: CohortStats = field(default_factory=CohortStats)
    as_enemy: CohortStats = field(default_factory=CohortStats)
    by_mode: dict[QueueCategory, ModeBreakdown] = field(default_factory=dict)
    last_seen: Optional[LastSeen] = None
    threat_level: ThreatLevel = ThreatLevel.MEDIUM
    ally_quality: AllyQuality = AllyQuality.AVERAGE
    games: list[SharedGame] = field(default_factory=list)

    @classmethod
    def empty(cls, target: PlayerRef) -> 'EncounterSummary':
        return cls(
            target_puuid=target.puuid,
            display_name=target.display_name,
            by_mode={category: ModeBreakdown() for category in QueueCategory.ordered()},
        )

    @property
    def has_history(self) -> bool:
        return self.total_games > 0

    def to_dict(self) -> dict:
        return {
            'puuid': self.target_puuid,
            'summoner_name': self.display_name,
            'encounter_count': self.total_games,
            'wins': self.wins,
            'losses': self.losses,
            'as_ally': self.as_ally.to_dict(),
            'as_enemy': self.as_enemy.to_dict(),
            'by_mode': {category.label: mode.to_dict() for category, mode in self.by_mode.items()},
            'last_seen': self.last_seen.to_dict() if self.last_seen else None,
            'threat_level': self.threat_level.value,
            'ally_quality': self.ally_quality.value,
            'games': [g.to_dict() for g in self.games],
        }


@dataclass
class RosterPlayer:
    puuid: str
    summoner_name: str
    champion_name: str
    team_id: int
    role: Role
    win: bool

    def to_dict(self) -> dict:
        return {
            'puuid': self.puuid,
            'summoner_name': self.summoner_name,
            'champion_name': self.champion_name,
            'team_id': self.team_id,
            'role': self.role.label,
            'win': self.win,
        }


@dataclass
class LastMatchRoster:
    """Everyone in the configured user's most recent stored match."""

    match_id: str
    queue_id: int
    game_creation: int
    user_team_id: int
    players: list[RosterPlayer] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            'queue_id': self.queue_id,
            'game_creation': self.game_creation,
            'user_team_id': self.user_team_id,
            'players': [p.to_dict() for p in self.players],
        }
