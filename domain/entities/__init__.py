"""Domain entities."""
from .participant import Participant
from .match import Match
from .user_config import UserConfig
from .player_tag import PlayerTag
from .lobby_player import LobbyPlayer, LobbyPlayerAnalysis, LobbyAnalysis
from .shared_match_query import SharedMatchQuery
from .encounter import (
    PlayerRef,
    SharedGame,
    ChampionStat,
    RoleStat,
    CohortStats,
    ModeBreakdown,
    LastSeen,
    EncounterSummary,
    RosterPlayer,
    LastMatchRoster,
)

__all__ = [
    'Participant',
    'Match',
    'UserConfig',
    'PlayerTag',
    'LobbyPlayer',
    'LobbyPlayerAnalysis',
    'LobbyAnalysis',
    'SharedMatchQuery',
    'PlayerRef',
    'SharedGame',
    'ChampionStat',
    'RoleStat',
    'CohortStats',
    'ModeBreakdown',
    'LastSeen',
    'EncounterSummary',
    'RosterPlayer',
    'LastMatchRoster',
]
