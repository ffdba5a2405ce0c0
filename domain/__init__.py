"""Domain layer - entities, enums, and interfaces."""
from .entities import (
    Match,
    Participant,
    UserConfig,
    PlayerTag,
    LobbyPlayer,
    PlayerRef,
    SharedGame,
    SharedMatchQuery,
    EncounterSummary,
)
from .enums import QueueCategory, Role, Region, GameflowPhase, StatusTone, TagCategory
from .interfaces import IMatchRepository, IUserConfigRepository, ITagRepository, IGameClient

__all__ = [
    # Entities
    'Match',
    'Participant',
    'UserConfig',
    'PlayerTag',
    'LobbyPlayer',
    'PlayerRef',
    'SharedGame',
    'SharedMatchQuery',
    'EncounterSummary',
    # Enums
    'QueueCategory',
    'Role',
    'Region',
    'GameflowPhase',
    'StatusTone',
    'TagCategory',
    # Interfaces
    'IMatchRepository',
    'IUserConfigRepository',
    'ITagRepository',
    'IGameClient',
]
