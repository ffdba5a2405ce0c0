"""Domain interfaces."""
from .repository import IMatchRepository, IUserConfigRepository, ITagRepository
from .game_client import IGameClient, PhaseSnapshot, GameClientError

__all__ = [
    'IMatchRepository',
    'IUserConfigRepository',
    'ITagRepository',
    'IGameClient',
    'PhaseSnapshot',
    'GameClientError',
]
