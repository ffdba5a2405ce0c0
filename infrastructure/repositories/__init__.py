"""Infrastructure repositories module."""
from .match_repository import MatchRepository, parse_match_payload
from .player_repository import PlayerRepository
from .shared_match_query import build_shared_match_sql

__all__ = [
    'MatchRepository',
    'PlayerRepository',
    'parse_match_payload',
    'build_shared_match_sql',
]
