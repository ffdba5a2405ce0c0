"""Lobby detection and enrichment."""
from .detector import LobbyDetector, dedupe_players, roster_signature, to_lobby_player
from .name_cache import SessionNameCache

__all__ = [
    'LobbyDetector',
    'SessionNameCache',
    'dedupe_players',
    'roster_signature',
    'to_lobby_player',
]
