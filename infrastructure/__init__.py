"""Infrastructure layer - API clients and repositories."""
from .api import RiotAPIClient, LCUClient, RateLimiter, RiotRateLimiter
from .repositories import MatchRepository, PlayerRepository

__all__ = [
    'RiotAPIClient',
    'LCUClient',
    'RateLimiter',
    'RiotRateLimiter',
    'MatchRepository',
    'PlayerRepository',
]
