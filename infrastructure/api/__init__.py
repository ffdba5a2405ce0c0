"""Infrastructure API module."""
from .errors import (
    RiotAPIError,
    RateLimitedError,
    LCUConnectionError,
    LCUCredentialsNotFound,
    LCURequestError,
)
from .riot_client import RiotAPIClient
from .rate_limiter import RateLimiter, RiotRateLimiter
from .lcu_client import LCUClient, LockfileCredentials, parse_lockfile, is_anonymized

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'RiotRateLimiter',
    'LCUClient',
    'LockfileCredentials',
    'parse_lockfile',
    'is_anonymized',
    'RiotAPIError',
    'RateLimitedError',
    'LCUConnectionError',
    'LCUCredentialsNotFound',
    'LCURequestError',
]
