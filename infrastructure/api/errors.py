"""Errors raised by the HTTP collaborators."""
from typing import Optional

from domain.interfaces import GameClientError


class RiotAPIError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(RiotAPIError):
    """HTTP 429. ``retry_after_s`` is the server's Retry-After, if it sent one."""

    def __init__(self, message: str, retry_after_s: Optional[float] = None):
        super().__init__(message, status_code=429)
        self.retry_after_s = retry_after_s


class LCUConnectionError(GameClientError):
    """The game client is not running or its lockfile cannot be read."""


class LCUCredentialsNotFound(LCUConnectionError):
    """No readable lockfile: the client is not running or is installed elsewhere."""


class LCURequestError(GameClientError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
