"""Riot Games API client."""
import asyncio
import logging
from typing import Optional, Dict, Any, List
from urllib.parse import quote
import httpx

from config import settings
from domain.enums import Region
from .errors import RiotAPIError, RateLimitedError
from .rate_limiter import RiotRateLimiter

logger = logging.getLogger(__name__)


def _retry_after(response: httpx.Response) -> Optional[float]:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


class RiotAPIClient:
    """Asynchronous Riot API client.

    A 429 is raised as ``RateLimitedError`` instead of being retried here: the
    caller owns the backoff policy and retries the same unit of work. Timeouts
    and 5xx answers are retried up to ``max_retries`` times.
    """

    def __init__(
        self,
        api_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_retries: Optional[int] = None,
    ):
        self.api_key  = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout  = settings.REQUEST_TIMEOUT
        self.max_retries = settings.MAX_RETRIES if max_retries is None else max_retries
        self.last_status_code: Optional[int] = None
        self._transport = transport

        self.rate_limiter = RiotRateLimiter.from_settings()

    async def __aenter__(self):
        http2 = False
        if self._transport is None:
            try:
                import h2  # type: ignore  # noqa: F401
                http2 = True
            except ImportError:
                pass
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key},
            http2=http2,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    def _get_platform_url(self, region: Region) -> str:
        return f"https://{region.platform_route}.api.riotgames.com"

    def _get_regional_url(self, region: Region) -> str:
        return f"https://{region.regional_route}.api.riotgames.com"

    def _backoff(self, attempt: int) -> float:
        return min(settings.RETRY_BACKOFF_CAP_S, settings.RETRY_BACKOFF_BASE_S * (2 ** attempt))

    async def _make_request(
        self,
        url: str,
        endpoint_type: str = "default",
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Any]:
        """GET ``url``. Returns the decoded JSON, or None on 404."""
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        for attempt in range(self.max_retries + 1):
            await self.rate_limiter.acquire(endpoint_type)
            try:
                response = await self.session.get(url, params=params)
            except httpx.TimeoutException as exc:
                if attempt < self.max_retries:
                    await asyncio.sleep(self._backoff(attempt))
                    continue
                raise RiotAPIError(f"Timed out calling {url}") from exc
            except httpx.HTTPError as exc:
                logger.error(f"Network error: {exc}")
                if attempt < self.max_retries:
                    await asyncio.sleep(self._backoff(attempt))
                    continue
                raise RiotAPIError(f"Network error calling {url}: {exc}") from exc

            self.last_status_code = response.status_code

            if response.status_code == 200:
                return response.json()

            if response.status_code == 404:
                return None

            if response.status_code in (401, 403):
                logger.error(f"{response.status_code} from Riot API - check the API key")
                raise RiotAPIError("Riot API key is invalid or expired", response.status_code)

            if response.status_code == 429:
                retry_after = _retry_after(response)
                logger.warning(f"429 rate-limited (Retry-After={retry_after})")
                self.rate_limiter.penalize(
                    endpoint_type, retry_after, response.headers.get("X-Rate-Limit-Type")
                )
                raise RateLimitedError(f"Rate limited calling {url}", retry_after_s=retry_after)

            if response.status_code >= 500 and attempt < self.max_retries:
                await asyncio.sleep(self._backoff(attempt))
                continue

            logger.warning(f"HTTP {response.status_code} for {url}")
            raise RiotAPIError(
                f"Riot API returned HTTP {response.status_code}", response.status_code
            )

        raise RiotAPIError(f"Retries exhausted for {url}")

    # ── Account / Summoner API ─────────────────────────────────────────

    async def get_account_by_riot_id(
        self, region: Region, game_name: str, tag_line: str
    ) -> Optional[Dict]:
        base = self._get_regional_url(region)
        path = f"/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        return await self._make_request(f"{base}{path}", "account")

    async def get_summoner_by_name(self, region: Region, name: str) -> Optional[Dict]:
        base = self._get_platform_url(region)
        return await self._make_request(
            f"{base}/lol/summoner/v4/summoners/by-name/{quote(name, safe='')}", "summoner"
        )

    async def get_summoner_by_puuid(self, region: Region, puuid: str) -> Optional[Dict]:
        base = self._get_platform_url(region)
        return await self._make_request(
            f"{base}/lol/summoner/v4/summoners/by-puuid/{puuid}", "summoner"
        )

    # ── Match API ──────────────────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        region: Region,
        puuid: str,
        count: int = 20,
        start: int = 0,
        queue: Optional[int] = None,
    ) -> List[str]:
        base = self._get_regional_url(region)
        params: Dict[str, Any] = {"start": start, "count": min(count, 100)}
        if queue is not None:
            params["queue"] = queue
        url    = f"{base}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        result = await self._make_request(url, "match", params=params)
        return result if isinstance(result, list) else []

    async def get_match_by_id(self, region: Region, match_id: str) -> Optional[Dict]:
        base = self._get_regional_url(region)
        return await self._make_request(f"{base}/lol/match/v5/matches/{match_id}", "match")
