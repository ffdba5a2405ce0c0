"""Use case for importing the configured user's recent match history."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, TypeVar

from config import settings
from domain.enums import Region
from infrastructure.api import RiotAPIClient, RiotAPIError, RateLimitedError
from infrastructure.repositories import MatchRepository, parse_match_payload
from application.services.data_persistence_service import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")
ProgressCallback = Callable[[int, int, int], None]


class ImportFailedError(Exception):
    """The import could not continue. Matches committed so far are kept."""

    def __init__(self, message: str, result: Optional["ImportResult"] = None):
        super().__init__(message)
        self.result = result


@dataclass
class ImportResult:
    total: int = 0
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False
    imported_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'imported': self.imported,
            'skipped': self.skipped,
            'failed': self.failed,
            'cancelled': self.cancelled,
        }


class ImportMatchHistoryUseCase:
    """
    Imports match-v5 history one match at a time.

    - ids already in the corpus are skipped without a request
    - ``is_cancelled`` is checked before every match
    - a 429 delays and retries the SAME match:
      ``min(cap, max(retry_after, base * 2^(attempt-1)))``
    - any other per-match failure is logged and counted, then the import moves on
    """

    def __init__(
        self,
        api_client: RiotAPIClient,
        match_repo: MatchRepository,
        progress_callback: Optional[ProgressCallback] = None,
        request_delay_s: Optional[float] = None,
        backoff_base_s: Optional[float] = None,
        backoff_cap_s: Optional[float] = None,
        max_rate_limit_retries: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_client  = api_client
        self.match_repo  = match_repo
        self._progress_cb = progress_callback
        self.request_delay_s = settings.IMPORT_REQUEST_DELAY_S if request_delay_s is None else request_delay_s
        self.backoff_base_s  = settings.RETRY_BACKOFF_BASE_S if backoff_base_s is None else backoff_base_s
        self.backoff_cap_s   = settings.RETRY_BACKOFF_CAP_S if backoff_cap_s is None else backoff_cap_s
        self.max_rate_limit_retries = max_rate_limit_retries
        self._sleep = sleep

    def backoff_delay(self, attempt: int, retry_after_s: Optional[float] = None) -> float:
        exponential = self.backoff_base_s * (2 ** (attempt - 1))
        return min(self.backoff_cap_s, max(retry_after_s or 0.0, exponential))

    async def _with_backoff(self, call: Callable[[], Awaitable[T]], what: str) -> T:
        attempt = 0
        while True:
            try:
                return await call()
            except RateLimitedError as exc:
                attempt += 1
                if self.max_rate_limit_retries is not None and attempt > self.max_rate_limit_retries:
                    raise
                delay = self.backoff_delay(attempt, exc.retry_after_s)
                logger.warning(f"{what}: rate limited, retry {attempt} in {delay:.2f}s")
                await self._sleep(delay)

    def _progress(self, current: int, total: int, imported: int) -> None:
        if self._progress_cb:
            self._progress_cb(current, total, imported)

    async def execute(
        self,
        puuid: str,
        region: Region,
        count: Optional[int] = None,
        is_cancelled: Callable[[], bool] = lambda: False,
    ) -> ImportResult:
        count = settings.IMPORT_MATCH_COUNT if count is None else count
        result = ImportResult()

        try:
            match_ids = await self._with_backoff(
                lambda: self.api_client.get_match_ids_by_puuid(region, puuid, count=count),
                "match ids",
            )
        except RiotAPIError as exc:
            raise ImportFailedError(f"Could not list matches: {exc}", result) from exc

        result.total = len(match_ids)
        existing = self.match_repo.get_existing_match_ids()
        logger.info(f"import start puuid={puuid[:8]} ids={result.total} known={len(existing & set(match_ids))}")

        for index, match_id in enumerate(match_ids, start=1):
            if is_cancelled():
                result.cancelled = True
                logger.info(f"import cancelled after {index - 1}/{result.total}")
                break

            if match_id in existing:
                result.skipped += 1
                self._progress(index, result.total, result.imported)
                continue

            try:
                data = await self._with_backoff(
                    lambda: self.api_client.get_match_by_id(region, match_id), match_id
                )
                if not data:
                    raise ValueError("match not found")
                if self.match_repo.save_match(parse_match_payload(data)):
                    result.imported += 1
                    result.imported_ids.append(match_id)
                else:
                    result.skipped += 1
            except RateLimitedError as exc:
                raise ImportFailedError(
                    f"Rate limit retries exhausted on {match_id}", result
                ) from exc
            except (RiotAPIError, PersistenceError, ValueError, KeyError) as exc:
                result.failed += 1
                logger.error(f"Failed to import match {match_id}: {exc}")

            self._progress(index, result.total, result.imported)
            if self.request_delay_s > 0 and index < result.total:
                await self._sleep(self.request_delay_s)

        logger.info(
            f"import done imported={result.imported} skipped={result.skipped} "
            f"failed={result.failed} cancelled={result.cancelled}"
        )
        return result
