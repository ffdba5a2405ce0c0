import asyncio

import pytest

from application.use_cases import ImportFailedError, ImportMatchHistoryUseCase
from domain.enums import Region
from infrastructure.api import RateLimitedError, RiotAPIError

from helpers import match_payload


class FakeRiotClient:
    """Match ids and payloads from dicts; ``failures`` maps a match id to
    the exceptions raised (in order) before the payload is returned."""

    def __init__(self, ids, failures=None, list_error=None):
        self.ids = ids
        self.failures = {k: list(v) for k, v in (failures or {}).items()}
        self.list_error = list_error
        self.fetched = []

    async def get_match_ids_by_puuid(self, region, puuid, count=20, start=0, queue=None):
        if self.list_error:
            raise self.list_error
        return self.ids[:count]

    async def get_match_by_id(self, region, match_id):
        self.fetched.append(match_id)
        pending = self.failures.get(match_id)
        if pending:
            raise pending.pop(0)
        return match_payload(match_id=match_id)


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sleep():
    return RecordingSleep()


def _use_case(client, matches, sleep, **kwargs):
    options = dict(request_delay_s=0, backoff_base_s=1.0, backoff_cap_s=30.0,
                   max_rate_limit_retries=3, sleep=sleep)
    options.update(kwargs)
    return ImportMatchHistoryUseCase(client, matches, **options)


def _execute(use_case, **kwargs):
    return asyncio.run(use_case.execute("U1", Region.EUW1, count=10, **kwargs))


class TestImportMatchHistory:

    def test_imports_and_skips_known_matches(self, matches, sleep):
        _execute(_use_case(FakeRiotClient(["A"]), matches, sleep))
        client = FakeRiotClient(["A", "B", "C"])
        result = _execute(_use_case(client, matches, sleep))
        assert (result.total, result.imported, result.skipped, result.failed) == (3, 2, 1, 0)
        assert client.fetched == ["B", "C"]
        assert matches.count_matches() == 3

    def test_rate_limit_retries_the_same_match(self, matches, sleep):
        client = FakeRiotClient(["A", "B"], failures={
            "A": [RateLimitedError("429", retry_after_s=5), RateLimitedError("429")],
        })
        result = _execute(_use_case(client, matches, sleep))
        assert result.imported == 2
        assert client.fetched == ["A", "A", "A", "B"]
        # max(retry_after, base * 2^0), then base * 2^1
        assert sleep.calls == [5.0, 2.0]

    def test_backoff_is_capped(self, matches, sleep):
        use_case = _use_case(FakeRiotClient([]), matches, sleep, backoff_cap_s=10.0)
        assert use_case.backoff_delay(1) == 1.0
        assert use_case.backoff_delay(3) == 4.0
        assert use_case.backoff_delay(6) == 10.0
        assert use_case.backoff_delay(1, retry_after_s=120) == 10.0

    def test_exhausted_rate_limit_aborts_and_keeps_progress(self, matches, sleep):
        client = FakeRiotClient(["A", "B"], failures={"B": [RateLimitedError("429")] * 5})
        with pytest.raises(ImportFailedError) as info:
            _execute(_use_case(client, matches, sleep, max_rate_limit_retries=2))
        assert info.value.result.imported == 1
        assert matches.has_match("A")
        assert not matches.has_match("B")

    def test_other_errors_are_counted_and_skipped(self, matches, sleep):
        client = FakeRiotClient(["A", "B"], failures={"A": [RiotAPIError("boom", 500)]})
        result = _execute(_use_case(client, matches, sleep))
        assert (result.imported, result.failed) == (1, 1)

    def test_listing_failure(self, matches, sleep):
        client = FakeRiotClient([], list_error=RiotAPIError("forbidden", 403))
        with pytest.raises(ImportFailedError):
            _execute(_use_case(client, matches, sleep))

    def test_cancellation_stops_before_next_match(self, matches, sleep):
        client = FakeRiotClient(["A", "B", "C"])
        checks = iter([False, True])
        result = _execute(_use_case(client, matches, sleep), is_cancelled=lambda: next(checks))
        assert result.cancelled
        assert result.imported_ids == ["A"]

    def test_progress_and_pacing(self, matches, sleep):
        progress = []
        client = FakeRiotClient(["A", "B", "C"])
        use_case = _use_case(client, matches, sleep, request_delay_s=0.5,
                             progress_callback=lambda *args: progress.append(args))
        _execute(use_case)
        assert progress == [(1, 3, 1), (2, 3, 2), (3, 3, 3)]
        assert sleep.calls == [0.5, 0.5]
