import asyncio

import httpx
import pytest

from infrastructure.api import LCUClient, LCUCredentialsNotFound, LCURequestError
from infrastructure.api.lcu_client import (
    LockfileCredentials,
    find_credentials,
    is_anonymized,
    parse_lockfile,
)

CREDENTIALS = LockfileCredentials("LeagueClient", "1234", 50123, "secret")


def _client(routes):
    """Serve ``routes`` (path -> json body); anything else is a 404."""
    def handler(request):
        if request.url.path in routes:
            return httpx.Response(200, json=routes[request.url.path])
        return httpx.Response(404)
    return LCUClient(transport=httpx.MockTransport(handler), credentials=CREDENTIALS)


def _run(client, method):
    async def go():
        try:
            return await getattr(client, method)()
        finally:
            await client.aclose()
    return asyncio.run(go())


class TestLockfile:

    def test_parse(self):
        creds = parse_lockfile("LeagueClient:1234:50123:secret:https")
        assert creds.port == 50123
        assert creds.password == "secret"
        assert creds.base_url == "https://127.0.0.1:50123"

    @pytest.mark.parametrize("content", ["", "LeagueClient:1", "Other:1:2:3:https", "LeagueClient:1:port:pw:https"])
    def test_rejects_malformed(self, content):
        assert parse_lockfile(content) is None

    def test_find_first_readable(self, tmp_path):
        broken = tmp_path / "a" / "lockfile"
        good = tmp_path / "lockfile"
        good.write_text("LeagueClient:1:2999:pw:https", encoding="utf-8")
        assert find_credentials([broken, good]).port == 2999

    def test_missing_lockfile(self, tmp_path):
        client = LCUClient(lockfile=tmp_path / "lockfile")
        with pytest.raises(LCUCredentialsNotFound):
            client.connect()


class TestLCUClient:

    def test_basic_auth_against_local_host(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json="InProgress")

        client = LCUClient(transport=httpx.MockTransport(handler), credentials=CREDENTIALS)
        assert _run(client, "get_gameflow_phase") == "InProgress"
        assert seen["url"] == "https://127.0.0.1:50123/lol-gameflow/v1/gameflow-phase"
        assert seen["auth"].startswith("Basic ")

    def test_unreachable_client_has_no_phase(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = LCUClient(transport=httpx.MockTransport(handler), credentials=CREDENTIALS)
        snapshot = _run(client, "get_phase_snapshot")
        assert snapshot.phase is None

    def test_snapshot_in_champ_select(self):
        client = _client({
            "/lol-gameflow/v1/gameflow-phase": "ChampSelect",
            "/lol-gameflow/v1/session": {"gameData": {"queue": {"id": 420}}},
            "/lol-champ-select/v1/session": {"myTeam": [{"cellId": 0, "nameVisibilityType": "HIDDEN"}]},
        })
        snapshot = _run(client, "get_phase_snapshot")
        assert snapshot.phase == "ChampSelect"
        assert snapshot.queue_id == 420
        assert snapshot.anonymized

    def test_roster_from_champ_select_with_summoner_lookup(self):
        client = _client({
            "/lol-champ-select/v1/session": {"myTeam": [
                {"cellId": 0, "summonerId": 11, "puuid": "P1", "championId": 99},
                {"cellId": 1, "summonerId": 0, "puuid": "P2"},
            ]},
            "/lol-summoner/v1/summoners/11": {"gameName": "Target", "tagLine": "EUW", "puuid": "P1"},
        })
        roster = _run(client, "get_lobby_roster")
        assert [r["source"] for r in roster] == ["championSelect", "championSelect"]
        assert roster[0]["gameName"] == "Target"
        assert roster[0]["championId"] == 99
        assert "gameName" not in roster[1]

    def test_roster_from_live_game(self):
        client = _client({
            "/lol-gameflow/v1/session": {"gameData": {
                "teamOne": [{"puuid": "P1", "summonerName": "One"}],
                "teamTwo": [{"puuid": "P2", "summonerName": "Two"}],
            }},
        })
        roster = _run(client, "get_lobby_roster")
        assert [r["puuid"] for r in roster] == ["P1", "P2"]
        assert {r["source"] for r in roster} == {"inGame"}

    def test_no_roster_outside_a_game(self):
        with pytest.raises(LCURequestError):
            _run(_client({}), "get_lobby_roster")


def test_is_anonymized():
    assert not is_anonymized(None)
    assert not is_anonymized({"myTeam": [{"puuid": "P1", "nameVisibilityType": "VISIBLE"}]})
    assert is_anonymized({"myTeam": [{"puuid": ""}]})
    assert is_anonymized({"myTeam": [{"nameVisibilityType": "hidden"}]})


def test_reset_closes_sessions_while_client_refuses(tmp_path):
    lockfile = tmp_path / "lockfile"
    lockfile.write_text("LeagueClient:1:50123:pw:https", encoding="utf-8")

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = LCUClient(lockfile=lockfile, transport=httpx.MockTransport(handler))

    async def poll(times):
        sessions = []
        for _ in range(times):
            snapshot = await client.get_phase_snapshot()
            assert snapshot.phase is None
            sessions.append(client._session)
            await client.reset()
        return sessions

    sessions = asyncio.run(poll(20))
    assert len(set(map(id, sessions))) == 20
    assert all(session.is_closed for session in sessions)
    assert client._session is None
    assert not client.connected
