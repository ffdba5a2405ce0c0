import pytest

from application.services import LobbyDetector, SessionNameCache
from application.services.lobby.detector import dedupe_players, roster_signature, to_lobby_player
from domain.enums import TagCategory

from helpers import LOCAL_PUUID, NOW_MS, HOUR_MS, duel

ROSTER = [
    {"puuid": LOCAL_PUUID, "gameName": "Me", "tagLine": "EUW", "cellId": 0},
    {"puuid": "P1", "cellId": 1},
    {"puuid": "P1", "gameName": "Target", "tagLine": "EUW", "cellId": 1},
    {"puuid": "P2", "gameName": "Second", "tagLine": "EUW", "cellId": 2},
    {"puuid": "P3", "displayName": "Third", "cellId": 3},
]


class FailingAggregator:
    """Blows up for one specific player."""

    def __init__(self, inner, bad_puuid):
        self.inner = inner
        self.bad_puuid = bad_puuid

    def compute_encounter_summary(self, local_puuid, target):
        if target.puuid == self.bad_puuid:
            raise RuntimeError("corrupt row")
        return self.inner.compute_encounter_summary(local_puuid, target)


class TestLobbyDetector:

    def test_dedupes_and_excludes_configured_user(self, detector, configured_user):
        analysis = detector.analyze(ROSTER)
        assert analysis.configured
        assert sorted(r.player.puuid for r in analysis.players) == ["P1", "P2", "P3"]
        target = next(r for r in analysis.players if r.player.puuid == "P1")
        assert target.player.display_name == "Target#EUW"

    def test_not_configured(self, detector):
        analysis = detector.analyze(ROSTER)
        assert analysis.configured is False
        assert analysis.players == []

    def test_ranked_by_shared_games(self, detector, configured_user, matches):
        matches.save_match(duel("A", target_puuid="P2", target_name="Second#EUW"))
        matches.save_match(duel("B", target_puuid="P2", target_name="Second#EUW",
                                created=NOW_MS - 3 * HOUR_MS))
        matches.save_match(duel("C", target_puuid="P3", target_name="Third"))
        analysis = detector.analyze(ROSTER)
        assert [r.player.puuid for r in analysis.players][:2] == ["P2", "P3"]
        assert [r.player.puuid for r in analysis.known_players] == ["P2", "P3"]

    def test_one_failure_does_not_break_the_lobby(self, detector, configured_user, players):
        detector.aggregator = FailingAggregator(detector.aggregator, "P2")
        analysis = detector.analyze(ROSTER)
        assert len(analysis.players) == 3
        broken = next(r for r in analysis.players if r.player.puuid == "P2")
        assert broken.failed
        assert broken.summary.total_games == 0

    def test_tags_are_attached(self, detector, configured_user, players):
        players.upsert_tag("P3", TagCategory.TOXIC, "flames")
        analysis = detector.analyze(ROSTER)
        third = next(r for r in analysis.players if r.player.puuid == "P3")
        assert [t.category for t in third.tags] == [TagCategory.TOXIC]

    def test_session_cache_fills_missing_names(self, detector, configured_user):
        detector.analyze(ROSTER)
        later = detector.analyze([{"puuid": "P2", "cellId": 2}])
        assert later.players[0].player.display_name == "Second#EUW"
        detector.reset_session()
        assert len(detector.name_cache) == 0


class TestRosterHelpers:

    def test_slot_dedupe_without_puuid(self):
        players = dedupe_players([
            to_lobby_player({"cellId": 4}),
            to_lobby_player({"cellId": 4, "displayName": "Late"}),
        ])
        assert len(players) == 1
        assert players[0].display_name == "Late"

    def test_cache_lookup_by_slot(self):
        cache = SessionNameCache()
        to_lobby_player({"cellId": 2, "displayName": "Known"}, cache)
        assert to_lobby_player({"cellId": 2}, cache).display_name == "Known"

    def test_signature_ignores_order(self):
        assert roster_signature(ROSTER) == roster_signature(list(reversed(ROSTER)))
        assert roster_signature(ROSTER) != roster_signature(ROSTER[:-1])
