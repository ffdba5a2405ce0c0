import pytest

from application.services.identity import (
    format_riot_id,
    is_configured_user,
    name_keys,
    normalize_key,
    parse_riot_id,
    resolve_display_name,
    resolve_name_parts,
    resolve_puuid,
    resolve_slot_id,
)
from domain.entities import UserConfig


def _config(name="Me#EUW", puuid="U1"):
    return UserConfig(puuid=puuid, summoner_name=name, region="euw1")


class TestNormalization:

    def test_lowercases_and_strips_all_whitespace(self):
        assert normalize_key("  Faker  #KR 1 ") == "faker#kr1"

    def test_missing_name_gives_empty_key(self):
        assert normalize_key(None) == ""
        assert normalize_key("   ") == ""

    def test_name_keys_split_on_first_hash(self):
        keys = name_keys("Some Name#Tag#X")
        assert keys.full == "somename#tag#x"
        assert keys.game_name == "somename"
        assert keys.has_tag

    def test_untagged_name_keys(self):
        keys = name_keys("Legacy Name")
        assert keys.full == keys.game_name == "legacyname"
        assert not keys.has_tag

    def test_parse_riot_id(self):
        assert parse_riot_id("Me #EUW") == ("Me", "EUW")
        assert parse_riot_id("Me") == ("Me", None)
        assert parse_riot_id("Me#") == ("Me", None)

    def test_format_riot_id(self):
        assert format_riot_id("Me", "EUW") == "Me#EUW"
        assert format_riot_id("Me", None) == "Me"
        assert format_riot_id(None, "EUW") is None


class TestConfiguredUser:

    def test_no_config_never_matches(self):
        assert not is_configured_user(None, "U1", "Me#EUW")

    def test_same_puuid_matches(self):
        assert is_configured_user(_config(), "U1", None)

    def test_different_puuid_falls_through_to_name(self):
        assert is_configured_user(_config(), "OTHER-ID", "me # euw")

    def test_full_name_ignores_case_and_spacing(self):
        assert is_configured_user(_config(), None, "ME#EUW")

    def test_both_tagged_with_different_tags_do_not_match(self):
        assert not is_configured_user(_config(), None, "Me#NA1")

    def test_game_name_matches_when_one_side_untagged(self):
        assert is_configured_user(_config(), None, "Me")
        assert is_configured_user(_config(name="Me"), None, "Me#NA1")

    @pytest.mark.parametrize("stored,candidate", [("", ""), ("", "Me"), ("Me#EUW", ""), ("Me#EUW", None)])
    def test_empty_names_never_match(self, stored, candidate):
        assert not is_configured_user(_config(name=stored, puuid=""), None, candidate)


class TestResolution:

    def test_riot_id_preferred_over_legacy_names(self):
        payload = {"gameName": "Me", "tagLine": "EUW", "displayName": "Old", "summonerName": "Older"}
        assert resolve_display_name(payload) == "Me#EUW"

    def test_match_payload_riot_id_fields(self):
        assert resolve_name_parts({"riotIdGameName": "Me", "riotIdTagline": "EUW"}) == ("Me", "EUW")
        assert resolve_name_parts({"riotIdGameName": "Me", "riotIdTagLine": "EUW"}) == ("Me", "EUW")

    def test_missing_tag_falls_back_to_game_name(self):
        assert resolve_display_name({"gameName": "Me", "tagLine": ""}) == "Me"

    def test_blank_candidates_are_skipped(self):
        payload = {"gameName": " ", "displayName": "", "summonerName": "Legacy"}
        assert resolve_display_name(payload) == "Legacy"

    def test_internal_name_is_last_resort(self):
        assert resolve_display_name({"internalName": "internal"}) == "internal"
        assert resolve_display_name({}) is None
        assert resolve_display_name(None) is None

    def test_puuid(self):
        assert resolve_puuid({"puuid": "abc"}) == "abc"
        assert resolve_puuid({"puuid": ""}) is None

    def test_slot_ids(self):
        assert resolve_slot_id({"cellId": 0}) == "cellId:0"
        assert resolve_slot_id({"summonerId": 0}) is None
        assert resolve_slot_id({"summonerId": 42}) == "summonerId:42"
        assert resolve_slot_id({"cellId": 3, "summonerId": 42}) == "cellId:3"
