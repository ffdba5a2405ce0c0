import pytest

from application.services import EncounterAggregator
from application.services.encounters.stats import cohort_stats, round_half_up, win_rate
from domain.entities import PlayerRef
from domain.enums import AllyQuality, QueueCategory, Role, ThreatLevel

from helpers import HOUR_MS, LOCAL_PUUID, MINUTE_MS, NOW_MS, duel, fixed_clock, shared_game

TARGET = PlayerRef(puuid="P1", display_name="Target#EUW")


def _summary(aggregator, target=TARGET):
    return aggregator.compute_encounter_summary(LOCAL_PUUID, target)


class TestEncounterSummary:

    def test_ally_and_enemy_cohorts(self, matches, aggregator):
        matches.save_match(duel("A", same_team=True, user_win=True, created=NOW_MS - 3 * HOUR_MS))
        matches.save_match(duel("B", same_team=False, user_win=False, created=NOW_MS - 2 * HOUR_MS))

        summary = _summary(aggregator)

        assert summary.total_games == 2
        assert (summary.as_ally.games, summary.as_ally.wins, summary.as_ally.win_rate) == (1, 1, 100)
        assert (summary.as_enemy.games, summary.as_enemy.wins, summary.as_enemy.win_rate) == (1, 0, 0)
        assert summary.last_seen.timestamp == NOW_MS - 2 * HOUR_MS
        assert summary.last_seen.is_ally is False
        assert summary.last_seen.outcome == "loss"

    def test_three_wins_one_loss_is_75_percent(self, matches, aggregator):
        for i, win in enumerate([True, True, True, False]):
            matches.save_match(duel(f"M{i}", user_win=win, created=NOW_MS - (i + 1) * HOUR_MS))
        summary = _summary(aggregator)
        assert summary.as_ally.win_rate == 75
        assert summary.ally_quality is AllyQuality.GOOD
        assert summary.threat_level is ThreatLevel.MEDIUM

    def test_no_shared_games_gives_empty_cohorts(self, matches, aggregator):
        matches.save_match(duel("A", target_puuid="SOMEONE-ELSE", target_name="Other#1"))
        summary = _summary(aggregator)
        assert summary.total_games == 0
        assert summary.as_ally.games == 0 and summary.as_enemy.games == 0
        assert summary.threat_level is ThreatLevel.MEDIUM
        assert summary.ally_quality is AllyQuality.AVERAGE
        assert summary.last_seen is None
        assert set(summary.by_mode) == set(QueueCategory)

    def test_fresh_matches_are_ignored(self, matches, aggregator):
        matches.save_match(duel("OLD", created=NOW_MS - 31 * MINUTE_MS))
        matches.save_match(duel("FRESH", created=NOW_MS - 29 * MINUTE_MS))
        summary = _summary(aggregator)
        assert [g.match_id for g in summary.games] == ["OLD"]

    def test_cutoff_can_be_disabled(self, matches):
        matches.save_match(duel("FRESH", created=NOW_MS - MINUTE_MS))
        aggregator = EncounterAggregator(matches, freshness_cutoff_minutes=0, clock=fixed_clock)
        assert _summary(aggregator).total_games == 1

    def test_repeated_queries_are_identical(self, matches, aggregator):
        matches.save_match(duel("A"))
        matches.save_match(duel("B", same_team=False, created=NOW_MS - 4 * HOUR_MS))
        assert _summary(aggregator).to_dict() == _summary(aggregator).to_dict()

    def test_name_fallback_when_id_does_not_match(self, matches, aggregator):
        matches.save_match(duel("A", target_puuid="P1", target_name="Target#EUW"))
        live_id = PlayerRef(puuid="LIVE-ONLY-ID", display_name="target #euw")
        summary = _summary(aggregator, live_id)
        assert summary.total_games == 1
        assert summary.display_name == "Target#EUW"

    def test_name_fallback_never_returns_the_local_user(self, matches, aggregator):
        matches.save_match(duel("A"))
        summary = _summary(aggregator, PlayerRef(puuid=None, display_name="Me#EUW"))
        assert summary.total_games == 0

    def test_by_mode_splits_categories(self, matches, aggregator):
        matches.save_match(duel("R", queue_id=420))
        matches.save_match(duel("A", queue_id=450, same_team=False, created=NOW_MS - 3 * HOUR_MS))
        by_mode = _summary(aggregator).by_mode
        assert by_mode[QueueCategory.RANKED].as_ally.games == 1
        assert by_mode[QueueCategory.RANKED].as_enemy is None
        assert by_mode[QueueCategory.ARAM].as_enemy.games == 1
        assert by_mode[QueueCategory.ARENA].as_ally is None

    def test_enemy_win_rate_sets_threat(self, matches, aggregator):
        for i in range(3):
            matches.save_match(duel(f"E{i}", same_team=False, user_win=False,
                                    created=NOW_MS - (i + 1) * HOUR_MS))
        assert _summary(aggregator).threat_level is ThreatLevel.LOW

    def test_no_local_user(self, matches, aggregator):
        assert aggregator.compute_encounter_summary(None, TARGET) is None
        assert aggregator.summary_for_configured_user(TARGET) is None

    def test_configured_user_lookup(self, matches, aggregator, configured_user):
        matches.save_match(duel("A"))
        assert aggregator.summary_for_configured_user(TARGET).total_games == 1


class TestCohortStats:

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(1.005, 2) == 1.01
        assert win_rate(1, 8) == 13
        assert win_rate(0, 0) == 0

    def test_kda_without_deaths(self):
        stats = cohort_stats([shared_game("A", kda=(2, 0, 10))])
        assert stats.avg_kda == 12.0

    def test_kda_uses_unrounded_means(self):
        stats = cohort_stats([
            shared_game("A", kda=(1, 1, 1)),
            shared_game("B", kda=(1, 1, 0)),
            shared_game("C", kda=(1, 1, 0)),
        ])
        assert stats.avg_assists == 0.3
        # (1 + 1/3) / 1, not (1 + 0.3) / 1
        assert stats.avg_kda == 1.33

    def test_recent_form_is_five_newest(self):
        games = [
            shared_game(f"G{i}", user_win=(i % 2 == 0), created=NOW_MS - i * HOUR_MS)
            for i in range(7)
        ]
        assert cohort_stats(games).recent_form == ["W", "L", "W", "L", "W"]

    def test_top_champions_ties_keep_most_recent_first(self):
        games = [
            shared_game("1", champion="Lux", created=NOW_MS - 1 * HOUR_MS),
            shared_game("2", champion="Ahri", created=NOW_MS - 2 * HOUR_MS),
            shared_game("3", champion="Ahri", created=NOW_MS - 3 * HOUR_MS),
            shared_game("4", champion="Lux", created=NOW_MS - 4 * HOUR_MS),
            shared_game("5", champion="Zed", created=NOW_MS - 5 * HOUR_MS),
            shared_game("6", champion="Yasuo", created=NOW_MS - 6 * HOUR_MS),
        ]
        top = cohort_stats(games).top_champions
        assert [c.champion for c in top] == ["Lux", "Ahri", "Zed"]
        assert top[0].games == 2

    def test_role_stats_sorted_by_games(self):
        games = [
            shared_game("1", position="TOP"),
            shared_game("2", position="UTILITY", user_win=False),
            shared_game("3", position="UTILITY"),
        ]
        roles = cohort_stats(games).role_stats
        assert [r.role for r in roles] == [Role.SUPPORT, Role.TOP]
        assert roles[0].win_rate == 50

    def test_empty_cohort(self):
        stats = cohort_stats([])
        assert stats.is_empty
        assert stats.last_played is None
