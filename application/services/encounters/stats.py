"""Cohort statistics over shared games.

All functions here are pure: same games in, same numbers out. Win counts and
rates are from the local user's point of view; kills/deaths/assists, champion
and role are the target player's.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence

from domain.entities import (
    ChampionStat,
    CohortStats,
    EncounterSummary,
    LastSeen,
    ModeBreakdown,
    PlayerRef,
    RoleStat,
    SharedGame,
)
from domain.enums import AllyQuality, QueueCategory, Role, ThreatLevel

RECENT_FORM_SIZE = 5
TOP_CHAMPIONS_SIZE = 3
LOW_THRESHOLD = 40
HIGH_THRESHOLD = 60


def round_half_up(value, places: int = 0) -> float:
    """Round like a person would (2.5 -> 3), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def win_rate(wins: int, games: int) -> int:
    if games <= 0:
        return 0
    return int(round_half_up(Decimal(wins * 100) / Decimal(games)))


def most_recent_first(games: Sequence[SharedGame]) -> List[SharedGame]:
    return sorted(games, key=lambda g: g.game_creation, reverse=True)


def _champion_stats(games: Sequence[SharedGame]) -> List[ChampionStat]:
    buckets: Dict[str, List[SharedGame]] = {}
    for game in games:
        buckets.setdefault(game.target_champion or "Unknown", []).append(game)
    ranked = sorted(buckets.items(), key=lambda item: len(item[1]), reverse=True)
    stats = []
    for champion, played in ranked[:TOP_CHAMPIONS_SIZE]:
        wins = sum(1 for g in played if g.user_win)
        stats.append(ChampionStat(
            champion=champion,
            games=len(played),
            wins=wins,
            losses=len(played) - wins,
            win_rate=win_rate(wins, len(played)),
        ))
    return stats


def _role_stats(games: Sequence[SharedGame]) -> List[RoleStat]:
    buckets: Dict[Role, List[SharedGame]] = {}
    for game in games:
        buckets.setdefault(game.target_role, []).append(game)
    ranked = sorted(buckets.items(), key=lambda item: len(item[1]), reverse=True)
    stats = []
    for role, played in ranked:
        wins = sum(1 for g in played if g.user_win)
        stats.append(RoleStat(
            role=role,
            games=len(played),
            wins=wins,
            losses=len(played) - wins,
            win_rate=win_rate(wins, len(played)),
        ))
    return stats


def cohort_stats(games: Sequence[SharedGame]) -> CohortStats:
    """Aggregate one cohort. An empty cohort gives zeroed stats."""
    if not games:
        return CohortStats()

    ordered = most_recent_first(games)
    count = len(ordered)
    wins = sum(1 for g in ordered if g.user_win)

    kills = Decimal(sum(g.target_kills for g in ordered))
    deaths = Decimal(sum(g.target_deaths for g in ordered))
    assists = Decimal(sum(g.target_assists for g in ordered))
    avg_kills = kills / count
    avg_deaths = deaths / count
    avg_assists = assists / count
    if avg_deaths == 0:
        kda = avg_kills + avg_assists
    else:
        kda = (avg_kills + avg_assists) / avg_deaths

    return CohortStats(
        games=count,
        wins=wins,
        losses=count - wins,
        win_rate=win_rate(wins, count),
        avg_kills=round_half_up(avg_kills, 1),
        avg_deaths=round_half_up(avg_deaths, 1),
        avg_assists=round_half_up(avg_assists, 1),
        avg_kda=round_half_up(kda, 2),
        recent_form=[g.outcome for g in ordered[:RECENT_FORM_SIZE]],
        top_champions=_champion_stats(ordered),
        role_stats=_role_stats(ordered),
        last_played=ordered[0].game_creation,
    )


def classify_threat(enemy: CohortStats) -> ThreatLevel:
    if enemy.is_empty:
        return ThreatLevel.MEDIUM
    if enemy.win_rate < LOW_THRESHOLD:
        return ThreatLevel.LOW
    if enemy.win_rate > HIGH_THRESHOLD:
        return ThreatLevel.HIGH
    return ThreatLevel.MEDIUM


def classify_ally(ally: CohortStats) -> AllyQuality:
    if ally.is_empty:
        return AllyQuality.AVERAGE
    if ally.win_rate < LOW_THRESHOLD:
        return AllyQuality.POOR
    if ally.win_rate > HIGH_THRESHOLD:
        return AllyQuality.GOOD
    return AllyQuality.AVERAGE


def mode_breakdown(games: Sequence[SharedGame]) -> Dict[QueueCategory, ModeBreakdown]:
    """Every category is present; a side with no games is None."""
    breakdown: Dict[QueueCategory, ModeBreakdown] = {}
    for category in QueueCategory.ordered():
        in_mode = [g for g in games if g.queue_category is category]
        ally = [g for g in in_mode if g.is_ally]
        enemy = [g for g in in_mode if not g.is_ally]
        breakdown[category] = ModeBreakdown(
            as_ally=cohort_stats(ally) if ally else None,
            as_enemy=cohort_stats(enemy) if enemy else None,
        )
    return breakdown


def last_seen(games: Sequence[SharedGame]) -> Optional[LastSeen]:
    if not games:
        return None
    latest = most_recent_first(games)[0]
    return LastSeen(
        timestamp=latest.game_creation,
        champion=latest.target_champion,
        role=latest.target_role,
        outcome='win' if latest.user_win else 'loss',
        is_ally=latest.is_ally,
    )


def build_summary(target: PlayerRef, games: Sequence[SharedGame]) -> EncounterSummary:
    """Assemble the full head-to-head summary from already-filtered games."""
    if not games:
        return EncounterSummary.empty(target)

    ordered = most_recent_first(games)
    ally = [g for g in ordered if g.is_ally]
    enemy = [g for g in ordered if not g.is_ally]
    as_ally = cohort_stats(ally)
    as_enemy = cohort_stats(enemy)
    wins = sum(1 for g in ordered if g.user_win)

    return EncounterSummary(
        target_puuid=target.puuid,
        # The newest participant row carries the player's current name.
        display_name=ordered[0].target_name or target.display_name,
        total_games=len(ordered),
        wins=wins,
        losses=len(ordered) - wins,
        as_ally=as_ally,
        as_enemy=as_enemy,
        by_mode=mode_breakdown(ordered),
        last_seen=last_seen(ordered),
        threat_level=classify_threat(as_enemy),
        ally_quality=classify_ally(as_ally),
        games=ordered,
    )
