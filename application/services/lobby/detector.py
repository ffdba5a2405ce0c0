"""Lobby Detector: raw roster -> deduplicated, enriched player list."""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.logging import get_logger, log_context
from domain.entities import (
    EncounterSummary,
    LobbyAnalysis,
    LobbyPlayer,
    LobbyPlayerAnalysis,
    PlayerRef,
    PlayerTag,
    UserConfig,
)
from domain.interfaces import ITagRepository, IUserConfigRepository
from application.services.encounters import EncounterAggregator
from application.services.identity import (
    is_configured_user,
    resolve_display_name,
    resolve_puuid,
    resolve_slot_id,
)
from .name_cache import SessionNameCache


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def to_lobby_player(descriptor: Mapping[str, Any], cache: Optional[SessionNameCache] = None) -> LobbyPlayer:
    puuid = resolve_puuid(descriptor)
    slot_id = resolve_slot_id(descriptor)
    name = resolve_display_name(descriptor)
    if cache is not None:
        if name:
            cache.remember(puuid, name)
            cache.remember(slot_id, name)
        else:
            name = cache.get(puuid) or cache.get(slot_id)
    return LobbyPlayer(
        puuid=puuid,
        display_name=name,
        slot_id=slot_id,
        champion_id=_int_or_none(descriptor.get("championId")),
        team_id=_int_or_none(descriptor.get("teamId") or descriptor.get("team")),
        profile_icon_id=_int_or_none(descriptor.get("profileIconId")),
        source=str(descriptor.get("source") or ""),
    )


def _merge(kept: LobbyPlayer, other: LobbyPlayer) -> None:
    """Fill gaps in the first-seen entry from a later duplicate."""
    kept.puuid = kept.puuid or other.puuid
    kept.display_name = kept.display_name or other.display_name
    kept.slot_id = kept.slot_id or other.slot_id
    if not kept.champion_id:
        kept.champion_id = other.champion_id
    if kept.team_id is None:
        kept.team_id = other.team_id
    if kept.profile_icon_id is None:
        kept.profile_icon_id = other.profile_icon_id


def dedupe_players(players: Iterable[LobbyPlayer]) -> List[LobbyPlayer]:
    """One entry per stable id (or slot id when the id is unknown)."""
    unique: List[LobbyPlayer] = []
    by_key: Dict[str, LobbyPlayer] = {}
    for player in players:
        keys = [k for k in (
            f"puuid:{player.puuid}" if player.puuid else None,
            f"slot:{player.slot_id}" if player.slot_id else None,
        ) if k]
        existing = next((by_key[k] for k in keys if k in by_key), None)
        if existing is not None:
            _merge(existing, player)
        else:
            existing = player
            unique.append(player)
        for key in keys:
            by_key.setdefault(key, existing)
    return unique


def roster_signature(roster: Iterable[Mapping[str, Any]]) -> Tuple[str, ...]:
    """Order-independent fingerprint of who is in the roster."""
    parts = []
    for descriptor in roster:
        parts.append(
            resolve_puuid(descriptor)
            or resolve_display_name(descriptor)
            or resolve_slot_id(descriptor)
            or ""
        )
    return tuple(sorted(parts))


class LobbyDetector:
    """Enriches a roster with each player's encounter summary.

    Players are looked up one after another; a failure for one player is
    logged and that player is still returned with an empty summary.
    """

    def __init__(
        self,
        aggregator: EncounterAggregator,
        users: IUserConfigRepository,
        tags: Optional[ITagRepository] = None,
        name_cache: Optional[SessionNameCache] = None,
    ):
        self.aggregator = aggregator
        self.users = users
        self.tags = tags
        self.name_cache = name_cache if name_cache is not None else SessionNameCache()
        self._log = get_logger(__name__, service="lobby")

    def reset_session(self) -> None:
        self.name_cache.clear()

    def resolve_players(
        self, roster: Iterable[Mapping[str, Any]], config: Optional[UserConfig]
    ) -> List[LobbyPlayer]:
        players = dedupe_players(to_lobby_player(d, self.name_cache) for d in roster)
        return [
            p for p in players
            if not is_configured_user(config, p.puuid, p.display_name)
        ]

    def _summary(self, config: UserConfig, player: LobbyPlayer) -> Tuple[EncounterSummary, bool]:
        target = PlayerRef(puuid=player.puuid, display_name=player.display_name)
        try:
            summary = self.aggregator.compute_encounter_summary(config.puuid, target)
        except Exception:
            self._log.exception("encounter lookup failed")
            return EncounterSummary.empty(target), True
        return summary or EncounterSummary.empty(target), False

    def _tags(self, player: LobbyPlayer) -> List[PlayerTag]:
        if self.tags is None or not player.puuid:
            return []
        try:
            return self.tags.get_tags(player.puuid)
        except Exception:
            self._log.exception("tag lookup failed")
            return []

    def analyze(self, roster: Iterable[Mapping[str, Any]]) -> LobbyAnalysis:
        config = self.users.get_user_config()
        if config is None:
            self._log.warning("No configured user; skipping lobby enrichment")
            return LobbyAnalysis(configured=False)

        results: List[LobbyPlayerAnalysis] = []
        for player in self.resolve_players(roster, config):
            with log_context(player=player.display_name or player.puuid or player.slot_id):
                summary, failed = self._summary(config, player)
                results.append(LobbyPlayerAnalysis(
                    player=player,
                    summary=summary,
                    tags=self._tags(player),
                    failed=failed,
                ))

        results.sort(key=lambda r: r.summary.total_games, reverse=True)
        self._log.info(
            f"Lobby analyzed: {len(results)} players, "
            f"{sum(1 for r in results if r.summary.has_history)} seen before"
        )
        return LobbyAnalysis(configured=True, players=results)
