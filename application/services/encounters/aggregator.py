"""Encounter Aggregator: the local user's shared history with one player."""
import time
from typing import Callable, List, Optional

from config import settings
from core.logging import get_logger
from domain.entities import EncounterSummary, PlayerRef, SharedGame, SharedMatchQuery
from domain.interfaces import IMatchRepository, IUserConfigRepository
from application.services.identity import name_keys
from .stats import build_summary


class EncounterAggregator:
    """Computes encounter summaries against the match corpus.

    Lookup order: the target's stable id first; if that finds nothing and a
    display name is known, the normalized name (full ``name#tag`` key, or the
    game name alone when ``match_game_name`` is on). Matches created within
    the freshness window before "now" are ignored.
    """

    def __init__(
        self,
        matches: IMatchRepository,
        users: Optional[IUserConfigRepository] = None,
        freshness_cutoff_minutes: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        match_game_name: bool = True,
    ):
        self.matches = matches
        self.users = users
        self.cutoff_minutes = (
            settings.FRESHNESS_CUTOFF_MINUTES
            if freshness_cutoff_minutes is None
            else freshness_cutoff_minutes
        )
        self._clock = clock
        self.match_game_name = match_game_name
        self._log = get_logger(__name__, service="encounters")

    def _created_before(self) -> int:
        return int(self._clock() * 1000) - self.cutoff_minutes * 60 * 1000

    def find_shared_games(self, local_puuid: str, target: PlayerRef) -> List[SharedGame]:
        created_before = self._created_before()
        games: List[SharedGame] = []

        if target.puuid:
            games = self.matches.find_shared_matches(
                SharedMatchQuery.for_puuid(local_puuid, target.puuid, created_before)
            )

        if not games and target.display_name:
            keys = name_keys(target.display_name)
            if not keys.is_empty:
                self._log.trace(lambda: f"name fallback for {target.display_name!r}")
                games = self.matches.find_shared_matches(
                    SharedMatchQuery.for_name(
                        local_puuid,
                        keys.full,
                        keys.game_name,
                        created_before,
                        include_game_name_only=self.match_game_name,
                    )
                )
        return games

    def compute_encounter_summary(
        self, local_puuid: Optional[str], target: PlayerRef
    ) -> Optional[EncounterSummary]:
        """Summary for ``target``; None when there is no local user to compare against."""
        if not local_puuid:
            return None
        games = self.find_shared_games(local_puuid, target)
        summary = build_summary(target, games)
        self._log.debug(
            lambda: f"{target.display_name or target.puuid}: {summary.total_games} shared games"
        )
        return summary

    def summary_for_configured_user(self, target: PlayerRef) -> Optional[EncounterSummary]:
        if self.users is None:
            return None
        config = self.users.get_user_config()
        if config is None:
            return None
        return self.compute_encounter_summary(config.puuid, target)
