"""Player, configured-user and tag repository implementation."""
import logging
import time
from typing import Dict, Iterable, List, Optional

from application.services.data_persistence_service import DataPersistenceService
from domain.entities import PlayerTag, UserConfig
from domain.enums import TagCategory
from domain.interfaces import ITagRepository, IUserConfigRepository

logger = logging.getLogger(__name__)


class PlayerRepository(IUserConfigRepository, ITagRepository):
    """SQLite-backed local user configuration, known players and tags."""

    def __init__(self, store: DataPersistenceService):
        """
        Initialize player repository.

        Args:
            store: Open persistence service owning the connection
        """
        self.store = store

    # ── Configured user ────────────────────────────────────────────────

    def get_user_config(self) -> Optional[UserConfig]:
        """Latest saved configuration, or None when nothing was configured."""
        row = self.store.query_one("SELECT * FROM user_config ORDER BY id DESC LIMIT 1")
        if row is None:
            return None
        return UserConfig(
            puuid=row['puuid'],
            summoner_name=row['summoner_name'],
            region=row['region'],
            riot_api_key=row['riot_api_key'],
            last_updated=row['last_updated'],
        )

    def save_user_config(self, config: UserConfig) -> UserConfig:
        config.last_updated = _now_ms()
        with self.store.transaction() as conn:
            conn.execute(
                """INSERT INTO user_config (puuid, summoner_name, region, riot_api_key, last_updated)
                   VALUES (?, ?, ?, ?, ?)""",
                (config.puuid, config.summoner_name, config.region,
                 config.riot_api_key, config.last_updated),
            )
        logger.info(f"Configured user {config.summoner_name} ({config.region})")
        return config

    # ── Players ────────────────────────────────────────────────────────

    def get_player_name(self, puuid: str) -> Optional[str]:
        row = self.store.query_one("SELECT summoner_name FROM players WHERE puuid = ?", (puuid,))
        return row['summoner_name'] if row else None

    # ── Tags ───────────────────────────────────────────────────────────

    def get_tags(self, puuid: str) -> List[PlayerTag]:
        rows = self.store.query(
            "SELECT * FROM player_tags WHERE puuid = ? ORDER BY created_at DESC, tag_type",
            (puuid,),
        )
        return [self._row_to_tag(r) for r in rows]

    def get_tags_for(self, puuids: Iterable[str]) -> Dict[str, List[PlayerTag]]:
        wanted = [p for p in dict.fromkeys(puuids) if p]
        if not wanted:
            return {}
        ph = ",".join(["?"] * len(wanted))
        rows = self.store.query(
            f"SELECT * FROM player_tags WHERE puuid IN ({ph}) ORDER BY created_at DESC, tag_type",
            wanted,
        )
        tags: Dict[str, List[PlayerTag]] = {}
        for r in rows:
            tags.setdefault(r['puuid'], []).append(self._row_to_tag(r))
        return tags

    def get_all_tags(self) -> List[PlayerTag]:
        rows = self.store.query("SELECT * FROM player_tags ORDER BY created_at DESC, puuid, tag_type")
        return [self._row_to_tag(r) for r in rows]

    def upsert_tag(self, puuid: str, category: TagCategory, note: Optional[str] = None) -> PlayerTag:
        """One row per (player, category): re-tagging replaces note and timestamp."""
        tag = PlayerTag(puuid=puuid, category=category, note=note, created_at=_now_ms())
        with self.store.transaction() as conn:
            conn.execute(
                """INSERT INTO player_tags (puuid, tag_type, note, created_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(puuid, tag_type) DO UPDATE SET
                       note = excluded.note,
                       created_at = excluded.created_at""",
                (tag.puuid, tag.category.value, tag.note, tag.created_at),
            )
        return tag

    def delete_tag(self, puuid: str, category: TagCategory) -> bool:
        with self.store.transaction() as conn:
            cur = conn.execute(
                "DELETE FROM player_tags WHERE puuid = ? AND tag_type = ?",
                (puuid, category.value),
            )
        return cur.rowcount > 0

    @staticmethod
    def _row_to_tag(row) -> PlayerTag:
        return PlayerTag(
            puuid=row['puuid'],
            category=TagCategory(row['tag_type']),
            note=row['note'],
            created_at=row['created_at'],
        )


def _now_ms() -> int:
    return int(time.time() * 1000)
