import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence


class PersistenceError(Exception):
    """Raised when the local SQLite store cannot be read or written."""


_SCHEMA = (
    """CREATE TABLE IF NOT EXISTS user_config (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        puuid TEXT NOT NULL,
        summoner_name TEXT NOT NULL,
        region TEXT NOT NULL,
        riot_api_key TEXT,
        last_updated INTEGER NOT NULL)""",
    """CREATE TABLE IF NOT EXISTS players (
        puuid TEXT PRIMARY KEY,
        summoner_name TEXT,
        region TEXT,
        last_seen INTEGER)""",
    """CREATE TABLE IF NOT EXISTS matches (
        match_id TEXT PRIMARY KEY,
        game_creation INTEGER NOT NULL,
        game_duration INTEGER,
        game_mode TEXT,
        queue_id INTEGER,
        platform_id TEXT,
        imported_at INTEGER)""",
    """CREATE TABLE IF NOT EXISTS match_participants (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        match_id TEXT NOT NULL,
        puuid TEXT,
        summoner_name TEXT,
        name_key TEXT NOT NULL DEFAULT '',
        game_name_key TEXT NOT NULL DEFAULT '',
        champion_name TEXT,
        champion_id INTEGER,
        team_id INTEGER,
        kills INTEGER DEFAULT 0,
        deaths INTEGER DEFAULT 0,
        assists INTEGER DEFAULT 0,
        win INTEGER DEFAULT 0,
        total_damage_dealt INTEGER DEFAULT 0,
        total_damage_to_champions INTEGER DEFAULT 0,
        total_minions_killed INTEGER DEFAULT 0,
        gold_earned INTEGER DEFAULT 0,
        lane TEXT,
        team_position TEXT,
        FOREIGN KEY(match_id) REFERENCES matches(match_id),
        FOREIGN KEY(puuid) REFERENCES players(puuid))""",
    """CREATE TABLE IF NOT EXISTS player_tags (
        puuid TEXT NOT NULL,
        tag_type TEXT NOT NULL,
        note TEXT,
        created_at INTEGER NOT NULL,
        PRIMARY KEY(puuid, tag_type))""",
    "CREATE INDEX IF NOT EXISTS idx_participants_match ON match_participants(match_id)",
    "CREATE INDEX IF NOT EXISTS idx_participants_puuid ON match_participants(puuid)",
    "CREATE INDEX IF NOT EXISTS idx_participants_name_key ON match_participants(name_key)",
    "CREATE INDEX IF NOT EXISTS idx_participants_game_name_key ON match_participants(game_name_key)",
    "CREATE INDEX IF NOT EXISTS idx_matches_creation ON matches(game_creation)",
)

TABLES = ("user_config", "players", "matches", "match_participants", "player_tags")


class DataPersistenceService:
    """Owns the SQLite connection and schema shared by the repositories."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys=ON")
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._create_tables()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot open database {self.db_path}: {exc}") from exc

    def _create_tables(self) -> None:
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back everything on any error."""
        try:
            with self._conn:
                yield self._conn
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            return self._conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        try:
            return self._conn.execute(sql, tuple(params)).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc

    # ── Query helpers ──────────────────────────────────────────────────────

    def get_existing_match_ids(self) -> set[str]:
        return {r[0] for r in self.query("SELECT match_id FROM matches")}

    def get_table_counts(self) -> Dict[str, int]:
        return {
            name: int(self.query_one(f"SELECT COUNT(*) FROM {name}")[0])
            for name in TABLES
        }

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            pass
