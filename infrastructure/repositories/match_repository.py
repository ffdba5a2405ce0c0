"""Match repository implementation."""
import logging
import sqlite3
import time
from typing import Any, Dict, Iterable, List, Optional

from application.services.data_persistence_service import DataPersistenceService
from application.services.identity import name_keys, resolve_name_parts, format_riot_id
from domain.entities import (
    LastMatchRoster,
    Match,
    Participant,
    RosterPlayer,
    SharedGame,
    SharedMatchQuery,
)
from domain.enums import Role
from domain.interfaces import IMatchRepository
from .shared_match_query import build_shared_match_sql

logger = logging.getLogger(__name__)

_PARTICIPANT_INSERT = """
    INSERT INTO match_participants (
        match_id, puuid, summoner_name, name_key, game_name_key,
        champion_name, champion_id, team_id, kills, deaths, assists, win,
        total_damage_dealt, total_damage_to_champions, total_minions_killed,
        gold_earned, lane, team_position
    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

_PLAYER_UPSERT = """
    INSERT INTO players (puuid, summoner_name, region, last_seen)
    VALUES (?, ?, ?, ?)
    ON CONFLICT(puuid) DO UPDATE SET
        summoner_name = excluded.summoner_name,
        region        = excluded.region,
        last_seen     = excluded.last_seen
"""


def parse_match_payload(data: Dict[str, Any]) -> Match:
    """Parse a match-v5 ``/matches/{id}`` payload into a Match entity."""
    metadata = data.get('metadata') or {}
    info = data.get('info') or {}
    match_id = metadata.get('matchId') or ''
    if not match_id:
        raise ValueError("match payload has no metadata.matchId")

    participants = [
        _parse_participant_data(p_data, match_id)
        for p_data in info.get('participants') or []
    ]
    return Match(
        match_id=match_id,
        game_creation=int(info.get('gameCreation') or 0),
        game_duration=int(info.get('gameDuration') or 0),
        game_mode=info.get('gameMode') or '',
        queue_id=int(info.get('queueId') or 0),
        platform_id=info.get('platformId') or '',
        participants=participants,
    )


def _parse_participant_data(p_data: Dict[str, Any], match_id: str) -> Participant:
    """Riot ID (``riotIdGameName#riotIdTagline``) wins over the legacy name."""
    game_name, tag_line = resolve_name_parts({
        'riotIdGameName': p_data.get('riotIdGameName'),
        'riotIdTagline': p_data.get('riotIdTagline') or p_data.get('riotIdTagLine'),
        'summonerName': p_data.get('summonerName'),
    })
    position = (
        p_data.get('teamPosition')
        or p_data.get('individualPosition')
        or p_data.get('lane')
        or ''
    )
    if position == 'Invalid':
        position = p_data.get('lane') or ''
    return Participant(
        puuid=p_data.get('puuid') or '',
        summoner_name=format_riot_id(game_name, tag_line) or '',
        game_name=game_name,
        tag_line=tag_line,
        match_id=match_id,
        team_id=int(p_data.get('teamId') or 0),
        champion_id=int(p_data.get('championId') or 0),
        champion_name=p_data.get('championName') or '',
        position=position,
        lane=p_data.get('lane') or '',
        win=bool(p_data.get('win', False)),
        kills=int(p_data.get('kills') or 0),
        deaths=int(p_data.get('deaths') or 0),
        assists=int(p_data.get('assists') or 0),
        total_damage_dealt=int(p_data.get('totalDamageDealt') or 0),
        total_damage_to_champions=int(p_data.get('totalDamageDealtToChampions') or 0),
        total_minions_killed=int(p_data.get('totalMinionsKilled') or 0),
        gold_earned=int(p_data.get('goldEarned') or 0),
        profile_icon_id=p_data.get('profileIcon'),
    )


class MatchRepository(IMatchRepository):
    """SQLite-backed match corpus.

    Matches are insert-if-absent; participants of a match are written in the
    same transaction as the match row, or not at all.
    """

    def __init__(self, store: DataPersistenceService):
        self.store = store

    # ── Writes ─────────────────────────────────────────────────────────

    def insert_match(self, match: Match) -> bool:
        with self.store.transaction() as conn:
            return self._insert_match_row(conn, match)

    def insert_participants(self, match_id: str, participants: Iterable[Participant]) -> int:
        with self.store.transaction() as conn:
            return self._insert_participant_rows(conn, match_id, list(participants), region='')

    def save_match(self, match: Match) -> bool:
        """Store a match and all its participants atomically.

        Returns False (and writes nothing) when the match id is already stored.
        """
        with self.store.transaction() as conn:
            if not self._insert_match_row(conn, match):
                return False
            self._insert_participant_rows(
                conn, match.match_id, match.participants, region=match.platform_id
            )
        logger.debug(f"Stored match {match.match_id} ({len(match.participants)} participants)")
        return True

    def _insert_match_row(self, conn: sqlite3.Connection, match: Match) -> bool:
        cur = conn.execute(
            """INSERT OR IGNORE INTO matches
               (match_id, game_creation, game_duration, game_mode, queue_id, platform_id, imported_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                match.match_id, match.game_creation, match.game_duration,
                match.game_mode, match.queue_id, match.platform_id, _now_ms(),
            ),
        )
        return cur.rowcount == 1

    def _insert_participant_rows(
        self,
        conn: sqlite3.Connection,
        match_id: str,
        participants: List[Participant],
        region: str,
    ) -> int:
        now = _now_ms()
        player_rows = [
            (p.puuid, p.summoner_name, region, now) for p in participants if p.puuid
        ]
        if player_rows:
            conn.executemany(_PLAYER_UPSERT, player_rows)

        rows = []
        for p in participants:
            keys = name_keys(p.summoner_name)
            rows.append((
                match_id, p.puuid or None, p.summoner_name, keys.full, keys.game_name,
                p.champion_name, p.champion_id, p.team_id,
                p.kills, p.deaths, p.assists, 1 if p.win else 0,
                p.total_damage_dealt, p.total_damage_to_champions,
                p.total_minions_killed, p.gold_earned, p.lane, p.position,
            ))
        conn.executemany(_PARTICIPANT_INSERT, rows)
        return len(rows)

    # ── Reads ──────────────────────────────────────────────────────────

    def has_match(self, match_id: str) -> bool:
        row = self.store.query_one("SELECT 1 FROM matches WHERE match_id = ?", (match_id,))
        return row is not None

    def get_existing_match_ids(self) -> set[str]:
        return self.store.get_existing_match_ids()

    def count_matches(self) -> int:
        return int(self.store.query_one("SELECT COUNT(*) FROM matches")[0])

    def get_match(self, match_id: str) -> Optional[Match]:
        row = self.store.query_one("SELECT * FROM matches WHERE match_id = ?", (match_id,))
        if row is None:
            return None
        participants = [
            self._row_to_participant(r)
            for r in self.store.query(
                "SELECT * FROM match_participants WHERE match_id = ? ORDER BY id", (match_id,)
            )
        ]
        return Match(
            match_id=row['match_id'],
            game_creation=row['game_creation'],
            game_duration=row['game_duration'] or 0,
            game_mode=row['game_mode'] or '',
            queue_id=row['queue_id'] or 0,
            platform_id=row['platform_id'] or '',
            participants=participants,
        )

    def find_shared_matches(self, query: SharedMatchQuery) -> List[SharedGame]:
        sql, params = build_shared_match_sql(query)
        games: List[SharedGame] = []
        seen: set[str] = set()
        for row in self.store.query(sql, params):
            if row['match_id'] in seen:
                continue
            seen.add(row['match_id'])
            games.append(SharedGame(
                match_id=row['match_id'],
                game_creation=row['game_creation'],
                game_duration=row['game_duration'] or 0,
                queue_id=row['queue_id'] or 0,
                game_mode=row['game_mode'] or '',
                user_team_id=row['user_team_id'],
                user_win=bool(row['user_win']),
                user_champion=row['user_champion'] or '',
                user_kills=row['user_kills'] or 0,
                user_deaths=row['user_deaths'] or 0,
                user_assists=row['user_assists'] or 0,
                target_puuid=row['target_puuid'] or '',
                target_name=row['target_name'] or '',
                target_team_id=row['target_team_id'],
                target_champion=row['target_champion'] or '',
                target_champion_id=row['target_champion_id'] or 0,
                target_kills=row['target_kills'] or 0,
                target_deaths=row['target_deaths'] or 0,
                target_assists=row['target_assists'] or 0,
                target_position=row['target_position'] or '',
            ))
        return games

    def get_last_match_roster(self, puuid: str) -> Optional[LastMatchRoster]:
        match_row = self.store.query_one(
            """SELECT m.match_id, m.queue_id, m.game_creation, u.team_id AS user_team_id
               FROM matches m
               JOIN match_participants u ON u.match_id = m.match_id AND u.puuid = ?
               ORDER BY m.game_creation DESC
               LIMIT 1""",
            (puuid,),
        )
        if match_row is None:
            return None
        rows = self.store.query(
            """SELECT puuid, summoner_name, champion_name, team_id, win,
                      COALESCE(NULLIF(team_position, ''), lane, '') AS position
               FROM match_participants WHERE match_id = ?
               ORDER BY team_id, id""",
            (match_row['match_id'],),
        )
        return LastMatchRoster(
            match_id=match_row['match_id'],
            queue_id=match_row['queue_id'] or 0,
            game_creation=match_row['game_creation'],
            user_team_id=match_row['user_team_id'],
            players=[
                RosterPlayer(
                    puuid=r['puuid'] or '',
                    summoner_name=r['summoner_name'] or '',
                    champion_name=r['champion_name'] or '',
                    team_id=r['team_id'],
                    role=Role.from_string(r['position']),
                    win=bool(r['win']),
                )
                for r in rows
            ],
        )

    @staticmethod
    def _row_to_participant(row: sqlite3.Row) -> Participant:
        game_name, _, tag_line = (row['summoner_name'] or '').partition('#')
        return Participant(
            puuid=row['puuid'] or '',
            summoner_name=row['summoner_name'] or '',
            game_name=game_name or None,
            tag_line=tag_line or None,
            match_id=row['match_id'],
            team_id=row['team_id'],
            champion_id=row['champion_id'] or 0,
            champion_name=row['champion_name'] or '',
            position=row['team_position'] or '',
            lane=row['lane'] or '',
            win=bool(row['win']),
            kills=row['kills'] or 0,
            deaths=row['deaths'] or 0,
            assists=row['assists'] or 0,
            total_damage_dealt=row['total_damage_dealt'] or 0,
            total_damage_to_champions=row['total_damage_to_champions'] or 0,
            total_minions_killed=row['total_minions_killed'] or 0,
            gold_earned=row['gold_earned'] or 0,
        )


def _now_ms() -> int:
    return int(time.time() * 1000)
