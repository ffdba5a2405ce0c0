"""SQL compilation of ``SharedMatchQuery``.

Each optional predicate is a separate clause switched on by a flag of the
query object, so the fallback matching rules can be read (and tested) here
without a database.
"""
from typing import Any, List, Tuple

from domain.entities import SharedMatchQuery

_SELECT = """
SELECT
    m.match_id,
    m.game_creation,
    m.game_duration,
    m.queue_id,
    m.game_mode,
    u.team_id       AS user_team_id,
    u.win           AS user_win,
    u.champion_name AS user_champion,
    u.kills         AS user_kills,
    u.deaths        AS user_deaths,
    u.assists       AS user_assists,
    t.puuid         AS target_puuid,
    t.summoner_name AS target_name,
    t.team_id       AS target_team_id,
    t.champion_name AS target_champion,
    t.champion_id   AS target_champion_id,
    t.kills         AS target_kills,
    t.deaths        AS target_deaths,
    t.assists       AS target_assists,
    COALESCE(NULLIF(t.team_position, ''), t.lane, '') AS target_position
FROM matches m
JOIN match_participants u ON u.match_id = m.match_id AND u.puuid = ?
JOIN match_participants t ON t.match_id = m.match_id AND t.id != u.id
"""

_ORDER = "ORDER BY m.game_creation DESC, m.match_id, t.id"


def build_shared_match_sql(query: SharedMatchQuery) -> Tuple[str, List[Any]]:
    """Return ``(sql, params)``; raises ValueError for a query with no target."""
    if not (query.by_puuid or query.by_name):
        raise ValueError("SharedMatchQuery needs a target puuid or a name key")

    params: List[Any] = [query.local_puuid]
    clauses: List[str] = ["m.game_creation < ?"]
    params.append(query.created_before)

    if query.by_puuid:
        clauses.append("t.puuid = ?")
        params.append(query.target_puuid)
    else:
        name_clauses: List[str] = []
        if query.name_key:
            name_clauses.append("t.name_key = ?")
            params.append(query.name_key)
        if query.include_game_name_only and query.game_name_key:
            name_clauses.append("t.game_name_key = ?")
            params.append(query.game_name_key)
        if not name_clauses:
            raise ValueError("Name lookup has no enabled name predicate")
        clauses.append("(" + " OR ".join(name_clauses) + ")")
        clauses.append("(t.puuid IS NULL OR t.puuid != ?)")
        params.append(query.local_puuid)

    sql = _SELECT + "WHERE " + "\n  AND ".join(clauses) + "\n" + _ORDER
    return sql, params
