"""Builders shared by the test modules."""
from typing import Any, Dict, List, Optional

from domain.entities import Match, Participant, SharedGame

NOW_MS = 1_700_000_000_000
MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS

LOCAL_PUUID = "U1"
LOCAL_NAME = "Me#EUW"


def fixed_clock() -> float:
    return NOW_MS / 1000


def participant(
    puuid: str,
    name: str,
    team_id: int = 100,
    win: bool = True,
    champion: str = "Ahri",
    position: str = "MIDDLE",
    kills: int = 5,
    deaths: int = 2,
    assists: int = 7,
) -> Participant:
    game_name, _, tag = name.partition("#")
    return Participant(
        puuid=puuid,
        summoner_name=name,
        game_name=game_name,
        tag_line=tag or None,
        team_id=team_id,
        champion_id=103,
        champion_name=champion,
        position=position,
        win=win,
        kills=kills,
        deaths=deaths,
        assists=assists,
    )


def match(
    match_id: str,
    participants: List[Participant],
    created: int = NOW_MS - 2 * HOUR_MS,
    queue_id: int = 420,
    duration: int = 1800,
) -> Match:
    for p in participants:
        p.match_id = match_id
    return Match(
        match_id=match_id,
        game_creation=created,
        game_duration=duration,
        game_mode="CLASSIC",
        queue_id=queue_id,
        platform_id="EUW1",
        participants=participants,
    )


def duel(
    match_id: str,
    target_puuid: str = "P1",
    target_name: str = "Target#EUW",
    same_team: bool = True,
    user_win: bool = True,
    created: int = NOW_MS - 2 * HOUR_MS,
    queue_id: int = 420,
    champion: str = "Lux",
    position: str = "UTILITY",
    kda: tuple = (2, 3, 10),
) -> Match:
    """A match with the local user, the target, and two fillers."""
    target_team = 100 if same_team else 200
    target_win = user_win if same_team else not user_win
    k, d, a = kda
    return match(
        match_id,
        [
            participant(LOCAL_PUUID, LOCAL_NAME, team_id=100, win=user_win, champion="Jinx", position="BOTTOM"),
            participant(target_puuid, target_name, team_id=target_team, win=target_win,
                        champion=champion, position=position, kills=k, deaths=d, assists=a),
            participant(f"F-{match_id}-1", f"Filler{match_id}#1", team_id=100, win=user_win),
            participant(f"F-{match_id}-2", f"Filler{match_id}#2", team_id=200, win=not user_win),
        ],
        created=created,
        queue_id=queue_id,
    )


def shared_game(
    match_id: str,
    same_team: bool = True,
    user_win: bool = True,
    created: int = NOW_MS - 2 * HOUR_MS,
    champion: str = "Lux",
    position: str = "UTILITY",
    kda: tuple = (2, 3, 10),
    queue_id: int = 420,
) -> SharedGame:
    k, d, a = kda
    return SharedGame(
        match_id=match_id,
        game_creation=created,
        game_duration=1800,
        queue_id=queue_id,
        game_mode="CLASSIC",
        user_team_id=100,
        user_win=user_win,
        user_champion="Jinx",
        target_puuid="P1",
        target_name="Target#EUW",
        target_team_id=100 if same_team else 200,
        target_champion=champion,
        target_champion_id=99,
        target_kills=k,
        target_deaths=d,
        target_assists=a,
        target_position=position,
    )


def match_payload(
    match_id: str = "EUW1_1",
    queue_id: int = 420,
    created: int = NOW_MS - 2 * HOUR_MS,
    participants: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Minimal match-v5 ``/matches/{id}`` body."""
    if participants is None:
        participants = [
            {
                "puuid": LOCAL_PUUID, "riotIdGameName": "Me", "riotIdTagline": "EUW",
                "summonerName": "OldMe", "teamId": 100, "championId": 222,
                "championName": "Jinx", "teamPosition": "BOTTOM", "win": True,
                "kills": 8, "deaths": 2, "assists": 6,
            },
            {
                "puuid": "P1", "riotIdGameName": "Target", "riotIdTagline": "EUW",
                "teamId": 200, "championId": 99, "championName": "Lux",
                "teamPosition": "", "individualPosition": "UTILITY", "win": False,
                "kills": 1, "deaths": 5, "assists": 4,
            },
        ]
    return {
        "metadata": {"matchId": match_id, "participants": [p["puuid"] for p in participants]},
        "info": {
            "gameCreation": created,
            "gameDuration": 1750,
            "gameMode": "CLASSIC",
            "queueId": queue_id,
            "platformId": "EUW1",
            "participants": participants,
        },
    }
