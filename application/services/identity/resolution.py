"""Name/id resolution over loosely-shaped client and API payloads.

Payloads from the live client and from match-v5 expose a player's name under
several historical field names. The first candidate in ``NAME_CANDIDATES``
that yields a non-empty value wins; a ``(game, tag)`` pair is joined as a
Riot ID, and a pair whose tag is missing falls back to the game name alone.
"""
from typing import Any, Mapping, Optional, Tuple, Union

from .normalizer import format_riot_id

NameCandidate = Union[str, Tuple[str, Tuple[str, ...]]]

NAME_CANDIDATES: Tuple[NameCandidate, ...] = (
    ("gameName", ("tagLine",)),
    ("riotIdGameName", ("riotIdTagline", "riotIdTagLine")),
    "displayName",
    "summonerName",
    "internalName",
)

ID_FIELDS: Tuple[str, ...] = ("puuid",)
SLOT_FIELDS: Tuple[str, ...] = ("cellId", "summonerId")


def _text(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _first(payload: Mapping[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = _text(payload, key)
        if value:
            return value
    return None


def resolve_name_parts(payload: Optional[Mapping[str, Any]]) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(game_name, tag_line)``; for legacy names the tag is None."""
    if not payload:
        return None, None
    for candidate in NAME_CANDIDATES:
        if isinstance(candidate, tuple):
            game_key, tag_keys = candidate
            game_name = _text(payload, game_key)
            if game_name:
                return game_name, _first(payload, tag_keys)
        else:
            name = _text(payload, candidate)
            if name:
                return name, None
    return None, None


def resolve_display_name(payload: Optional[Mapping[str, Any]]) -> Optional[str]:
    game_name, tag_line = resolve_name_parts(payload)
    return format_riot_id(game_name, tag_line)


def resolve_puuid(payload: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not payload:
        return None
    return _first(payload, ID_FIELDS)


def resolve_slot_id(payload: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Client-local identifier, used only when no stable id is known."""
    if not payload:
        return None
    for key in SLOT_FIELDS:
        value = payload.get(key)
        # cellId 0 is a valid slot; summonerId 0 means "bot/unknown".
        if value is None or value == "":
            continue
        if key == "summonerId" and str(value) == "0":
            continue
        return f"{key}:{value}"
    return None
