"""Canonical comparison keys for player names."""
from dataclasses import dataclass
from typing import Optional, Tuple

from domain.entities import UserConfig


@dataclass(frozen=True)
class NameKeys:
    """``full`` is the whole normalized name (``name#tag``); ``game_name`` is
    the part before the first ``#``. Both are empty for a missing name."""

    full: str = ""
    game_name: str = ""

    @property
    def has_tag(self) -> bool:
        return "#" in self.full

    @property
    def is_empty(self) -> bool:
        return not self.full


def normalize_key(name: Optional[str]) -> str:
    """Lowercase and drop every whitespace character."""
    if not name:
        return ""
    return "".join(str(name).lower().split())


def name_keys(name: Optional[str]) -> NameKeys:
    full = normalize_key(name)
    if not full:
        return NameKeys()
    game_name, _, _ = full.partition("#")
    return NameKeys(full=full, game_name=game_name)


def parse_riot_id(value: str) -> Tuple[str, Optional[str]]:
    """Split ``"Name #Tag"`` into ``("Name", "Tag")``; tag is None when absent."""
    game_name, sep, tag_line = (value or "").partition("#")
    game_name = game_name.strip()
    tag_line = tag_line.strip()
    return game_name, (tag_line if sep and tag_line else None)


def format_riot_id(game_name: Optional[str], tag_line: Optional[str]) -> Optional[str]:
    if not game_name:
        return None
    if tag_line:
        return f"{game_name}#{tag_line}"
    return game_name


def is_configured_user(
    config: Optional[UserConfig],
    puuid: Optional[str] = None,
    display_name: Optional[str] = None,
) -> bool:
    """Decide whether a candidate player is the configured local user.

    Order: stable id (authoritative when both sides carry one), then the
    full normalized name, then the game name alone when at least one side
    has no tag. Empty keys never match.
    """
    if config is None:
        return False

    if puuid and config.puuid:
        if puuid == config.puuid:
            return True
        # Ids from the live client and from match records can disagree for
        # the same account, so a mismatch falls through to the names.

    mine = name_keys(config.summoner_name)
    theirs = name_keys(display_name)
    if mine.is_empty or theirs.is_empty:
        return False

    if mine.full == theirs.full:
        return True

    if mine.has_tag and theirs.has_tag:
        return False
    return bool(mine.game_name) and mine.game_name == theirs.game_name
