"""Criteria for the "matches both players appeared in" lookup."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SharedMatchQuery:
    """Storage-agnostic description of a shared-match lookup.

    Exactly one of the two strategies is used per query:

    * by stable id: ``target_puuid`` set;
    * by name: ``name_key`` (full normalized ``name#tag``) and, when
      ``include_game_name_only`` is true, also rows whose game-name part equals
      ``game_name_key``. The game-name-only clause can match a different
      player sharing the same game name under another tag.

    Name lookups always exclude rows belonging to ``local_puuid``.
    """

    local_puuid: str
    created_before: int
    target_puuid: Optional[str] = None
    name_key: Optional[str] = None
    game_name_key: Optional[str] = None
    include_game_name_only: bool = True

    @property
    def by_puuid(self) -> bool:
        return bool(self.target_puuid)

    @property
    def by_name(self) -> bool:
        return not self.by_puuid and bool(self.name_key or self.game_name_key)

    @classmethod
    def for_puuid(cls, local_puuid: str, target_puuid: str, created_before: int) -> 'SharedMatchQuery':
        return cls(local_puuid=local_puuid, created_before=created_before, target_puuid=target_puuid)

    @classmethod
    def for_name(
        cls,
        local_puuid: str,
        name_key: str,
        game_name_key: str,
        created_before: int,
        include_game_name_only: bool = True,
    ) -> 'SharedMatchQuery':
        return cls(
            local_puuid=local_puuid,
            created_before=created_before,
            name_key=name_key or None,
            game_name_key=game_name_key or None,
            include_game_name_only=include_game_name_only,
        )
