"""Repository interfaces for data access."""
from abc import ABC, abstractmethod
from typing import Iterable, Optional, List
from ..entities import (
    LastMatchRoster,
    Match,
    Participant,
    PlayerTag,
    SharedGame,
    SharedMatchQuery,
    UserConfig,
)
from ..enums import TagCategory


class IMatchRepository(ABC):
    """The match corpus: append-only writes, predicate reads."""

    @abstractmethod
    def insert_match(self, match: Match) -> bool:
        """Insert the match row if absent. Returns True when a row was added."""

    @abstractmethod
    def insert_participants(self, match_id: str, participants: Iterable[Participant]) -> int:
        """Insert all participant rows of one match, all-or-nothing."""

    @abstractmethod
    def save_match(self, match: Match) -> bool:
        """insert_match + insert_participants in a single transaction."""

    @abstractmethod
    def has_match(self, match_id: str) -> bool:
        pass

    @abstractmethod
    def find_shared_matches(self, query: SharedMatchQuery) -> List[SharedGame]:
        """Shared games, most recent first, at most one row per match."""

    @abstractmethod
    def get_last_match_roster(self, puuid: str) -> Optional[LastMatchRoster]:
        pass


class IUserConfigRepository(ABC):
    @abstractmethod
    def get_user_config(self) -> Optional[UserConfig]:
        pass

    @abstractmethod
    def save_user_config(self, config: UserConfig) -> UserConfig:
        pass


class ITagRepository(ABC):
    @abstractmethod
    def get_tags(self, puuid: str) -> List[PlayerTag]:
        pass

    @abstractmethod
    def upsert_tag(self, puuid: str, category: TagCategory, note: Optional[str] = None) -> PlayerTag:
        pass

    @abstractmethod
    def delete_tag(self, puuid: str, category: TagCategory) -> bool:
        pass
